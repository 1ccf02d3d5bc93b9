import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from shared.errors import ConflictError, InvalidCredentialsError, NotFoundError
from shared.security import create_access_token, hash_password, verify_password
from shared.security.passwords import DUMMY_HASH

from .models import User
from .repository import UserRepository
from .schemas import LoginResponse, UserCreate, UserLogin, UserResponse

logger = structlog.get_logger(__name__)


class AuthService:

    # bcrypt is CPU-bound but fast enough at these volumes to stay on the event loop.
    @staticmethod
    async def register(db: AsyncSession, data: UserCreate) -> User:
        existing = await UserRepository.get_by_email(db, data.email)
        if existing:
            raise ConflictError("Email already registered")
        user = User(
            email=data.email,
            password=hash_password(data.password),
            name=data.name,
            phone=data.phone,
            address=data.address,
        )
        user = await UserRepository.create(db, user)
        logger.info("user_registered", user_id=user.id)
        return user

    @staticmethod
    async def login(db: AsyncSession, data: UserLogin) -> LoginResponse:
        user = await UserRepository.get_by_email(db, data.email)
        # Hash check runs even for unknown emails; both failures look the same to the caller.
        password_ok = verify_password(data.password, user.password if user else DUMMY_HASH)
        if not user or not password_ok:
            logger.info("login_failed")
            raise InvalidCredentialsError()

        token = create_access_token(data={"sub": str(user.id), "email": user.email, "role": user.role})
        logger.info("user_logged_in", user_id=user.id)
        return LoginResponse(message="Login successful", token=token, user=UserResponse.model_validate(user))

    @staticmethod
    async def get_user_by_id(db: AsyncSession, user_id: int) -> User:
        user = await UserRepository.get_by_id(db, user_id)
        if not user:
            raise NotFoundError("User not found")
        return user
