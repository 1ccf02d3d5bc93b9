from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.errors import ConflictError, InvalidCredentialsError, NotFoundError, server_error
from shared.security.dependencies import get_current_user

from .schemas import LoginResponse, RegisterResponse, UserCreate, UserLogin, UserResponse
from .service import AuthService

router = APIRouter(tags=["Auth"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user account",
)
async def register(payload: UserCreate, db: AsyncSession = Depends(get_db)):
    try:
        user = await AuthService.register(db, payload)
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        raise server_error("Registration failed", e)
    return RegisterResponse(message="Registration successful", user=UserResponse.model_validate(user))


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Authenticate and receive a JWT access token",
)
async def login(payload: UserLogin, db: AsyncSession = Depends(get_db)):
    try:
        return await AuthService.login(db, payload)
    except InvalidCredentialsError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )
    except Exception as e:
        raise server_error("Login failed", e)


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Get the current authenticated user's profile",
)
async def get_me(
    claims: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    try:
        return await AuthService.get_user_by_id(db, int(claims["sub"]))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception as e:
        raise server_error("Failed to load profile", e)
