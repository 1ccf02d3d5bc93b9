from passlib.context import CryptContext

_pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return _pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return _pwd_context.verify(plain, hashed)


# Verified against unknown emails so a miss costs the same as a wrong password.
DUMMY_HASH = _pwd_context.hash("not-a-real-password")
