from .jwt_handler import create_access_token, verify_access_token
from .passwords import hash_password, verify_password
from .dependencies import get_current_user

__all__ = [
    "create_access_token",
    "verify_access_token",
    "hash_password",
    "verify_password",
    "get_current_user",
]
