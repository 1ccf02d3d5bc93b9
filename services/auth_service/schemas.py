from datetime import datetime
from typing import Optional

from email_validator import validate_email
from pydantic import BaseModel, Field, field_validator


def _check_email(value: str) -> str:
    # Validated like EmailStr, but kept exactly as sent: lookups are case-sensitive.
    validate_email(value, check_deliverability=False)
    return value


class UserCreate(BaseModel):
    email: str = Field(..., max_length=255)
    password: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=100)
    phone: Optional[str] = Field(default=None, max_length=20)
    address: Optional[str] = None

    @field_validator("email")
    @classmethod
    def validate_email_address(cls, value: str) -> str:
        return _check_email(value)


class UserLogin(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def validate_email_address(cls, value: str) -> str:
        return _check_email(value)


class UserResponse(BaseModel):
    id: int
    email: str
    name: str
    phone: Optional[str]
    address: Optional[str]
    role: str
    created_at: Optional[datetime]

    class Config:
        from_attributes = True


class RegisterResponse(BaseModel):
    message: str
    user: UserResponse


class LoginResponse(BaseModel):
    message: str
    token: str
    token_type: str = "bearer"
    user: UserResponse
