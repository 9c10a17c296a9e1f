from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional

from portfolio.schemas.common import UrlStr
from portfolio.schemas.user import UserResponse


class UserRegister(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8)
    full_name: str = Field(..., min_length=1, max_length=255)
    bio: Optional[str] = None
    profile_pic_url: Optional[UrlStr] = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class AuthResponse(BaseModel):
    """Returned by register and login"""
    message: str
    user: UserResponse
    token: str


class VerifyResponse(BaseModel):
    message: str = "Token is valid"
    user: UserResponse


class CurrentUserResponse(BaseModel):
    user: UserResponse
