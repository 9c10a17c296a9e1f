from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import List, Literal, Optional
from datetime import datetime

from portfolio.models.user import UserRole
from portfolio.schemas.common import ListQuery, PaginationInfo, PartialUpdate, UrlStr


class UserResponse(BaseModel):
    """Public view of a user; the password hash is never part of it"""
    user_id: str
    email: str
    full_name: str
    profile_pic_url: Optional[str] = None
    bio: Optional[str] = None
    role: UserRole
    created_at: datetime
    last_login: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ProfileUpdate(PartialUpdate):
    not_null = ("email", "full_name", "role")

    email: Optional[EmailStr] = None
    full_name: Optional[str] = Field(None, min_length=1, max_length=255)
    bio: Optional[str] = None
    profile_pic_url: Optional[UrlStr] = None
    # Honoured for admins only
    role: Optional[UserRole] = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: Optional[str]) -> Optional[str]:
        return v.strip().lower() if v else v


class UserQuery(ListQuery):
    role: Optional[UserRole] = None
    search: Optional[str] = None
    sort_by: Literal["full_name", "created_at", "last_login"] = "created_at"


class UserEnvelope(BaseModel):
    user: UserResponse


class UserListResponse(BaseModel):
    users: List[UserResponse]
    pagination: PaginationInfo


class ProfileUpdateResponse(BaseModel):
    message: str
    user: UserResponse
