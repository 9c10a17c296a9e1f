from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import List, Literal, Optional
from datetime import date, datetime

from portfolio.schemas.common import ListQuery, PaginationInfo, PartialUpdate


class ContactMessageCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    subject: Optional[str] = Field(None, max_length=500)
    message: str = Field(..., min_length=10, max_length=10000)


class ContactMessageUpdate(PartialUpdate):
    not_null = ("read",)

    read: Optional[bool] = None


class ContactMessageResponse(BaseModel):
    message_id: str
    name: str
    email: str
    subject: Optional[str] = None
    message: str
    created_at: datetime
    read: bool

    model_config = ConfigDict(from_attributes=True)


class ContactMessageQuery(ListQuery):
    search: Optional[str] = None
    read: Optional[bool] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    sort_by: Literal["created_at", "name", "read"] = "created_at"


class ContactMessageListResponse(BaseModel):
    contact_messages: List[ContactMessageResponse]
    pagination: PaginationInfo
