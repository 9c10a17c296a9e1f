from pydantic import BaseModel, ConfigDict, Field
from typing import List, Literal, Optional

from portfolio.schemas.common import HttpsUrlStr, ListQuery, PageSize, PaginationInfo, PartialUpdate, SortOrder, UrlStr


class SocialLinkCreate(BaseModel):
    platform: str = Field(..., min_length=1, max_length=100)
    url: HttpsUrlStr
    display_text: Optional[str] = Field(None, max_length=255)


class SocialLinkUpdate(PartialUpdate):
    not_null = ("platform", "url")

    platform: Optional[str] = Field(None, min_length=1, max_length=100)
    url: Optional[UrlStr] = None
    display_text: Optional[str] = Field(None, max_length=255)


class SocialLinkResponse(BaseModel):
    social_id: str
    user_id: str
    platform: str
    url: str
    display_text: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class SocialLinkQuery(ListQuery):
    user_id: Optional[str] = None
    platform: Optional[str] = None
    limit: PageSize = 50
    sort_by: Literal["platform"] = "platform"
    sort_order: SortOrder = "asc"


class SocialLinkListResponse(BaseModel):
    social_links: List[SocialLinkResponse]
    pagination: PaginationInfo
