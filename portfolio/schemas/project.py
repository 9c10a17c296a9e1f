from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Literal, Optional
from datetime import date, datetime

from portfolio.schemas.common import ListQuery, PageSize, PaginationInfo, PartialUpdate, SortOrder, UrlStr

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


def _blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v


class ProjectCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=500)
    slug: str = Field(..., min_length=1, max_length=255, pattern=SLUG_PATTERN)
    featured_image: UrlStr
    category: str = Field(..., min_length=1, max_length=255)
    excerpt: str = Field(..., min_length=10)
    content: str = Field(..., min_length=100)
    client: Optional[str] = Field(None, max_length=255)
    technologies: Optional[List[str]] = None
    project_url: Optional[UrlStr] = None
    project_date: date

    @field_validator("project_url", "client", mode="before")
    @classmethod
    def empty_as_missing(cls, v):
        return _blank_to_none(v)


class ProjectUpdate(PartialUpdate):
    """Partial update; the slug and owner only change when sent explicitly"""
    not_null = ("title", "slug", "featured_image", "category", "excerpt", "content", "project_date")

    title: Optional[str] = Field(None, min_length=1, max_length=500)
    slug: Optional[str] = Field(None, min_length=1, max_length=255, pattern=SLUG_PATTERN)
    featured_image: Optional[UrlStr] = None
    category: Optional[str] = Field(None, min_length=1, max_length=255)
    excerpt: Optional[str] = Field(None, min_length=10)
    content: Optional[str] = Field(None, min_length=100)
    client: Optional[str] = Field(None, max_length=255)
    technologies: Optional[List[str]] = None
    project_url: Optional[UrlStr] = None
    project_date: Optional[date] = None

    @field_validator("project_url", mode="before")
    @classmethod
    def empty_as_missing(cls, v):
        return _blank_to_none(v)


class ProjectResponse(BaseModel):
    project_id: str
    user_id: str
    title: str
    slug: str
    featured_image: str
    category: str
    excerpt: str
    content: str
    client: Optional[str] = None
    technologies: Optional[List[str]] = None
    project_url: Optional[str] = None
    project_date: date
    created_at: datetime
    updated_at: datetime
    author_name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class GalleryImageResponse(BaseModel):
    image_id: str
    project_id: str
    image_url: str
    caption: Optional[str] = None
    sort_order: int

    model_config = ConfigDict(from_attributes=True)


class ProjectDetailResponse(ProjectResponse):
    gallery_images: List[GalleryImageResponse] = []


class ProjectQuery(ListQuery):
    search: Optional[str] = None
    category: Optional[str] = None
    user_id: Optional[str] = None
    sort_by: Literal["title", "project_date", "created_at"] = "created_at"


class ProjectListResponse(BaseModel):
    projects: List[ProjectResponse]
    pagination: PaginationInfo


class GalleryImageCreate(BaseModel):
    image_url: UrlStr
    caption: Optional[str] = None
    sort_order: int = Field(0, ge=0)


class GalleryImageUpdate(PartialUpdate):
    not_null = ("sort_order",)

    caption: Optional[str] = None
    sort_order: Optional[int] = Field(None, ge=0)


class GalleryImageQuery(ListQuery):
    limit: PageSize = 100
    sort_by: Literal["sort_order"] = "sort_order"
    sort_order: SortOrder = "asc"


class GalleryListResponse(BaseModel):
    gallery_images: List[GalleryImageResponse]
    pagination: PaginationInfo
