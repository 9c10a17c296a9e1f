from pydantic import BaseModel, ConfigDict, Field
from typing import List, Literal, Optional

from portfolio.schemas.common import ListQuery, PageSize, PaginationInfo, PartialUpdate, SortOrder


# Global catalog

class SkillCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    category: Optional[str] = Field(None, max_length=255)
    proficiency: Optional[int] = Field(None, ge=0, le=100)


class SkillUpdate(PartialUpdate):
    not_null = ("name",)

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    category: Optional[str] = Field(None, max_length=255)
    proficiency: Optional[int] = Field(None, ge=0, le=100)


class SkillResponse(BaseModel):
    skill_id: str
    name: str
    category: Optional[str] = None
    proficiency: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class SkillQuery(ListQuery):
    search: Optional[str] = None
    category: Optional[str] = None
    min_proficiency: Optional[int] = Field(None, ge=0, le=100)
    max_proficiency: Optional[int] = Field(None, ge=0, le=100)
    limit: PageSize = 20
    sort_by: Literal["name", "category", "proficiency"] = "name"
    sort_order: SortOrder = "asc"


class SkillListResponse(BaseModel):
    skills: List[SkillResponse]
    pagination: PaginationInfo


# Per-user links

class UserSkillCreate(BaseModel):
    skill_id: str = Field(..., min_length=1)
    years_experience: Optional[float] = Field(None, gt=0, le=100)


class UserSkillUpdate(PartialUpdate):
    years_experience: Optional[float] = Field(None, gt=0, le=100)


class UserSkillResponse(BaseModel):
    """A user's skill, flattened with the catalog entry it points at"""
    user_skill_id: str
    user_id: str
    skill_id: str
    years_experience: Optional[float] = None
    name: Optional[str] = None
    category: Optional[str] = None
    skill_proficiency: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class UserSkillQuery(ListQuery):
    user_id: Optional[str] = None
    skill_id: Optional[str] = None
    min_years: Optional[float] = Field(None, gt=0)
    limit: PageSize = 20
    sort_by: Literal["years_experience"] = "years_experience"


class UserSkillListResponse(BaseModel):
    user_skills: List[UserSkillResponse]
    pagination: PaginationInfo
