from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import List, Literal, Optional
from datetime import date

from portfolio.schemas.common import ListQuery, PaginationInfo, PartialUpdate


class ExperienceCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    company: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=10)
    start_date: date
    end_date: Optional[date] = None
    current: bool = False
    location: Optional[str] = Field(None, max_length=255)

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date cannot be before start_date")
        return self


class ExperienceUpdate(PartialUpdate):
    not_null = ("title", "company", "description", "start_date", "current")

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    company: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=10)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    current: Optional[bool] = None
    location: Optional[str] = Field(None, max_length=255)


class ExperienceResponse(BaseModel):
    experience_id: str
    user_id: str
    title: str
    company: str
    description: str
    start_date: date
    end_date: Optional[date] = None
    current: bool
    location: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class ExperienceQuery(ListQuery):
    user_id: Optional[str] = None
    company: Optional[str] = None
    title: Optional[str] = None
    current: Optional[bool] = None
    start_year: Optional[int] = Field(None, ge=1)
    sort_by: Literal["start_date", "title", "company"] = "start_date"


class ExperienceListResponse(BaseModel):
    experiences: List[ExperienceResponse]
    pagination: PaginationInfo
