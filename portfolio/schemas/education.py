from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import List, Literal, Optional

from portfolio.schemas.common import ListQuery, PaginationInfo, PartialUpdate

MIN_YEAR = 1900
MAX_YEAR = 2100


class EducationCreate(BaseModel):
    institution: str = Field(..., min_length=1, max_length=255)
    degree: str = Field(..., min_length=1, max_length=255)
    field_of_study: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    start_year: int = Field(..., ge=MIN_YEAR, le=MAX_YEAR)
    end_year: Optional[int] = Field(None, ge=MIN_YEAR, le=MAX_YEAR)
    current: bool = False

    @model_validator(mode="after")
    def check_years(self):
        if self.end_year is not None and self.end_year < self.start_year:
            raise ValueError("end_year cannot be before start_year")
        return self


class EducationUpdate(PartialUpdate):
    not_null = ("institution", "degree", "start_year", "current")

    institution: Optional[str] = Field(None, min_length=1, max_length=255)
    degree: Optional[str] = Field(None, min_length=1, max_length=255)
    field_of_study: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    start_year: Optional[int] = Field(None, ge=MIN_YEAR, le=MAX_YEAR)
    end_year: Optional[int] = Field(None, ge=MIN_YEAR, le=MAX_YEAR)
    current: Optional[bool] = None


class EducationResponse(BaseModel):
    education_id: str
    user_id: str
    institution: str
    degree: str
    field_of_study: Optional[str] = None
    description: Optional[str] = None
    start_year: int
    end_year: Optional[int] = None
    current: bool

    model_config = ConfigDict(from_attributes=True)


class EducationQuery(ListQuery):
    user_id: Optional[str] = None
    degree: Optional[str] = None
    institution: Optional[str] = None
    sort_by: Literal["start_year", "degree", "institution"] = "start_year"


class EducationListResponse(BaseModel):
    education: List[EducationResponse]
    pagination: PaginationInfo
