from pydantic import BaseModel, ConfigDict
from typing import List, Literal, Optional
from datetime import datetime

from portfolio.schemas.common import ListQuery, PaginationInfo, PartialUpdate


class ResumeUpdate(PartialUpdate):
    not_null = ("file_name", "primary_resume")

    file_name: Optional[str] = None
    primary_resume: Optional[bool] = None


class ResumeResponse(BaseModel):
    resume_id: str
    user_id: str
    file_url: str
    file_name: str
    file_size: int
    uploaded_at: datetime
    primary_resume: bool

    model_config = ConfigDict(from_attributes=True)


class ResumeQuery(ListQuery):
    user_id: Optional[str] = None
    is_primary: Optional[bool] = None
    sort_by: Literal["uploaded_at"] = "uploaded_at"


class ResumeListResponse(BaseModel):
    resumes: List[ResumeResponse]
    pagination: PaginationInfo
