"""
User directory and public profile sections.

Everything here is read-only. The per-user lists are the same queries as the
top-level resource lists with ``user_id`` pinned to the path.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.core.database import get_db
from portfolio.core.exceptions import NotFoundError
from portfolio.modules.auth.dependencies import require_admin
from portfolio.modules.auth.permissions import Actor
from portfolio.repositories.profile import EducationRepository, ExperienceRepository, SocialLinkRepository
from portfolio.repositories.resumes import ResumeRepository
from portfolio.repositories.skills import UserSkillRepository
from portfolio.repositories.users import UserRepository
from portfolio.schemas.common import criteria_dependency
from portfolio.schemas.education import EducationListResponse, EducationQuery, EducationResponse
from portfolio.schemas.experience import ExperienceListResponse, ExperienceQuery, ExperienceResponse
from portfolio.schemas.resume import ResumeResponse
from portfolio.schemas.skill import UserSkillListResponse, UserSkillQuery, UserSkillResponse
from portfolio.schemas.social_link import SocialLinkListResponse, SocialLinkQuery, SocialLinkResponse
from portfolio.schemas.user import UserEnvelope, UserListResponse, UserQuery, UserResponse

router = APIRouter()


async def _existing_user_id(user_id: str, db: AsyncSession) -> str:
    await UserRepository(db).get_or_404(user_id)
    return user_id


@router.get("", response_model=UserListResponse)
async def list_users(
    criteria: UserQuery = Depends(criteria_dependency(UserQuery)),
    current_user: Actor = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """List users (admin only)"""
    page = await UserRepository(db).list(criteria)
    return page.to_response("users", UserResponse.model_validate)


@router.get("/{user_id}", response_model=UserEnvelope)
async def get_user(
    user_id: str,
    db: AsyncSession = Depends(get_db)
):
    user = await UserRepository(db).get_or_404(user_id)
    return {"user": UserResponse.model_validate(user)}


@router.get("/{user_id}/skills", response_model=UserSkillListResponse)
async def list_user_skills(
    user_id: str,
    criteria: UserSkillQuery = Depends(criteria_dependency(UserSkillQuery)),
    db: AsyncSession = Depends(get_db)
):
    await _existing_user_id(user_id, db)
    page = await UserSkillRepository(db).list({**criteria.model_dump(), "user_id": user_id})
    return page.to_response("user_skills", UserSkillResponse.model_validate)


@router.get("/{user_id}/experiences", response_model=ExperienceListResponse)
async def list_user_experiences(
    user_id: str,
    criteria: ExperienceQuery = Depends(criteria_dependency(ExperienceQuery)),
    db: AsyncSession = Depends(get_db)
):
    await _existing_user_id(user_id, db)
    page = await ExperienceRepository(db).list({**criteria.model_dump(), "user_id": user_id})
    return page.to_response("experiences", ExperienceResponse.model_validate)


@router.get("/{user_id}/education", response_model=EducationListResponse)
async def list_user_education(
    user_id: str,
    criteria: EducationQuery = Depends(criteria_dependency(EducationQuery)),
    db: AsyncSession = Depends(get_db)
):
    await _existing_user_id(user_id, db)
    page = await EducationRepository(db).list({**criteria.model_dump(), "user_id": user_id})
    return page.to_response("education", EducationResponse.model_validate)


@router.get("/{user_id}/social-links", response_model=SocialLinkListResponse)
async def list_user_social_links(
    user_id: str,
    criteria: SocialLinkQuery = Depends(criteria_dependency(SocialLinkQuery)),
    db: AsyncSession = Depends(get_db)
):
    await _existing_user_id(user_id, db)
    page = await SocialLinkRepository(db).list({**criteria.model_dump(), "user_id": user_id})
    return page.to_response("social_links", SocialLinkResponse.model_validate)


@router.get("/{user_id}/resume")
async def get_user_resume(
    user_id: str,
    db: AsyncSession = Depends(get_db)
):
    """Primary resume of a user (most recent upload when none is marked primary)"""
    await _existing_user_id(user_id, db)
    resume = await ResumeRepository(db).get_primary(user_id)
    if resume is None:
        raise NotFoundError("Resume", user_id)
    return {"resume": ResumeResponse.model_validate(resume)}
