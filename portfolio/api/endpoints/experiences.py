from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.core.database import get_db
from portfolio.modules.auth.dependencies import get_current_user
from portfolio.modules.auth.permissions import Actor, Operation, ensure_can_mutate
from portfolio.repositories.profile import ExperienceRepository
from portfolio.schemas.common import MessageResponse, criteria_dependency, require_changes
from portfolio.schemas.experience import (
    ExperienceCreate,
    ExperienceListResponse,
    ExperienceQuery,
    ExperienceResponse,
    ExperienceUpdate,
)

router = APIRouter()


@router.get("", response_model=ExperienceListResponse)
async def list_experiences(
    criteria: ExperienceQuery = Depends(criteria_dependency(ExperienceQuery)),
    db: AsyncSession = Depends(get_db)
):
    page = await ExperienceRepository(db).list(criteria)
    return page.to_response("experiences", ExperienceResponse.model_validate)


@router.get("/{experience_id}")
async def get_experience(
    experience_id: str,
    db: AsyncSession = Depends(get_db)
):
    experience = await ExperienceRepository(db).get_or_404(experience_id)
    return {"experience": ExperienceResponse.model_validate(experience)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_experience(
    payload: ExperienceCreate,
    current_user: Actor = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    experience = await ExperienceRepository(db).create_for(current_user.id, payload.model_dump())
    return {
        "message": "Experience created successfully",
        "experience": ExperienceResponse.model_validate(experience),
    }


@router.put("/{experience_id}")
async def update_experience(
    experience_id: str,
    payload: ExperienceUpdate,
    current_user: Actor = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    experiences = ExperienceRepository(db)
    experience = await experiences.get_or_404(experience_id)
    ensure_can_mutate(current_user, experience, Operation.UPDATE)

    experience = await experiences.update(experience, require_changes(payload))
    return {
        "message": "Experience updated successfully",
        "experience": ExperienceResponse.model_validate(experience),
    }


@router.delete("/{experience_id}", response_model=MessageResponse)
async def delete_experience(
    experience_id: str,
    current_user: Actor = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    experiences = ExperienceRepository(db)
    experience = await experiences.get_or_404(experience_id)
    ensure_can_mutate(current_user, experience, Operation.DELETE)

    await experiences.delete(experience)
    return {"message": "Experience deleted successfully"}
