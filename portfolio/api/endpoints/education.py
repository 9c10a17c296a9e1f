from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.core.database import get_db
from portfolio.modules.auth.dependencies import get_current_user
from portfolio.modules.auth.permissions import Actor, Operation, ensure_can_mutate
from portfolio.repositories.profile import EducationRepository
from portfolio.schemas.common import MessageResponse, criteria_dependency, require_changes
from portfolio.schemas.education import (
    EducationCreate,
    EducationListResponse,
    EducationQuery,
    EducationResponse,
    EducationUpdate,
)

router = APIRouter()


@router.get("", response_model=EducationListResponse)
async def list_education(
    criteria: EducationQuery = Depends(criteria_dependency(EducationQuery)),
    db: AsyncSession = Depends(get_db)
):
    page = await EducationRepository(db).list(criteria)
    return page.to_response("education", EducationResponse.model_validate)


@router.get("/{education_id}")
async def get_education(
    education_id: str,
    db: AsyncSession = Depends(get_db)
):
    education = await EducationRepository(db).get_or_404(education_id)
    return {"education": EducationResponse.model_validate(education)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_education(
    payload: EducationCreate,
    current_user: Actor = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    education = await EducationRepository(db).create_for(current_user.id, payload.model_dump())
    return {
        "message": "Education created successfully",
        "education": EducationResponse.model_validate(education),
    }


@router.put("/{education_id}")
async def update_education(
    education_id: str,
    payload: EducationUpdate,
    current_user: Actor = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    educations = EducationRepository(db)
    education = await educations.get_or_404(education_id)
    ensure_can_mutate(current_user, education, Operation.UPDATE)

    education = await educations.update(education, require_changes(payload))
    return {
        "message": "Education updated successfully",
        "education": EducationResponse.model_validate(education),
    }


@router.delete("/{education_id}", response_model=MessageResponse)
async def delete_education(
    education_id: str,
    current_user: Actor = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    educations = EducationRepository(db)
    education = await educations.get_or_404(education_id)
    ensure_can_mutate(current_user, education, Operation.DELETE)

    await educations.delete(education)
    return {"message": "Education deleted successfully"}
