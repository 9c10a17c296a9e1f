from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.core.database import get_db
from portfolio.modules.auth.dependencies import get_current_user
from portfolio.modules.auth.permissions import Actor, Operation, ensure_can_mutate
from portfolio.repositories.skills import UserSkillRepository
from portfolio.schemas.common import MessageResponse, criteria_dependency, require_changes
from portfolio.schemas.skill import (
    UserSkillCreate,
    UserSkillListResponse,
    UserSkillQuery,
    UserSkillResponse,
    UserSkillUpdate,
)

router = APIRouter()


@router.get("", response_model=UserSkillListResponse)
async def list_user_skills(
    criteria: UserSkillQuery = Depends(criteria_dependency(UserSkillQuery)),
    db: AsyncSession = Depends(get_db)
):
    page = await UserSkillRepository(db).list(criteria)
    return page.to_response("user_skills", UserSkillResponse.model_validate)


@router.post("", status_code=status.HTTP_201_CREATED)
async def add_user_skill(
    payload: UserSkillCreate,
    current_user: Actor = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Link a catalog skill to the caller"""
    user_skill = await UserSkillRepository(db).link(
        current_user.id, payload.skill_id, payload.years_experience
    )
    return {
        "message": "Skill added successfully",
        "user_skill": UserSkillResponse.model_validate(user_skill),
    }


@router.put("/{user_skill_id}")
async def update_user_skill(
    user_skill_id: str,
    payload: UserSkillUpdate,
    current_user: Actor = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    user_skills = UserSkillRepository(db)
    user_skill = await user_skills.get_or_404(user_skill_id)
    ensure_can_mutate(current_user, user_skill, Operation.UPDATE)

    user_skill = await user_skills.update(user_skill, require_changes(payload))
    return {
        "message": "Skill updated successfully",
        "user_skill": UserSkillResponse.model_validate(user_skill),
    }


@router.delete("/{user_skill_id}", response_model=MessageResponse)
async def remove_user_skill(
    user_skill_id: str,
    current_user: Actor = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    user_skills = UserSkillRepository(db)
    user_skill = await user_skills.get_or_404(user_skill_id)
    ensure_can_mutate(current_user, user_skill, Operation.DELETE)

    await user_skills.delete(user_skill)
    return {"message": "Skill removed successfully"}
