from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.core.database import get_db
from portfolio.core.logging_config import logger
from portfolio.modules.auth.dependencies import get_current_user, require_admin
from portfolio.modules.auth.permissions import Actor, Operation, ensure_can_mutate
from portfolio.repositories.skills import SkillRepository
from portfolio.schemas.common import MessageResponse, criteria_dependency, require_changes
from portfolio.schemas.skill import SkillCreate, SkillListResponse, SkillQuery, SkillResponse, SkillUpdate

router = APIRouter()


@router.get("", response_model=SkillListResponse)
async def list_skills(
    criteria: SkillQuery = Depends(criteria_dependency(SkillQuery)),
    db: AsyncSession = Depends(get_db)
):
    page = await SkillRepository(db).list(criteria)
    return page.to_response("skills", SkillResponse.model_validate)


@router.get("/{skill_id}")
async def get_skill(
    skill_id: str,
    db: AsyncSession = Depends(get_db)
):
    skill = await SkillRepository(db).get_or_404(skill_id)
    return {"skill": SkillResponse.model_validate(skill)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_skill(
    payload: SkillCreate,
    current_user: Actor = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """Add a catalog skill (admin only)"""
    skill = await SkillRepository(db).create_skill(payload.model_dump())
    logger.info(f"Skill created: {skill.name}")
    return {"message": "Skill created successfully", "skill": SkillResponse.model_validate(skill)}


@router.put("/{skill_id}")
async def update_skill(
    skill_id: str,
    payload: SkillUpdate,
    current_user: Actor = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    skills = SkillRepository(db)
    skill = await skills.get_or_404(skill_id)
    ensure_can_mutate(current_user, skill, Operation.UPDATE)
    skill = await skills.update_skill(skill, require_changes(payload))
    return {"message": "Skill updated successfully", "skill": SkillResponse.model_validate(skill)}


@router.delete("/{skill_id}", response_model=MessageResponse)
async def delete_skill(
    skill_id: str,
    current_user: Actor = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Remove a catalog skill; every user's link to it goes with it"""
    skills = SkillRepository(db)
    skill = await skills.get_or_404(skill_id)
    ensure_can_mutate(current_user, skill, Operation.DELETE)
    await skills.delete(skill)
    return {"message": "Skill deleted successfully"}
