from typing import Any, Dict, Optional

from sqlalchemy import func, select

from portfolio.core.exceptions import ConflictError, NotFoundError
from portfolio.models.skill import Skill, UserSkill
from portfolio.repositories.base import BaseRepository, OwnedRepository
from portfolio.utils.query_builder import AtLeast, AtMost, Equals, ResourceQuery, Search

SKILL_QUERY = ResourceQuery(
    model=Skill,
    filters={
        "search": Search(Skill.name),
        "category": Equals(Skill.category),
        "min_proficiency": AtLeast(Skill.proficiency),
        "max_proficiency": AtMost(Skill.proficiency),
    },
    sortable={
        "name": Skill.name,
        "category": Skill.category,
        "proficiency": Skill.proficiency,
    },
    default_sort=("name", "asc"),
    default_limit=20,
)

USER_SKILL_QUERY = ResourceQuery(
    model=UserSkill,
    filters={
        "user_id": Equals(UserSkill.user_id),
        "skill_id": Equals(UserSkill.skill_id),
        "min_years": AtLeast(UserSkill.years_experience),
    },
    sortable={"years_experience": UserSkill.years_experience},
    default_sort=("years_experience", "desc"),
    default_limit=20,
)


class SkillRepository(BaseRepository[Skill]):
    """Global skill catalog"""
    model = Skill
    query = SKILL_QUERY
    resource_name = "Skill"
    conflict_message = "Skill with this name already exists"
    conflict_code = "SKILL_EXISTS"

    async def ensure_name_available(self, name: str, exclude_skill_id: Optional[str] = None) -> None:
        stmt = select(func.count()).select_from(Skill).where(func.lower(Skill.name) == name.lower())
        if exclude_skill_id:
            stmt = stmt.where(Skill.skill_id != exclude_skill_id)
        if await self.db.scalar(stmt):
            raise ConflictError(self.conflict_message, code=self.conflict_code)

    async def create_skill(self, values: Dict[str, Any]) -> Skill:
        await self.ensure_name_available(values["name"])
        return await self.add(values)

    async def update_skill(self, skill: Skill, changes: Dict[str, Any]) -> Skill:
        if "name" in changes and changes["name"] != skill.name:
            await self.ensure_name_available(changes["name"], exclude_skill_id=skill.skill_id)
        return await self.update(skill, changes)


class UserSkillRepository(OwnedRepository[UserSkill]):
    model = UserSkill
    query = USER_SKILL_QUERY
    resource_name = "User skill"
    conflict_message = "User already has this skill"
    conflict_code = "USER_SKILL_EXISTS"

    async def link(self, owner_id: str, skill_id: str, years_experience: Optional[float]) -> UserSkill:
        skill = await self.db.get(Skill, skill_id)
        if skill is None:
            raise NotFoundError("Skill", skill_id)

        existing = await self.db.scalar(
            select(func.count()).select_from(UserSkill).where(
                UserSkill.user_id == owner_id,
                UserSkill.skill_id == skill_id,
            )
        )
        if existing:
            raise ConflictError(self.conflict_message, code=self.conflict_code)

        return await self.create_for(owner_id, {
            "skill_id": skill_id,
            "years_experience": years_experience,
        })
