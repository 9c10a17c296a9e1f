from typing import Optional

from sqlalchemy import select, update

from portfolio.core.logging_config import logger
from portfolio.models.resume import Resume
from portfolio.models.user import User
from portfolio.repositories.base import OwnedRepository
from portfolio.utils.query_builder import Equals, ResourceQuery

RESUME_QUERY = ResourceQuery(
    model=Resume,
    filters={
        "user_id": Equals(Resume.user_id),
        "is_primary": Equals(Resume.primary_resume),
    },
    sortable={"uploaded_at": Resume.uploaded_at},
    default_sort=("uploaded_at", "desc"),
)


class ResumeRepository(OwnedRepository[Resume]):
    """
    Resume rows. At most one resume per user is primary.

    Making a resume primary demotes the user's other primaries in the same
    transaction as the insert/update. The user row is locked first
    (SELECT ... FOR UPDATE, rendered only on dialects that support it) so two
    concurrent primary uploads for one user are serialized.
    """
    model = Resume
    query = RESUME_QUERY
    resource_name = "Resume"

    async def _lock_owner(self, user_id: str) -> None:
        await self.db.execute(
            select(User.user_id).where(User.user_id == user_id).with_for_update()
        )

    async def _demote_primaries(self, user_id: str, keep_resume_id: Optional[str] = None) -> None:
        stmt = (
            update(Resume)
            .where(Resume.user_id == user_id, Resume.primary_resume.is_(True))
            .values(primary_resume=False)
        )
        if keep_resume_id:
            stmt = stmt.where(Resume.resume_id != keep_resume_id)
        result = await self.db.execute(stmt)
        if result.rowcount:
            logger.log_statement("UPDATE", self.table, rows=result.rowcount, owner_id=user_id)

    async def create_resume(
        self,
        owner_id: str,
        file_url: str,
        file_name: str,
        file_size: int,
        primary_resume: bool = True,
    ) -> Resume:
        if primary_resume:
            await self._lock_owner(owner_id)
            await self._demote_primaries(owner_id)
        # add() commits the demotion and the insert together
        return await self.create_for(owner_id, {
            "file_url": file_url,
            "file_name": file_name,
            "file_size": file_size,
            "primary_resume": primary_resume,
        })

    async def update_resume(self, resume: Resume, changes: dict) -> Resume:
        if changes.get("primary_resume") and not resume.primary_resume:
            await self._lock_owner(resume.user_id)
            await self._demote_primaries(resume.user_id, keep_resume_id=resume.resume_id)
        return await self.update(resume, changes)

    async def get_primary(self, user_id: str) -> Optional[Resume]:
        """Primary resume, falling back to the most recent upload"""
        result = await self.db.execute(
            select(Resume)
            .where(Resume.user_id == user_id)
            .order_by(Resume.primary_resume.desc(), Resume.uploaded_at.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()
