from typing import Any, Dict, Optional

from sqlalchemy import func, select

from portfolio.core.exceptions import ConflictError
from portfolio.core.security import get_password_hash
from portfolio.models.base import utcnow
from portfolio.models.user import User, UserRole
from portfolio.repositories.base import BaseRepository
from portfolio.utils.query_builder import Equals, ResourceQuery, Search

USER_QUERY = ResourceQuery(
    model=User,
    filters={
        "role": Equals(User.role),
        "search": Search(User.full_name, User.email),
    },
    sortable={
        "full_name": User.full_name,
        "created_at": User.created_at,
        "last_login": User.last_login,
    },
)

EMAIL_CONFLICT_MESSAGE = "User with this email already exists"
EMAIL_CONFLICT_CODE = "USER_ALREADY_EXISTS"


class UserRepository(BaseRepository[User]):
    """Credential store: lookups by email, registration and profile changes"""
    model = User
    query = USER_QUERY
    resource_name = "User"
    conflict_message = EMAIL_CONFLICT_MESSAGE
    conflict_code = EMAIL_CONFLICT_CODE

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(
            select(User).where(func.lower(User.email) == email.lower())
        )
        return result.scalar_one_or_none()

    async def ensure_email_available(self, email: str, exclude_user_id: Optional[str] = None) -> None:
        existing = await self.get_by_email(email)
        if existing and existing.user_id != exclude_user_id:
            raise ConflictError(EMAIL_CONFLICT_MESSAGE, code=EMAIL_CONFLICT_CODE)

    async def register(
        self,
        email: str,
        password: str,
        full_name: str,
        bio: Optional[str] = None,
        profile_pic_url: Optional[str] = None,
        role: UserRole = UserRole.USER,
    ) -> User:
        # Checked up front for a clean message; the unique index still backs it up
        await self.ensure_email_available(email)
        return await self.add({
            "email": email.lower(),
            "hashed_password": get_password_hash(password),
            "full_name": full_name,
            "bio": bio,
            "profile_pic_url": profile_pic_url,
            "role": role,
        })

    async def record_login(self, user: User) -> User:
        return await self.update(user, {"last_login": utcnow()})

    async def update_profile(self, user: User, changes: Dict[str, Any]) -> User:
        if "email" in changes and changes["email"] != user.email:
            await self.ensure_email_available(changes["email"], exclude_user_id=user.user_id)
        return await self.update(user, changes)
