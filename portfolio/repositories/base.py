"""
Base repository shared by every resource.

A repository is constructed per request with the request's AsyncSession and
owns the unit of work for its writes: add/flush, commit, refresh. Constraint
violations are rolled back and translated through ``map_integrity_error``.
"""
from typing import Any, Dict, Generic, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.core.exceptions import NotFoundError, map_integrity_error
from portfolio.core.logging_config import logger
from portfolio.utils.pagination import Page
from portfolio.utils.query_builder import QueryBuilder, ResourceQuery, fetch_page

ModelT = TypeVar("ModelT")


class BaseRepository(Generic[ModelT]):
    model: Type[ModelT]
    query: ResourceQuery
    # Human name used in NotFound messages and error codes ("Project" -> PROJECT_NOT_FOUND)
    resource_name: str = "Resource"
    conflict_message: str = "Resource already exists"
    conflict_code: str = "CONFLICT"

    def __init__(self, db: AsyncSession):
        self.db = db

    @property
    def table(self) -> str:
        return self.model.__tablename__

    def _pk(self):
        return self.query.primary_key

    async def get(self, resource_id: str) -> Optional[ModelT]:
        result = await self.db.execute(
            select(self.model).options(*self.query.options).where(self._pk() == resource_id)
        )
        return result.unique().scalar_one_or_none()

    async def get_or_404(self, resource_id: str) -> ModelT:
        obj = await self.get(resource_id)
        if obj is None:
            raise NotFoundError(self.resource_name, resource_id)
        return obj

    async def list(self, criteria: Any = None) -> Page:
        built = QueryBuilder(self.query).build(criteria)
        return await fetch_page(self.db, built)

    async def add(self, values: Dict[str, Any]) -> ModelT:
        obj = self.model(**values)
        self.db.add(obj)
        await self._commit(obj)
        logger.log_statement("INSERT", self.table, rows=1)
        return obj

    async def update(self, obj: ModelT, changes: Dict[str, Any]) -> ModelT:
        for key, value in changes.items():
            setattr(obj, key, value)
        await self._commit(obj)
        logger.log_statement("UPDATE", self.table, rows=1)
        return obj

    async def delete(self, obj: ModelT) -> None:
        await self.db.delete(obj)
        await self._commit()
        logger.log_statement("DELETE", self.table, rows=1)

    async def _commit(self, obj: Optional[ModelT] = None) -> None:
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"Integrity error on {self.table}: {e.orig}")
            raise map_integrity_error(
                e,
                conflict_message=self.conflict_message,
                conflict_code=self.conflict_code,
            ) from e
        if obj is not None:
            await self.db.refresh(obj)


class OwnedRepository(BaseRepository[ModelT]):
    """Repository for rows that belong to a user through ``user_id``"""

    async def create_for(self, owner_id: str, values: Dict[str, Any]) -> ModelT:
        return await self.add({**values, "user_id": owner_id})
