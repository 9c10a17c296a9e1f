from typing import Any, Dict, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import selectinload

from portfolio.core.exceptions import ConflictError
from portfolio.models.base import utcnow
from portfolio.models.project import Project, ProjectGalleryImage
from portfolio.repositories.base import BaseRepository, OwnedRepository
from portfolio.utils.query_builder import Equals, ResourceQuery, Search

PROJECT_QUERY = ResourceQuery(
    model=Project,
    filters={
        "search": Search(Project.title, Project.content),
        "category": Equals(Project.category),
        "user_id": Equals(Project.user_id),
    },
    sortable={
        "title": Project.title,
        "project_date": Project.project_date,
        "created_at": Project.created_at,
    },
)

GALLERY_QUERY = ResourceQuery(
    model=ProjectGalleryImage,
    filters={"project_id": Equals(ProjectGalleryImage.project_id)},
    sortable={"sort_order": ProjectGalleryImage.sort_order},
    default_sort=("sort_order", "asc"),
    default_limit=100,
)

SLUG_CONFLICT_MESSAGE = "Project with this slug already exists"
SLUG_CONFLICT_CODE = "SLUG_EXISTS"


class ProjectRepository(OwnedRepository[Project]):
    model = Project
    query = PROJECT_QUERY
    resource_name = "Project"
    conflict_message = SLUG_CONFLICT_MESSAGE
    conflict_code = SLUG_CONFLICT_CODE

    async def get_with_gallery(self, project_id: str) -> Optional[Project]:
        result = await self.db.execute(
            select(Project)
            .options(selectinload(Project.gallery_images))
            .where(Project.project_id == project_id)
        )
        return result.unique().scalar_one_or_none()

    async def ensure_slug_available(self, slug: str, exclude_project_id: Optional[str] = None) -> None:
        stmt = select(func.count()).select_from(Project).where(Project.slug == slug)
        if exclude_project_id:
            stmt = stmt.where(Project.project_id != exclude_project_id)
        if await self.db.scalar(stmt):
            raise ConflictError(SLUG_CONFLICT_MESSAGE, code=SLUG_CONFLICT_CODE)

    async def create_project(self, owner_id: str, values: Dict[str, Any]) -> Project:
        await self.ensure_slug_available(values["slug"])
        return await self.create_for(owner_id, values)

    async def update_project(self, project: Project, changes: Dict[str, Any]) -> Project:
        """Apply a partial update; ownership is never part of ``changes``"""
        changes.pop("user_id", None)
        if "slug" in changes and changes["slug"] != project.slug:
            await self.ensure_slug_available(changes["slug"], exclude_project_id=project.project_id)
        changes["updated_at"] = utcnow()
        return await self.update(project, changes)


class GalleryImageRepository(BaseRepository[ProjectGalleryImage]):
    model = ProjectGalleryImage
    query = GALLERY_QUERY
    resource_name = "Gallery image"
    conflict_message = "Gallery image already exists"
    conflict_code = "GALLERY_IMAGE_EXISTS"

    async def add_to_project(self, project: Project, values: Dict[str, Any]) -> ProjectGalleryImage:
        return await self.add({**values, "project_id": project.project_id})
