from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.core.database import get_db
from portfolio.core.exceptions import NotFoundError
from portfolio.core.logging_config import logger
from portfolio.modules.auth.dependencies import get_current_user
from portfolio.modules.auth.permissions import Actor, Operation, ensure_can_mutate
from portfolio.repositories.projects import GalleryImageRepository, ProjectRepository
from portfolio.schemas.common import MessageResponse, criteria_dependency, require_changes
from portfolio.schemas.project import (
    GalleryImageCreate,
    GalleryImageQuery,
    GalleryImageResponse,
    GalleryListResponse,
    ProjectCreate,
    ProjectDetailResponse,
    ProjectListResponse,
    ProjectQuery,
    ProjectResponse,
    ProjectUpdate,
)

router = APIRouter()


@router.get("", response_model=ProjectListResponse)
async def list_projects(
    criteria: ProjectQuery = Depends(criteria_dependency(ProjectQuery)),
    db: AsyncSession = Depends(get_db)
):
    """List projects with search, category/author filters, sorting and pagination"""
    page = await ProjectRepository(db).list(criteria)
    return page.to_response("projects", ProjectResponse.model_validate)


@router.get("/{project_id}")
async def get_project(
    project_id: str,
    db: AsyncSession = Depends(get_db)
):
    """Get a project with its gallery images"""
    project = await ProjectRepository(db).get_with_gallery(project_id)
    if project is None:
        raise NotFoundError("Project", project_id)
    return {"project": ProjectDetailResponse.model_validate(project)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_project(
    payload: ProjectCreate,
    current_user: Actor = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Create a project owned by the caller"""
    project = await ProjectRepository(db).create_project(current_user.id, payload.model_dump())
    logger.info(f"Project created: {project.slug} by {current_user.id}")
    return {
        "message": "Project created successfully",
        "project": ProjectResponse.model_validate(project),
    }


@router.put("/{project_id}")
async def update_project(
    project_id: str,
    payload: ProjectUpdate,
    current_user: Actor = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Update a project (owner or admin)"""
    projects = ProjectRepository(db)
    project = await projects.get_or_404(project_id)
    ensure_can_mutate(current_user, project, Operation.UPDATE)

    project = await projects.update_project(project, require_changes(payload))
    return {
        "message": "Project updated successfully",
        "project": ProjectResponse.model_validate(project),
    }


@router.delete("/{project_id}", response_model=MessageResponse)
async def delete_project(
    project_id: str,
    current_user: Actor = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Delete a project and its gallery (owner or admin)"""
    projects = ProjectRepository(db)
    project = await projects.get_or_404(project_id)
    ensure_can_mutate(current_user, project, Operation.DELETE)

    await projects.delete(project)
    logger.info(f"Project deleted: {project_id} by {current_user.id}")
    return {"message": "Project deleted successfully"}


# ========== Gallery ==========

@router.get("/{project_id}/gallery", response_model=GalleryListResponse)
async def list_gallery(
    project_id: str,
    criteria: GalleryImageQuery = Depends(criteria_dependency(GalleryImageQuery)),
    db: AsyncSession = Depends(get_db)
):
    await ProjectRepository(db).get_or_404(project_id)
    page = await GalleryImageRepository(db).list({**criteria.model_dump(), "project_id": project_id})
    return page.to_response("gallery_images", GalleryImageResponse.model_validate)


@router.post("/{project_id}/gallery", status_code=status.HTTP_201_CREATED)
async def add_gallery_image(
    project_id: str,
    payload: GalleryImageCreate,
    current_user: Actor = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Attach an image to a project (project owner or admin)"""
    project = await ProjectRepository(db).get_or_404(project_id)
    ensure_can_mutate(current_user, project, Operation.CREATE)

    image = await GalleryImageRepository(db).add_to_project(project, payload.model_dump())
    return {
        "message": "Gallery image added successfully",
        "gallery_image": GalleryImageResponse.model_validate(image),
    }
