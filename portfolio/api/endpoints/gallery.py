from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.core.database import get_db
from portfolio.modules.auth.dependencies import get_current_user
from portfolio.modules.auth.permissions import Actor, Operation, ensure_can_mutate
from portfolio.repositories.projects import GalleryImageRepository
from portfolio.schemas.common import MessageResponse, require_changes
from portfolio.schemas.project import GalleryImageResponse, GalleryImageUpdate

router = APIRouter()


@router.put("/{image_id}")
async def update_gallery_image(
    image_id: str,
    payload: GalleryImageUpdate,
    current_user: Actor = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Change caption or order; allowed for the parent project's owner or an admin"""
    images = GalleryImageRepository(db)
    image = await images.get_or_404(image_id)
    ensure_can_mutate(current_user, image, Operation.UPDATE)

    image = await images.update(image, require_changes(payload))
    return {
        "message": "Gallery image updated successfully",
        "gallery_image": GalleryImageResponse.model_validate(image),
    }


@router.delete("/{image_id}", response_model=MessageResponse)
async def delete_gallery_image(
    image_id: str,
    current_user: Actor = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    images = GalleryImageRepository(db)
    image = await images.get_or_404(image_id)
    ensure_can_mutate(current_user, image, Operation.DELETE)

    await images.delete(image)
    return {"message": "Gallery image deleted successfully"}
