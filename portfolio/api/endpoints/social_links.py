from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.core.database import get_db
from portfolio.modules.auth.dependencies import get_current_user
from portfolio.modules.auth.permissions import Actor, Operation, ensure_can_mutate
from portfolio.repositories.profile import SocialLinkRepository
from portfolio.schemas.common import MessageResponse, criteria_dependency, require_changes
from portfolio.schemas.social_link import (
    SocialLinkCreate,
    SocialLinkListResponse,
    SocialLinkQuery,
    SocialLinkResponse,
    SocialLinkUpdate,
)

router = APIRouter()


@router.get("", response_model=SocialLinkListResponse)
async def list_social_links(
    criteria: SocialLinkQuery = Depends(criteria_dependency(SocialLinkQuery)),
    db: AsyncSession = Depends(get_db)
):
    page = await SocialLinkRepository(db).list(criteria)
    return page.to_response("social_links", SocialLinkResponse.model_validate)


@router.get("/{social_id}")
async def get_social_link(
    social_id: str,
    db: AsyncSession = Depends(get_db)
):
    link = await SocialLinkRepository(db).get_or_404(social_id)
    return {"social_link": SocialLinkResponse.model_validate(link)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_social_link(
    payload: SocialLinkCreate,
    current_user: Actor = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Add a social profile link; new links must be https"""
    link = await SocialLinkRepository(db).create_for(current_user.id, payload.model_dump())
    return {
        "message": "Social link created successfully",
        "social_link": SocialLinkResponse.model_validate(link),
    }


@router.put("/{social_id}")
async def update_social_link(
    social_id: str,
    payload: SocialLinkUpdate,
    current_user: Actor = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    links = SocialLinkRepository(db)
    link = await links.get_or_404(social_id)
    ensure_can_mutate(current_user, link, Operation.UPDATE)

    link = await links.update(link, require_changes(payload))
    return {
        "message": "Social link updated successfully",
        "social_link": SocialLinkResponse.model_validate(link),
    }


@router.delete("/{social_id}", response_model=MessageResponse)
async def delete_social_link(
    social_id: str,
    current_user: Actor = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    links = SocialLinkRepository(db)
    link = await links.get_or_404(social_id)
    ensure_can_mutate(current_user, link, Operation.DELETE)

    await links.delete(link)
    return {"message": "Social link deleted successfully"}
