from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.core.database import get_db
from portfolio.core.logging_config import logger
from portfolio.core.rate_limiter import CONTACT_LIMIT, limiter
from portfolio.modules.auth.dependencies import get_current_user, require_admin
from portfolio.modules.auth.permissions import Actor, Operation, ensure_can_mutate
from portfolio.repositories.contact_messages import ContactMessageRepository
from portfolio.schemas.common import MessageResponse, criteria_dependency, require_changes
from portfolio.schemas.contact import (
    ContactMessageCreate,
    ContactMessageListResponse,
    ContactMessageQuery,
    ContactMessageResponse,
    ContactMessageUpdate,
)

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
@limiter.limit(CONTACT_LIMIT)
async def send_message(
    request: Request,
    payload: ContactMessageCreate,
    db: AsyncSession = Depends(get_db)
):
    """Public contact form"""
    message = await ContactMessageRepository(db).add(payload.model_dump())
    logger.info(f"Contact message received from {message.email}")
    return {
        "message": "Message sent successfully",
        "contact_message": ContactMessageResponse.model_validate(message),
    }


@router.get("", response_model=ContactMessageListResponse)
async def list_messages(
    criteria: ContactMessageQuery = Depends(criteria_dependency(ContactMessageQuery)),
    current_user: Actor = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    page = await ContactMessageRepository(db).list(criteria)
    return page.to_response("contact_messages", ContactMessageResponse.model_validate)


@router.get("/{message_id}")
async def get_message(
    message_id: str,
    current_user: Actor = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    message = await ContactMessageRepository(db).get_or_404(message_id)
    return {"contact_message": ContactMessageResponse.model_validate(message)}


@router.put("/{message_id}")
async def update_message(
    message_id: str,
    payload: ContactMessageUpdate,
    current_user: Actor = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Mark a message read or unread"""
    messages = ContactMessageRepository(db)
    message = await messages.get_or_404(message_id)
    ensure_can_mutate(current_user, message, Operation.UPDATE)
    message = await messages.update(message, require_changes(payload))
    return {
        "message": "Contact message updated successfully",
        "contact_message": ContactMessageResponse.model_validate(message),
    }


@router.delete("/{message_id}", response_model=MessageResponse)
async def delete_message(
    message_id: str,
    current_user: Actor = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    messages = ContactMessageRepository(db)
    message = await messages.get_or_404(message_id)
    ensure_can_mutate(current_user, message, Operation.DELETE)
    await messages.delete(message)
    return {"message": "Contact message deleted successfully"}
