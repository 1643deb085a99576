"""
Contact form routes.
Anyone can submit a message; reading and removing messages is admin-only.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from nallore_api.database import get_db
from nallore_api.schemas import ContactMessageCreate, ContactMessageResponse, DeleteResponse
from nallore_api.services.resource_service import contact_messages
from nallore_api.utils.auth import require_admin

router = APIRouter(prefix="/contact", tags=["contact"])


@router.post("", response_model=ContactMessageResponse, status_code=status.HTTP_201_CREATED)
async def submit_contact_message(
    message: ContactMessageCreate,
    db: AsyncSession = Depends(get_db)
):
    """
    Save a message from the public contact form.
    Name, email and message are required; phone and subject are optional.
    """
    return await contact_messages.create(db, message.values())


@router.get("", response_model=List[ContactMessageResponse])
async def get_contact_messages(
    authenticated: bool = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """All contact messages, newest first. Requires admin token authentication."""
    return await contact_messages.list(db, admin=True)


@router.delete("/{message_id}", response_model=DeleteResponse)
async def delete_contact_message(
    message_id: int,
    authenticated: bool = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    return await contact_messages.delete(db, message_id)
