"""
Event routes.
Public listing (optionally upcoming-only and limited) plus admin CRUD.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import logging

from nallore_api.config import settings
from nallore_api.database import get_db
from nallore_api.schemas import DeleteResponse, EventCreate, EventResponse, EventUpdate
from nallore_api.services.resource_service import events
from nallore_api.utils.auth import require_admin

logger = logging.getLogger(__name__)

router = APIRouter()


def parse_events_limit(limit: Optional[str]) -> Optional[int]:
    """
    Interpret the public ``limit`` query value.
    Absent or blank means no limit; zero or a non-numeric value falls back
    to DEFAULT_EVENTS_LIMIT.
    """
    if not limit:
        return None
    try:
        value = int(limit)
    except ValueError:
        value = 0
    return value or settings.DEFAULT_EVENTS_LIMIT


@router.get("/events", response_model=List[EventResponse])
async def get_events(
    upcoming: Optional[str] = None,
    limit: Optional[str] = None,
    db: AsyncSession = Depends(get_db)
):
    """
    Get events in date order.

    Args:
        upcoming: "true" restricts to events dated today or later; any other
            value is ignored
        limit: Maximum number of events (clamped to 1..100)
        db: Database session (injected by FastAPI dependency)
    """
    return await events.list(db, upcoming=upcoming == "true", limit=parse_events_limit(limit))


@router.get("/events/{event_id}", response_model=EventResponse)
async def get_event(event_id: int, db: AsyncSession = Depends(get_db)):
    return await events.get(db, event_id)


@router.get("/admin/events", response_model=List[EventResponse])
async def get_admin_events(
    authenticated: bool = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """All events for the admin dashboard, most recently added first."""
    return await events.list(db, admin=True)


@router.post("/admin/events", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    event: EventCreate,
    authenticated: bool = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    return await events.create(db, event.values())


@router.put("/admin/events/{event_id}", response_model=EventResponse)
async def update_event(
    event_id: int,
    event_update: EventUpdate,
    authenticated: bool = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    return await events.update(db, event_id, event_update.values(), event_update.clear)


@router.delete("/admin/events/{event_id}", response_model=DeleteResponse)
async def delete_event(
    event_id: int,
    authenticated: bool = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    return await events.delete(db, event_id)
