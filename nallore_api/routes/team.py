"""
Team routes.
Public listing grouped by level plus admin CRUD.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from nallore_api.database import get_db
from nallore_api.schemas import DeleteResponse, TeamMemberCreate, TeamMemberResponse, TeamMemberUpdate
from nallore_api.services.resource_service import team_members
from nallore_api.utils.auth import require_admin

router = APIRouter()


@router.get("/team", response_model=List[TeamMemberResponse])
async def get_team_members(
    level: Optional[str] = None,
    db: AsyncSession = Depends(get_db)
):
    """
    Get team members ordered by level, then by when they were added.

    Args:
        level: Level to filter by; omitted or "all" returns everyone
        db: Database session (injected by FastAPI dependency)
    """
    return await team_members.list(db, {"level": level})


@router.get("/team/{member_id}", response_model=TeamMemberResponse)
async def get_team_member(member_id: int, db: AsyncSession = Depends(get_db)):
    return await team_members.get(db, member_id)


@router.post("/admin/team", response_model=TeamMemberResponse, status_code=status.HTTP_201_CREATED)
async def create_team_member(
    member: TeamMemberCreate,
    authenticated: bool = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """Add a team member; name and level are required."""
    return await team_members.create(db, member.values())


@router.put("/admin/team/{member_id}", response_model=TeamMemberResponse)
async def update_team_member(
    member_id: int,
    member_update: TeamMemberUpdate,
    authenticated: bool = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    return await team_members.update(db, member_id, member_update.values(), member_update.clear)


@router.delete("/admin/team/{member_id}", response_model=DeleteResponse)
async def delete_team_member(
    member_id: int,
    authenticated: bool = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    return await team_members.delete(db, member_id)
