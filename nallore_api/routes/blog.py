"""
Blog routes.
Public list and detail views plus admin CRUD.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from nallore_api.database import get_db
from nallore_api.schemas import BlogCreate, BlogResponse, BlogUpdate, DeleteResponse
from nallore_api.services.resource_service import blogs
from nallore_api.utils.auth import require_admin

router = APIRouter()


@router.get("/blog", response_model=List[BlogResponse])
async def get_blog_posts(
    limit: Optional[int] = None,
    db: AsyncSession = Depends(get_db)
):
    """
    Get blog posts, newest first.

    Args:
        limit: Maximum number of posts (clamped to 1..100)
        db: Database session (injected by FastAPI dependency)
    """
    return await blogs.list(db, limit=limit)


@router.get("/blog/{post_id}", response_model=BlogResponse)
async def get_blog_post(post_id: int, db: AsyncSession = Depends(get_db)):
    """Get a single blog post; 404 if it does not exist."""
    return await blogs.get(db, post_id)


@router.get("/admin/blog", response_model=List[BlogResponse])
async def get_admin_blog_posts(
    authenticated: bool = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    return await blogs.list(db, admin=True)


@router.post("/admin/blog", response_model=BlogResponse, status_code=status.HTTP_201_CREATED)
async def create_blog_post(
    post: BlogCreate,
    authenticated: bool = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """Create a blog post; title and content are required."""
    return await blogs.create(db, post.values())


@router.put("/admin/blog/{post_id}", response_model=BlogResponse)
async def update_blog_post(
    post_id: int,
    post_update: BlogUpdate,
    authenticated: bool = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    return await blogs.update(db, post_id, post_update.values(), post_update.clear)


@router.delete("/admin/blog/{post_id}", response_model=DeleteResponse)
async def delete_blog_post(
    post_id: int,
    authenticated: bool = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    return await blogs.delete(db, post_id)
