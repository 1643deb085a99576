"""
Gallery routes.
Public endpoints list categories and images; admin endpoints add, edit and
remove images and require the admin token.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import logging

from nallore_api.database import get_db
from nallore_api.registry import ALL_SENTINEL
from nallore_api.schemas import (
    DeleteResponse,
    GalleryCategoryResponse,
    GalleryImageCreate,
    GalleryImageResponse,
    GalleryImageUpdate,
)
from nallore_api.services.resource_service import gallery_categories, gallery_images
from nallore_api.utils.auth import require_admin

logger = logging.getLogger(__name__)

# Create router instance
router = APIRouter()


@router.get("/gallery/categories", response_model=List[GalleryCategoryResponse])
async def get_gallery_categories(db: AsyncSession = Depends(get_db)):
    """
    Get gallery categories for the filter bar.
    The "all" category comes first, the rest are ordered by title.
    """
    return await gallery_categories.list(db)


@router.get("/gallery/images", response_model=List[GalleryImageResponse])
async def get_gallery_images(
    category: str = ALL_SENTINEL,
    db: AsyncSession = Depends(get_db)
):
    """
    Get gallery images, newest first.

    Args:
        category: Category key to filter by; "all" returns every image
        db: Database session (injected by FastAPI dependency)

    Returns:
        list[GalleryImageResponse]: Matching images

    Raises:
        StoreError: 500 if the database query fails
    """
    images = await gallery_images.list(db, {"category_key": category})
    logger.info(f"Retrieved {len(images)} gallery images (category: {category})")
    return images


@router.get("/gallery/images/{image_id}", response_model=GalleryImageResponse)
async def get_gallery_image(image_id: int, db: AsyncSession = Depends(get_db)):
    """Get a single gallery image; 404 if it does not exist."""
    return await gallery_images.get(db, image_id)


@router.post("/admin/gallery", response_model=GalleryImageResponse, status_code=status.HTTP_201_CREATED)
async def create_gallery_image(
    image: GalleryImageCreate,
    authenticated: bool = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """
    Add a gallery image.
    Requires admin token authentication.

    Args:
        image: Image source, title and category key (all required)
        authenticated: Authentication status (injected by dependency)
        db: Database session (injected by FastAPI dependency)

    Returns:
        GalleryImageResponse: Created image with its identifier

    Raises:
        ValidationError: 400 if a required field is missing or empty
        Unauthorized: 401 if the admin token is missing or invalid
    """
    return await gallery_images.create(db, image.values())


@router.put("/admin/gallery/{image_id}", response_model=GalleryImageResponse)
async def update_gallery_image(
    image_id: int,
    image_update: GalleryImageUpdate,
    authenticated: bool = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """
    Update an existing gallery image.
    Requires admin token authentication. Only non-empty fields are changed.

    Args:
        image_id: Image ID to update
        image_update: Any subset of src, title, category_key
        authenticated: Authentication status (injected by dependency)
        db: Database session (injected by FastAPI dependency)

    Returns:
        GalleryImageResponse: Updated image

    Raises:
        ValidationError: 400 if nothing would be updated
        NotFound: 404 if image not found
    """
    return await gallery_images.update(db, image_id, image_update.values(), image_update.clear)


@router.delete("/admin/gallery/{image_id}", response_model=DeleteResponse)
async def delete_gallery_image(
    image_id: int,
    authenticated: bool = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """
    Delete a gallery image.
    Requires admin token authentication.

    Returns:
        DeleteResponse: deleted is false when the image did not exist
    """
    return await gallery_images.delete(db, image_id)
