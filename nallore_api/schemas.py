"""
Pydantic schemas for request and response data validation.
Defines data structures for API endpoints with automatic validation and serialization.

Request bodies declare every field optional: required-on-create checks are
made against the resource registry so that a missing field and an empty
field are rejected the same way for every resource.
"""
from pydantic import BaseModel, ConfigDict, EmailStr
from datetime import date as Date, datetime
from typing import Optional, List


class ResourceWrite(BaseModel):
    """Base for create/update bodies. Unknown keys are dropped."""

    model_config = ConfigDict(extra="ignore")

    def values(self) -> dict:
        """Column values supplied by the caller, excluding control fields."""
        return self.model_dump(exclude={"clear"}, exclude_unset=True)


class ResourceUpdate(ResourceWrite):
    """
    Partial update body.
    Blank fields are ignored; list column names in ``clear`` to set them to null.
    """
    clear: List[str] = []


# Gallery

class GalleryImageResponse(BaseModel):
    """Gallery image as returned by public and admin endpoints."""
    id: int
    src: str
    title: str
    category_key: str


class GalleryCategoryResponse(BaseModel):
    key: str
    title: str


class GalleryImageCreate(ResourceWrite):
    """
    Request schema for adding a gallery image.
    Used by POST /api/admin/gallery.
    """
    src: Optional[str] = None
    title: Optional[str] = None
    category_key: Optional[str] = None


class GalleryImageUpdate(ResourceUpdate):
    """Used by PUT /api/admin/gallery/{id}."""
    src: Optional[str] = None
    title: Optional[str] = None
    category_key: Optional[str] = None


# Events

class EventResponse(BaseModel):
    id: int
    title: str
    date: Optional[Date] = None
    location: Optional[str] = None
    category: Optional[str] = None
    image: Optional[str] = None


class EventCreate(ResourceWrite):
    title: Optional[str] = None
    date: Optional[Date] = None
    location: Optional[str] = None
    category: Optional[str] = None
    image: Optional[str] = None


class EventUpdate(ResourceUpdate):
    title: Optional[str] = None
    date: Optional[Date] = None
    location: Optional[str] = None
    category: Optional[str] = None
    image: Optional[str] = None


# Blog

class BlogResponse(BaseModel):
    id: int
    title: str
    content: str
    thumbnail: Optional[str] = None
    author: Optional[str] = None
    created_at: datetime


class BlogCreate(ResourceWrite):
    title: Optional[str] = None
    content: Optional[str] = None
    thumbnail: Optional[str] = None
    author: Optional[str] = None


class BlogUpdate(ResourceUpdate):
    title: Optional[str] = None
    content: Optional[str] = None
    thumbnail: Optional[str] = None
    author: Optional[str] = None


# Team

class TeamMemberResponse(BaseModel):
    id: int
    name: str
    role: Optional[str] = None
    level: str
    image: Optional[str] = None
    description: Optional[str] = None


class TeamMemberCreate(ResourceWrite):
    name: Optional[str] = None
    role: Optional[str] = None
    level: Optional[str] = None
    image: Optional[str] = None
    description: Optional[str] = None


class TeamMemberUpdate(ResourceUpdate):
    name: Optional[str] = None
    role: Optional[str] = None
    level: Optional[str] = None
    image: Optional[str] = None
    description: Optional[str] = None


# Contact

class ContactMessageResponse(BaseModel):
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    subject: Optional[str] = None
    message: str
    created_at: datetime


class ContactMessageCreate(ResourceWrite):
    """
    Request schema for the public contact form.
    Used by POST /api/contact.
    """
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    subject: Optional[str] = None
    message: Optional[str] = None


# Common

class DeleteResponse(BaseModel):
    """Outcome of a delete; false when no row had the given identifier."""
    deleted: bool


class LoginRequest(BaseModel):
    password: Optional[str] = None


class LoginResponse(BaseModel):
    token: str
