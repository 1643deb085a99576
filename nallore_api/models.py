"""
SQLAlchemy models for the application.
All database models inherit from Base (declarative base).
They define the table layout used for table creation; reads and writes go
through the query builder against the same tables.
"""
from sqlalchemy import Column, Integer, String, Text, Date, DateTime
from sqlalchemy.sql import func
from nallore_api.database import Base

# Identifiers are never reused after deletion (AUTOINCREMENT on SQLite,
# SERIAL sequences on PostgreSQL)
_NO_ID_REUSE = {"sqlite_autoincrement": True}


class GalleryImage(Base):
    """Gallery image: image source path or URL, title and category key."""
    __tablename__ = "gallery_images"
    __table_args__ = _NO_ID_REUSE

    id = Column(Integer, primary_key=True)
    src = Column(String, nullable=False)
    title = Column(String, nullable=False)
    category_key = Column(String, nullable=False, index=True)


class GalleryCategory(Base):
    """Gallery category; managed directly in the database."""
    __tablename__ = "gallery_categories"

    key = Column(String, primary_key=True)
    title = Column(String, nullable=False)


class Event(Base):
    __tablename__ = "events"
    __table_args__ = _NO_ID_REUSE

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    date = Column(Date, nullable=True, index=True)
    location = Column(String, nullable=True)
    category = Column(String, nullable=True)
    image = Column(String, nullable=True)


class Blog(Base):
    __tablename__ = "blogs"
    __table_args__ = _NO_ID_REUSE

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    thumbnail = Column(String, nullable=True)
    author = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class TeamMember(Base):
    __tablename__ = "team_members"
    __table_args__ = _NO_ID_REUSE

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    role = Column(String, nullable=True)
    level = Column(String, nullable=False, index=True)
    image = Column(String, nullable=True)
    description = Column(Text, nullable=True)


class ContactMessage(Base):
    __tablename__ = "contact_messages"
    __table_args__ = _NO_ID_REUSE

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    subject = Column(String, nullable=True)
    message = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
