"""
Configuration management for the FastAPI application.
Uses Pydantic Settings for environment variable management.
"""
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Configuration
    API_TITLE: str = "Nallore Backend API"
    API_VERSION: str = "0.1.0"
    API_DESCRIPTION: str = "Content API for gallery, events, blog, team and contact messages"

    # CORS Configuration
    # The public site and the admin client are served from different origins
    CORS_ORIGINS: List[str] = ["*"]

    # Database Configuration
    # Empty value falls back to an in-memory SQLite database
    DATABASE_URL: str = ""
    # Create missing tables from the SQLAlchemy metadata on startup
    AUTO_CREATE_TABLES: bool = False

    # Admin Authentication
    # Shared secret sent by the admin client in the X-Admin-Token header
    ADMIN_TOKEN: str = ""
    # Optional bcrypt hash; when set, login checks the password against it
    # (generate with: python generate_password_hash.py)
    ADMIN_PASSWORD_HASH: str = ""

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = True
    LOGIN_RATE_LIMIT: str = "5/minute"

    # Listing
    # Applied to /api/events when limit is present but not a usable number
    DEFAULT_EVENTS_LIMIT: int = 3

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignore extra fields in .env that aren't defined in Settings


# Global settings instance
settings = Settings()
