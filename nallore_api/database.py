"""
Database connection and session management for SQLAlchemy 2.0.
Configured for async operations with PostgreSQL (asyncpg), falling back to
SQLite (aiosqlite) when no DATABASE_URL is configured.

This module owns the engine and its connection pool; the rest of the
application only ever hands it a session and a built statement.
"""
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
)
from sqlalchemy.exc import SQLAlchemyError, StatementError
from sqlalchemy.orm import declarative_base
from sqlalchemy import Date, DateTime, bindparam, text
from sqlalchemy.sql.elements import TextClause
from typing import Any, Dict, List
from datetime import date, datetime
from urllib.parse import urlparse
import logging
import socket

from nallore_api.config import settings
from nallore_api.errors import StoreError
from nallore_api.query_builder import BuiltQuery

logger = logging.getLogger(__name__)

# Create declarative base for models
Base = declarative_base()


def _async_database_url(url: str) -> str:
    """Map plain PostgreSQL URLs onto the asyncpg driver."""
    if url.startswith("postgres://"):
        url = "postgresql://" + url[len("postgres://"):]
    if url.startswith("postgresql://"):
        return "postgresql+asyncpg://" + url[len("postgresql://"):]
    return url


DATABASE_URL = _async_database_url(settings.DATABASE_URL) if settings.DATABASE_URL else "sqlite+aiosqlite:///:memory:"

# Create async engine with connection pooling
# Pool settings only apply to PostgreSQL (not SQLite)
_engine_args = {
    "echo": False,  # Set to True for SQL query logging in development
}

if DATABASE_URL.startswith("postgresql"):
    _engine_args.update({
        "pool_size": 10,  # Number of connections to maintain in pool
        "max_overflow": 20,  # Additional connections allowed beyond pool_size
        "pool_pre_ping": True,  # Verify connections before using (handles stale connections)
        "pool_recycle": 3600,  # Recycle connections after 1 hour (prevents stale connections)
        "connect_args": {
            "server_settings": {
                "application_name": "nallore-backend"
            }
        }
    })

engine = create_async_engine(DATABASE_URL, **_engine_args)

# Create async session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def get_db() -> AsyncSession:
    """
    FastAPI dependency for database sessions.
    Provides async database session with automatic commit/rollback.

    Usage:
        @router.get("/endpoint")
        async def my_endpoint(db: AsyncSession = Depends(get_db)):
            # Use db session here
            pass
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception as e:
            await session.rollback()
            if isinstance(e, SQLAlchemyError):
                logger.error(f"Database session error: {str(e)}", exc_info=True)
            raise
        finally:
            await session.close()


def bound_statement(query: BuiltQuery) -> TextClause:
    """
    Wrap a built query in `text()`, typing date and datetime arguments so
    each dialect renders them itself instead of relying on driver adapters.
    """
    typed = []
    for name, value in query.params.items():
        if isinstance(value, datetime):
            typed.append(bindparam(name, type_=DateTime()))
        elif isinstance(value, date):
            typed.append(bindparam(name, type_=Date()))
    statement = text(query.sql)
    return statement.bindparams(*typed) if typed else statement


def _store_message(error: SQLAlchemyError) -> str:
    """Driver-level message for a store failure, without the statement text."""
    if isinstance(error, StatementError) and error.orig is not None:
        return str(error.orig)
    return str(error)


async def run_statement(
    db: AsyncSession,
    query: BuiltQuery,
    commit: bool = False,
) -> List[Dict[str, Any]]:
    """
    Execute one built statement and return its rows as dictionaries.

    Args:
        db: Database session
        query: Statement and positional arguments from the query builder
        commit: Commit after reading the returned rows (write statements)

    Returns:
        list[dict]: Returned rows keyed by column name (empty when none)

    Raises:
        StoreError: If the store rejects or fails the statement
    """
    try:
        result = await db.execute(bound_statement(query), query.params)
        rows = [dict(row) for row in result.mappings().all()]
        if commit:
            await db.commit()
        return rows
    except SQLAlchemyError as e:
        await db.rollback()
        message = _store_message(e)
        logger.error(f"Statement failed ({type(e).__name__}): {message}", exc_info=True)
        raise StoreError(message) from e


def _validate_database_url(url: str) -> tuple[bool, str]:
    """
    Validate database URL and provide diagnostic information.
    Returns (is_valid, diagnostic_message)
    """
    if not url:
        return False, "DATABASE_URL is empty"

    try:
        parsed = urlparse(url)

        if url.startswith("sqlite"):
            return True, f"SQLite database: {parsed.path or ':memory:'}"

        # Check if it's a PostgreSQL URL
        if not url.startswith(("postgres://", "postgresql://", "postgresql+asyncpg://")):
            return False, f"Invalid database URL scheme. Expected postgresql:// or postgresql+asyncpg://, got: {parsed.scheme}"

        # Extract hostname
        hostname = parsed.hostname
        if not hostname:
            return False, "No hostname found in DATABASE_URL"

        # Try DNS resolution
        try:
            socket.getaddrinfo(hostname, None)
            dns_status = "DNS resolution successful"
        except socket.gaierror as e:
            dns_status = f"DNS resolution failed: {str(e)}. This may indicate network connectivity issues or incorrect hostname."

        return True, f"URL format valid. Hostname: {hostname}, Port: {parsed.port or 5432}, Database: {parsed.path or '/postgres'}. {dns_status}"

    except ValueError as e:
        return False, f"Error parsing DATABASE_URL: {str(e)}"


async def create_tables():
    """Create any missing resource tables from the model metadata."""
    # Register the table definitions on Base.metadata
    import nallore_api.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables verified")


async def init_db():
    """
    Initialize database connection.
    Used at startup to verify the connection and optionally create tables.
    """
    if not settings.DATABASE_URL:
        logger.warning("DATABASE_URL not set, using in-memory SQLite database")
    else:
        # Validate URL and provide diagnostics
        is_valid, diagnostic = _validate_database_url(settings.DATABASE_URL)
        if not is_valid:
            logger.error(f"Invalid DATABASE_URL: {diagnostic}")
            raise ValueError(f"Invalid DATABASE_URL: {diagnostic}")

        logger.info(f"Database URL validation: {diagnostic}")

    try:
        async with engine.begin() as conn:
            # Test connection with a simple query
            await conn.execute(text("SELECT 1"))
            logger.info("Database connection initialized successfully")
    except (SQLAlchemyError, OSError) as e:
        error_msg = _store_message(e) if isinstance(e, SQLAlchemyError) else str(e)

        if "connection refused" in error_msg.lower() or "timeout" in error_msg.lower():
            logger.error(
                f"Database connection failed - Connection refused/timeout: {error_msg}\n"
                f"This usually means:\n"
                f"  1. The database server is not accessible\n"
                f"  2. Firewall is blocking the connection\n"
                f"  3. The port is incorrect"
            )
        elif "authentication failed" in error_msg.lower() or "password" in error_msg.lower():
            logger.error(
                f"Database connection failed - Authentication error: {error_msg}\n"
                f"This usually means:\n"
                f"  1. Incorrect username or password in DATABASE_URL\n"
                f"  2. Database user does not have required permissions"
            )
        else:
            logger.error(f"Database connection failed ({type(e).__name__}): {error_msg}")
        raise

    if settings.AUTO_CREATE_TABLES or not settings.DATABASE_URL:
        await create_tables()


async def close_db():
    """
    Close database connections.
    Used for shutdown events.
    """
    await engine.dispose()
    logger.info("Database connections closed")
