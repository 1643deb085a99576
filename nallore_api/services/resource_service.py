"""
Resource handlers.
One generic handler, bound to a registry entry, implements create, list,
get, update and delete for every resource. Each call builds exactly one
statement, executes it and turns empty results into the right outcome.
"""
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any, Dict, Iterable, List, Mapping, Optional
import logging

from nallore_api.database import run_statement
from nallore_api.errors import NotFound, ValidationError
from nallore_api.query_builder import (
    build_delete,
    build_filtered_select,
    build_insert,
    build_partial_update,
    build_select_by_id,
    missing_required,
)
from nallore_api.registry import (
    BLOGS,
    CONTACT_MESSAGES,
    EVENTS,
    GALLERY_CATEGORIES,
    GALLERY_IMAGES,
    TEAM_MEMBERS,
    ResourceSchema,
)

logger = logging.getLogger(__name__)


class ResourceHandler:
    """CRUD operations for one resource table."""

    def __init__(self, schema: ResourceSchema):
        self.schema = schema

    async def create(self, db: AsyncSession, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Insert a record.

        Args:
            db: Database session
            payload: Column values; every required column must be non-empty

        Returns:
            dict: The stored record, including its new identifier

        Raises:
            ValidationError: If a required column is missing or empty
            StoreError: If the insert fails
        """
        missing = missing_required(self.schema, payload)
        if missing:
            raise ValidationError(f"{', '.join(missing)} required")

        rows = await run_statement(db, build_insert(self.schema, payload), commit=True)
        record = rows[0]
        logger.info(f"Created {self.schema.name}: ID {record[self.schema.id_column]}")
        return record

    async def list(
        self,
        db: AsyncSession,
        filters: Optional[Mapping[str, Any]] = None,
        *,
        upcoming: bool = False,
        limit: Optional[int] = None,
        admin: bool = False,
    ) -> List[Dict[str, Any]]:
        """List records, optionally filtered; see build_filtered_select."""
        query = build_filtered_select(
            self.schema, filters, upcoming=upcoming, limit=limit, admin=admin
        )
        rows = await run_statement(db, query)
        logger.debug(f"Retrieved {len(rows)} {self.schema.table} rows")
        return rows

    async def get(self, db: AsyncSession, record_id: Any) -> Dict[str, Any]:
        """Fetch one record or raise NotFound."""
        rows = await run_statement(db, build_select_by_id(self.schema, record_id))
        if not rows:
            raise NotFound(self.schema.name, record_id)
        return rows[0]

    async def update(
        self,
        db: AsyncSession,
        record_id: Any,
        payload: Mapping[str, Any],
        clear: Iterable[str] = (),
    ) -> Dict[str, Any]:
        """
        Apply a partial update.

        Only truthy payload values are written; columns listed in ``clear``
        are set to null. An update with nothing to write is rejected before
        any statement runs.

        Returns:
            dict: The record after the update

        Raises:
            NoOpError: If no column would change
            ValidationError: If ``clear`` is invalid
            NotFound: If no record has this identifier
            StoreError: If the update fails
        """
        query = build_partial_update(self.schema, record_id, payload, clear)
        rows = await run_statement(db, query, commit=True)
        if not rows:
            raise NotFound(self.schema.name, record_id)
        logger.info(f"Updated {self.schema.name}: ID {record_id}")
        return rows[0]

    async def delete(self, db: AsyncSession, record_id: Any) -> Dict[str, bool]:
        """
        Delete a record.
        A missing identifier is reported as {"deleted": False}, not an error.
        """
        rows = await run_statement(db, build_delete(self.schema, record_id), commit=True)
        deleted = bool(rows)
        if deleted:
            logger.info(f"Deleted {self.schema.name}: ID {record_id}")
        else:
            logger.info(f"Delete skipped, {self.schema.name} {record_id} does not exist")
        return {"deleted": deleted}


gallery_images = ResourceHandler(GALLERY_IMAGES)
gallery_categories = ResourceHandler(GALLERY_CATEGORIES)
events = ResourceHandler(EVENTS)
blogs = ResourceHandler(BLOGS)
team_members = ResourceHandler(TEAM_MEMBERS)
contact_messages = ResourceHandler(CONTACT_MESSAGES)
