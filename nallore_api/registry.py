"""
Resource schema registry.
Static description of every resource table: read projection, updatable
columns, required-on-create columns, filters and ordering. The query
builder and the resource handlers both read from here, so list/update
behaviour cannot drift between endpoints.
"""
from dataclasses import dataclass
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class ResourceSchema:
    """
    Declarative description of one resource.

    Attributes:
        name: Resource name used in messages and URLs
        table: Table name in the store
        columns: Read projection, in response order (identifier first)
        updatable: Columns written on insert and eligible for partial update,
            in the fixed order statements are built
        required: Columns that must be present and non-empty on create
        filters: Columns accepting an equality filter on list
        order_by: Ordering for public listings
        admin_order_by: Ordering for admin listings
        upcoming_column: Date column compared against CURRENT_DATE when
            only upcoming rows are requested
        read_only: Resource has no write operations
    """
    name: str
    table: str
    columns: Tuple[str, ...]
    updatable: Tuple[str, ...] = ()
    required: Tuple[str, ...] = ()
    filters: Tuple[str, ...] = ()
    order_by: str = "id DESC"
    admin_order_by: str = "id DESC"
    upcoming_column: Optional[str] = None
    read_only: bool = False
    id_column: str = "id"

    @property
    def optional(self) -> Tuple[str, ...]:
        """Updatable columns that may be stored as NULL."""
        return tuple(c for c in self.updatable if c not in self.required)


# Value meaning "no filter applied" for categorical filters
ALL_SENTINEL = "all"

# Upper bound for any caller-supplied LIMIT
MAX_LIST_LIMIT = 100


GALLERY_IMAGES = ResourceSchema(
    name="gallery image",
    table="gallery_images",
    columns=("id", "src", "title", "category_key"),
    updatable=("src", "title", "category_key"),
    required=("src", "title", "category_key"),
    filters=("category_key",),
    order_by="id DESC",
)

GALLERY_CATEGORIES = ResourceSchema(
    name="gallery category",
    table="gallery_categories",
    columns=("key", "title"),
    # The "all" pseudo-category always leads the list
    order_by="CASE WHEN key = 'all' THEN 0 ELSE 1 END, title",
    admin_order_by="CASE WHEN key = 'all' THEN 0 ELSE 1 END, title",
    read_only=True,
    id_column="key",
)

EVENTS = ResourceSchema(
    name="event",
    table="events",
    columns=("id", "title", "date", "location", "category", "image"),
    updatable=("title", "date", "location", "category", "image"),
    required=("title",),
    order_by="date ASC",
    admin_order_by="id DESC",
    upcoming_column="date",
)

BLOGS = ResourceSchema(
    name="blog post",
    table="blogs",
    columns=("id", "title", "content", "thumbnail", "author", "created_at"),
    updatable=("title", "content", "thumbnail", "author"),
    required=("title", "content"),
    order_by="created_at DESC",
    admin_order_by="id DESC",
)

TEAM_MEMBERS = ResourceSchema(
    name="team member",
    table="team_members",
    columns=("id", "name", "role", "level", "image", "description"),
    updatable=("name", "role", "level", "image", "description"),
    required=("name", "level"),
    filters=("level",),
    order_by="level, id",
    admin_order_by="level, id",
)

CONTACT_MESSAGES = ResourceSchema(
    name="contact message",
    table="contact_messages",
    columns=("id", "name", "email", "phone", "subject", "message", "created_at"),
    updatable=("name", "email", "phone", "subject", "message"),
    required=("name", "email", "message"),
    order_by="created_at DESC",
    admin_order_by="created_at DESC",
)


REGISTRY: Dict[str, ResourceSchema] = {
    schema.table: schema
    for schema in (
        GALLERY_IMAGES,
        GALLERY_CATEGORIES,
        EVENTS,
        BLOGS,
        TEAM_MEMBERS,
        CONTACT_MESSAGES,
    )
}


def get_schema(table: str) -> ResourceSchema:
    """Look up a resource schema by table name."""
    try:
        return REGISTRY[table]
    except KeyError:
        raise KeyError(f"Unknown resource table: {table}") from None
