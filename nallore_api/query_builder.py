"""
Parameterized statement construction for resource tables.

All functions here are pure: they take a registry entry plus sparse caller
input and return the SQL text with numbered placeholders (:p1, :p2, ...)
and the ordered argument list. Column and table names only ever come from
the registry; caller values only ever travel as bound arguments.
"""
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from nallore_api.errors import NoOpError, ValidationError
from nallore_api.registry import ALL_SENTINEL, MAX_LIST_LIMIT, ResourceSchema


@dataclass(frozen=True)
class BuiltQuery:
    """SQL text plus its positional arguments."""
    sql: str
    args: Tuple[Any, ...] = ()

    @property
    def params(self) -> Dict[str, Any]:
        """Arguments keyed by placeholder name, as the driver expects them."""
        return {f"p{index}": value for index, value in enumerate(self.args, start=1)}


class _Placeholders:
    """Hands out sequential placeholders and records the bound values."""

    def __init__(self):
        self.args: List[Any] = []

    def bind(self, value: Any) -> str:
        self.args.append(value)
        return f":p{len(self.args)}"


def is_supplied(value: Any) -> bool:
    """
    Whether a payload value counts as provided.
    None, empty strings and other falsy values mean "not supplied", so a
    blank form field leaves the stored value alone. Clearing a column needs
    the explicit ``clear`` list of build_partial_update.
    """
    return bool(value)


def clamp_limit(limit: int) -> int:
    """Clamp a caller-supplied row limit to [1, MAX_LIST_LIMIT]."""
    return max(1, min(int(limit), MAX_LIST_LIMIT))


def _projection(schema: ResourceSchema) -> str:
    return ", ".join(schema.columns)


def _ensure_writable(schema: ResourceSchema) -> None:
    if schema.read_only:
        raise ValidationError(f"{schema.name} is read-only")


def missing_required(schema: ResourceSchema, payload: Mapping[str, Any]) -> List[str]:
    """Required columns absent or empty in the payload, in registry order."""
    return [column for column in schema.required if not is_supplied(payload.get(column))]


def build_insert(schema: ResourceSchema, payload: Mapping[str, Any]) -> BuiltQuery:
    """
    Build an INSERT for every writable column of the resource.

    Args:
        schema: Resource to insert into
        payload: Column values; optional columns may be missing or blank

    Returns:
        BuiltQuery: INSERT ... RETURNING the read projection

    Raises:
        ValidationError: If a required column is missing or empty
    """
    _ensure_writable(schema)

    missing = missing_required(schema, payload)
    if missing:
        raise ValidationError(f"{', '.join(missing)} required")

    placeholders = _Placeholders()
    values = []
    for column in schema.updatable:
        value = payload.get(column)
        values.append(placeholders.bind(value if is_supplied(value) else None))

    sql = (
        f"INSERT INTO {schema.table} ({', '.join(schema.updatable)}) "
        f"VALUES ({', '.join(values)}) "
        f"RETURNING {_projection(schema)}"
    )
    return BuiltQuery(sql, tuple(placeholders.args))


def build_partial_update(
    schema: ResourceSchema,
    record_id: Any,
    payload: Mapping[str, Any],
    clear: Iterable[str] = (),
) -> BuiltQuery:
    """
    Build an UPDATE touching only the supplied columns.

    Updatable columns are walked in registry order; each one with a truthy
    payload value becomes ``column = :pN``. Columns named in ``clear`` are
    set to NULL. The record identifier is always the last placeholder.

    Args:
        schema: Resource to update
        record_id: Identifier of the row to update
        payload: Sparse column values
        clear: Optional columns to set to NULL explicitly

    Returns:
        BuiltQuery: UPDATE ... RETURNING the read projection

    Raises:
        NoOpError: If no column would change
        ValidationError: If ``clear`` names a required or unknown column,
            or a column that is also being set
    """
    _ensure_writable(schema)

    clear = tuple(dict.fromkeys(clear))
    for column in clear:
        if column in schema.required:
            raise ValidationError(f"{column} is required and cannot be cleared")
        if column not in schema.optional:
            raise ValidationError(f"{column} is not a field of {schema.name}")

    placeholders = _Placeholders()
    assignments = []
    for column in schema.updatable:
        value = payload.get(column)
        if is_supplied(value):
            if column in clear:
                raise ValidationError(f"{column} cannot be both set and cleared")
            assignments.append(f"{column} = {placeholders.bind(value)}")
        elif column in clear:
            assignments.append(f"{column} = NULL")

    if not assignments:
        raise NoOpError()

    where = f"{schema.id_column} = {placeholders.bind(record_id)}"
    sql = (
        f"UPDATE {schema.table} SET {', '.join(assignments)} "
        f"WHERE {where} "
        f"RETURNING {_projection(schema)}"
    )
    return BuiltQuery(sql, tuple(placeholders.args))


def build_filtered_select(
    schema: ResourceSchema,
    filters: Optional[Mapping[str, Any]] = None,
    *,
    upcoming: bool = False,
    limit: Optional[int] = None,
    admin: bool = False,
) -> BuiltQuery:
    """
    Build a list SELECT with optional equality filters.

    Args:
        schema: Resource to list
        filters: Values keyed by filter column; missing, blank or "all"
            values apply no predicate. Undeclared keys are ignored.
        upcoming: Restrict to rows dated today or later (resources with an
            upcoming column only)
        limit: Maximum rows, clamped to [1, MAX_LIST_LIMIT]
        admin: Use the admin ordering

    Returns:
        BuiltQuery: SELECT of the read projection
    """
    filters = filters or {}
    placeholders = _Placeholders()
    predicates = []

    for column in schema.filters:
        value = filters.get(column)
        if not is_supplied(value) or value == ALL_SENTINEL:
            continue
        predicates.append(f"{column} = {placeholders.bind(value)}")

    if upcoming and schema.upcoming_column:
        predicates.append(f"{schema.upcoming_column} >= CURRENT_DATE")

    sql = f"SELECT {_projection(schema)} FROM {schema.table}"
    if predicates:
        sql += " WHERE " + " AND ".join(predicates)
    sql += " ORDER BY " + (schema.admin_order_by if admin else schema.order_by)
    if limit is not None:
        sql += f" LIMIT {placeholders.bind(clamp_limit(limit))}"

    return BuiltQuery(sql, tuple(placeholders.args))


def build_select_by_id(schema: ResourceSchema, record_id: Any) -> BuiltQuery:
    """Build a single-row SELECT by identifier."""
    return BuiltQuery(
        f"SELECT {_projection(schema)} FROM {schema.table} WHERE {schema.id_column} = :p1",
        (record_id,),
    )


def build_delete(schema: ResourceSchema, record_id: Any) -> BuiltQuery:
    """Build a DELETE that returns the removed identifier, if any."""
    _ensure_writable(schema)
    return BuiltQuery(
        f"DELETE FROM {schema.table} WHERE {schema.id_column} = :p1 RETURNING {schema.id_column}",
        (record_id,),
    )
