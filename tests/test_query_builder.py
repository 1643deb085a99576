"""Query Builder - verifies statement shape and argument binding.

Invariants:
    - Placeholders are numbered from 1 in the order arguments are bound
    - Partial update binds only truthy values, identifier always last
    - Empty update never produces a statement (NoOpError)
    - Caller values never appear in SQL text, only in args
    - "all" / blank filters produce no predicate
    - LIMIT is a clamped bound argument
"""

from datetime import date

import pytest

from nallore_api.errors import NoOpError, ValidationError
from nallore_api.query_builder import (
    BuiltQuery,
    build_delete,
    build_filtered_select,
    build_insert,
    build_partial_update,
    build_select_by_id,
    clamp_limit,
)
from nallore_api.registry import (
    BLOGS,
    EVENTS,
    GALLERY_CATEGORIES,
    GALLERY_IMAGES,
    MAX_LIST_LIMIT,
    TEAM_MEMBERS,
)


# --- insert ---

def test_insert_binds_columns_in_registry_order():
    query = build_insert(GALLERY_IMAGES, {
        "title": "A", "category_key": "nature", "src": "/a.png",
    })
    assert query.sql == (
        "INSERT INTO gallery_images (src, title, category_key) "
        "VALUES (:p1, :p2, :p3) "
        "RETURNING id, src, title, category_key"
    )
    assert query.args == ("/a.png", "A", "nature")


def test_insert_stores_blank_optional_fields_as_null():
    query = build_insert(EVENTS, {"title": "Fair", "location": ""})
    assert query.args == ("Fair", None, None, None, None)


def test_insert_statement_shape_is_stable_across_payloads():
    first = build_insert(TEAM_MEMBERS, {"name": "Ana", "level": "core"})
    second = build_insert(TEAM_MEMBERS, {"level": "board", "role": "Chair", "name": "Ben"})
    assert first.sql == second.sql


@pytest.mark.parametrize("payload", [
    {"title": "A", "category_key": "nature"},
    {"src": "", "title": "A", "category_key": "nature"},
    {"src": None, "title": "A", "category_key": "nature"},
])
def test_insert_rejects_missing_or_empty_required_field(payload):
    with pytest.raises(ValidationError, match="src required"):
        build_insert(GALLERY_IMAGES, payload)


def test_insert_names_every_missing_field():
    with pytest.raises(ValidationError) as exc_info:
        build_insert(BLOGS, {})
    assert exc_info.value.message == "title, content required"


def test_insert_into_read_only_resource_is_rejected():
    with pytest.raises(ValidationError):
        build_insert(GALLERY_CATEGORIES, {"key": "x", "title": "X"})


def test_insert_ignores_undeclared_keys():
    query = build_insert(GALLERY_IMAGES, {
        "src": "/a.png", "title": "A", "category_key": "nature",
        "id": 99, "title; DROP TABLE gallery_images": "x",
    })
    assert "DROP" not in query.sql
    assert 99 not in query.args


# --- partial update ---

def test_update_touches_only_supplied_fields():
    query = build_partial_update(TEAM_MEMBERS, 7, {"role": "Lead"})
    assert query.sql == (
        "UPDATE team_members SET role = :p1 WHERE id = :p2 "
        "RETURNING id, name, role, level, image, description"
    )
    assert query.args == ("Lead", 7)


def test_update_walks_registry_order_and_puts_id_last():
    query = build_partial_update(BLOGS, 3, {"author": "Kim", "title": "New"})
    assert "SET title = :p1, author = :p2 WHERE id = :p3" in query.sql
    assert query.args == ("New", "Kim", 3)


def test_update_skips_falsy_values():
    query = build_partial_update(EVENTS, 1, {
        "title": "", "location": None, "category": "music",
    })
    assert "SET category = :p1 WHERE id = :p2" in query.sql
    assert query.args == ("music", 1)


@pytest.mark.parametrize("payload", [{}, {"title": ""}, {"src": None, "title": "", "category_key": ""}])
def test_update_with_nothing_to_write_is_a_noop_error(payload):
    with pytest.raises(NoOpError):
        build_partial_update(GALLERY_IMAGES, 1, payload)


def test_noop_error_is_a_validation_error():
    assert issubclass(NoOpError, ValidationError)


def test_update_binds_date_values_unchanged():
    query = build_partial_update(EVENTS, 2, {"date": date(2030, 5, 1)})
    assert query.args == (date(2030, 5, 1), 2)


def test_update_clear_sets_optional_column_to_null():
    query = build_partial_update(EVENTS, 4, {"title": "Renamed"}, clear=["image"])
    assert "SET title = :p1, image = NULL WHERE id = :p2" in query.sql
    assert query.args == ("Renamed", 4)


def test_update_clear_alone_is_not_a_noop():
    query = build_partial_update(BLOGS, 5, {}, clear=["thumbnail", "thumbnail"])
    assert "SET thumbnail = NULL WHERE id = :p1" in query.sql
    assert query.args == (5,)


def test_update_cannot_clear_required_column():
    with pytest.raises(ValidationError, match="cannot be cleared"):
        build_partial_update(TEAM_MEMBERS, 1, {}, clear=["level"])


def test_update_cannot_clear_unknown_column():
    with pytest.raises(ValidationError):
        build_partial_update(TEAM_MEMBERS, 1, {}, clear=["id"])


def test_update_cannot_set_and_clear_same_column():
    with pytest.raises(ValidationError, match="both set and cleared"):
        build_partial_update(EVENTS, 1, {"image": "/x.png"}, clear=["image"])


# --- filtered select ---

def test_select_without_filters_is_unconditional():
    query = build_filtered_select(GALLERY_IMAGES)
    assert query.sql == "SELECT id, src, title, category_key FROM gallery_images ORDER BY id DESC"
    assert query.args == ()


@pytest.mark.parametrize("value", ["all", "", None])
def test_all_sentinel_and_blank_filters_match_no_filter(value):
    assert build_filtered_select(GALLERY_IMAGES, {"category_key": value}) == build_filtered_select(GALLERY_IMAGES)


def test_filter_value_is_bound_not_interpolated():
    query = build_filtered_select(GALLERY_IMAGES, {"category_key": "x' OR '1'='1"})
    assert "WHERE category_key = :p1" in query.sql
    assert "'1'='1" not in query.sql
    assert query.args == ("x' OR '1'='1",)


def test_undeclared_filter_keys_are_ignored():
    query = build_filtered_select(TEAM_MEMBERS, {"name": "Ana"})
    assert "WHERE" not in query.sql


def test_team_ordering_is_declared_by_registry():
    assert build_filtered_select(TEAM_MEMBERS, {"level": "core"}).sql.endswith("ORDER BY level, id")
    assert build_filtered_select(TEAM_MEMBERS).sql.endswith("ORDER BY level, id")


def test_admin_listing_uses_admin_ordering():
    assert build_filtered_select(EVENTS).sql.endswith("ORDER BY date ASC")
    assert build_filtered_select(EVENTS, admin=True).sql.endswith("ORDER BY id DESC")


def test_upcoming_adds_date_predicate():
    query = build_filtered_select(EVENTS, upcoming=True)
    assert "WHERE date >= CURRENT_DATE ORDER BY date ASC" in query.sql


def test_upcoming_ignored_without_date_column():
    assert "WHERE" not in build_filtered_select(BLOGS, upcoming=True).sql


def test_limit_is_last_bound_argument():
    query = build_filtered_select(TEAM_MEMBERS, {"level": "core"}, limit=5)
    assert query.sql.endswith("ORDER BY level, id LIMIT :p2")
    assert query.args == ("core", 5)


@pytest.mark.parametrize("raw, expected", [
    (0, 1), (-3, 1), (1, 1), (10, 10), (MAX_LIST_LIMIT, MAX_LIST_LIMIT), (10_000, MAX_LIST_LIMIT),
])
def test_clamp_limit(raw, expected):
    assert clamp_limit(raw) == expected


def test_select_limit_is_clamped():
    assert build_filtered_select(BLOGS, limit=5000).args == (MAX_LIST_LIMIT,)


def test_categories_order_all_first():
    query = build_filtered_select(GALLERY_CATEGORIES)
    assert query.sql == (
        "SELECT key, title FROM gallery_categories "
        "ORDER BY CASE WHEN key = 'all' THEN 0 ELSE 1 END, title"
    )


# --- single row ---

def test_select_by_id():
    query = build_select_by_id(BLOGS, 9)
    assert query.sql.endswith("FROM blogs WHERE id = :p1")
    assert query.args == (9,)


def test_delete_returns_identifier():
    query = build_delete(EVENTS, 9)
    assert query.sql == "DELETE FROM events WHERE id = :p1 RETURNING id"
    assert query.args == (9,)


def test_params_maps_placeholders_to_args():
    query = BuiltQuery("SELECT :p1, :p2", ("a", 2))
    assert query.params == {"p1": "a", "p2": 2}
