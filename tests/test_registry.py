"""Resource Schema Registry - verifies declarations agree with the table layout.

Invariants:
    - Every registry entry names an existing table and only its columns
    - Required and filter columns are subsets of the writable/read columns
    - Identifier and created_at are never updatable
"""

import pytest

import nallore_api.models  # noqa: F401
from nallore_api.database import Base
from nallore_api.registry import REGISTRY, get_schema

SCHEMAS = list(REGISTRY.values())


@pytest.mark.parametrize("schema", SCHEMAS, ids=lambda s: s.table)
def test_projection_matches_table_columns(schema):
    table = Base.metadata.tables[schema.table]
    assert set(schema.columns) == {column.name for column in table.columns}


@pytest.mark.parametrize("schema", SCHEMAS, ids=lambda s: s.table)
def test_required_and_filters_are_declared_columns(schema):
    assert set(schema.required) <= set(schema.updatable)
    assert set(schema.updatable) <= set(schema.columns)
    assert set(schema.filters) <= set(schema.columns)


@pytest.mark.parametrize("schema", SCHEMAS, ids=lambda s: s.table)
def test_identifier_and_created_at_are_not_updatable(schema):
    assert schema.id_column not in schema.updatable
    assert "created_at" not in schema.updatable


@pytest.mark.parametrize("schema", SCHEMAS, ids=lambda s: s.table)
def test_required_columns_are_not_nullable(schema):
    table = Base.metadata.tables[schema.table]
    for column in schema.required:
        assert not table.columns[column].nullable


def test_optional_excludes_required():
    schema = get_schema("team_members")
    assert schema.optional == ("role", "image", "description")


def test_categories_are_read_only():
    assert get_schema("gallery_categories").read_only


def test_unknown_table_raises():
    with pytest.raises(KeyError):
        get_schema("users")
