"""The initial Alembic revision must create the same schema as the models.

``upgrade()`` runs against a mocked ``op`` so that the tables and indexes it
would create can be compared with ``SQLModel.metadata`` column by column.
"""

from __future__ import annotations

import importlib.util
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import sqlalchemy as sa
from sqlmodel import SQLModel

from access_registry.core.database import entities  # noqa: F401

REVISION_FILE = Path(__file__).resolve().parents[4] / "alembic" / "versions" / "20261019_000000_initial_schema.py"


@pytest.fixture
def migrated(monkeypatch):
    """Tables and indexes created by the initial revision, keyed by table name."""
    spec = importlib.util.spec_from_file_location("initial_schema_revision", REVISION_FILE)
    revision = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(revision)

    mock_op = MagicMock()
    monkeypatch.setattr(revision, "op", mock_op)
    revision.upgrade()

    tables = {}
    for call in mock_op.create_table.call_args_list:
        name, *items = call.args
        tables[name] = {item.name: item for item in items if isinstance(item, sa.Column)}
    indexes = {
        call.args[0]: (call.args[1], call.kwargs.get("unique", False)) for call in mock_op.create_index.call_args_list
    }
    return tables, indexes


def test_creates_every_model_table(migrated):
    tables, _ = migrated

    assert set(tables) == set(SQLModel.metadata.tables)


@pytest.mark.parametrize("table_name", ["users", "access_groups", "user_group_links"])
def test_columns_match_the_models(migrated, table_name):
    tables, _ = migrated
    model_table = SQLModel.metadata.tables[table_name]

    assert set(tables[table_name]) == set(model_table.columns.keys())
    for column in model_table.columns:
        created = tables[table_name][column.name]
        assert created.type.python_type is column.type.python_type, column.name
        assert created.nullable == column.nullable, column.name
        if isinstance(column.type, sa.DateTime):
            assert created.type.timezone is True, column.name
            assert column.type.timezone is True, column.name


def test_indexes_match_the_models(migrated):
    _, indexes = migrated
    model_indexes = {
        index.name: (index.table.name, bool(index.unique))
        for table in SQLModel.metadata.tables.values()
        for index in table.indexes
    }

    assert indexes == model_indexes
