"""Functional tests for the SQL-backed record store."""

from __future__ import annotations

import pytest

from frd_wizard.db.base import get_engine, init_schema
from frd_wizard.logic.collaborators import RecordStoreError
from frd_wizard.logic.repository_conversations import SqlRecordStore


@pytest.fixture
def store(db_url) -> SqlRecordStore:
    engine = get_engine(db_url)
    init_schema(engine)
    return SqlRecordStore(engine)


def test_create_inserts_draft_with_new_id(store):
    first = store.create_record({"product_name": "A", "key_features": ["x", "y"]})
    second = store.create_record({"product_name": "A", "key_features": ["x", "y"]})
    assert first and second and first != second

    record = store.get_record(first)
    assert record["status"] == "draft"
    assert record["product_name"] == "A"
    assert record["key_features"] == ["x", "y"]
    assert record["generated_frd"] is None
    assert record["competitors"] is None
    assert record["created_at"]


def test_update_attaches_document(store):
    record_id = store.create_record({"product_name": "A"})
    store.update_record(record_id, "# FRD")
    record = store.get_record(record_id)
    assert record["generated_frd"] == "# FRD"
    assert record["status"] == "completed"


def test_get_unknown_returns_none(store):
    assert store.get_record("missing") is None


def test_update_unknown_raises(store):
    with pytest.raises(RecordStoreError, match="record not found"):
        store.update_record("missing", "doc")


def test_unknown_field_rejected(store):
    with pytest.raises(RecordStoreError, match="unknown record fields"):
        store.create_record({"product_name": "A", "favourite_colour": "blue"})
