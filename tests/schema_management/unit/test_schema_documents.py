"""Schema document loading tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from schema_inspector.schema_management import (
    SchemaError,
    load_schema_document,
    read_schema_document,
)


def test_load_schema_document_parses_object_and_boolean_roots() -> None:
    document = load_schema_document("Person", '{"title": "Person"}')

    assert document.name == "Person"
    assert document.root == {"title": "Person"}
    assert document.source_path is None
    assert load_schema_document("Anything", "true").root is True


def test_load_schema_document_rejects_invalid_json() -> None:
    with pytest.raises(SchemaError, match="Invalid JSON schema 'Broken'"):
        load_schema_document("Broken", "{")


def test_load_schema_document_rejects_other_roots() -> None:
    with pytest.raises(SchemaError, match="must be an object or a boolean"):
        load_schema_document("Number", "42")


def test_read_schema_document_keeps_source_path(tmp_path: Path) -> None:
    schema_path = tmp_path / "schema.json"
    schema_path.write_text('{"type": "string"}', encoding="utf-8")

    document = read_schema_document("Text", schema_path)

    assert document.root == {"type": "string"}
    assert document.source_path == schema_path


def test_read_schema_document_fails_for_missing_file(tmp_path: Path) -> None:
    with pytest.raises(SchemaError, match="Schema file not found"):
        read_schema_document("Missing", tmp_path / "missing.json")
