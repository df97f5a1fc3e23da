"""Schema document loading service."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path

from .schema_models import SchemaDocument


class SchemaError(Exception):
    """Raised for schema documents that cannot be parsed."""


def load_schema_document(
    name: str, text: str, source_path: Path | None = None
) -> SchemaDocument:
    """Parse JSON Schema text into a document.

    Raises:
      SchemaError: If the text is no valid JSON or its root is neither an object nor a boolean.
    """
    origin = source_path or name
    try:
        root = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SchemaError(f"Invalid JSON schema '{origin}': {exc}") from exc

    if not isinstance(root, (Mapping, bool)):
        raise SchemaError(f"JSON schema '{origin}' must be an object or a boolean.")

    return SchemaDocument(name=name, root=root, source_path=source_path)


def read_schema_document(name: str, path: Path | str) -> SchemaDocument:
    """Read and parse a JSON Schema file."""
    schema_path = Path(path)
    if not schema_path.exists():
        raise SchemaError(f"Schema file not found: {schema_path}")
    return load_schema_document(name, schema_path.read_text(encoding="utf-8"), schema_path)
