"""Schema management entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class SchemaDocument:
    """Parsed raw JSON Schema document."""

    name: str
    root: Any
    source_path: Path | None = None
