"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from schema_inspector.schema_management.schema_documents import (
    SchemaError,
    load_schema_document,
    read_schema_document,
)
from schema_inspector.schema_management.schema_models import SchemaDocument

from .runtime_settings import (
    CombinatorMode,
    InspectorConfiguration,
    OptionNameForIndex,
    ParserConfig,
    SchemaPartSettings,
)


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> InspectorConfiguration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    schemas = _parse_schemas_section(parsed.get("schemas"), path.parent)
    reference_schemas = _parse_reference_schemas_section(
        parsed.get("reference_schemas"), path.parent
    )
    parser_config = _parse_parser_section(parsed.get("parser"))

    return InspectorConfiguration(
        path=path,
        schemas=schemas,
        reference_schemas=reference_schemas,
        parser_config=parser_config,
    )


def _parse_schemas_section(value: Any, base_path: Path) -> dict[str, Any]:
    section = _require_mapping(value, "schemas")
    if not section:
        raise ConfigurationError("schemas must contain at least one schema.")
    schemas: dict[str, Any] = {}
    for name, definition in section.items():
        schema_name = _require_non_empty_string(name, "schemas key")
        schemas[schema_name] = _load_schema(
            schema_name, definition, base_path, f"schemas.{schema_name}"
        )
    return schemas


def _parse_reference_schemas_section(value: Any, base_path: Path) -> tuple[Any, ...]:
    if value is None:
        return ()
    if isinstance(value, str) or not isinstance(value, Sequence):
        raise ConfigurationError("reference_schemas must be a list of schema definitions.")
    reference_schemas = []
    for index, definition in enumerate(value):
        label = f"reference_schemas[{index}]"
        reference_schemas.append(_load_schema(label, definition, base_path, label))
    return tuple(reference_schemas)


def _load_schema(name: str, definition: Any, base_path: Path, label: str) -> Any:
    try:
        return _load_schema_document(name, definition, base_path, label).root
    except SchemaError as exc:
        raise ConfigurationError(f"{label}: {exc}") from exc


def _load_schema_document(
    name: str, definition: Any, base_path: Path, label: str
) -> SchemaDocument:
    if isinstance(definition, str):
        return _load_inline_schema(name, definition, label)
    mapping = _require_mapping(definition, label)
    inline = mapping.get("inline")
    path_value = mapping.get("path")
    if inline and path_value:
        raise ConfigurationError(f"{label} must not set both inline and path.")
    if inline:
        if not isinstance(inline, str):
            raise ConfigurationError(f"{label}.inline must be a string.")
        return _load_inline_schema(name, inline, label)
    if path_value:
        if not isinstance(path_value, str):
            raise ConfigurationError(f"{label}.path must be a string.")
        return read_schema_document(name, _resolve_path(base_path, path_value))
    raise ConfigurationError(f"{label} requires either inline or path.")


def _load_inline_schema(name: str, text: str, label: str) -> SchemaDocument:
    if not text.strip():
        raise ConfigurationError(f"{label} schema text cannot be empty.")
    return load_schema_document(name, text)


def _parse_parser_section(value: Any) -> ParserConfig:
    if value is None:
        return ParserConfig()
    section = _require_mapping(value, "parser")
    unknown_keys = sorted(str(key) for key in section if key not in ("anyOf", "oneOf"))
    if unknown_keys:
        raise ConfigurationError(f"Unsupported parser entries: {', '.join(unknown_keys)}")
    return ParserConfig(
        any_of=_parse_schema_part_settings(section.get("anyOf"), "parser.anyOf"),
        one_of=_parse_schema_part_settings(section.get("oneOf"), "parser.oneOf"),
    )


def _parse_schema_part_settings(value: Any, section_name: str) -> SchemaPartSettings | None:
    if value is None:
        return None
    section = _require_mapping(value, section_name)
    raw_type = _require_non_empty_string(section.get("type"), f"{section_name}.type")
    try:
        part_type = CombinatorMode(raw_type)
    except ValueError as exc:
        supported = ", ".join(mode.value for mode in CombinatorMode)
        raise ConfigurationError(
            f"{section_name}.type must be one of: {supported} (got '{raw_type}')."
        ) from exc
    group_title = _optional_string(section.get("group_title"), f"{section_name}.group_title")
    option_label = _optional_string(section.get("option_label"), f"{section_name}.option_label")
    return SchemaPartSettings(
        type=part_type,
        group_title=group_title,
        option_name_for_index=(
            _option_label_formatter(option_label, f"{section_name}.option_label")
            if option_label
            else None
        ),
    )


def _option_label_formatter(template: str, field_name: str) -> OptionNameForIndex:
    try:
        template.format(index="1")
    except (KeyError, IndexError, ValueError) as exc:
        raise ConfigurationError(
            f"{field_name} may only contain the '{{index}}' placeholder."
        ) from exc

    def option_name_for_index(option_indexes: Sequence[int]) -> str:
        return template.format(index="-".join(str(index + 1) for index in option_indexes))

    return option_name_for_index


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None
