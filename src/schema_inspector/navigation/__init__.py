"""Navigation exports."""

from .column_builder import (
    BuildArrayPropertiesFunction,
    Column,
    ItemsColumn,
    OptionsColumn,
    Selection,
    TrailingSelection,
    build_column_data,
    build_default_array_properties,
    find_trailing_selection,
    has_schema_group_nested_items,
)
from .detail_fields import DetailField, collect_detail_fields

__all__ = [
    "BuildArrayPropertiesFunction",
    "Column",
    "ItemsColumn",
    "OptionsColumn",
    "Selection",
    "TrailingSelection",
    "build_column_data",
    "build_default_array_properties",
    "find_trailing_selection",
    "has_schema_group_nested_items",
    "DetailField",
    "collect_detail_fields",
]
