"""Column-wise navigation through a set of schemas, following a path of selections."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, replace
from typing import Any, Union

from schema_inspector.configuration.runtime_settings import ParserConfig
from schema_inspector.model.reference_scope import ReferenceScope
from schema_inspector.model.schema_groups import (
    OptionsRepresentation,
    SchemaGroup,
    create_option_target,
)
from schema_inspector.model.schema_node import SchemaNode
from schema_inspector.model.schema_queries import (
    create_group_from_schema,
    get_options_in_schema_group,
    get_properties_from_schema_group,
    get_type_of_array_items_from_schema_group,
    is_option_index_valid_for_options,
)
from schema_inspector.model.value_merging import is_non_empty_object, map_object_values

_LOGGER = logging.getLogger(__name__)
_LOGGER.addHandler(logging.NullHandler())

Selection = Union[str, Sequence[int]]
BuildArrayPropertiesFunction = Callable[
    [SchemaNode, SchemaGroup, "Sequence[int] | None"], Mapping[str, Any]
]


@dataclass(frozen=True)
class ItemsColumn:
    """Column listing named schema groups (root schemas, properties or array accessors)."""

    items: Mapping[str, SchemaGroup]
    selected_item: str | None = None
    trailing_selection: bool = False


@dataclass(frozen=True)
class OptionsColumn:
    """Column offering the options within `context_group` for selection."""

    options: OptionsRepresentation
    context_group: SchemaGroup
    selected_item: tuple[int, ...] | None = None
    trailing_selection: bool = False


Column = Union[ItemsColumn, OptionsColumn]


@dataclass(frozen=True)
class TrailingSelection:
    """The last valid selection in a list of columns."""

    item_group: SchemaGroup
    column_index: int
    option_indexes: tuple[int, ...] | None = None


def build_default_array_properties(
    array_item_schema: SchemaNode,
    schema_group: SchemaGroup | None = None,
    option_indexes: Sequence[int] | None = None,
) -> dict[str, Any]:
    """Offer access to the declared type of an array's entries via a single `[0]` entry."""
    return {"[0]": array_item_schema}


def _create_root_column(
    schemas: Mapping[str, Any],
    reference_schemas: Sequence[Any],
    parser_config: ParserConfig,
) -> ItemsColumn:
    reference_scopes: list[ReferenceScope] = []
    for raw_reference_schema in reference_schemas:
        new_scope = SchemaNode.create_root(raw_reference_schema, parser_config).scope
        for other_scope in reference_scopes:
            new_scope.add_other_scope(other_scope)
            other_scope.add_other_scope(new_scope)
        reference_scopes.append(new_scope)

    def create_root_group(raw_schema: Any) -> SchemaGroup:
        root = SchemaNode.create_root(raw_schema, parser_config)
        root.scope.add_other_scopes(reference_scopes)
        return create_group_from_schema(root)

    return ItemsColumn(items=map_object_values(schemas, create_root_group))


def _build_next_column(
    schema_group: SchemaGroup,
    option_indexes: Sequence[int] | None,
    build_array_properties: BuildArrayPropertiesFunction,
) -> Column | None:
    if option_indexes is None:
        options = get_options_in_schema_group(schema_group)
        if options.options:
            return OptionsColumn(options=options, context_group=schema_group)
    property_schemas = get_properties_from_schema_group(schema_group, option_indexes)
    if is_non_empty_object(property_schemas):
        return ItemsColumn(items=map_object_values(property_schemas, create_group_from_schema))
    array_item_schema = get_type_of_array_items_from_schema_group(schema_group, option_indexes)
    if array_item_schema is None:
        return None
    array_properties = map_object_values(
        build_array_properties(array_item_schema, schema_group, option_indexes),
        lambda value: (
            value
            if isinstance(value, SchemaNode)
            else SchemaNode.create_root(value, array_item_schema.parser_config)
        ),
    )
    return ItemsColumn(items=map_object_values(array_properties, create_group_from_schema))


def build_column_data(
    schemas: Mapping[str, Any],
    reference_schemas: Sequence[Any] | None,
    selected_items: Sequence[Selection],
    parser_config: ParserConfig | None = None,
    build_array_properties: BuildArrayPropertiesFunction | None = None,
) -> list[Column]:
    """Build the columns to show for the given path of selections.

    The first column lists every root schema. Each selection (a property name or an
    option-index path) leads to the next column. An invalid selection ends the list: the
    column it was made in is kept without a selection.

    Args:
      schemas: Raw root schemas by display name.
      reference_schemas: Raw schemas only available as `$ref` targets via their `$id`.
      selected_items: Selected property names or option-index paths, one per column.
      parser_config: Settings determining how `anyOf`/`oneOf` are traversed.
      build_array_properties: Accessors offered for an array's declared item type.

    Returns:
      The columns, the one holding the trailing valid selection flagged as such.
    """
    parser_config = parser_config or ParserConfig()
    build_array_properties = build_array_properties or build_default_array_properties
    next_column: Column | None = _create_root_column(
        schemas, reference_schemas or (), parser_config
    )
    selected_group: SchemaGroup | None = None
    columns: list[Column] = []
    for selection in selected_items:
        current_column = next_column
        if current_column is None:
            break
        is_option_selection = not isinstance(selection, str)
        valid_selection: str | tuple[int, ...] | None = None
        if is_option_selection and isinstance(current_column, OptionsColumn):
            option_indexes = tuple(selection)
            if selected_group is not None and is_option_index_valid_for_options(
                option_indexes, current_column.options
            ):
                valid_selection = option_indexes
        elif isinstance(selection, str) and isinstance(current_column, ItemsColumn):
            selected_group = current_column.items.get(selection)
            if selected_group is not None:
                valid_selection = selection

        if valid_selection is None or selected_group is None:
            _LOGGER.debug("Ignoring invalid selection %r in column %d", selection, len(columns))
            next_column = None
            columns.append(current_column)
            break
        next_column = _build_next_column(
            selected_group,
            valid_selection if isinstance(valid_selection, tuple) else None,
            build_array_properties,
        )
        if is_option_selection:
            selected_group = None
        columns.append(replace(current_column, selected_item=valid_selection))

    if columns:
        last_has_selection = columns[-1].selected_item is not None
        if last_has_selection or len(columns) > 1:
            trailing_index = len(columns) - (1 if last_has_selection else 2)
            columns[trailing_index] = replace(columns[trailing_index], trailing_selection=True)
    if next_column is not None:
        columns.append(next_column)
    return columns


def find_trailing_selection(columns: Sequence[Column]) -> TrailingSelection | None:
    """Locate the last valid selection, i.e. the one whose details are of interest."""
    if not columns:
        return None
    column_index = len(columns) - (1 if columns[-1].trailing_selection else 2)
    if column_index < 0:
        return None
    column = columns[column_index]
    if column.selected_item is None:
        return None
    if isinstance(column, ItemsColumn):
        return TrailingSelection(
            item_group=column.items[column.selected_item], column_index=column_index
        )
    return TrailingSelection(
        item_group=column.context_group,
        column_index=column_index,
        option_indexes=column.selected_item,
    )


def _has_schema_nested_items(schema: SchemaNode, _: bool = True) -> bool:
    raw_schema = schema.schema
    if not isinstance(raw_schema, Mapping):
        return False
    return (
        is_non_empty_object(raw_schema.get("properties"))
        or raw_schema.get("required") is not None
        or is_non_empty_object(raw_schema.get("items"))
        or is_non_empty_object(raw_schema.get("additionalItems"))
    )


def has_schema_group_nested_items(
    schema_group: SchemaGroup, option_indexes: Sequence[int] | None = None
) -> bool:
    """Check whether selecting the group would lead to another column.

    That is the case if properties are mentioned, it is an array with a declared item type,
    or (without `option_indexes`) it contains options to choose from.
    """
    return schema_group.some_entry(
        _has_schema_nested_items, create_option_target(option_indexes)
    ) or (option_indexes is None and bool(get_options_in_schema_group(schema_group).options))
