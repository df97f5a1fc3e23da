"""Building schema groups and querying them."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from .schema_groups import (
    OptionsRepresentation,
    SchemaGroup,
    create_option_target,
)
from .schema_node import (
    MappingFunction,
    MergeFunction,
    SchemaNode,
    merge_property_maps,
    properties_of_node,
    wrap_property_placeholders,
)
from .value_merging import is_non_empty_object, list_values

_LOGGER = logging.getLogger(__name__)
_LOGGER.addHandler(logging.NullHandler())


def create_group_from_schema(schema: SchemaNode) -> SchemaGroup:
    """Represent a node with all its `$ref`/`allOf`/`anyOf`/`oneOf` parts as one group.

    `anyOf` and `oneOf` are only included if the node's parser configuration mentions
    them. References are resolved while building; a node that is already being expanded
    further up (i.e. a circular reference) contributes nothing more.
    """
    return _create_group_from_schema(schema, frozenset())


def _create_group_from_schema(schema: SchemaNode, expanding: frozenset[int]) -> SchemaGroup:
    raw_schema = schema.schema
    if not is_non_empty_object(raw_schema):
        return SchemaGroup.all_of()
    if id(raw_schema) in expanding:
        _LOGGER.debug("Skipping circular reference while building schema group")
        return SchemaGroup.all_of()
    expanding = expanding | {id(raw_schema)}
    referenced = schema.resolve_reference()
    if referenced is not None:
        # all other keys next to "$ref" are ignored
        return _create_group_from_schema(referenced, expanding)
    result = SchemaGroup.all_of().with_entry(schema)
    parser_config = schema.parser_config
    for keyword, create_group, enabled in (
        ("allOf", SchemaGroup.all_of, True),
        ("anyOf", lambda: SchemaGroup.any_of(parser_config), parser_config.any_of is not None),
        ("oneOf", lambda: SchemaGroup.one_of(parser_config), parser_config.one_of is not None),
    ):
        parts = schema.get_combinator_parts(keyword)
        if parts is None or not enabled:
            continue
        group = create_group()
        for raw_part in parts:
            if isinstance(raw_part, bool):
                continue
            group.with_entry(_create_group_from_schema(schema.wrap(raw_part), expanding))
        result.with_entry(group)
    return result


def _get_field_value_from_schema(
    schema: SchemaNode, field_name: str, mapping_function: MappingFunction | None
) -> Any:
    raw_value = schema.schema.get(field_name)
    if mapping_function is not None:
        return mapping_function(raw_value, schema.parser_config, schema.scope)
    return raw_value


def get_field_value_from_schema_group(
    schema_group: SchemaGroup,
    field_name: str,
    merge_values: MergeFunction = list_values,
    default_value: Any = None,
    mapping_function: MappingFunction | None = None,
    option_indexes: Sequence[int] | None = None,
) -> Any:
    """Merge the values of one field across every (selected) node in the group."""
    return schema_group.extract_values(
        lambda schema: _get_field_value_from_schema(schema, field_name, mapping_function),
        merge_values,
        default_value,
        create_option_target(option_indexes),
    )


def _get_schema_field_value_from_schema_group(
    schema_group: SchemaGroup, field_name: str, option_indexes: Sequence[int]
) -> SchemaNode | list[SchemaNode] | None:
    return get_field_value_from_schema_group(
        schema_group,
        field_name,
        list_values,
        None,
        SchemaNode.create_if_not_empty,
        option_indexes,
    )


def get_type_of_array_items_from_schema_group(
    schema_group: SchemaGroup, option_indexes: Sequence[int] | None = None
) -> SchemaNode | None:
    """Return the declared type of array entries, or None if the group is no array.

    `items` takes precedence over `additionalItems`. Both look-ups start from the same
    option path. If differing item schemas are declared (e.g. in several `allOf` parts),
    only the first one is considered.
    """
    option_target = create_option_target(option_indexes)
    for field_name in ("items", "additionalItems"):
        array_item_schema = _get_schema_field_value_from_schema_group(
            schema_group, field_name, option_target
        )
        if isinstance(array_item_schema, list):
            return array_item_schema[0].resolve_reference_chain()
        if array_item_schema is not None:
            return array_item_schema.resolve_reference_chain()
    return None


def get_properties_from_schema_group(
    schema_group: SchemaGroup, option_indexes: Sequence[int] | None = None
) -> dict[str, SchemaNode]:
    """Collect every property mentioned in the (selected parts of the) group."""
    extracted = schema_group.extract_values(
        properties_of_node,
        merge_property_maps,
        {},
        create_option_target(option_indexes),
    )
    return wrap_property_placeholders(extracted)


def get_options_in_schema_group(schema_group: SchemaGroup) -> OptionsRepresentation:
    """Determine the hierarchy of selectable options within the group."""
    contained_options: list[OptionsRepresentation]
    if schema_group.should_treat_entries_as_one():
        contained_options = [
            nested
            for nested in (
                get_options_in_schema_group(entry)
                for entry in schema_group.entries
                if isinstance(entry, SchemaGroup)
            )
            if nested.options
        ]
    else:
        separate_schemas = schema_group.consider_schemas_as_separate_options()
        contained_options = [
            get_options_in_schema_group(entry)
            if isinstance(entry, SchemaGroup)
            else OptionsRepresentation()
            for entry in schema_group.entries
            if separate_schemas or isinstance(entry, SchemaGroup)
        ]
    return schema_group.create_options_representation(contained_options)


def get_index_permutations_for_options(options: OptionsRepresentation) -> list[list[int]]:
    """Return every option-index path leading to a single option in the hierarchy."""
    permutations: list[list[int]] = []
    for index, entry in enumerate(options.options or ()):
        if entry.options:
            permutations.extend(
                [index, *nested] for nested in get_index_permutations_for_options(entry)
            )
        else:
            permutations.append([index])
    return permutations


def is_option_index_valid_for_options(
    option_indexes: Sequence[int], options: OptionsRepresentation
) -> bool:
    """Check whether the option-index path leads to a single option in the hierarchy."""
    options_part: OptionsRepresentation | None = options
    for index in option_indexes:
        if (
            options_part is not None
            and options_part.options
            and 0 <= index < len(options_part.options)
        ):
            options_part = options_part.options[index]
        else:
            options_part = None
    return options_part is not None and not options_part.options


def name_option(
    option_indexes: Sequence[int],
    options: OptionsRepresentation,
    fallback: Callable[[Sequence[int]], str],
) -> str:
    """Return the display label for one option path.

    The naming function of the innermost group containing the option is applied to the
    whole path; `fallback` is used if that group offers none (or it returns nothing).
    """
    naming = None
    options_part: OptionsRepresentation | None = options
    for index in option_indexes:
        if options_part is None or not options_part.options:
            break
        naming = options_part.option_name_for_index
        options_part = (
            options_part.options[index] if 0 <= index < len(options_part.options) else None
        )
    label = naming(option_indexes) if naming is not None else None
    return label if label else fallback(option_indexes)
