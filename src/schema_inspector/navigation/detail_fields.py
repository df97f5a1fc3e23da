"""Summary of the JSON Schema keywords applying to a selected item."""

from __future__ import annotations

import functools
import json
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from schema_inspector.model.schema_groups import SchemaGroup, create_option_target
from schema_inspector.model.schema_node import MergeFunction, SchemaNode
from schema_inspector.model.schema_queries import get_field_value_from_schema_group
from schema_inspector.model.value_merging import (
    common_values,
    list_values,
    maximum_value,
    minimum_value,
)

from .column_builder import Column, ItemsColumn


@dataclass(frozen=True)
class DetailField:
    label: str
    value: Any


def _contains_true_or_reduce(all_values: Any, reduce_non_booleans: MergeFunction) -> Any:
    if isinstance(all_values, list):
        if any(value is True for value in all_values):
            return True
        non_booleans = [value for value in all_values if not isinstance(value, bool)]
        return functools.reduce(reduce_non_booleans, non_booleans) if non_booleans else None
    return all_values


def _check_if_is_required(selection_column_index: int, columns: Sequence[Column]) -> bool:
    if selection_column_index < 1:
        return False
    selected_item = columns[selection_column_index].selected_item
    if not isinstance(selected_item, str):
        # an option is required if the group it belongs to is
        return _check_if_is_required(selection_column_index - 1, columns)
    parent_column = columns[selection_column_index - 1]
    if isinstance(parent_column, ItemsColumn):
        if parent_column.selected_item is None:
            return False
        parent_group = parent_column.items[parent_column.selected_item]
        option_target = None
    else:
        parent_group = parent_column.context_group
        option_target = create_option_target(parent_column.selected_item)

    def is_required_in(schema: SchemaNode, _: bool) -> bool:
        required = schema.schema.get("required") if isinstance(schema.schema, Mapping) else None
        return isinstance(required, list) and selected_item in required

    return parent_group.some_entry(is_required_in, option_target)


def _describe_limit(inclusive_limit: Any, exclusive_limit: Any) -> str | None:
    if inclusive_limit is not None:
        # draft 4: boolean "exclusive..." modifies the inclusive limit, which is the default
        return f"{inclusive_limit} ({'exclusive' if exclusive_limit else 'inclusive'})"
    if exclusive_limit is not None and not isinstance(exclusive_limit, bool):
        # draft 6: numeric "exclusive..." used on its own
        return f"{exclusive_limit} (exclusive)"
    return None


def collect_detail_fields(
    item_group: SchemaGroup, columns: Sequence[Column], selection_column_index: int
) -> list[DetailField]:
    """Collect the labelled values to show for the selection in the indicated column.

    Values from several parts of the group are merged: titles and descriptions are all
    listed, only common types/values/formats are kept, and the strictest limits apply.
    Fields without any value are omitted.
    """
    fields: list[DetailField] = []

    def add_field(label: str, value: Any) -> None:
        if value is not None:
            fields.append(DetailField(label, value))

    selected_item = columns[selection_column_index].selected_item
    option_indexes = None if isinstance(selected_item, str) else selected_item

    get_value: Callable[..., Any] = functools.partial(
        _get_value, item_group, option_indexes=option_indexes
    )

    add_field("Title", get_value("title"))
    add_field("Description", get_value("description"))
    add_field(
        "Required", "Yes" if _check_if_is_required(selection_column_index, columns) else None
    )
    add_field("Type", get_value("type", common_values))
    enum_values = common_values(get_value("const", common_values), get_value("enum", common_values))
    if isinstance(enum_values, list):
        if len(enum_values) == 1:
            add_field("Constant Value", enum_values[0])
        else:
            add_field("Possible Values", enum_values)
    else:
        add_field("Constant Value", enum_values)

    # multiple minimums (e.g. in allOf parts): the highest one applies
    minimum = get_value("minimum", maximum_value)
    exclusive_minimum = _contains_true_or_reduce(get_value("exclusiveMinimum"), maximum_value)
    add_field("Min Value", _describe_limit(minimum, exclusive_minimum))
    maximum = get_value("maximum", minimum_value)
    exclusive_maximum = _contains_true_or_reduce(get_value("exclusiveMaximum"), minimum_value)
    add_field("Max Value", _describe_limit(maximum, exclusive_maximum))

    default_value = get_value("default")
    add_field(
        "Default Value",
        json.dumps(default_value) if isinstance(default_value, (Mapping, list)) else default_value,
    )
    examples = get_value("examples")
    if isinstance(examples, list) and not examples:
        examples = None
    if isinstance(examples, list) and isinstance(examples[0], (Mapping, list)):
        examples = json.dumps(examples)
    add_field("Example(s)", examples)
    add_field("Value Pattern", get_value("pattern"))
    add_field("Value Format", get_value("format", common_values))
    add_field("Min Length", get_value("minLength", maximum_value))
    add_field("Max Length", get_value("maxLength", minimum_value))
    add_field("Min Items", get_value("minItems", maximum_value))
    add_field("Max Items", get_value("maxItems", minimum_value))
    unique_items = get_value("uniqueItems")
    add_field(
        "Items Unique",
        "Yes"
        if unique_items is True
        or (isinstance(unique_items, list) and any(value is True for value in unique_items))
        else None,
    )
    return fields


def _get_value(
    item_group: SchemaGroup,
    field_name: str,
    merge_values: MergeFunction = list_values,
    *,
    option_indexes: Sequence[int] | None,
) -> Any:
    return get_field_value_from_schema_group(
        item_group, field_name, merge_values, None, None, option_indexes
    )
