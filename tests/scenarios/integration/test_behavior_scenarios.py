"""Scenario-style integration tests for core schema behaviors."""

from __future__ import annotations

import pytest

from schema_inspector.configuration.runtime_settings import (
    CombinatorMode,
    ParserConfig,
    SchemaPartSettings,
)
from schema_inspector.model import (
    OptionsRepresentation,
    ReferenceNotFoundError,
    SchemaGroup,
    SchemaNode,
    create_group_from_schema,
    get_field_value_from_schema_group,
    get_options_in_schema_group,
    get_type_of_array_items_from_schema_group,
    maximum_value,
)

_AS_COLUMN = SchemaPartSettings(type=CombinatorMode.AS_ADDITIONAL_COLUMN)


def test_definitions_are_reachable_internally_and_via_id() -> None:
    root = SchemaNode.create_root({"$id": "S", "definitions": {"X": {"title": "T"}}})

    assert root.scope.find("#/definitions/X").schema == {"title": "T"}
    assert root.scope.find("S#/definitions/X").schema == {"title": "T"}


def test_all_of_minimum_merged_with_maximum_function() -> None:
    root = SchemaNode.create_root({"allOf": [{"minimum": 1}, {"minimum": 5}]})

    assert root.get_field_value("minimum", maximum_value) == 5
    assert (
        get_field_value_from_schema_group(create_group_from_schema(root), "minimum", maximum_value)
        == 5
    )


def test_one_of_as_additional_column_offers_selectable_options() -> None:
    root = SchemaNode.create_root(
        {"oneOf": [{"title": "A"}, {"title": "B"}]}, ParserConfig(one_of=_AS_COLUMN)
    )
    group = create_group_from_schema(root)

    options = get_options_in_schema_group(group)

    assert options.options == (OptionsRepresentation(), OptionsRepresentation())
    assert get_field_value_from_schema_group(group, "title", option_indexes=[1]) == "B"


def test_unresolvable_array_item_reference_raises() -> None:
    root = SchemaNode.create_root({"items": {"$ref": "#/definitions/Y"}})

    with pytest.raises(ReferenceNotFoundError, match="#/definitions/Y") as exc:
        get_type_of_array_items_from_schema_group(create_group_from_schema(root))

    assert exc.value.ref == "#/definitions/Y"


def test_ref_siblings_are_ignored_everywhere() -> None:
    target = {"title": "Target", "properties": {"a": {"type": "string"}}}
    with_siblings = SchemaNode.create_root(
        {
            "definitions": {"T": target},
            "properties": {
                "x": {"$ref": "#/definitions/T", "title": "Ignored", "allOf": [{"title": "No"}]},
                "y": {"$ref": "#/definitions/T"},
            },
        }
    )
    properties = with_siblings.get_properties()
    x_node, y_node = properties["x"], properties["y"]

    assert x_node.get_field_value("title") == y_node.get_field_value("title") == "Target"
    assert [node.schema for node in x_node.get_property_parent_schemas()] == [
        node.schema for node in y_node.get_property_parent_schemas()
    ]
    assert create_group_from_schema(x_node).entries == create_group_from_schema(y_node).entries


def test_nested_all_of_depth_never_appears_in_group() -> None:
    shallow = create_group_from_schema(
        SchemaNode.create_root({"allOf": [{"title": "A"}, {"title": "B"}]})
    )
    deep = create_group_from_schema(
        SchemaNode.create_root(
            {"allOf": [{"allOf": [{"allOf": [{"title": "A"}]}]}, {"title": "B"}]}
        )
    )

    assert all(not isinstance(entry, SchemaGroup) for entry in deep.entries)
    assert [entry.schema.get("title") for entry in shallow.entries] == [None, "A", "B"]
    assert [entry.schema.get("title") for entry in deep.entries if "title" in entry.schema] == [
        "A",
        "B",
    ]


def test_two_any_of_branches_as_additional_column_give_two_options() -> None:
    config = ParserConfig(any_of=_AS_COLUMN)
    two_branches = create_group_from_schema(
        SchemaNode.create_root(
            {"anyOf": [{"properties": {"a": {}}}, {"properties": {"b": {}}}]}, config
        )
    )
    transparent = create_group_from_schema(
        SchemaNode.create_root({"anyOf": [{"properties": {"a": {}}}]}, config)
    )

    options = get_options_in_schema_group(two_branches)

    assert options.options is not None
    assert len(options.options) == 2
    assert two_branches.should_treat_entries_as_one() is True
    assert transparent.should_treat_entries_as_one() is True
    assert get_options_in_schema_group(transparent) == OptionsRepresentation()


def test_array_item_type_after_wrong_option_path() -> None:
    config = ParserConfig(any_of=_AS_COLUMN, one_of=_AS_COLUMN)
    group = create_group_from_schema(
        SchemaNode.create_root(
            {
                "oneOf": [
                    {"title": "0"},
                    {"title": "1"},
                    {
                        "anyOf": [
                            {"additionalItems": {"title": "2-0"}},
                            {"additionalItems": {"title": "2-1"}},
                        ]
                    },
                ]
            },
            config,
        )
    )

    assert get_type_of_array_items_from_schema_group(group, [1, 0]) is None
    item_schema = get_type_of_array_items_from_schema_group(group, [2, 1])

    assert item_schema is not None
    assert item_schema.schema == {"title": "2-1"}
