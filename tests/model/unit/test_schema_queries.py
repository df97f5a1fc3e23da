"""Schema group construction and query tests."""

from __future__ import annotations

from collections.abc import Sequence

from schema_inspector.configuration.runtime_settings import (
    CombinatorMode,
    ParserConfig,
    SchemaPartSettings,
    default_option_name,
)
from schema_inspector.model.schema_groups import GroupKind, OptionsRepresentation, SchemaGroup
from schema_inspector.model.schema_node import SchemaNode
from schema_inspector.model.schema_queries import (
    create_group_from_schema,
    get_field_value_from_schema_group,
    get_index_permutations_for_options,
    get_options_in_schema_group,
    get_properties_from_schema_group,
    get_type_of_array_items_from_schema_group,
    is_option_index_valid_for_options,
    name_option,
)
from schema_inspector.model.value_merging import common_values

_AS_COLUMN = SchemaPartSettings(type=CombinatorMode.AS_ADDITIONAL_COLUMN)
_AS_COLUMN_CONFIG = ParserConfig(any_of=_AS_COLUMN, one_of=_AS_COLUMN)

_NESTED_OPTIONS_SCHEMA = {
    "title": "Root",
    "oneOf": [
        {"title": "First"},
        {"title": "Second"},
        {
            "title": "Third",
            "anyOf": [
                {"title": "Third A"},
                {"title": "Third B", "items": {"title": "Entry"}},
            ],
        },
    ],
}


def _group(raw_schema: object, parser_config: ParserConfig = _AS_COLUMN_CONFIG) -> SchemaGroup:
    return create_group_from_schema(SchemaNode.create_root(raw_schema, parser_config))


def test_empty_and_boolean_schemas_produce_empty_group() -> None:
    for raw_schema in ({}, True, False):
        group = _group(raw_schema)
        assert group.kind is GroupKind.ALL_OF
        assert group.entries == []


def test_ref_siblings_are_ignored_during_group_construction() -> None:
    root = SchemaNode.create_root(
        {
            "definitions": {"Target": {"title": "Target"}},
            "properties": {
                "x": {"$ref": "#/definitions/Target", "allOf": [{"title": "Ignored"}]}
            },
        }
    )

    group = create_group_from_schema(root.get_properties()["x"])

    assert group.entries == [root.scope.find("#/definitions/Target")]


def test_optionals_are_only_included_when_configured() -> None:
    raw_schema = {"title": "Main", "anyOf": [{"title": "A"}, {"title": "B"}]}

    without_config = _group(raw_schema, ParserConfig())
    with_config = _group(raw_schema)

    assert len(without_config.entries) == 1
    assert len(with_config.entries) == 2
    assert with_config.entries[1].kind is GroupKind.ANY_OF


def test_all_of_parts_are_flattened() -> None:
    group = _group({"title": "Main", "allOf": [{"title": "A"}, {"allOf": [{"title": "B"}]}]})

    assert all(isinstance(entry, SchemaNode) for entry in group.entries)
    assert [entry.schema.get("title") for entry in group.entries] == ["Main", "A", None, "B"]


def test_self_referencing_schema_terminates() -> None:
    group = _group(
        {
            "definitions": {
                "Node": {
                    "properties": {"child": {"$ref": "#/definitions/Node"}},
                    "allOf": [{"$ref": "#/definitions/Node"}],
                }
            },
            "$ref": "#/definitions/Node",
        }
    )

    assert len(group.entries) == 1
    child = get_properties_from_schema_group(group)["child"]
    assert list(get_properties_from_schema_group(create_group_from_schema(child))) == ["child"]


def test_field_value_from_group_respects_option_path() -> None:
    group = _group(_NESTED_OPTIONS_SCHEMA)

    assert get_field_value_from_schema_group(group, "title", option_indexes=[1]) == [
        "Root",
        "Second",
    ]
    assert get_field_value_from_schema_group(group, "title", option_indexes=[2, 0]) == [
        "Root",
        "Third",
        "Third A",
    ]
    assert (
        get_field_value_from_schema_group(group, "title", common_values, option_indexes=[0]) == []
    )


def test_properties_from_group_respect_option_path() -> None:
    group = _group(
        {
            "properties": {"common": {"type": "string"}},
            "oneOf": [
                {"properties": {"a": {"type": "string"}}},
                {"required": ["b"]},
            ],
        }
    )

    assert list(get_properties_from_schema_group(group)) == ["common"]
    assert list(get_properties_from_schema_group(group, [0])) == ["common", "a"]
    second = get_properties_from_schema_group(group, [1])
    assert list(second) == ["common", "b"]
    assert second["b"].schema is True


def test_properties_prefer_declared_schema_over_placeholder() -> None:
    group = _group(
        {"required": ["name"], "allOf": [{"properties": {"name": {"type": "string"}}}]}
    )

    assert get_properties_from_schema_group(group)["name"].schema == {"type": "string"}


def test_array_item_type_follows_option_path() -> None:
    group = _group(_NESTED_OPTIONS_SCHEMA)

    assert get_type_of_array_items_from_schema_group(group, [2, 0]) is None
    item_schema = get_type_of_array_items_from_schema_group(group, [2, 1])
    assert item_schema is not None
    assert item_schema.schema == {"title": "Entry"}


def test_array_item_type_retries_additional_items_with_same_option_path() -> None:
    group = _group(
        {
            "oneOf": [
                {"title": "Plain"},
                {"additionalItems": {"title": "Additional"}},
            ]
        }
    )

    item_schema = get_type_of_array_items_from_schema_group(group, [1])

    assert item_schema is not None
    assert item_schema.schema == {"title": "Additional"}


def test_array_item_type_uses_first_of_differing_declarations() -> None:
    group = _group({"items": {"title": "One"}, "allOf": [{"items": {"title": "Two"}}]})

    item_schema = get_type_of_array_items_from_schema_group(group)

    assert item_schema is not None
    assert item_schema.schema == {"title": "One"}


def test_options_hierarchy_and_permutations() -> None:
    options = get_options_in_schema_group(_group(_NESTED_OPTIONS_SCHEMA))

    assert options.group_title == "one of"
    assert options.options is not None
    assert options.options[:2] == (OptionsRepresentation(), OptionsRepresentation())
    nested = options.options[2]
    assert nested.group_title == "any of"
    assert nested.options == (OptionsRepresentation(), OptionsRepresentation())
    assert get_index_permutations_for_options(options) == [[0], [1], [2, 0], [2, 1]]


def test_transparent_group_has_no_options() -> None:
    options = get_options_in_schema_group(
        _group({"title": "Main", "allOf": [{"title": "A"}], "anyOf": [{"title": "Only"}]})
    )

    assert options == OptionsRepresentation()
    assert get_index_permutations_for_options(options) == []


def test_like_all_of_optionals_are_folded_into_parent_group() -> None:
    like_all_of = ParserConfig(
        any_of=SchemaPartSettings(type=CombinatorMode.LIKE_ALL_OF), one_of=_AS_COLUMN
    )
    options = get_options_in_schema_group(
        _group(
            {
                "anyOf": [
                    {"title": "Plain"},
                    {"oneOf": [{"title": "X"}, {"title": "Y"}]},
                ]
            },
            like_all_of,
        )
    )

    assert options.options == (OptionsRepresentation(), OptionsRepresentation())
    assert options.group_title == "one of"


def test_option_index_validity() -> None:
    options = get_options_in_schema_group(_group(_NESTED_OPTIONS_SCHEMA))

    assert is_option_index_valid_for_options([0], options) is True
    assert is_option_index_valid_for_options([2, 1], options) is True
    assert is_option_index_valid_for_options([2], options) is False
    assert is_option_index_valid_for_options([3], options) is False
    assert is_option_index_valid_for_options([-1], options) is False
    assert is_option_index_valid_for_options([0, 0], options) is False
    assert is_option_index_valid_for_options([], options) is False


def test_name_option_uses_innermost_naming_function() -> None:
    def name_variant(option_indexes: Sequence[int]) -> str:
        return "Variant " + "-".join(str(index + 1) for index in option_indexes)

    config = ParserConfig(
        any_of=SchemaPartSettings(
            type=CombinatorMode.AS_ADDITIONAL_COLUMN, option_name_for_index=name_variant
        ),
        one_of=_AS_COLUMN,
    )
    options = get_options_in_schema_group(_group(_NESTED_OPTIONS_SCHEMA, config))

    assert name_option([1], options, default_option_name) == "Option 2"
    assert name_option([2, 1], options, default_option_name) == "Variant 3-2"
