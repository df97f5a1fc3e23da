"""Schema model exports."""

from .reference_scope import ReferenceNotFoundError, ReferenceScope
from .schema_groups import (
    GroupKind,
    OptionsRepresentation,
    SchemaGroup,
    create_option_target,
)
from .schema_node import SchemaNode
from .schema_queries import (
    create_group_from_schema,
    get_field_value_from_schema_group,
    get_index_permutations_for_options,
    get_options_in_schema_group,
    get_properties_from_schema_group,
    get_type_of_array_items_from_schema_group,
    is_option_index_valid_for_options,
    name_option,
)
from .value_merging import (
    common_values,
    is_defined,
    is_non_empty_object,
    list_values,
    map_object_values,
    maximum_value,
    minimum_value,
)

__all__ = [
    "GroupKind",
    "OptionsRepresentation",
    "ReferenceNotFoundError",
    "ReferenceScope",
    "SchemaGroup",
    "SchemaNode",
    "common_values",
    "create_group_from_schema",
    "create_option_target",
    "get_field_value_from_schema_group",
    "get_index_permutations_for_options",
    "get_options_in_schema_group",
    "get_properties_from_schema_group",
    "get_type_of_array_items_from_schema_group",
    "is_defined",
    "is_non_empty_object",
    "is_option_index_valid_for_options",
    "list_values",
    "map_object_values",
    "maximum_value",
    "minimum_value",
    "name_option",
]
