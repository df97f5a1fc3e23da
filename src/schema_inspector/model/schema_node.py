"""Wrapper around a single raw JSON Schema and the scope it was defined in."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from schema_inspector.configuration.runtime_settings import CombinatorMode, ParserConfig

from .reference_scope import ReferenceScope
from .value_merging import is_non_empty_object, list_values, map_object_values

MergeFunction = Callable[[Any, Any], Any]
MappingFunction = Callable[[Any, ParserConfig, ReferenceScope], Any]


@dataclass(frozen=True, eq=False)
class SchemaNode:
    """Raw schema together with its parser configuration and reference scope.

    Many nodes share one scope: the top-level schema and every fragment found while
    walking it. Nodes compare by identity.
    """

    schema: Any
    parser_config: ParserConfig
    scope: ReferenceScope

    @classmethod
    def create_root(cls, raw_schema: Any, parser_config: ParserConfig | None = None) -> SchemaNode:
        """Wrap a top-level schema, collecting its `$ref` targets into a new scope."""
        scope = ReferenceScope()
        root = cls(raw_schema, parser_config or ParserConfig(), scope)
        scope.register_root(root)
        return root

    @classmethod
    def create_if_not_empty(
        cls, raw_schema: Any, parser_config: ParserConfig, scope: ReferenceScope
    ) -> SchemaNode | None:
        """Wrap the given value if it is a non-empty mapping, otherwise return None."""
        if is_non_empty_object(raw_schema):
            return cls(raw_schema, parser_config, scope)
        return None

    def wrap(self, raw_schema: Any) -> SchemaNode:
        """Wrap a nested raw schema, sharing this node's configuration and scope."""
        return SchemaNode(raw_schema, self.parser_config, self.scope)

    @property
    def ref(self) -> str | None:
        if not is_non_empty_object(self.schema):
            return None
        ref = self.schema.get("$ref")
        return ref if isinstance(ref, str) and ref else None

    def resolve_reference(self) -> SchemaNode | None:
        """Return the referenced node if this schema is a `$ref`, otherwise None."""
        ref = self.ref
        return self.scope.find(ref) if ref is not None else None

    def resolve_reference_chain(self) -> SchemaNode:
        """Follow `$ref` values until reaching a node that is not a mere reference."""
        node = self
        visited = {id(node.schema)}
        while (referenced := node.resolve_reference()) is not None:
            if id(referenced.schema) in visited:
                break
            visited.add(id(referenced.schema))
            node = referenced
        return node

    def get_combinator_parts(self, keyword: str) -> list[Any] | None:
        """Return the raw parts of `allOf`/`anyOf`/`oneOf`; non-list values count as absent."""
        if not is_non_empty_object(self.schema):
            return None
        parts = self.schema.get(keyword)
        return parts if isinstance(parts, list) and parts else None

    def get_relevant_schema_parts(self) -> list[Any] | None:
        """Return the parts to treat as if they were declared in this schema itself.

        `allOf` takes precedence; `anyOf` and then `oneOf` are only considered when
        configured to be included `likeAllOf`.
        """
        all_of = self.get_combinator_parts("allOf")
        if all_of is not None:
            return all_of
        for keyword, settings in (
            ("anyOf", self.parser_config.any_of),
            ("oneOf", self.parser_config.one_of),
        ):
            parts = self.get_combinator_parts(keyword)
            if (
                parts is not None
                and settings is not None
                and settings.type is CombinatorMode.LIKE_ALL_OF
            ):
                return parts
        return None

    def get_field_value(
        self,
        field_name: str,
        merge_function: MergeFunction = list_values,
        mapping_function: MappingFunction | None = None,
    ) -> Any:
        """Look-up a field, following `$ref` and merging in values from relevant parts."""
        return self._get_field_value(field_name, merge_function, mapping_function, frozenset())

    def _get_field_value(
        self,
        field_name: str,
        merge_function: MergeFunction,
        mapping_function: MappingFunction | None,
        visited: frozenset[int],
    ) -> Any:
        if not is_non_empty_object(self.schema) or id(self.schema) in visited:
            return None
        visited = visited | {id(self.schema)}
        referenced = self.resolve_reference()
        if referenced is not None:
            # by convention, all other keys next to "$ref" are ignored
            return referenced._get_field_value(
                field_name, merge_function, mapping_function, visited
            )
        raw_value = self.schema.get(field_name)
        value = (
            mapping_function(raw_value, self.parser_config, self.scope)
            if mapping_function
            else raw_value
        )
        for part in self.get_relevant_schema_parts() or ():
            part_value = self.wrap(part)._get_field_value(
                field_name, merge_function, mapping_function, visited
            )
            value = merge_function(value, part_value)
        return value

    def get_schema_field_value(
        self, field_name: str, merge_function: MergeFunction = list_values
    ) -> SchemaNode | list[SchemaNode] | None:
        """Look-up a field holding a nested schema (e.g. `items`), wrapped as node(s)."""
        return self.get_field_value(field_name, merge_function, SchemaNode.create_if_not_empty)

    def get_type_of_array_items(self) -> SchemaNode | None:
        """Return the schema of an array's entries, or None if this is not an array.

        A list of positional schemas in `items` is not supported and falls through to
        `additionalItems`.
        """
        for field_name in ("items", "additionalItems"):
            item_schema = self.get_schema_field_value(field_name)
            if isinstance(item_schema, list):
                return item_schema[0].resolve_reference_chain()
            if item_schema is not None:
                return item_schema.resolve_reference_chain()
        return None

    def get_property_parent_schemas(self) -> list[SchemaNode]:
        """Return every node that may declare `properties`/`required` for this schema."""
        return self._get_property_parent_schemas(frozenset())

    def _get_property_parent_schemas(self, visited: frozenset[int]) -> list[SchemaNode]:
        if not is_non_empty_object(self.schema) or id(self.schema) in visited:
            return []
        visited = visited | {id(self.schema)}
        referenced = self.resolve_reference()
        if referenced is not None:
            return referenced._get_property_parent_schemas(visited)
        parts = self.get_relevant_schema_parts()
        if parts is not None:
            result = [self]
            for part in parts:
                result.extend(self.wrap(part)._get_property_parent_schemas(visited))
            return result
        for field_name in ("items", "additionalItems"):
            item_schema = self.schema.get(field_name)
            if is_non_empty_object(item_schema):
                # an array describes its entries rather than declaring properties itself
                return self.wrap(item_schema)._get_property_parent_schemas(visited)
        return [self]

    def get_properties(self) -> dict[str, SchemaNode]:
        """Collect every property mentioned in this schema, including merely required ones."""
        combined: dict[str, Any] = {}
        for parent in self.get_property_parent_schemas():
            combined = merge_property_maps(combined, properties_of_node(parent))
        return wrap_property_placeholders(combined)


def properties_of_node(node: SchemaNode) -> dict[str, Any]:
    """Return the properties declared directly in one node (ignoring nested parts).

    Names only listed in `required` are represented by `True`. Values that are schemas
    are wrapped as nodes; booleans and empty mappings are kept as they are.
    """
    raw_schema = node.schema
    if not is_non_empty_object(raw_schema):
        return {}
    raw_properties: dict[str, Any] = {}
    required = raw_schema.get("required")
    if isinstance(required, list):
        raw_properties.update((name, True) for name in required if isinstance(name, str))
    properties = raw_schema.get("properties")
    if isinstance(properties, Mapping):
        raw_properties.update(properties)
    return map_object_values(
        raw_properties,
        lambda value: node.wrap(value) if is_non_empty_object(value) else value,
    )


def merge_property_maps(
    combined: Mapping[str, Any], next_value: Mapping[str, Any]
) -> dict[str, Any]:
    """Union two property maps, preferring an actual schema over a placeholder."""
    if not combined:
        return dict(next_value)
    merged = dict(combined)
    for name, value in next_value.items():
        if not _is_declared_schema(merged.get(name)) or _is_declared_schema(value):
            merged[name] = value
    return merged


def wrap_property_placeholders(properties: Mapping[str, Any]) -> dict[str, SchemaNode]:
    """Convert remaining placeholder values (e.g. `True`) into stand-alone nodes."""
    return map_object_values(
        properties,
        lambda value: value if isinstance(value, SchemaNode) else SchemaNode.create_root(value),
    )


def _is_declared_schema(value: Any) -> bool:
    return isinstance(value, SchemaNode) or is_non_empty_object(value)
