"""Collection of `$ref` targets belonging to one top-level schema."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

from .value_merging import is_non_empty_object

if TYPE_CHECKING:
    from .schema_node import SchemaNode

_LOGGER = logging.getLogger(__name__)
_LOGGER.addHandler(logging.NullHandler())

_DEFINITION_KEYWORDS = ("definitions", "$defs")


class ReferenceNotFoundError(Exception):
    """Raised when a `$ref` cannot be resolved in a scope or any of its linked scopes."""

    def __init__(self, ref: str, known_targets: Iterable[str] = ()) -> None:
        self.ref = ref
        self.known_targets = tuple(sorted(known_targets))
        message = f'Cannot resolve $ref: "{ref}"'
        if self.known_targets:
            message += f" (known targets: {', '.join(self.known_targets)})"
        super().__init__(message)


class ReferenceScope:
    """Re-usable sub-schemas of one main schema, addressable via `$ref`.

    Internal references (`#`, `#/definitions/<key>`, aliases declared inside
    definitions) are only visible from within the main schema itself. External
    references are derived from an absolute `$id` on the main schema and may also be
    used by other schemas whose scopes were linked via `add_other_scope()`.
    """

    def __init__(self) -> None:
        self.internal_refs: dict[str, SchemaNode] = {}
        self.external_refs: dict[str, SchemaNode] = {}
        self.other_scopes: list[ReferenceScope] = []

    def register_root(self, root: SchemaNode) -> None:
        """Collect every reference target offered by the given top-level schema."""
        raw_schema = root.schema
        if not is_non_empty_object(raw_schema):
            return
        self.internal_refs["#"] = root
        main_alias = _identifier_of(raw_schema)
        external_ref_base: str | None = None
        if main_alias and not main_alias.startswith("#"):
            alias_with_fragment = main_alias if main_alias.endswith("#") else f"{main_alias}#"
            self.external_refs[alias_with_fragment] = root
            self.external_refs[alias_with_fragment[:-1]] = root
            external_ref_base = alias_with_fragment

        for keyword in _DEFINITION_KEYWORDS:
            definitions = raw_schema.get(keyword)
            if not is_non_empty_object(definitions):
                continue
            for key, definition in definitions.items():
                if not is_non_empty_object(definition):
                    continue
                sub_schema = type(root)(definition, root.parser_config, self)
                sub_alias = _identifier_of(definition)
                if sub_alias:
                    # only available as short-hand within this schema
                    self.internal_refs[sub_alias] = sub_schema
                self.internal_refs[f"#/{keyword}/{key}"] = sub_schema
                if external_ref_base:
                    self.external_refs[f"{external_ref_base}/{keyword}/{key}"] = sub_schema

        _LOGGER.debug(
            "Registered %d internal and %d external $ref targets (id: %s)",
            len(self.internal_refs),
            len(self.external_refs),
            main_alias,
        )

    def add_other_scope(self, other_scope: ReferenceScope) -> None:
        """Make the external references of another scope available here."""
        self.other_scopes.append(other_scope)

    def add_other_scopes(self, other_scopes: Iterable[ReferenceScope]) -> None:
        for other_scope in other_scopes:
            self.add_other_scope(other_scope)

    def find_in_own_scope(self, ref: str, include_internal: bool = True) -> SchemaNode | None:
        """Look-up a target in this scope only, optionally ignoring internal references."""
        if include_internal and ref in self.internal_refs:
            return self.internal_refs[ref]
        return self.external_refs.get(ref)

    def find(self, ref: str) -> SchemaNode:
        """Resolve a `$ref` value, falling back on the external references of linked scopes.

        Raises:
          ReferenceNotFoundError: If no scope offers the given reference.
        """
        result = self.find_in_own_scope(ref)
        if result is not None:
            return result
        for other_scope in self.other_scopes:
            result = other_scope.find_in_own_scope(ref, include_internal=False)
            if result is not None:
                _LOGGER.debug("Resolved $ref %r via linked scope", ref)
                return result
        _LOGGER.debug("Failed to resolve $ref %r", ref)
        raise ReferenceNotFoundError(ref, self.known_targets())

    def known_targets(self) -> set[str]:
        """Return every reference resolvable from this scope."""
        targets = set(self.internal_refs) | set(self.external_refs)
        for other_scope in self.other_scopes:
            targets.update(other_scope.external_refs)
        return targets


def _identifier_of(raw_schema: object) -> str | None:
    # from JSON Schema Draft 6: "$id" replaces former "id"
    if not isinstance(raw_schema, Mapping):
        return None
    identifier = raw_schema.get("$id") or raw_schema.get("id")
    return identifier if isinstance(identifier, str) and identifier else None
