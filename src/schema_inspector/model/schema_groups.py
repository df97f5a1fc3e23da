"""Representation of combined schemas (`allOf`, `anyOf`, `oneOf`) and their traversal.

Option-index paths select one branch through nested groups whose entries are offered
as distinct options, outermost first. While traversing, the path is threaded through
as an immutable cursor: a tuple of counters, where the head is decremented for every
candidate option passed at the current level and the tail is handed to the selected
nested group. Every traversal starts from a fresh cursor.
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Union

from schema_inspector.configuration.runtime_settings import (
    OptionNameForIndex,
    ParserConfig,
    SchemaPartSettings,
)

from .schema_node import MergeFunction, SchemaNode
from .value_merging import list_values

OptionCursor = tuple[int, ...]
GroupEntry = Union[SchemaNode, "SchemaGroup"]
EntryPredicate = Callable[[SchemaNode, bool], bool]


class GroupKind(str, Enum):
    """Closed set of group variants."""

    ALL_OF = "allOf"
    ANY_OF = "anyOf"
    ONE_OF = "oneOf"


@dataclass(frozen=True)
class OptionsRepresentation:
    """Hierarchy of selectable options; the empty instance stands for a single option."""

    options: tuple[OptionsRepresentation, ...] | None = None
    group_title: str | None = None
    option_name_for_index: OptionNameForIndex | None = None


@dataclass(frozen=True)
class OptionalsSettings:
    """Settings of an `anyOf`/`oneOf` group."""

    group_title: str | None
    option_name_for_index: OptionNameForIndex | None
    treat_as_separate_options: bool


def create_option_target(option_indexes: Sequence[int] | None = None) -> OptionCursor:
    """Convert an option-index path into a fresh traversal cursor."""
    return tuple(option_indexes or ())


class SchemaGroup:
    """Ordered collection of schema nodes and nested groups of one `kind`."""

    def __init__(
        self, kind: GroupKind = GroupKind.ALL_OF, settings: OptionalsSettings | None = None
    ) -> None:
        if kind is not GroupKind.ALL_OF and settings is None:
            raise ValueError(f"Group of kind {kind.value} requires settings.")
        self.kind = kind
        self.settings = settings
        self.entries: list[GroupEntry] = []

    @classmethod
    def all_of(cls) -> SchemaGroup:
        return cls(GroupKind.ALL_OF)

    @classmethod
    def any_of(cls, parser_config: ParserConfig) -> SchemaGroup:
        return cls(GroupKind.ANY_OF, _optionals_settings(GroupKind.ANY_OF, parser_config.any_of))

    @classmethod
    def one_of(cls, parser_config: ParserConfig) -> SchemaGroup:
        return cls(GroupKind.ONE_OF, _optionals_settings(GroupKind.ONE_OF, parser_config.one_of))

    def __repr__(self) -> str:
        return f"SchemaGroup(kind={self.kind.value}, entries={len(self.entries)})"

    def consider_schemas_as_separate_options(self) -> bool:
        """Whether plain schema entries are offered as options (not only nested groups)."""
        match self.kind:
            case GroupKind.ALL_OF:
                return False
            case GroupKind.ANY_OF | GroupKind.ONE_OF:
                assert self.settings is not None
                return self.settings.treat_as_separate_options

    def should_treat_entries_as_one(self) -> bool:
        """Whether the entries can be walked as if they were declared in a single schema.

        Otherwise, the entries are alternative options to choose from.
        """
        if len(self.entries) < 2:
            return True
        if self.consider_schemas_as_separate_options():
            return False
        found_group_with_options = False
        for entry in self.entries:
            if isinstance(entry, SchemaNode) or entry.should_treat_entries_as_one():
                continue
            if found_group_with_options:
                return False
            found_group_with_options = True
        return True

    def with_entry(self, schema_or_group: GroupEntry) -> SchemaGroup:
        """Append a node or group, returning this group for chaining.

        A nested group with a single entry is replaced by that entry. An `allOf` group
        additionally inlines the entries of nested `allOf` groups and of any nested group
        that is walked as one.
        """
        if isinstance(schema_or_group, SchemaGroup):
            if self.kind is GroupKind.ALL_OF and (
                schema_or_group.kind is GroupKind.ALL_OF
                or schema_or_group.should_treat_entries_as_one()
            ):
                for entry in list(schema_or_group.entries):
                    self.with_entry(entry)
                return self
            if len(schema_or_group.entries) == 1:
                self.entries.append(schema_or_group.entries[0])
                return self
        self.entries.append(schema_or_group)
        return self

    def some_entry(
        self, check_entry: EntryPredicate, option_target: Sequence[int] | None = None
    ) -> bool:
        """Return True as soon as `check_entry` holds for one of the (selected) nodes.

        `check_entry` receives a node and a flag indicating whether no option narrowing
        is active anymore. Without `option_target` every option is visited; with one,
        only the options along the given path are.
        """
        cursor = None if option_target is None else create_option_target(option_target)
        found, _ = self._some_entry(check_entry, cursor)
        return found

    def _some_entry(
        self, check_entry: EntryPredicate, cursor: OptionCursor | None
    ) -> tuple[bool, OptionCursor | None]:
        separate_schemas = self.consider_schemas_as_separate_options()
        treat_as_one = self.should_treat_entries_as_one()
        for entry in self.entries:
            if not treat_as_one and (separate_schemas or isinstance(entry, SchemaGroup)):
                is_selected = cursor is None or (len(cursor) > 0 and cursor[0] == 0)
                if cursor:
                    cursor = (cursor[0] - 1, *cursor[1:])
                if not is_selected:
                    continue
            if isinstance(entry, SchemaGroup):
                if treat_as_one or cursor is None:
                    found, cursor = entry._some_entry(check_entry, cursor)
                else:
                    found, nested_cursor = entry._some_entry(check_entry, cursor[1:])
                    cursor = (cursor[0], *(nested_cursor or ()))
            else:
                found = check_entry(entry, not cursor)
            if found:
                return True, cursor
        return False, cursor

    def extract_values(
        self,
        extract_from_schema: Callable[[SchemaNode], Any],
        merge_results: MergeFunction = list_values,
        default_value: Any = None,
        option_target: Sequence[int] | None = None,
    ) -> Any:
        """Merge the values extracted from every (selected) node in this group."""
        values: list[Any] = []

        def add_to_result_and_continue(entry: SchemaNode, _: bool) -> bool:
            single_value = extract_from_schema(entry)
            if single_value is not None:
                values.append(single_value)
            return False

        self.some_entry(add_to_result_and_continue, option_target)
        return functools.reduce(merge_results, values, default_value)

    def create_options_representation(
        self, contained_options: Sequence[OptionsRepresentation]
    ) -> OptionsRepresentation:
        """Represent this group's options, collapsing a single option into itself."""
        if not contained_options:
            result = OptionsRepresentation()
        elif len(contained_options) == 1:
            result = contained_options[0]
        else:
            result = OptionsRepresentation(options=tuple(contained_options))
        if self.settings is not None and result.options:
            result = replace(
                result,
                group_title=result.group_title or self.settings.group_title,
                option_name_for_index=self.settings.option_name_for_index,
            )
        return result


def _default_group_title(kind: GroupKind) -> str | None:
    match kind:
        case GroupKind.ANY_OF:
            return "any of"
        case GroupKind.ONE_OF:
            return "one of"
        case _:
            return None


def _optionals_settings(kind: GroupKind, settings: SchemaPartSettings | None) -> OptionalsSettings:
    if settings is None:
        return OptionalsSettings(
            group_title=_default_group_title(kind),
            option_name_for_index=None,
            treat_as_separate_options=True,
        )
    return OptionalsSettings(
        group_title=(
            _default_group_title(kind) if settings.group_title is None else settings.group_title
        ),
        option_name_for_index=settings.option_name_for_index,
        treat_as_separate_options=settings.treat_as_separate_options,
    )
