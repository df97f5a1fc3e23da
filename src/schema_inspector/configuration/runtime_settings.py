"""Configuration domain entities."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

OptionNameForIndex = Callable[[Sequence[int]], "str | None"]


class CombinatorMode(str, Enum):
    """Supported ways of including `anyOf`/`oneOf` parts of a schema."""

    LIKE_ALL_OF = "likeAllOf"
    AS_ADDITIONAL_COLUMN = "asAdditionalColumn"


def default_option_name(option_indexes: Sequence[int]) -> str:
    """Return the label shown for one option path, e.g. `Option 1-2` for `[0, 1]`."""
    return "Option " + "-".join(str(index + 1) for index in option_indexes)


@dataclass(frozen=True)
class SchemaPartSettings:
    """Parsing settings for one kind of optional schema parts (`anyOf` or `oneOf`)."""

    type: CombinatorMode
    group_title: str | None = None
    option_name_for_index: OptionNameForIndex | None = None

    @property
    def treat_as_separate_options(self) -> bool:
        """Return True when the parts should be offered as selectable options."""
        return self.type is CombinatorMode.AS_ADDITIONAL_COLUMN


@dataclass(frozen=True)
class ParserConfig:
    """Settings steering how `anyOf`/`oneOf` are traversed; absent entries are ignored."""

    any_of: SchemaPartSettings | None = None
    one_of: SchemaPartSettings | None = None


@dataclass(frozen=True)
class InspectorConfiguration:
    """Top-level configuration aggregate."""

    path: Path
    schemas: Mapping[str, Any]
    reference_schemas: tuple[Any, ...] = ()
    parser_config: ParserConfig = field(default_factory=ParserConfig)
