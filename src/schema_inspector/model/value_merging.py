"""Presence checks and reducers for combining values found in several schema parts.

All reducers are meant for `functools.reduce()` and ignore `None` values: if one side
is `None`, the other side is returned unchanged.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, TypeVar

T = TypeVar("T")
K = TypeVar("K")


def is_defined(target: object) -> bool:
    """Return True when the given value is not None."""
    return target is not None


def is_non_empty_object(target: object) -> bool:
    """Return True for a mapping with at least one key."""
    return isinstance(target, Mapping) and len(target) > 0


def map_object_values(
    original: Mapping[K, Any], mapping_function: Callable[[Any], T | None]
) -> dict[K, T]:
    """Copy a mapping while converting its values, dropping keys mapped to None."""
    mapped: dict[K, T] = {}
    for key, value in original.items():
        mapped_value = mapping_function(value)
        if mapped_value is not None:
            mapped[key] = mapped_value
    return mapped


def _null_aware(
    merge_defined_values: Callable[[Any, Any], Any],
) -> Callable[[Any, Any], Any]:
    def reducer(combined: Any, next_value: Any = None) -> Any:
        if next_value is None:
            return combined
        if combined is None:
            return next_value
        return merge_defined_values(combined, next_value)

    reducer.__doc__ = merge_defined_values.__doc__
    return reducer


def _is_same_value(first: object, second: object) -> bool:
    if first is second:
        return True
    if isinstance(first, (Mapping, list)) or isinstance(second, (Mapping, list)):
        return False
    if isinstance(first, bool) or isinstance(second, bool):
        return type(first) is type(second) and first == second
    return first == second


def _contains(values: list[Any], target: object) -> bool:
    return any(_is_same_value(value, target) for value in values)


def _list_values(combined: Any, next_value: Any) -> Any:
    """Return all encountered values: a single value or a list of them."""
    if _is_same_value(combined, next_value):
        return combined
    if isinstance(combined, list):
        if isinstance(next_value, list):
            return combined + next_value
        return [*combined, next_value]
    if isinstance(next_value, list):
        return [combined, *next_value]
    return [combined, next_value]


def _common_values(combined: Any, next_value: Any) -> Any:
    """Return only values encountered everywhere; an empty list if they do not intersect."""
    if _is_same_value(combined, next_value):
        return combined
    if isinstance(combined, list):
        if isinstance(next_value, list):
            filtered = [value for value in combined if _contains(next_value, value)]
            return filtered[0] if len(filtered) == 1 else filtered
        return next_value if _contains(combined, next_value) else []
    if isinstance(next_value, list):
        return combined if _contains(next_value, combined) else []
    return []


list_values = _null_aware(_list_values)
common_values = _null_aware(_common_values)
minimum_value = _null_aware(lambda combined, next_value: min(combined, next_value))
maximum_value = _null_aware(lambda combined, next_value: max(combined, next_value))
