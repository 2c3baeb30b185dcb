"""
Data model for template contexts.

A closed set of value variants used both as rendering context and as
section test results. Plain Python values are converted with to_data().
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Optional, Tuple, Union


@dataclass(frozen=True)
class StrValue:
    """Text leaf."""
    text: str


@dataclass(frozen=True)
class BoolValue:
    """Boolean leaf. Only False is falsey."""
    flag: bool


@dataclass(frozen=True)
class ListValue:
    """Ordered sequence of values. Empty lists are falsey."""
    items: Tuple[Data, ...] = ()

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class MapValue:
    """
    Mapping from name to value.

    The only variant that supports named lookup. Entries are exposed
    through a read-only proxy; build new maps with MapBuilder or to_data().
    Map values compare by content but are not hashable.
    """
    entries: Mapping[str, Data] = field(default_factory=lambda: MappingProxyType({}))

    __hash__ = None

    def __post_init__(self) -> None:
        if not isinstance(self.entries, MappingProxyType):
            object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))

    def get(self, key: str) -> Optional[Data]:
        return self.entries.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class LambdaValue:
    """
    Callable value.

    Receives the raw, unrendered text of the section it decorates
    (an empty string when used as a variable). The returned text is
    rendered again against the current context.
    """
    func: Callable[[str], Any]

    def __call__(self, text: str) -> str:
        result = self.func(text)
        return "" if result is None else str(result)


Data = Union[StrValue, BoolValue, ListValue, MapValue, LambdaValue]

DATA_TYPES = (StrValue, BoolValue, ListValue, MapValue, LambdaValue)


def to_data(value: Any) -> Optional[Data]:
    """
    Converts a plain Python value to the data model.

    None stands for absence and is returned as is; map entries and list
    items that convert to None are dropped, so an explicit None behaves
    exactly like a missing key.

    Raises:
        TypeError: For values that have no counterpart in the data model
    """
    if value is None or isinstance(value, DATA_TYPES):
        return value
    # bool before int: bool is a subclass of int
    if isinstance(value, bool):
        return BoolValue(value)
    if isinstance(value, str):
        return StrValue(value)
    if isinstance(value, (int, float)):
        return StrValue(str(value))
    if isinstance(value, Mapping):
        entries = {}
        for key, item in value.items():
            converted = to_data(item)
            if converted is not None:
                entries[str(key)] = converted
        return MapValue(entries)
    if callable(value):
        return LambdaValue(value)
    if isinstance(value, Iterable) and not isinstance(value, (bytes, bytearray)):
        items = (to_data(item) for item in value)
        return ListValue(tuple(item for item in items if item is not None))
    raise TypeError(f"Unsupported context value of type {type(value).__name__}")


def is_truthy(value: Optional[Data]) -> bool:
    """
    Section test.

    False, absence and the empty list are falsey; everything else,
    including empty maps and empty strings, is truthy.
    """
    if value is None:
        return False
    if isinstance(value, BoolValue):
        return value.flag
    if isinstance(value, ListValue):
        return len(value.items) > 0
    return True


def stringify(value: Data) -> str:
    """Textual form of a value for interpolation."""
    if isinstance(value, StrValue):
        return value.text
    if isinstance(value, BoolValue):
        return "true" if value.flag else "false"
    if isinstance(value, ListValue):
        return ",".join(stringify(item) for item in value.items)
    if isinstance(value, MapValue):
        inner = ", ".join(f"{key}: {stringify(item)}" for key, item in value.entries.items())
        return "{" + inner + "}"
    if isinstance(value, LambdaValue):
        raise TypeError("Lambdas are invoked by the renderer, not stringified")
    raise TypeError(f"Not a data value: {type(value).__name__}")


__all__ = [
    "StrValue",
    "BoolValue",
    "ListValue",
    "MapValue",
    "LambdaValue",
    "Data",
    "to_data",
    "is_truthy",
    "stringify",
]
