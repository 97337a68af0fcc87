"""Variable values supplied to template expansion.

Callers pass plain Python objects; ``coerce`` converts each one once into a
tagged variant so expansion can dispatch on shape without inspecting types.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Absent:
    """An undefined variable. Contributes nothing to an expansion."""


@dataclass(frozen=True)
class Scalar:
    value: str


@dataclass(frozen=True)
class ListValue:
    items: tuple[str, ...]


@dataclass(frozen=True)
class MapValue:
    """Associative value. Pairs keep the caller's iteration order."""

    pairs: tuple[tuple[str, str], ...]


VariableValue = Absent | Scalar | ListValue | MapValue

ABSENT = Absent()


def coerce(value: Any) -> VariableValue:
    """Convert a plain Python value into a VariableValue.

    ``None`` becomes Absent, strings and other scalars become Scalar, mappings
    become MapValue and lists or tuples become ListValue. Items of lists and
    values of mappings are converted with ``str``, so booleans expand as
    ``True``/``False``. The input is never mutated.
    """
    if value is None:
        return ABSENT
    if isinstance(value, (Absent, Scalar, ListValue, MapValue)):
        return value
    if isinstance(value, str):
        return Scalar(value)
    if isinstance(value, Mapping):
        return MapValue(tuple((str(key), str(item)) for key, item in value.items()))
    if isinstance(value, (list, tuple)):
        return ListValue(tuple(str(item) for item in value))
    return Scalar(str(value))
