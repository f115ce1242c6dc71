"""
api-check — runtime value classification

File: src/api_check/utils/kinds.py

Purpose
- Map arbitrary Python values onto a closed set of runtime kinds.
- Provide own-property access that treats mappings and plain objects alike.

Functional requirements
- ``None`` classifies as ``object``; the non-null ``object`` checker excludes it explicitly.
- ``bool`` is never a number.
- Absent values (``MISSING``) classify as ``undefined``.

Non-functional requirements
- Pure functions; never mutate the inspected value.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum

from api_check.constants import MISSING


class ValueKind(StrEnum):
    """Canonical lowercase runtime kinds recognised by the checkers."""

    ARRAY = "array"
    BOOLEAN = "boolean"
    FUNCTION = "function"
    NUMBER = "number"
    STRING = "string"
    OBJECT = "object"
    UNDEFINED = "undefined"

    @property
    def type_name(self) -> str:
        return self.value


def classify(value: object) -> ValueKind:
    """Return the runtime kind of ``value``."""

    if value is MISSING:
        return ValueKind.UNDEFINED
    if value is None:
        return ValueKind.OBJECT
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    if isinstance(value, Mapping):
        return ValueKind.OBJECT
    if callable(value):
        return ValueKind.FUNCTION
    return ValueKind.OBJECT


def own_keys(value: object) -> tuple[str, ...]:
    """Return own property names in insertion order."""

    if isinstance(value, Mapping):
        return tuple(str(key) for key in value)
    attributes = getattr(value, "__dict__", None)
    if isinstance(attributes, Mapping):
        return tuple(key for key in attributes if not key.startswith("_"))
    return ()


def has_own(value: object, key: str) -> bool:
    """Return whether ``value`` owns the property ``key``."""

    if value is None or value is MISSING:
        return False
    if isinstance(value, Mapping):
        return key in value
    attributes = getattr(value, "__dict__", None)
    if isinstance(attributes, Mapping):
        return key in attributes
    return False


def get_own(value: object, key: str) -> object:
    """Return the own property ``key`` of ``value``, or ``MISSING`` when absent."""

    if not has_own(value, key):
        return MISSING
    if isinstance(value, Mapping):
        return value[key]
    return vars(value)[key]


__all__ = ["ValueKind", "classify", "get_own", "has_own", "own_keys"]
