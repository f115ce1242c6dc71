"""
api-check — structural combinators

File: src/api_check/checkers/combinators.py

Purpose
- Build checkers for homogeneous arrays, homogeneous mappings, unions, and
  "value or array of values" from one or more inner checkers.

Functional requirements
- Each combinator reports its own error labelled with its display label; inner
  failures are tested for presence only.
- ``object_of`` propagates the object check failure verbatim and stops at the
  first failing entry.
- ``type_or_array_of`` delegates to a union built once at construction.

Non-functional requirements
- Inner checkers are never mutated; labels are computed once.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import cast

from api_check.checkers.base import (
    CheckOutcome,
    Checker,
    display_label_of,
    ensure_checker,
    wrap_checker,
)
from api_check.checkers.primitives import array, object_
from api_check.errors import build_error, is_failure
from api_check.utils.collections import each


def array_of(checker: Checker) -> Checker:
    """Return a checker for arrays whose every element passes ``checker``."""

    inner = ensure_checker(checker, role="array_of inner checker")
    label = f"arrayOf[{display_label_of(inner)}]"

    def array_of_definition(
        value: object, name: object, location: object, parent: object
    ) -> CheckOutcome:
        if is_failure(array(value)):
            return build_error(name, location, label)
        items = cast("Sequence[object]", value)
        if any(is_failure(inner(item)) for item in items):
            return build_error(name, location, label)
        return None

    return wrap_checker(array_of_definition, label)


def object_of(checker: Checker) -> Checker:
    """Return a checker for objects whose every own value passes ``checker``.

    Entries are checked as ``checker(item, key, name)``; no parent object is passed,
    so conditional-presence checkers cannot see their siblings here.
    """

    inner = ensure_checker(checker, role="object_of inner checker")
    label = f"objectOf[{display_label_of(inner)}]"

    def object_of_definition(
        value: object, name: object, location: object, parent: object
    ) -> CheckOutcome:
        object_failure = object_(value, name, location)
        if is_failure(object_failure):
            return object_failure
        all_entries_pass = each(value, lambda item, key: not is_failure(inner(item, key, name)))
        if not all_entries_pass:
            return build_error(name, location, label)
        return None

    return wrap_checker(object_of_definition, label)


def one_of_type(checkers: Sequence[Checker]) -> Checker:
    """Return a checker that passes when any of ``checkers`` passes."""

    if isinstance(checkers, (str, bytes)) or not isinstance(checkers, Sequence):
        raise TypeError("one_of_type expects a sequence of checkers")
    members = tuple(
        ensure_checker(item, role=f"one_of_type member {index}") for index, item in enumerate(checkers)
    )
    if not members:
        raise ValueError("one_of_type requires at least one checker")
    label = f"oneOf[{', '.join(display_label_of(member) for member in members)}]"

    def one_of_type_definition(
        value: object, name: object, location: object, parent: object
    ) -> CheckOutcome:
        if not any(not is_failure(member(value, name, location)) for member in members):
            return build_error(name, location, label)
        return None

    return wrap_checker(one_of_type_definition, label)


def type_or_array_of(checker: Checker) -> Checker:
    """Return a checker for a value passing ``checker`` or an array of such values."""

    inner = ensure_checker(checker, role="type_or_array_of inner checker")
    label = f"typeOrArrayOf[{display_label_of(inner)}]"
    union = one_of_type([inner, array_of(inner)])

    def type_or_array_of_definition(
        value: object, name: object, location: object, parent: object
    ) -> CheckOutcome:
        if is_failure(union(value, name, location, parent)):
            return build_error(name, location, label)
        return None

    return wrap_checker(type_or_array_of_definition, label)


__all__ = ["array_of", "object_of", "one_of_type", "type_or_array_of"]
