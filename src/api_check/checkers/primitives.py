"""Primitive checkers: type-of family, object, instance-of, enum, and any."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Final

from api_check.checkers.base import CheckOutcome, Checker, wrap_checker
from api_check.constants import ANY_LABEL, OBJECT_LABEL, OBJECT_NULL_OK_LABEL
from api_check.errors import build_error, is_failure
from api_check.utils.kinds import ValueKind, classify


def type_of_checker(kind: ValueKind, label: str) -> Checker:
    """Return a checker accepting values classified as ``kind``."""

    def type_of_definition(
        value: object, name: object, location: object, parent: object
    ) -> CheckOutcome:
        if classify(value) is not kind:
            return build_error(name, location, label)
        return None

    return wrap_checker(type_of_definition, label)


def object_checker() -> Checker:
    """Return the non-null object checker with its ``null_ok`` variant."""

    def object_null_ok_definition(
        value: object, name: object, location: object, parent: object
    ) -> CheckOutcome:
        if classify(value) is not ValueKind.OBJECT:
            return build_error(name, location, OBJECT_NULL_OK_LABEL)
        return None

    null_ok = wrap_checker(object_null_ok_definition, OBJECT_NULL_OK_LABEL)

    def object_definition(
        value: object, name: object, location: object, parent: object
    ) -> CheckOutcome:
        if value is None or is_failure(null_ok(value, name, location)):
            return build_error(name, location, OBJECT_LABEL)
        return None

    return wrap_checker(object_definition, OBJECT_LABEL, variants={"null_ok": null_ok})


def instance_of(class_to_check: type) -> Checker:
    """Return a checker accepting instances of ``class_to_check``."""

    if not isinstance(class_to_check, type):
        raise TypeError(
            f"instance_of expects a class, got {type(class_to_check).__name__}"
        )
    label = class_to_check.__name__

    def instance_definition(
        value: object, name: object, location: object, parent: object
    ) -> CheckOutcome:
        if not isinstance(value, class_to_check):
            return build_error(name, location, label)
        return None

    return wrap_checker(instance_definition, label)


def one_of(enum_values: Iterable[object]) -> Checker:
    """Return a checker accepting values strictly equal to one of ``enum_values``."""

    if isinstance(enum_values, (str, bytes)):
        raise TypeError("one_of expects a sequence of values, not a string")
    allowed = tuple(enum_values)
    label = f"enum[{', '.join(str(item) for item in allowed)}]"

    def one_of_definition(
        value: object, name: object, location: object, parent: object
    ) -> CheckOutcome:
        if not any(_strictly_equal(value, item) for item in allowed):
            return build_error(name, location, label)
        return None

    return wrap_checker(one_of_definition, label)


def any_checker() -> Checker:
    """Return the pass-through checker."""

    def any_definition(
        value: object, name: object, location: object, parent: object
    ) -> CheckOutcome:
        return None

    return wrap_checker(any_definition, ANY_LABEL)


_COMPARED_BY_IDENTITY: Final[frozenset[ValueKind]] = frozenset(
    {ValueKind.ARRAY, ValueKind.OBJECT, ValueKind.FUNCTION}
)


def _strictly_equal(left: object, right: object) -> bool:
    kind = classify(left)
    if kind is not classify(right):
        return False
    if kind in _COMPARED_BY_IDENTITY:
        return left is right
    return bool(left == right)


array = type_of_checker(ValueKind.ARRAY, "Array")
boolean = type_of_checker(ValueKind.BOOLEAN, "Boolean")
func = type_of_checker(ValueKind.FUNCTION, "Function")
number = type_of_checker(ValueKind.NUMBER, "Number")
string = type_of_checker(ValueKind.STRING, "String")
object_ = object_checker()
any_ = any_checker()

__all__ = [
    "any_",
    "any_checker",
    "array",
    "boolean",
    "func",
    "instance_of",
    "number",
    "object_",
    "object_checker",
    "one_of",
    "string",
    "type_of_checker",
]
