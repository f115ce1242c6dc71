"""
api-check — validation error values and raised exceptions

File: src/api_check/errors.py

Purpose
- Define the failure values returned by checkers and the exceptions raised at API edges.

Functional requirements
- Built-in checkers return ``ValidationError`` instances; they never raise them.
- Any exception returned by a checker, built-in or user-supplied, is a failure.
- Combinators only test presence of a failure (``is_failure``), never message text.
- ``build_error`` is the single generic reporter for type mismatches.

Non-functional requirements
- Messages are deterministic for identical inputs.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, TypeGuard

from api_check.constants import DEFAULT_VALUE_NAME
from api_check.utils.text import describe_target, quote

if TYPE_CHECKING:
    from api_check.api import CheckResult


class ValidationError(ValueError):
    """Failure value describing which target did not match which expected type."""

    def __init__(
        self,
        message: str,
        *,
        name: object = None,
        location: object = None,
        expected: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.name = name
        self.location = location
        self.expected = expected

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationError):
            return NotImplemented
        return type(self) is type(other) and self.message == other.message

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.message))


class RequiredValueError(ValidationError):
    """A non-optional checker was called without a value."""


class ExtraPropertiesError(ValidationError):
    """A strict shape received properties it does not declare."""

    def __init__(
        self,
        *,
        name: object,
        location: object,
        extra_props: Sequence[str],
        allowed_properties: Sequence[str],
    ) -> None:
        self.extra_props = tuple(extra_props)
        self.allowed_properties = tuple(allowed_properties)
        message = (
            f"{describe_target(name, location)} cannot have extra properties: "
            f"{quote('`, `'.join(self.extra_props))}. "
            f"It is limited to {quote('`, `'.join(self.allowed_properties))}"
        )
        super().__init__(message, name=name, location=location)


class ApiCheckError(TypeError):
    """Raised by ``ApiCheck.assert_valid`` and ``guard`` when arguments fail."""

    def __init__(self, result: CheckResult) -> None:
        self.result = result
        super().__init__(result.message)


def build_error(name: object, location: object, expected: str) -> ValidationError:
    """Return the generic ``<target> must be <expected>`` failure."""

    return ValidationError(
        f"{describe_target(name, location)} must be {quote(expected)}",
        name=name,
        location=location,
        expected=expected,
    )


def build_required_error(name: object, location: object, expected: str) -> RequiredValueError:
    """Return the failure reported when a required value is absent."""

    target = quote(name if name not in (None, "") else DEFAULT_VALUE_NAME)
    where = "" if location in (None, "") else f" at {quote(location)}"
    return RequiredValueError(
        f"Required {target} not specified{where}. Must be {quote(expected)}",
        name=name,
        location=location,
        expected=expected,
    )


def is_failure(result: object) -> TypeGuard[Exception]:
    """Return whether a checker result signals failure (any returned exception)."""

    return isinstance(result, Exception)


def failure_message(failure: BaseException) -> str:
    """Return the readable message of a checker failure.

    ``ValidationError`` carries ``message``; exceptions returned by user checkers
    fall back to ``str(failure)``, then to the exception type name.
    """

    message = getattr(failure, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(failure) or type(failure).__name__


__all__ = [
    "ApiCheckError",
    "ExtraPropertiesError",
    "RequiredValueError",
    "ValidationError",
    "build_error",
    "build_required_error",
    "failure_message",
    "is_failure",
]
