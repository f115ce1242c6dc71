"""Checker for array-like "function arguments" values."""

from __future__ import annotations

from api_check.checkers.base import CheckOutcome, Checker, wrap_checker
from api_check.checkers.primitives import array, number, object_
from api_check.constants import ARGUMENTS_LABEL
from api_check.errors import build_error, is_failure
from api_check.utils.kinds import get_own


def arguments_checker() -> Checker:
    """Return a checker for non-array objects carrying a numeric ``length``."""

    def arguments_definition(
        value: object, name: object, location: object, parent: object
    ) -> CheckOutcome:
        if (
            not is_failure(array(value))
            or is_failure(object_(value))
            or is_failure(number(get_own(value, "length")))
        ):
            return build_error(name, location, ARGUMENTS_LABEL)
        return None

    return wrap_checker(arguments_definition, ARGUMENTS_LABEL)


args = arguments_checker()

__all__ = ["args", "arguments_checker"]
