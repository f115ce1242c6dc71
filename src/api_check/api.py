"""
api-check — argument-list validation front end

File: src/api_check/api.py

Purpose
- Validate a call's arguments against an ordered list of checkers and assemble one
  readable report (what was passed, its types, and what the API calls for).

What should be included in this file
- ``CheckResult`` report record.
- ``ApiCheck`` with ``validate`` / ``assert_valid`` / ``warn`` and a ``guard`` decorator.

Functional requirements
- Too few arguments (relative to non-optional checkers) fails before pairwise checks.
- A failing optional checker does not consume its argument; the next checker retries it.
- A disabled config passes every call without running checkers.

Non-functional requirements
- ``validate`` never raises for invalid arguments; raising is opt-in via ``assert_valid``.
"""

from __future__ import annotations

import functools
import json
import logging
import math
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Final, Literal, ParamSpec, TypeVar

from api_check.checkers import Checker, checkers, display_label_of, ensure_checker
from api_check.config.schema import DEFAULT_CONFIG, ApiCheckConfig
from api_check.constants import (
    ARGUMENT_LABEL_PREFIX,
    DEFAULT_VALUE_NAME,
    MISSING,
    OPTIONAL_SUFFIX,
)
from api_check.errors import ApiCheckError, failure_message, is_failure
from api_check.observability.logging import JSONValue
from api_check.utils.kinds import get_own
from api_check.utils.text import quote

P = ParamSpec("P")
R = TypeVar("R")

GuardMode = Literal["raise", "warn"]
ApiSpec = Checker | Sequence[Checker]

_JSON_INDENT: Final[int] = 2
_MAX_ARGUMENT_COUNT: Final[int] = 65_536

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CheckResult:
    """Outcome of validating one argument list."""

    passed: bool
    message: str = ""
    args: tuple[object, ...] = ()
    arg_types: tuple[JSONValue, ...] = ()
    api_types: tuple[str, ...] = ()
    failures: tuple[Exception, ...] = field(default_factory=tuple)

    @property
    def failed(self) -> bool:
        return not self.passed


class ApiCheck:
    """Validate argument lists against checkers using one configuration."""

    def __init__(
        self,
        config: ApiCheckConfig | None = None,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self.config = config if config is not None else DEFAULT_CONFIG
        self._logger = logger if logger is not None else _logger

    def validate(self, api: ApiSpec, args: object) -> CheckResult:
        """Check ``args`` against ``api``; a single checker validates a single value."""

        if self.config.disabled:
            return CheckResult(passed=True)

        api_list, arg_list = _normalize_call(api, args)
        messages, failures = _check_enough_args(api_list, arg_list)
        if not messages:
            messages, failures = _check_api_with_args(api_list, arg_list)

        arg_types = tuple(describe_argument(arg) for arg in arg_list)
        api_types = tuple(display_label_of(checker) for checker in api_list)
        if not messages:
            return CheckResult(
                passed=True,
                args=tuple(arg_list),
                arg_types=arg_types,
                api_types=api_types,
            )

        return CheckResult(
            passed=False,
            message=self._error_message(messages, arg_list, arg_types, api_types),
            args=tuple(arg_list),
            arg_types=arg_types,
            api_types=api_types,
            failures=failures,
        )

    def assert_valid(self, api: ApiSpec, args: object) -> CheckResult:
        """Check ``args`` and raise ``ApiCheckError`` when they fail."""

        result = self.validate(api, args)
        if result.failed:
            raise ApiCheckError(result)
        return result

    def warn(self, api: ApiSpec, args: object) -> CheckResult:
        """Check ``args`` and log a warning when they fail."""

        result = self.validate(api, args)
        if result.failed:
            self._logger.warning(
                result.message,
                extra={"api_types": list(result.api_types), "arg_types": list(result.arg_types)},
            )
        return result

    def guard(
        self, *api: Checker, mode: GuardMode = "raise"
    ) -> Callable[[Callable[P, R]], Callable[P, R]]:
        """Return a decorator validating positional arguments before each call."""

        if mode not in ("raise", "warn"):
            raise ValueError(f"unsupported guard mode {mode!r}")
        api_list = [ensure_checker(item, role="guard checker") for item in api]

        def decorator(fn: Callable[P, R]) -> Callable[P, R]:
            @functools.wraps(fn)
            def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
                if mode == "raise":
                    self.assert_valid(api_list, args)
                else:
                    self.warn(api_list, args)
                return fn(*args, **kwargs)

            return wrapper

        return decorator

    def _error_message(
        self,
        messages: Sequence[str],
        arg_list: Sequence[object],
        arg_types: Sequence[JSONValue],
        api_types: Sequence[str],
    ) -> str:
        head = " ".join(
            part
            for part in (
                self.config.output_prefix.strip(),
                " ".join(messages),
                self.config.output_suffix.strip(),
                self.config.docs_base_url.strip(),
            )
            if part
        )
        return f"{head}{_summarize_call(arg_list, arg_types, api_types)}"


def describe_argument(arg: object) -> JSONValue:
    """Return a JSON-friendly description of an argument's runtime type."""

    if arg is MISSING:
        return "undefined"
    if arg is None:
        return "null"
    if isinstance(arg, Mapping):
        if not arg:
            return "dict"
        return {str(key): describe_argument(item) for key, item in arg.items()}
    if isinstance(arg, type):
        return arg.__name__
    return type(arg).__name__


def _normalize_call(api: ApiSpec, args: object) -> tuple[list[Checker], list[object]]:
    if isinstance(api, Checker) or (callable(api) and not isinstance(api, Sequence)):
        return [ensure_checker(api)], [args]
    if isinstance(api, (str, bytes)) or not isinstance(api, Sequence):
        raise TypeError("api must be a checker or a sequence of checkers")
    api_list = [ensure_checker(item, role=f"api checker {index}") for index, item in enumerate(api)]
    return api_list, _as_argument_list(args)


def _as_argument_list(args: object) -> list[object]:
    if isinstance(args, (list, tuple)):
        return list(args)
    if not is_failure(checkers.args(args)):
        length = _argument_count(get_own(args, "length"))
        if length is not None:
            return [_indexed(args, index) for index in range(length)]
    raise TypeError("args must be a list, a tuple, or an arguments-like object")


def _argument_count(length: object) -> int | None:
    """Return ``length`` as a count if it is a whole number in ``[0, _MAX_ARGUMENT_COUNT]``."""

    if isinstance(length, bool) or not isinstance(length, (int, float)):
        return None
    if not math.isfinite(length) or length < 0 or length != int(length):
        return None
    if length > _MAX_ARGUMENT_COUNT:
        return None
    return int(length)


def _indexed(args: object, index: int) -> object:
    value = get_own(args, str(index))
    if value is MISSING and isinstance(args, Mapping):
        return args.get(index, MISSING)
    return value


def _check_enough_args(
    api: Sequence[Checker], args: Sequence[object]
) -> tuple[list[str], tuple[Exception, ...]]:
    required = [checker for checker in api if not checker.is_optional]
    if len(args) < len(required):
        return [
            "Not enough arguments specified. "
            f"Requires {quote(len(required))}, you passed {quote(len(args))}"
        ], ()
    return [], ()


def _check_api_with_args(
    api: Sequence[Checker], args: Sequence[object]
) -> tuple[list[str], tuple[Exception, ...]]:
    messages: list[str] = []
    failures: list[Exception] = []
    checker_index = 0
    arg_index = 0
    while checker_index < len(api) and arg_index < len(args):
        checker = api[checker_index]
        checker_index += 1
        arg = args[arg_index]
        arg_index += 1

        suffix = OPTIONAL_SUFFIX if checker.is_optional else ""
        arg_name = f"{ARGUMENT_LABEL_PREFIX} {arg_index}{suffix}"
        outcome = checker(arg, DEFAULT_VALUE_NAME, arg_name)
        last_checker = checker_index >= len(api)

        if is_failure(outcome) and (last_checker or not checker.is_optional):
            failures.append(outcome)
            messages.append(failure_message(outcome))
        elif is_failure(outcome):
            # Optional checker did not match; offer the same argument to the next checker.
            arg_index -= 1
        else:
            messages.append(f"{quote(arg_name)} passed")

    if not failures:
        return [], ()
    return messages, tuple(failures)


def _summarize_call(
    arg_list: Sequence[object],
    arg_types: Sequence[JSONValue],
    api_types: Sequence[str],
) -> str:
    use_plural = True
    if len(arg_list) == 1:
        only = arg_list[0]
        use_plural = isinstance(only, Mapping) and bool(only)
    types_word = "types" if use_plural else "type"
    return (
        f"\n\nYou passed:\n{_dump([_displayable(arg) for arg in arg_list])}"
        f"\n\nWith the {types_word}:\n{_dump(list(arg_types))}"
        f"\n\nThe API calls for:\n{_dump(list(api_types))}"
    )


def _displayable(value: object) -> Any:
    if value is MISSING:
        return "undefined"
    if isinstance(value, Mapping):
        return {str(key): _displayable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_displayable(item) for item in value]
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    if callable(value):
        return getattr(value, "__name__", repr(value))
    return repr(value)


def _dump(value: object) -> str:
    return json.dumps(value, indent=_JSON_INDENT, ensure_ascii=False)


DEFAULT_API_CHECK: Final[ApiCheck] = ApiCheck()

validate = DEFAULT_API_CHECK.validate
assert_valid = DEFAULT_API_CHECK.assert_valid
warn = DEFAULT_API_CHECK.warn
guard = DEFAULT_API_CHECK.guard

__all__ = [
    "DEFAULT_API_CHECK",
    "ApiCheck",
    "ApiSpec",
    "CheckResult",
    "GuardMode",
    "assert_valid",
    "describe_argument",
    "guard",
    "validate",
    "warn",
]
