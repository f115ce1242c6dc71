"""Stable constants shared across the checker engine, front end, and CLI."""

from __future__ import annotations

from typing import Final


class _MissingType:
    """Sentinel type for a value that was not provided at all."""

    __slots__ = ()
    _instance: _MissingType | None = None

    def __new__(cls) -> _MissingType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> _MissingType:
        return self

    def __deepcopy__(self, memo: object) -> _MissingType:
        return self

    def __reduce__(self) -> str:
        return "MISSING"


MISSING: Final[_MissingType] = _MissingType()

# Display labels.
ANY_LABEL: Final[str] = "any"
OBJECT_LABEL: Final[str] = "Object"
OBJECT_NULL_OK_LABEL: Final[str] = "Object[null ok]"
ARGUMENTS_LABEL: Final[str] = "function arguments"
OPTIONAL_SUFFIX: Final[str] = " (optional)"
DEFAULT_VALUE_NAME: Final[str] = "value"

# Front end.
ARGUMENT_LABEL_PREFIX: Final[str] = "Argument"

# Configuration and logging.
DEFAULT_CONFIG_FILE: Final[str] = "api_check.toml"
PYPROJECT_FILE: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_TABLE: Final[tuple[str, ...]] = ("tool", "api_check")
ENV_PREFIX: Final[str] = "API_CHECK_"
LOGGER_NAME: Final[str] = "api_check"

__all__ = [
    "ANY_LABEL",
    "ARGUMENTS_LABEL",
    "ARGUMENT_LABEL_PREFIX",
    "DEFAULT_CONFIG_FILE",
    "DEFAULT_VALUE_NAME",
    "ENV_PREFIX",
    "LOGGER_NAME",
    "MISSING",
    "OBJECT_LABEL",
    "OBJECT_NULL_OK_LABEL",
    "OPTIONAL_SUFFIX",
    "PYPROJECT_FILE",
    "PYPROJECT_TOOL_TABLE",
]
