"""
api-check config package public API.

File: src/api_check/config/__init__.py

Purpose
- Export config loading/validation entrypoints and public error types.

Functional requirements
- Support loading from ``api_check.toml`` / ``pyproject.toml`` + ``API_CHECK_`` env overrides.
- Fail fast with clear structured validation/load errors.
"""

from api_check.config.loader import ConfigLoadError, dump_effective_config, load_config
from api_check.config.schema import (
    CONFIG_PROPERTIES,
    DEFAULT_CONFIG,
    LOG_FORMATS,
    LOG_LEVELS,
    ApiCheckConfig,
    ConfigValidationError,
    ConfigValidationIssue,
    ConfigValidationResult,
    assert_valid_config,
    default_payload,
    merge_config,
    validate_config,
)

__all__ = [
    "CONFIG_PROPERTIES",
    "DEFAULT_CONFIG",
    "LOG_FORMATS",
    "LOG_LEVELS",
    "ApiCheckConfig",
    "ConfigLoadError",
    "ConfigValidationError",
    "ConfigValidationIssue",
    "ConfigValidationResult",
    "assert_valid_config",
    "default_payload",
    "dump_effective_config",
    "load_config",
    "merge_config",
    "validate_config",
]
