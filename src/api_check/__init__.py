"""
api-check — runtime validation of values against composable checkers.

File: src/api_check/__init__.py

Purpose
- Package root. Exposes the checker namespace, the argument-list front end, and
  the configuration and logging entrypoints.

Functional requirements
- Must not have side effects at import time (no config loading, no logging init).
"""

from api_check.api import (
    ApiCheck,
    CheckResult,
    assert_valid,
    describe_argument,
    guard,
    validate,
    warn,
)
from api_check.checkers import Checker, CheckerSet, checkers, wrap_checker
from api_check.config import ApiCheckConfig, load_config
from api_check.constants import MISSING
from api_check.errors import (
    ApiCheckError,
    ExtraPropertiesError,
    RequiredValueError,
    ValidationError,
    is_failure,
)
from api_check.observability import get_logger, setup_logging

__version__ = "0.1.0"

__all__ = [
    "MISSING",
    "ApiCheck",
    "ApiCheckConfig",
    "ApiCheckError",
    "CheckResult",
    "Checker",
    "CheckerSet",
    "ExtraPropertiesError",
    "RequiredValueError",
    "ValidationError",
    "__version__",
    "assert_valid",
    "checkers",
    "describe_argument",
    "get_logger",
    "guard",
    "is_failure",
    "load_config",
    "setup_logging",
    "validate",
    "warn",
]
