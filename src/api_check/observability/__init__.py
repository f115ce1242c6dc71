"""Observability exports: structured logging setup for api-check."""

from api_check.observability.logging import (
    JSONScalar,
    JSONValue,
    JsonLineFormatter,
    LogFormat,
    get_logger,
    setup_logging,
)

__all__ = [
    "JSONScalar",
    "JSONValue",
    "JsonLineFormatter",
    "LogFormat",
    "get_logger",
    "setup_logging",
]
