"""
api-check — configuration schema and validation.

File: src/api_check/config/schema.py

Purpose
- Define configuration defaults and strict validation rules for the argument front end.

What should be included in this file
- The frozen ``ApiCheckConfig`` record and its raw payload layout.
- Validation of raw payloads with the library's own shape checkers.
- Deterministic deep-merge helpers shared with the loader.

Functional requirements
- Validate payloads and return structured issues (field path + message).
- Unknown keys are reported individually.

Non-functional requirements
- Keep rules deterministic and easy to audit.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Final, Literal

from api_check.checkers import Checker, checkers
from api_check.errors import ValidationError, is_failure
from api_check.utils.kinds import get_own, has_own, own_keys

LOG_LEVELS: Final[tuple[str, ...]] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS: Final[tuple[str, ...]] = ("json", "text")
CONFIG_ROOT_NAME: Final[str] = "api_check"

OUTPUT_SECTION: Final[Checker] = checkers.shape(
    {
        "prefix": checkers.string.optional,
        "suffix": checkers.string.optional,
        "docs_base_url": checkers.string.optional,
    }
).strict

CONFIG_PROPERTIES: Final[Mapping[str, Checker]] = {
    "disabled": checkers.bool.optional,
    "output": OUTPUT_SECTION.optional,
    "log_level": checkers.one_of(LOG_LEVELS).optional,
    "log_format": checkers.one_of(LOG_FORMATS).optional,
}


@dataclass(frozen=True, slots=True)
class ApiCheckConfig:
    """Effective configuration for ``ApiCheck`` and the command line."""

    disabled: bool = False
    output_prefix: str = ""
    output_suffix: str = ""
    docs_base_url: str = ""
    log_level: str = "WARNING"
    log_format: Literal["json", "text"] = "text"

    def to_payload(self) -> dict[str, Any]:
        """Return the raw (TOML-shaped) payload for this config."""

        return {
            "disabled": self.disabled,
            "output": {
                "prefix": self.output_prefix,
                "suffix": self.output_suffix,
                "docs_base_url": self.docs_base_url,
            },
            "log_level": self.log_level,
            "log_format": self.log_format,
        }

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> ApiCheckConfig:
        """Build a config from an already validated payload; absent keys use defaults."""

        defaults = cls()
        output = payload.get("output") or {}
        return cls(
            disabled=bool(payload.get("disabled", defaults.disabled)),
            output_prefix=str(output.get("prefix", defaults.output_prefix)),
            output_suffix=str(output.get("suffix", defaults.output_suffix)),
            docs_base_url=str(output.get("docs_base_url", defaults.docs_base_url)),
            log_level=str(payload.get("log_level", defaults.log_level)),
            log_format=payload.get("log_format", defaults.log_format),
        )


DEFAULT_CONFIG: Final[ApiCheckConfig] = ApiCheckConfig()


@dataclass(frozen=True, slots=True)
class ConfigValidationIssue:
    """Single structured validation failure."""

    path: str
    message: str


@dataclass(frozen=True, slots=True)
class ConfigValidationResult:
    """Validation result with the parsed config when no issues were found."""

    config: ApiCheckConfig | None
    issues: tuple[ConfigValidationIssue, ...] = field(default_factory=tuple)

    @property
    def is_valid(self) -> bool:
        return self.config is not None and not self.issues


class ConfigValidationError(ValueError):
    """Raised when strict config validation fails."""

    def __init__(self, issues: Sequence[ConfigValidationIssue]) -> None:
        self.issues = tuple(issues)
        if not self.issues:
            rendered = "unknown validation failure"
        else:
            rendered = "\n".join(f"- {item.path}: {item.message}" for item in self.issues)
        super().__init__(f"invalid config:\n{rendered}")


def default_payload() -> dict[str, Any]:
    """Return the raw payload of the built-in defaults."""

    return DEFAULT_CONFIG.to_payload()


def validate_config(payload: object) -> ConfigValidationResult:
    """Validate a raw payload and return structured issues with dotted paths."""

    issues: list[ConfigValidationIssue] = []
    root_failure = checkers.object(payload, CONFIG_ROOT_NAME)
    if is_failure(root_failure):
        issues.append(_issue_from_failure(root_failure))
        return ConfigValidationResult(config=None, issues=tuple(issues))

    for prop, checker in CONFIG_PROPERTIES.items():
        if not has_own(payload, prop) and checker.is_optional:
            continue
        failure = checker(get_own(payload, prop), prop, CONFIG_ROOT_NAME, payload)
        if is_failure(failure):
            issues.append(_issue_from_failure(failure))

    for prop in own_keys(payload):
        if prop not in CONFIG_PROPERTIES:
            issues.append(ConfigValidationIssue(path=prop, message="unknown configuration key"))

    if issues:
        return ConfigValidationResult(config=None, issues=tuple(issues))
    assert isinstance(payload, Mapping)
    return ConfigValidationResult(config=ApiCheckConfig.from_payload(payload))


def assert_valid_config(payload: object) -> ApiCheckConfig:
    """Validate a raw payload and raise ``ConfigValidationError`` on failure."""

    result = validate_config(payload)
    if result.config is None:
        raise ConfigValidationError(result.issues)
    return result.config


def merge_config(base: Mapping[str, object], overlay: Mapping[str, object]) -> dict[str, Any]:
    """Deterministically deep-merge ``overlay`` onto ``base``."""

    merged = _deep_copy_mapping(base)
    _merge_into(merged, overlay)
    return merged


def _issue_from_failure(failure: Exception | None) -> ConfigValidationIssue:
    assert isinstance(failure, ValidationError)
    parts = [
        str(part)
        for part in (failure.location, failure.name)
        if part not in (None, "", CONFIG_ROOT_NAME)
    ]
    path = ".".join(parts) or "<root>"
    return ConfigValidationIssue(path=path, message=failure.message)


def _merge_into(target: dict[str, Any], overlay: Mapping[str, object]) -> None:
    for key in sorted(overlay):
        value = overlay[key]
        if isinstance(value, Mapping):
            existing = target.get(key)
            if isinstance(existing, dict):
                _merge_into(existing, value)
            else:
                nested: dict[str, Any] = {}
                _merge_into(nested, value)
                target[key] = nested
        else:
            target[key] = copy.deepcopy(value)


def _deep_copy_mapping(value: Mapping[str, object]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key in sorted(value):
        item = value[key]
        out[key] = _deep_copy_mapping(item) if isinstance(item, Mapping) else copy.deepcopy(item)
    return out


__all__ = [
    "CONFIG_PROPERTIES",
    "DEFAULT_CONFIG",
    "LOG_FORMATS",
    "LOG_LEVELS",
    "ApiCheckConfig",
    "ConfigValidationError",
    "ConfigValidationIssue",
    "ConfigValidationResult",
    "assert_valid_config",
    "default_payload",
    "merge_config",
    "validate_config",
]
