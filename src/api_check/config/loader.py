"""
api-check — runtime config loader.

File: src/api_check/config/loader.py

Purpose
- Load effective config from defaults, a TOML file, env vars, and explicit overrides.

What should be included in this file
- Precedence logic: overrides > env (API_CHECK_) > file > defaults.
- TOML loading via ``tomllib`` from ``api_check.toml`` or ``[tool.api_check]`` in ``pyproject.toml``.
- Deterministic environment variable mapping and coercion.

Functional requirements
- Reject invalid config via schema validation.
- An explicitly requested file must exist.
"""

from __future__ import annotations

import json
import logging
import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final, Literal

from api_check.config.schema import (
    ApiCheckConfig,
    assert_valid_config,
    default_payload,
    merge_config,
)
from api_check.constants import (
    DEFAULT_CONFIG_FILE,
    ENV_PREFIX,
    PYPROJECT_FILE,
    PYPROJECT_TOOL_TABLE,
)

logger = logging.getLogger(__name__)

_BOOLEAN_TRUE: Final[frozenset[str]] = frozenset({"1", "true", "t", "yes", "y", "on"})
_BOOLEAN_FALSE: Final[frozenset[str]] = frozenset({"0", "false", "f", "no", "n", "off"})


@dataclass(frozen=True, slots=True)
class _Binding:
    env_name: str
    path: tuple[str, ...]
    value_type: Literal["str", "bool"]


_ENV_BINDINGS: Final[tuple[_Binding, ...]] = (
    _Binding(f"{ENV_PREFIX}DISABLED", ("disabled",), "bool"),
    _Binding(f"{ENV_PREFIX}LOG_LEVEL", ("log_level",), "str"),
    _Binding(f"{ENV_PREFIX}LOG_FORMAT", ("log_format",), "str"),
    _Binding(f"{ENV_PREFIX}OUTPUT_PREFIX", ("output", "prefix"), "str"),
    _Binding(f"{ENV_PREFIX}OUTPUT_SUFFIX", ("output", "suffix"), "str"),
    _Binding(f"{ENV_PREFIX}DOCS_BASE_URL", ("output", "docs_base_url"), "str"),
)


class ConfigLoadError(ValueError):
    """Raised when config cannot be loaded or overrides cannot be coerced."""


def load_config(
    config_path: str | Path | None = None,
    *,
    overrides: Mapping[str, object] | None = None,
    environ: Mapping[str, str] | None = None,
    search_dir: str | Path | None = None,
) -> ApiCheckConfig:
    """Load effective config with deterministic precedence: overrides > env > file > defaults."""

    env_map = dict(os.environ if environ is None else environ)
    file_payload = _load_file_payload(config_path, search_dir=search_dir)

    merged = merge_config(default_payload(), file_payload)
    merged = merge_config(merged, _collect_env_overrides(env_map))
    merged = merge_config(merged, _materialize_overrides(overrides or {}))
    return assert_valid_config(merged)


def dump_effective_config(config: ApiCheckConfig) -> str:
    """Return a deterministic JSON dump of the effective config."""

    return json.dumps(
        config.to_payload(), sort_keys=True, separators=(",", ":"), ensure_ascii=False
    )


def _load_file_payload(
    config_path: str | Path | None,
    *,
    search_dir: str | Path | None,
) -> dict[str, Any]:
    if config_path is not None:
        path = Path(config_path).expanduser().resolve()
        if not path.exists():
            raise ConfigLoadError(f"config file not found: {path}")
        return _payload_for_path(path)

    base_dir = Path(search_dir) if search_dir is not None else Path.cwd()
    for candidate in (base_dir / DEFAULT_CONFIG_FILE, base_dir / PYPROJECT_FILE):
        if candidate.is_file():
            payload = _payload_for_path(candidate.resolve())
            if payload or candidate.name == DEFAULT_CONFIG_FILE:
                return payload
    return {}


def _payload_for_path(path: Path) -> dict[str, Any]:
    parsed = _load_toml_file(path)
    if path.name != PYPROJECT_FILE:
        logger.debug("loaded api-check config", extra={"config_path": str(path)})
        return parsed

    cursor: object = parsed
    for part in PYPROJECT_TOOL_TABLE:
        if not isinstance(cursor, Mapping) or part not in cursor:
            return {}
        cursor = cursor[part]
    if not isinstance(cursor, Mapping):
        raise ConfigLoadError(f"[{'.'.join(PYPROJECT_TOOL_TABLE)}] in {path} must be a table")
    logger.debug("loaded api-check config from pyproject", extra={"config_path": str(path)})
    return dict(cursor)


def _load_toml_file(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as handle:
            parsed = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigLoadError(f"invalid TOML in {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigLoadError(f"unable to read config file {path}: {exc}") from exc

    if not isinstance(parsed, dict):
        raise ConfigLoadError(f"config root must be an object: {path}")

    return parsed


def _collect_env_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for binding in _ENV_BINDINGS:
        raw = environ.get(binding.env_name)
        if raw is None:
            continue
        value = _coerce_env(raw, binding.value_type, binding.env_name, binding.path)
        _set_nested(overrides, binding.path, value)
    return overrides


def _coerce_env(
    raw: str,
    value_type: Literal["str", "bool"],
    env_name: str,
    path: tuple[str, ...],
) -> object:
    value = raw.strip()
    if value_type == "str":
        return value.upper() if path == ("log_level",) else value

    lowered = value.lower()
    if lowered in _BOOLEAN_TRUE:
        return True
    if lowered in _BOOLEAN_FALSE:
        return False
    raise ConfigLoadError(
        f"{env_name} -> {'.'.join(path)} must be a boolean (true/false/1/0/yes/no/on/off)"
    )


def _materialize_overrides(overrides: Mapping[str, object]) -> dict[str, Any]:
    payload: dict[str, Any] = {}
    for key in sorted(overrides):
        value = overrides[key]
        if value is None:
            continue
        path = tuple(part for part in key.split(".") if part)
        if not path:
            raise ConfigLoadError(f"invalid override key {key!r}")
        _set_nested(payload, path, value)
    return payload


def _set_nested(target: dict[str, Any], path: tuple[str, ...], value: object) -> None:
    cursor = target
    for part in path[:-1]:
        next_node = cursor.get(part)
        if not isinstance(next_node, dict):
            next_node = {}
            cursor[part] = next_node
        cursor = next_node
    cursor[path[-1]] = value


__all__ = [
    "ConfigLoadError",
    "dump_effective_config",
    "load_config",
]
