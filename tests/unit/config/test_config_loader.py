"""
api-check — unit tests for config loader

File: tests/unit/config/test_config_loader.py

Purpose
- Validate deterministic config loading from defaults, TOML, env overrides, and explicit overrides.

What this test file should cover
- Precedence: overrides > env > file > defaults.
- Discovery of ``api_check.toml`` and ``[tool.api_check]`` in ``pyproject.toml``.
- Env coercion and load errors.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from api_check.config import (
    DEFAULT_CONFIG,
    ConfigLoadError,
    ConfigValidationError,
    dump_effective_config,
    load_config,
)


def _write_config(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


@pytest.mark.unit
def test_loader_precedence_default_file_env_overrides(tmp_path: Path) -> None:
    config_path = tmp_path / "api_check.toml"
    _write_config(
        config_path,
        """
log_level = "INFO"

[output]
prefix = "from-file"
""".strip(),
    )

    default_loaded = load_config(environ={}, search_dir=tmp_path / "empty")
    file_loaded = load_config(config_path, environ={})
    env_loaded = load_config(config_path, environ={"API_CHECK_OUTPUT_PREFIX": "from-env"})
    override_loaded = load_config(
        config_path,
        environ={"API_CHECK_OUTPUT_PREFIX": "from-env"},
        overrides={"output.prefix": "from-override", "log_level": None},
    )

    assert default_loaded == DEFAULT_CONFIG
    assert file_loaded.output_prefix == "from-file"
    assert file_loaded.log_level == "INFO"
    assert env_loaded.output_prefix == "from-env"
    assert override_loaded.output_prefix == "from-override"
    assert override_loaded.log_level == "INFO"


@pytest.mark.unit
def test_discovers_api_check_toml_before_pyproject(tmp_path: Path) -> None:
    _write_config(tmp_path / "api_check.toml", "disabled = true\n")
    _write_config(tmp_path / "pyproject.toml", "[tool.api_check]\nlog_format = \"json\"\n")

    loaded = load_config(environ={}, search_dir=tmp_path)

    assert loaded.disabled is True
    assert loaded.log_format == "text"


@pytest.mark.unit
def test_discovers_pyproject_tool_table(tmp_path: Path) -> None:
    _write_config(
        tmp_path / "pyproject.toml",
        "[project]\nname = \"demo\"\n\n[tool.api_check]\nlog_format = \"json\"\n",
    )

    assert load_config(environ={}, search_dir=tmp_path).log_format == "json"


@pytest.mark.unit
def test_pyproject_without_tool_table_yields_defaults(tmp_path: Path) -> None:
    _write_config(tmp_path / "pyproject.toml", "[project]\nname = \"demo\"\n")

    assert load_config(environ={}, search_dir=tmp_path) == DEFAULT_CONFIG


@pytest.mark.unit
def test_env_coercion(tmp_path: Path) -> None:
    loaded = load_config(
        environ={
            "API_CHECK_DISABLED": "Yes",
            "API_CHECK_LOG_LEVEL": "debug",
            "API_CHECK_LOG_FORMAT": "json",
            "API_CHECK_OUTPUT_SUFFIX": " see docs ",
            "API_CHECK_DOCS_BASE_URL": "https://example.invalid",
        },
        search_dir=tmp_path,
    )

    assert loaded.disabled is True
    assert loaded.log_level == "DEBUG"
    assert loaded.log_format == "json"
    assert loaded.output_suffix == "see docs"
    assert loaded.docs_base_url == "https://example.invalid"


@pytest.mark.unit
def test_invalid_env_boolean_is_a_load_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigLoadError, match="API_CHECK_DISABLED"):
        load_config(environ={"API_CHECK_DISABLED": "maybe"}, search_dir=tmp_path)


@pytest.mark.unit
def test_missing_explicit_file_is_a_load_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigLoadError, match="config file not found"):
        load_config(tmp_path / "nope.toml", environ={})


@pytest.mark.unit
def test_invalid_toml_is_a_load_error(tmp_path: Path) -> None:
    config_path = tmp_path / "api_check.toml"
    _write_config(config_path, "disabled = = true\n")

    with pytest.raises(ConfigLoadError, match="invalid TOML"):
        load_config(config_path, environ={})


@pytest.mark.unit
def test_schema_violations_surface_as_validation_errors(tmp_path: Path) -> None:
    config_path = tmp_path / "api_check.toml"
    _write_config(config_path, "log_format = \"xml\"\nunknown = 1\n")

    with pytest.raises(ConfigValidationError) as exc_info:
        load_config(config_path, environ={})

    assert [issue.path for issue in exc_info.value.issues] == ["log_format", "unknown"]


@pytest.mark.unit
def test_invalid_override_key(tmp_path: Path) -> None:
    with pytest.raises(ConfigLoadError, match="invalid override key"):
        load_config(environ={}, search_dir=tmp_path, overrides={".": True})


@pytest.mark.unit
def test_dump_effective_config_is_deterministic() -> None:
    first = dump_effective_config(DEFAULT_CONFIG)
    second = dump_effective_config(DEFAULT_CONFIG)

    assert first == second
    assert json.loads(first) == DEFAULT_CONFIG.to_payload()
