"""Command-line interface router for api-check."""

from __future__ import annotations

import argparse
import importlib
import json
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Final, NoReturn

import yaml

from api_check.checkers import Checker, ensure_checker
from api_check.config import (
    ApiCheckConfig,
    ConfigLoadError,
    ConfigValidationError,
    dump_effective_config,
    load_config,
)
from api_check.errors import failure_message, is_failure
from api_check.main import ExitCode
from api_check.observability import get_logger, setup_logging
from api_check.ui.render import CLIRenderer, create_renderer

STDIN_PATH: Final[str] = "-"

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class CLIError(RuntimeError):
    """Typed CLI failure with an explicit process exit code."""

    message: str
    exit_code: int = ExitCode.USAGE_ERROR

    def __str__(self) -> str:
        return self.message


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        raise CLIError(f"{self.prog}: {message}", exit_code=ExitCode.USAGE_ERROR)


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse command router for all supported CLI workflows."""

    parser = _ArgumentParser(
        prog="api-check",
        description=(
            "api-check — runtime validation of values against composable checkers.\n\n"
            "Common workflows:\n"
            "  api-check validate --checker pkg.mod:checker data.yaml\n"
            "  api-check describe --checker pkg.mod:checker\n"
            "  api-check config\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        dest="config_path",
        default=None,
        help="Path to api-check TOML config (default: ./api_check.toml or pyproject.toml).",
    )
    common.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        default=False,
        help="Show detailed output.",
    )
    common.add_argument(
        "--no-color",
        action="store_true",
        default=False,
        help="Disable colored output (also respects NO_COLOR env var).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True, parser_class=_ArgumentParser)

    # validate ------------------------------------------------------------
    validate_parser = subparsers.add_parser(
        "validate",
        parents=[common],
        help="Validate a YAML/JSON document against a checker",
        description=(
            "Load a YAML or JSON document and check it with a checker found by import path.\n\n"
            "Examples:\n"
            "  api-check validate --checker myapp.schemas:user_shape user.yaml\n"
            "  api-check validate --checker myapp.schemas:user_shape - < user.json\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    validate_parser.add_argument("data_path", help="Document to validate ('-' reads stdin)")
    validate_parser.add_argument(
        "--checker", required=True, help="Checker import path as 'module:attribute'"
    )
    validate_parser.add_argument("--name", default=None, help="Name used in failure messages")
    validate_parser.add_argument(
        "--location", default=None, help="Location used in failure messages"
    )
    validate_parser.add_argument("--json", action="store_true", help="Emit deterministic JSON output")
    validate_parser.set_defaults(handler=_cmd_validate)

    # describe ------------------------------------------------------------
    describe_parser = subparsers.add_parser(
        "describe",
        parents=[common],
        help="Print a checker's display label",
    )
    describe_parser.add_argument(
        "--checker", required=True, help="Checker import path as 'module:attribute'"
    )
    describe_parser.add_argument("--json", action="store_true", help="Emit deterministic JSON output")
    describe_parser.set_defaults(handler=_cmd_describe)

    # config --------------------------------------------------------------
    config_parser = subparsers.add_parser(
        "config",
        parents=[common],
        help="Print the effective configuration as JSON",
    )
    config_parser.set_defaults(handler=_cmd_config)

    return parser


def run_cli(argv: Sequence[str] | None = None) -> int:
    """Parse argv, route to a command handler, and return process exit code."""

    parser = build_parser()
    try:
        namespace = parser.parse_args(list(argv) if argv is not None else None)
        handler = getattr(namespace, "handler", None)
        if not callable(handler):
            parser.print_help(sys.stderr)
            return int(ExitCode.USAGE_ERROR)
        result = handler(namespace)
    except CLIError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return exc.exit_code
    return int(result)


def main(argv: Sequence[str] | None = None) -> int:
    """Compatibility wrapper for main-module wiring."""

    return run_cli(argv)


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


def _cmd_validate(args: argparse.Namespace) -> int:
    _configure(args)
    checker_path = str(args.checker)
    checker = resolve_checker(checker_path)
    document = load_document(str(args.data_path))

    outcome = checker(document, args.name, args.location)
    passed = not is_failure(outcome)
    logger.info(
        "validated document",
        extra={"checker": checker_path, "checker_type": checker.type, "passed": passed},
    )

    if _flag(args, "json"):
        _emit_json(
            {
                "command": "validate",
                "checker": checker.type,
                "passed": passed,
                "message": failure_message(outcome) if is_failure(outcome) else None,
            }
        )
    else:
        renderer = _get_renderer(args)
        if is_failure(outcome):
            renderer.failure(failure_message(outcome))
            renderer.detail(f"error type: {type(outcome).__name__}")
        else:
            renderer.success(f"{args.data_path} matches {checker.type}")
        renderer.detail(f"checker: {checker_path}")

    return int(ExitCode.SUCCESS if passed else ExitCode.VALIDATION_FAILED)


def _cmd_describe(args: argparse.Namespace) -> int:
    _configure(args)
    checker = resolve_checker(str(args.checker))
    variants = list(checker.children_checkers)

    if _flag(args, "json"):
        _emit_json(
            {
                "command": "describe",
                "type": checker.type,
                "optional": checker.is_optional,
                "variants": {name: checker.variants[name].type for name in variants},
            }
        )
        return int(ExitCode.SUCCESS)

    renderer = _get_renderer(args)
    renderer.heading(checker.type)
    if renderer.verbose:
        renderer.kv("optional", checker.is_optional)
        renderer.kv("optional form", checker.optional.type)
    if variants:
        renderer.section("Variants:")
        renderer.items([f"{name}: {checker.variants[name].type}" for name in variants])
    return int(ExitCode.SUCCESS)


def _cmd_config(args: argparse.Namespace) -> int:
    config = _configure(args)
    print(dump_effective_config(config))
    return int(ExitCode.SUCCESS)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def resolve_checker(import_path: str) -> Checker:
    """Import ``module:attribute`` (attribute may be dotted) and return it as a checker."""

    module_name, sep, attribute = import_path.partition(":")
    if not sep or not module_name.strip() or not attribute.strip():
        raise CLIError(f"checker path must look like 'module:attribute', got {import_path!r}")

    try:
        target: object = importlib.import_module(module_name.strip())
    except ImportError as exc:
        raise CLIError(f"cannot import module {module_name!r}: {exc}") from exc

    for part in attribute.strip().split("."):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            raise CLIError(f"{import_path!r} has no attribute {part!r}") from exc

    try:
        return ensure_checker(target, role=import_path)
    except TypeError as exc:
        raise CLIError(str(exc)) from exc


def load_document(path: str) -> object:
    """Parse a YAML (or JSON) document from ``path`` or stdin."""

    try:
        if path == STDIN_PATH:
            raw = sys.stdin.read()
        else:
            raw = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise CLIError(f"unable to read {path}: {exc}") from exc

    try:
        return yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise CLIError(f"invalid YAML/JSON in {path}: {exc}") from exc


def _configure(args: argparse.Namespace) -> ApiCheckConfig:
    config = _load_effective_config(args)
    level = "DEBUG" if _flag(args, "verbose") else config.log_level
    setup_logging(level, log_format=config.log_format)
    return config


def _load_effective_config(args: argparse.Namespace) -> ApiCheckConfig:
    config_path = _optional_str(getattr(args, "config_path", None))
    try:
        return load_config(config_path)
    except (ConfigLoadError, ConfigValidationError) as exc:
        raise CLIError(str(exc), exit_code=ExitCode.CONFIG_ERROR) from exc


def _emit_json(payload: Mapping[str, object]) -> None:
    """Emit a JSON payload to stdout with deterministic formatting."""

    print(json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False))


def _get_renderer(args: argparse.Namespace) -> CLIRenderer:
    """Retrieve or create a CLI renderer from the parsed namespace."""

    return create_renderer(no_color=_flag(args, "no_color"), verbose=_flag(args, "verbose"))


def _optional_str(value: object) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise CLIError("invalid optional string argument")
    cleaned = value.strip()
    return cleaned or None


def _flag(args: argparse.Namespace, name: str) -> bool:
    return bool(getattr(args, name, False))


__all__ = ["CLIError", "build_parser", "load_document", "main", "resolve_checker", "run_cli"]
