"""UI package exports for the command line and its rendering."""

from api_check.ui.cli import CLIError, build_parser, main, run_cli
from api_check.ui.render import CLIRenderer, create_renderer

__all__ = [
    "CLIError",
    "CLIRenderer",
    "build_parser",
    "create_renderer",
    "main",
    "run_cli",
]
