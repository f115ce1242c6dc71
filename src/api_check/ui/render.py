"""Output rendering abstraction for the api-check command line.

File: src/api_check/ui/render.py

Purpose
- Provide a thin rendering layer for CLI output on top of ``rich``.
- Respect the NO_COLOR environment variable and the --no-color CLI flag.

What should be included in this file
- CLIRenderer class with methods for common output patterns.
- Factory function to create a renderer with appropriate settings.

Functional requirements
- User-supplied text (checker labels, messages) is never parsed as console markup.
- All public methods must be safe to call in any environment.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, TextIO

from rich.console import Console
from rich.text import Text

if TYPE_CHECKING:
    from collections.abc import Sequence


def _color_allowed(no_color_flag: bool) -> bool:
    """Check whether color output should be attempted."""

    if no_color_flag:
        return False
    return not os.environ.get("NO_COLOR", "")


class CLIRenderer:
    """Thin CLI output renderer.

    Writes through a ``rich`` console; with color disabled the output is plain
    text suitable for logs and pipes.
    """

    def __init__(
        self,
        *,
        no_color: bool = False,
        verbose: bool = False,
        file: TextIO | None = None,
    ) -> None:
        self.verbose = verbose
        self._color = _color_allowed(no_color)
        self._console = Console(
            file=file,
            color_system="auto" if self._color else None,
            highlight=False,
            soft_wrap=True,
        )

    def heading(self, text: str) -> None:
        """Print a heading line."""

        self._console.print(Text(text, style="bold"))

    def kv(self, key: str, value: object) -> None:
        """Print a key: value pair."""

        line = Text()
        line.append(f"{key}: ", style="bold")
        line.append(str(value))
        self._console.print(line)

    def section(self, title: str) -> None:
        """Print a section header with a preceding blank line."""

        self._console.print()
        self._console.print(Text(title, style="bold underline"))

    def success(self, text: str) -> None:
        self._console.print(Text(f"OK  {text}", style="green"))

    def failure(self, text: str) -> None:
        self._console.print(Text(f"FAIL  {text}", style="bold red"))

    def items(self, entries: Sequence[str], *, prefix: str = "- ") -> None:
        """Print a bulleted list."""

        for entry in entries:
            self._console.print(Text(f"  {prefix}{entry}"))

    def detail(self, line: str) -> None:
        """Print a line only in verbose mode."""

        if self.verbose:
            self._console.print(Text(line, style="dim"))


def create_renderer(
    *, no_color: bool = False, verbose: bool = False, file: TextIO | None = None
) -> CLIRenderer:
    """Create a CLI renderer with the given settings."""

    return CLIRenderer(no_color=no_color, verbose=verbose, file=file)


__all__ = ["CLIRenderer", "create_renderer"]
