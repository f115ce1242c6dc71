"""Module entrypoint for ``python -m api_check``."""

from __future__ import annotations

from api_check.main import cli_entrypoint

if __name__ == "__main__":
    raise SystemExit(cli_entrypoint())
