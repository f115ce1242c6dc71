"""Message-assembly helpers: quoting, list joining, and target descriptions."""

from __future__ import annotations

from collections.abc import Sequence

from api_check.constants import DEFAULT_VALUE_NAME
from api_check.utils.collections import arrayify


def quote(thing: object) -> str:
    """Wrap ``thing`` in back-ticks."""

    return f"`{thing}`"


def join_with_conjunction(items: Sequence[object] | object, sep: str, conjunction: str) -> str:
    """Join items as prose, e.g. ``a, b, and c`` or ``a and b``."""

    parts = [str(item) for item in arrayify(items)]
    if not parts:
        return ""
    last = parts.pop()
    if not parts:
        return last
    if len(parts) == 1:
        sep = " "
    return f"{sep.join(parts)}{sep}{conjunction}{last}"


def describe_target(name: object = None, location: object = None) -> str:
    """Describe a checked value by name and optional location for error messages."""

    target = quote(name if name not in (None, "") else DEFAULT_VALUE_NAME)
    if location in (None, ""):
        return target
    return f"{target} at {quote(location)}"


__all__ = ["describe_target", "join_with_conjunction", "quote"]
