"""Small collection helpers used while building and running checkers."""

from __future__ import annotations

import copy as _copy
from collections.abc import Callable, Mapping
from typing import Any

EachCallback = Callable[[Any, Any], object]


def copy(obj: object) -> Any:
    """Return a shallow copy of ``obj``; mappings become plain dicts."""

    if isinstance(obj, Mapping):
        return dict(obj)
    if isinstance(obj, (list, tuple)):
        return list(obj)
    return _copy.copy(obj)


def each(collection: object, fn: EachCallback) -> bool:
    """Call ``fn(item, key)`` for every entry, stopping at the first ``False``.

    Mappings yield ``(value, key)`` pairs, sequences yield ``(item, index)``.
    Returns ``True`` when the iteration ran to completion.
    """

    if isinstance(collection, Mapping):
        entries = ((item, key) for key, item in collection.items())
    elif isinstance(collection, (list, tuple)):
        entries = ((item, index) for index, item in enumerate(collection))
    else:
        attributes = getattr(collection, "__dict__", None)
        if not isinstance(attributes, Mapping):
            return True
        entries = ((item, key) for key, item in attributes.items() if not key.startswith("_"))

    for item, key in entries:
        if fn(item, key) is False:
            return False
    return True


def arrayify(value: object) -> list[Any]:
    """Return ``value`` as a list; scalars are wrapped, ``None`` becomes empty."""

    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


__all__ = ["arrayify", "copy", "each"]
