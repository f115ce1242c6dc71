"""
api-check — checker protocol and decoration

File: src/api_check/checkers/base.py

Purpose
- Define the uniform calling contract shared by every primitive and composite checker.
- Pair each validation function with its display label, ``optional`` sibling, and named variants.

What should be included in this file
- ``Checker``: immutable callable carrying ``type``, ``is_optional``, ``optional``, and
  ``children_checkers``.
- ``wrap_checker``: the single decoration step applied once per checker at construction.
- ``display_label_of``: label lookup used when composing parent labels.

Functional requirements
- ``checker.optional(MISSING, ...)`` succeeds; any other value is delegated unchanged.
- Named variants (``strict``, ``null_ok``) are fully decorated checkers themselves.
- Checkers built as "specified" report a required-value failure for ``MISSING``.

Non-functional requirements
- Decoration never happens at call time; checkers carry no per-call state.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Final, Protocol

from api_check.constants import MISSING, OPTIONAL_SUFFIX
from api_check.errors import build_required_error

CheckOutcome = Exception | None


class CheckDefinition(Protocol):
    """Raw validation function wrapped by ``Checker``."""

    def __call__(
        self,
        value: object,
        name: object,
        location: object,
        parent: object,
    ) -> CheckOutcome: ...


_FROZEN_ATTRIBUTE: Final[str] = "_frozen"


class Checker:
    """Immutable validation callable with display metadata.

    Call as ``checker(value, name=None, location=None, parent=None)``; the result is
    ``None`` on success or an exception describing the failure.
    """

    __slots__ = (
        "_definition",
        "_frozen",
        "_specified",
        "_variants",
        "children_checkers",
        "is_optional",
        "optional",
        "type",
    )

    def __init__(
        self,
        definition: CheckDefinition,
        type_label: str,
        *,
        variants: Mapping[str, Checker] | None = None,
        specified: bool = True,
        is_optional: bool = False,
    ) -> None:
        if not callable(definition):
            raise TypeError(f"checker definition must be callable, got {type(definition).__name__}")
        if not isinstance(type_label, str):
            raise TypeError(f"checker type label must be a string, got {type(type_label).__name__}")

        setter = object.__setattr__
        setter(self, _FROZEN_ATTRIBUTE, False)
        setter(self, "_definition", definition)
        setter(self, "_specified", specified and not is_optional)
        setter(self, "_variants", MappingProxyType(dict(variants or {})))
        setter(self, "children_checkers", tuple(self._variants))
        setter(self, "type", type_label)
        setter(self, "is_optional", is_optional)
        setter(self, "optional", self if is_optional else _build_optional(self))
        setter(self, _FROZEN_ATTRIBUTE, True)

    def __call__(
        self,
        value: object,
        name: object = None,
        location: object = None,
        parent: object = None,
    ) -> CheckOutcome:
        if self._specified and value is MISSING:
            return build_required_error(name, location, self.type)
        return self._definition(value, name, location, parent)

    def __getattr__(self, attribute: str) -> Checker:
        variants = object.__getattribute__(self, "_variants")
        try:
            return variants[attribute]
        except KeyError:
            raise AttributeError(
                f"{type(self).__name__} {self.type!r} has no variant {attribute!r}"
            ) from None

    def __setattr__(self, attribute: str, value: object) -> None:
        if getattr(self, _FROZEN_ATTRIBUTE, False):
            raise AttributeError(f"checkers are immutable; cannot set {attribute!r}")
        object.__setattr__(self, attribute, value)

    def __delattr__(self, attribute: str) -> None:
        raise AttributeError(f"checkers are immutable; cannot delete {attribute!r}")

    def __repr__(self) -> str:
        return f"<Checker {self.type}>"

    @property
    def variants(self) -> Mapping[str, Checker]:
        return self._variants


def _build_optional(checker: Checker) -> Checker:
    def optional_definition(
        value: object,
        name: object,
        location: object,
        parent: object,
    ) -> CheckOutcome:
        if value is MISSING:
            return None
        return checker(value, name, location, parent)

    return Checker(
        optional_definition,
        f"{checker.type}{OPTIONAL_SUFFIX}",
        specified=False,
        is_optional=True,
    )


def wrap_checker(
    definition: CheckDefinition | Checker,
    type_label: str | None = None,
    *,
    variants: Mapping[str, CheckDefinition | Checker] | None = None,
    specified: bool = True,
) -> Checker:
    """Decorate a raw validation function into a ``Checker``.

    Every entry of ``variants`` is decorated the same way (already-built checkers are
    kept as they are) and exposed as an attribute of the result, listed in
    ``children_checkers`` in declaration order.
    """

    if isinstance(definition, Checker) and type_label is None and not variants:
        return definition

    decorated: dict[str, Checker] = {}
    for variant_name, variant in (variants or {}).items():
        if not variant_name.isidentifier():
            raise ValueError(f"variant name must be an identifier, got {variant_name!r}")
        decorated[variant_name] = wrap_checker(variant, specified=specified)

    label = type_label if type_label is not None else display_label_of(definition)
    return Checker(definition, label, variants=decorated, specified=specified)


def ensure_checker(candidate: object, *, role: str = "checker") -> Checker:
    """Return ``candidate`` as a ``Checker`` or raise ``TypeError`` for non-callables."""

    if isinstance(candidate, Checker):
        return candidate
    if callable(candidate):
        return wrap_checker(candidate)  # type: ignore[arg-type]
    raise TypeError(f"{role} must be callable, got {type(candidate).__name__}")


def display_label_of(checker: object) -> str:
    """Return the human-readable label of ``checker``."""

    label = getattr(checker, "type", None)
    if isinstance(label, str):
        return label
    name = getattr(checker, "__name__", None)
    if isinstance(name, str):
        return name
    return repr(checker)


__all__ = [
    "CheckDefinition",
    "CheckOutcome",
    "Checker",
    "display_label_of",
    "ensure_checker",
    "wrap_checker",
]
