"""
api-check — shape engine

File: src/api_check/checkers/shape.py

Purpose
- Validate record-like values against a mapping of property name to checker.
- Provide the ``strict`` variant rejecting undeclared properties.
- Provide conditional-presence property checkers (``if_not``, ``only_if``).

Functional requirements
- Declared properties are checked in declaration order; absent optional properties are skipped.
- The first failing property error is returned unmodified (not re-labelled).
- ``strict`` lists extra and allowed property names in a dedicated message.
- Conditional checkers inspect the parent object handed in by the shape.

Non-functional requirements
- The descriptor is copied at construction; later mutation of the caller's mapping has no effect.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence

from api_check.checkers.base import (
    CheckOutcome,
    Checker,
    display_label_of,
    ensure_checker,
    wrap_checker,
)
from api_check.checkers.primitives import object_
from api_check.errors import ExtraPropertiesError, build_error, is_failure
from api_check.utils.collections import arrayify, copy
from api_check.utils.kinds import get_own, has_own, own_keys
from api_check.utils.text import join_with_conjunction

ShapeDescriptor = Mapping[str, Checker]


def shape_label(descriptor: ShapeDescriptor) -> str:
    """Return ``shape({...})`` with each property's display label, in declaration order."""

    labels = copy(descriptor)
    for prop in labels:
        labels[prop] = display_label_of(labels[prop])
    return f"shape({json.dumps(labels, separators=(',', ':'), ensure_ascii=False)})"


def build_shape(descriptor: ShapeDescriptor) -> Checker:
    """Return a shape checker for ``descriptor`` together with its ``strict`` variant."""

    if not isinstance(descriptor, Mapping):
        raise TypeError(
            f"shape expects a mapping of property checkers, got {type(descriptor).__name__}"
        )
    properties: dict[str, Checker] = {}
    for prop, checker in descriptor.items():
        if not isinstance(prop, str):
            raise TypeError(f"shape property names must be strings, got {prop!r}")
        properties[prop] = ensure_checker(checker, role=f"shape property {prop!r}")

    label = shape_label(properties)
    allowed_properties = tuple(properties)

    def shape_definition(
        value: object, name: object, location: object, parent: object
    ) -> CheckOutcome:
        object_failure = object_(value, name, location)
        if is_failure(object_failure):
            return object_failure
        for prop, checker in properties.items():
            if not has_own(value, prop) and checker.is_optional:
                continue
            prop_failure = checker(get_own(value, prop), prop, name, value)
            if is_failure(prop_failure):
                return prop_failure
        return None

    def strict_shape_definition(
        value: object, name: object, location: object, parent: object
    ) -> CheckOutcome:
        shape_failure = shape_definition(value, name, location, parent)
        if is_failure(shape_failure):
            return shape_failure
        extra_props = [prop for prop in own_keys(value) if prop not in properties]
        if extra_props:
            return ExtraPropertiesError(
                name=name,
                location=location,
                extra_props=extra_props,
                allowed_properties=allowed_properties,
            )
        return None

    strict = wrap_checker(strict_shape_definition, f"strict {label}")
    return wrap_checker(shape_definition, label, variants={"strict": strict})


def if_not(other_props: str | Sequence[str], prop_checker: Checker) -> Checker:
    """Return a property checker valid only when none of ``other_props`` are present.

    Exactly one of the governed property and the other properties must be present.
    """

    others = _normalize_props(other_props, "if_not")
    inner = ensure_checker(prop_checker, role="if_not property checker")
    if len(others) == 1:
        label = f"specified only if {others[0]} is not specified"
    else:
        label = (
            "specified only if none of the following are specified: "
            f"[{join_with_conjunction(others, ', ', 'and ')}]"
        )

    def if_not_definition(
        value: object, name: object, location: object, parent: object
    ) -> CheckOutcome:
        prop_exists = isinstance(name, str) and has_own(parent, name)
        others_exist = any(has_own(parent, other) for other in others)
        if prop_exists == others_exist:
            return build_error(name, location, label)
        if prop_exists:
            return inner(value, name, location, parent)
        return None

    return wrap_checker(if_not_definition, label, specified=False)


def only_if(other_props: str | Sequence[str], prop_checker: Checker) -> Checker:
    """Return a property checker valid only when all of ``other_props`` are present."""

    others = _normalize_props(other_props, "only_if")
    inner = ensure_checker(prop_checker, role="only_if property checker")
    if len(others) == 1:
        label = f"specified only if {others[0]} is also specified"
    else:
        label = (
            "specified only if all of the following are specified: "
            f"[{join_with_conjunction(others, ', ', 'and ')}]"
        )

    def only_if_definition(
        value: object, name: object, location: object, parent: object
    ) -> CheckOutcome:
        if not all(has_own(parent, other) for other in others):
            return build_error(name, location, label)
        return inner(value, name, location, parent)

    return wrap_checker(only_if_definition, label, specified=False)


def _normalize_props(other_props: str | Sequence[str], factory: str) -> tuple[str, ...]:
    props = tuple(arrayify(other_props))
    if not props:
        raise ValueError(f"{factory} requires at least one sibling property name")
    for prop in props:
        if not isinstance(prop, str):
            raise TypeError(f"{factory} sibling property names must be strings, got {prop!r}")
    return props


class ShapeFactory:
    """Callable ``shape`` factory exposing ``if_not`` and ``only_if``."""

    __slots__ = ()

    def __call__(self, descriptor: ShapeDescriptor) -> Checker:
        return build_shape(descriptor)

    @staticmethod
    def if_not(other_props: str | Sequence[str], prop_checker: Checker) -> Checker:
        return if_not(other_props, prop_checker)

    @staticmethod
    def only_if(other_props: str | Sequence[str], prop_checker: Checker) -> Checker:
        return only_if(other_props, prop_checker)

    def __repr__(self) -> str:
        return "<ShapeFactory>"


shape = ShapeFactory()

__all__ = [
    "ShapeDescriptor",
    "ShapeFactory",
    "build_shape",
    "if_not",
    "only_if",
    "shape",
    "shape_label",
]
