"""
api-check checkers package public API.

File: src/api_check/checkers/__init__.py

Purpose
- Export the construction API as a stateless factory namespace (``checkers``) and as
  module attributes.

Functional requirements
- Every exported checker is already decorated with ``type`` and ``optional``.
- No process-wide mutable state; the namespace is an immutable tuple.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import NamedTuple

from api_check.checkers.arguments import args, arguments_checker
from api_check.checkers.base import (
    CheckDefinition,
    CheckOutcome,
    Checker,
    display_label_of,
    ensure_checker,
    wrap_checker,
)
from api_check.checkers.combinators import array_of, object_of, one_of_type, type_or_array_of
from api_check.checkers.primitives import (
    any_,
    array,
    boolean,
    func,
    instance_of,
    number,
    object_,
    one_of,
    string,
)
from api_check.checkers.shape import ShapeDescriptor, ShapeFactory, if_not, only_if, shape


class CheckerSet(NamedTuple):
    """Immutable namespace of every primitive checker and checker factory."""

    array: Checker
    bool: Checker
    func: Checker
    number: Checker
    string: Checker
    object: Checker
    instance_of: Callable[[type], Checker]
    one_of: Callable[[Sequence[object]], Checker]
    one_of_type: Callable[[Sequence[Checker]], Checker]
    array_of: Callable[[Checker], Checker]
    object_of: Callable[[Checker], Checker]
    type_or_array_of: Callable[[Checker], Checker]
    shape: ShapeFactory
    args: Checker
    any: Checker


checkers = CheckerSet(
    array=array,
    bool=boolean,
    func=func,
    number=number,
    string=string,
    object=object_,
    instance_of=instance_of,
    one_of=one_of,
    one_of_type=one_of_type,
    array_of=array_of,
    object_of=object_of,
    type_or_array_of=type_or_array_of,
    shape=shape,
    args=args,
    any=any_,
)

__all__ = [
    "CheckDefinition",
    "CheckOutcome",
    "Checker",
    "CheckerSet",
    "ShapeDescriptor",
    "ShapeFactory",
    "any_",
    "args",
    "arguments_checker",
    "array",
    "array_of",
    "boolean",
    "checkers",
    "display_label_of",
    "ensure_checker",
    "func",
    "if_not",
    "instance_of",
    "number",
    "object_",
    "object_of",
    "one_of",
    "one_of_type",
    "only_if",
    "shape",
    "string",
    "type_or_array_of",
    "wrap_checker",
]
