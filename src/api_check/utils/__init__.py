"""Utility exports for value classification, collections, and message text."""

from api_check.utils.collections import arrayify, copy, each
from api_check.utils.kinds import ValueKind, classify, get_own, has_own, own_keys
from api_check.utils.text import describe_target, join_with_conjunction, quote

__all__ = [
    "ValueKind",
    "arrayify",
    "classify",
    "copy",
    "describe_target",
    "each",
    "get_own",
    "has_own",
    "join_with_conjunction",
    "own_keys",
    "quote",
]
