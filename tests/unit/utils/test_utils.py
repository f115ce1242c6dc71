"""
api-check — unit tests for utility helpers

File: tests/unit/utils/test_utils.py

Purpose
- Validate value classification, own-property access, collection helpers, and message text.
"""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from api_check.constants import MISSING
from api_check.utils import (
    ValueKind,
    arrayify,
    classify,
    copy,
    describe_target,
    each,
    get_own,
    has_own,
    join_with_conjunction,
    own_keys,
    quote,
)


@pytest.mark.unit
@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ([], ValueKind.ARRAY),
        ((1, 2), ValueKind.ARRAY),
        (True, ValueKind.BOOLEAN),
        (len, ValueKind.FUNCTION),
        (lambda: None, ValueKind.FUNCTION),
        (0, ValueKind.NUMBER),
        (1.5, ValueKind.NUMBER),
        ("", ValueKind.STRING),
        ({}, ValueKind.OBJECT),
        (None, ValueKind.OBJECT),
        (SimpleNamespace(a=1), ValueKind.OBJECT),
        (MISSING, ValueKind.UNDEFINED),
    ],
)
def test_classify_maps_values_to_kinds(value: object, expected: ValueKind) -> None:
    assert classify(value) is expected
    assert classify(value).type_name == expected.value


@pytest.mark.unit
def test_missing_is_a_falsy_singleton() -> None:
    assert not MISSING
    assert repr(MISSING) == "MISSING"
    assert type(MISSING)() is MISSING


@pytest.mark.unit
def test_own_property_access_for_mappings_and_objects() -> None:
    mapping = {"a": 1, "b": None}
    record = SimpleNamespace(a=1, _hidden=2)

    assert own_keys(mapping) == ("a", "b")
    assert own_keys(record) == ("a",)
    assert own_keys(42) == ()
    assert has_own(mapping, "b")
    assert not has_own(mapping, "c")
    assert has_own(record, "a")
    assert not has_own(None, "a")
    assert get_own(mapping, "b") is None
    assert get_own(mapping, "c") is MISSING
    assert get_own(record, "a") == 1


@pytest.mark.unit
def test_copy_is_shallow() -> None:
    inner = [1]
    original = {"a": inner}
    cloned = copy(original)

    assert cloned == original
    assert cloned is not original
    assert cloned["a"] is inner
    assert copy((1, 2)) == [1, 2]


@pytest.mark.unit
def test_each_stops_on_false_and_reports_completion() -> None:
    seen: list[object] = []

    def visit(item: object, key: object) -> bool:
        seen.append(key)
        return item != "stop"

    assert each(["a", "stop", "c"], visit) is False
    assert seen == [0, 1]

    seen.clear()
    assert each({"x": 1, "y": 2}, visit) is True
    assert seen == ["x", "y"]
    assert each(7, visit) is True


@pytest.mark.unit
def test_arrayify() -> None:
    assert arrayify(None) == []
    assert arrayify("a") == ["a"]
    assert arrayify(("a", "b")) == ["a", "b"]


@pytest.mark.unit
def test_join_with_conjunction() -> None:
    assert join_with_conjunction([], ", ", "and ") == ""
    assert join_with_conjunction(["a"], ", ", "and ") == "a"
    assert join_with_conjunction(["a", "b"], ", ", "and ") == "a and b"
    assert join_with_conjunction(["a", "b", "c"], ", ", "or ") == "a, b, or c"


@pytest.mark.unit
def test_quote_and_describe_target() -> None:
    assert quote("x") == "`x`"
    assert describe_target("age", "User") == "`age` at `User`"
    assert describe_target("age") == "`age`"
    assert describe_target(None, None) == "`value`"
