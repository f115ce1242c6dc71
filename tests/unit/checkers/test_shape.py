"""
api-check — unit tests for the shape engine

File: tests/unit/checkers/test_shape.py

Purpose
- Validate shape, strict shapes, and the conditional-presence checkers.

What this test file should cover
- Optional properties may be absent; extra properties are allowed unless strict.
- Sub-errors propagate unmodified; iteration follows declaration order.
- if_not / only_if presence rules against the parent object.
"""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from api_check.checkers import checkers
from api_check.errors import ExtraPropertiesError, RequiredValueError, is_failure


@pytest.mark.unit
def test_shape_label_preserves_declaration_order() -> None:
    checker = checkers.shape({"b": checkers.string.optional, "a": checkers.number})

    assert checker.type == 'shape({"b":"String (optional)","a":"Number"})'
    assert checker.strict.type == f"strict {checker.type}"


@pytest.mark.unit
def test_shape_accepts_optional_absence_and_extra_props() -> None:
    checker = checkers.shape({"a": checkers.number, "b": checkers.string.optional})

    assert checker({"a": 1}) is None
    assert checker({"a": 1, "b": "x"}) is None
    assert checkers.shape({"a": checkers.number})({"a": 1, "b": 2}) is None
    assert checker(SimpleNamespace(a=1)) is None


@pytest.mark.unit
def test_shape_propagates_property_error_unmodified() -> None:
    checker = checkers.shape({"a": checkers.number, "b": checkers.string})

    failure = checker({"a": "1", "b": 2}, "payload", "request")

    assert failure is not None
    assert failure.message == "`a` at `payload` must be `Number`"


def positive(value: object, name: object, location: object, parent: object) -> ValueError | None:
    if isinstance(value, (int, float)) and value > 0:
        return None
    return ValueError(f"{name} must be positive")


@pytest.mark.unit
def test_shape_treats_plain_exceptions_from_user_checkers_as_failures() -> None:
    checker = checkers.shape({"n": positive})

    assert checker({"n": 3}) is None
    failure = checker({"n": -5})
    assert is_failure(failure)
    assert isinstance(failure, ValueError)
    assert str(failure) == "n must be positive"
    assert is_failure(checker.strict({"n": 0}))


@pytest.mark.unit
def test_shape_reports_missing_required_property() -> None:
    failure = checkers.shape({"a": checkers.number})({}, "payload")

    assert isinstance(failure, RequiredValueError)
    assert failure.message == "Required `a` not specified at `payload`. Must be `Number`"


@pytest.mark.unit
def test_shape_propagates_object_failure() -> None:
    failure = checkers.shape({"a": checkers.number})("nope", "payload", "request")

    assert failure is not None
    assert failure.message == "`payload` at `request` must be `Object`"
    assert is_failure(checkers.shape({})(None))


@pytest.mark.unit
def test_nested_shape_errors_name_the_deepest_property() -> None:
    checker = checkers.shape(
        {"user": checkers.shape({"address": checkers.shape({"zip": checkers.string})})}
    )

    failure = checker({"user": {"address": {"zip": 12345}}}, "body")

    assert failure is not None
    assert failure.message == "`zip` at `address` must be `String`"


@pytest.mark.unit
def test_shape_passes_parent_to_property_checkers() -> None:
    parents: list[object] = []

    def recording(value: object, name: object, location: object, parent: object) -> None:
        parents.append(parent)

    value = {"a": 1}
    checkers.shape({"a": recording})(value)

    assert parents == [value]


@pytest.mark.unit
def test_strict_shape_rejects_extra_properties() -> None:
    checker = checkers.shape({"a": checkers.number}).strict

    assert checker({"a": 1}) is None
    failure = checker({"a": 1, "b": 2, "c": 3}, "opts", "Widget")

    assert isinstance(failure, ExtraPropertiesError)
    assert failure.extra_props == ("b", "c")
    assert failure.allowed_properties == ("a",)
    assert failure.message == (
        "`opts` at `Widget` cannot have extra properties: `b`, `c`. It is limited to `a`"
    )


@pytest.mark.unit
def test_strict_shape_reports_base_failure_first() -> None:
    failure = checkers.shape({"a": checkers.number}).strict({"a": "x", "b": 2}, "opts")

    assert failure is not None
    assert not isinstance(failure, ExtraPropertiesError)
    assert failure.message == "`a` at `opts` must be `Number`"


@pytest.mark.unit
def test_shape_copies_descriptor_at_construction() -> None:
    descriptor = {"a": checkers.number}
    checker = checkers.shape(descriptor)
    descriptor["b"] = checkers.string

    assert checker({"a": 1}) is None
    assert "b" not in checker.type


@pytest.mark.unit
def test_shape_rejects_bad_descriptors() -> None:
    with pytest.raises(TypeError):
        checkers.shape([checkers.number])  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        checkers.shape({"a": "Number"})  # type: ignore[dict-item]


@pytest.mark.unit
def test_if_not_presence_rules() -> None:
    checker = checkers.shape({"a": checkers.shape.if_not("b", checkers.number)})

    assert checker({"a": 1}) is None
    assert checker({"b": 2}) is None
    both = checker({"a": 1, "b": 2}, "opts")
    assert both is not None
    assert both.message == "`a` at `opts` must be `specified only if b is not specified`"
    assert is_failure(checker({}))
    assert is_failure(checker({"a": "x"}))


@pytest.mark.unit
def test_if_not_with_several_siblings() -> None:
    conditional = checkers.shape.if_not(["b", "c"], checkers.number)

    assert conditional.type == (
        "specified only if none of the following are specified: [b and c]"
    )
    checker = checkers.shape({"a": conditional})
    assert checker({"c": 1}) is None
    assert is_failure(checker({"a": 1, "c": 1}))


@pytest.mark.unit
def test_only_if_presence_rules() -> None:
    checker = checkers.shape({"a": checkers.shape.only_if("b", checkers.number)})

    missing_sibling = checker({"a": 1}, "opts")
    assert missing_sibling is not None
    assert missing_sibling.message == (
        "`a` at `opts` must be `specified only if b is also specified`"
    )
    assert checker({"a": 1, "b": 2}) is None
    assert is_failure(checker({"a": "x", "b": 2}))


@pytest.mark.unit
def test_only_if_delegates_absence_to_inner_checker() -> None:
    required = checkers.shape({"a": checkers.shape.only_if("b", checkers.number)})
    optional = checkers.shape({"a": checkers.shape.only_if("b", checkers.number.optional)})

    assert isinstance(required({"b": 2}), RequiredValueError)
    assert optional({"b": 2}) is None


@pytest.mark.unit
def test_only_if_label_for_several_siblings() -> None:
    conditional = checkers.shape.only_if(("b", "c", "d"), checkers.number)

    assert conditional.type == (
        "specified only if all of the following are specified: [b, c, and d]"
    )


@pytest.mark.unit
def test_conditional_checkers_reject_empty_sibling_lists() -> None:
    with pytest.raises(ValueError):
        checkers.shape.if_not([], checkers.number)
    with pytest.raises(TypeError):
        checkers.shape.only_if([1], checkers.number)  # type: ignore[list-item]
