#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Tests for argument validation and coercion.
"""

from typing import Any, Dict, List

import pytest

from genkai.core.coercion import coerce_arguments, coerce_value, normalize_array
from genkai.core.context import Context
from genkai.core.registry import Registry
from genkai.core.resolver import NameResolver
from genkai.core.types import TypeTag
from genkai.core.utils.exceptions import (
    ArityMismatch,
    HeterogeneousArray,
    JSONModeRequiresContext,
    ModeConflict,
    NotJSONModeCallable,
    ParameterTypeMismatch,
    UnsupportedArrayElement,
)


def _resolve(name, func):
    registry = Registry()
    registry.register_operation(name, func)
    return NameResolver(registry).resolve(name)


def test_normalize_array_converts_numbers_to_float():
    assert normalize_array([1, 2.5, 3]) == [1.0, 2.5, 3.0]
    assert all(isinstance(item, float) for item in normalize_array([1, 2]))
    assert normalize_array(["a", "b"]) == ["a", "b"]
    assert normalize_array([True, False]) == [True, False]
    assert normalize_array([]) == []


def test_normalize_array_rejects_mixed_and_unsupported_elements():
    with pytest.raises(HeterogeneousArray) as exc_info:
        normalize_array([1, "x"])
    assert exc_info.value.kind == "float"

    # bool is its own kind, not a number
    with pytest.raises(HeterogeneousArray):
        normalize_array([1, True])

    with pytest.raises(UnsupportedArrayElement):
        normalize_array([{"a": 1}])
    with pytest.raises(UnsupportedArrayElement):
        normalize_array([None])


def test_coerce_value_widens_integers_for_float_parameters():
    value = coerce_value(0, 3, TypeTag.NUMBER)

    assert value == 3.0
    assert isinstance(value, float)
    assert coerce_value(0, 3, TypeTag.INTEGER) == 3


def test_coerce_value_reports_index_and_types():
    with pytest.raises(ParameterTypeMismatch) as exc_info:
        coerce_value(2, "x", TypeTag.NUMBER)

    exc = exc_info.value
    assert exc.index == 2
    assert exc.supplied_type == "str"
    assert exc.expected_type == "float"
    assert exc.message == "Parameter '2' mismatch: supplied '<x:str>', expected '<float>'"


def test_coerce_value_rejects_float_for_int_and_bool_for_number():
    with pytest.raises(ParameterTypeMismatch):
        coerce_value(0, 1.5, TypeTag.INTEGER)
    with pytest.raises(ParameterTypeMismatch):
        coerce_value(0, True, TypeTag.NUMBER)


def test_list_parameters_accept_matching_and_empty_arrays():
    assert coerce_value(0, ["a"], TypeTag.TEXT_LIST) == ["a"]
    assert coerce_value(0, [], TypeTag.TEXT_LIST) == []
    assert coerce_value(0, [1, 2], TypeTag.LIST) == [1.0, 2.0]
    with pytest.raises(ParameterTypeMismatch):
        coerce_value(0, [1, 2], TypeTag.TEXT_LIST)


def test_object_and_any_parameters():
    assert coerce_value(0, {"a": 1}, TypeTag.OBJECT) == {"a": 1}
    assert coerce_value(0, None, TypeTag.ANY) is None
    with pytest.raises(ParameterTypeMismatch):
        coerce_value(0, None, TypeTag.TEXT)


def test_coerce_arguments_skips_context_and_offsets_indices():
    def scale(ctx: Context, factor: float, labels: List[str]) -> float:
        return factor

    resolution = _resolve("scale", scale)

    assert coerce_arguments(resolution, [2, ["a"]]) == [2.0, ["a"]]
    with pytest.raises(ParameterTypeMismatch) as exc_info:
        coerce_arguments(resolution, [2, "a"])
    assert exc_info.value.index == 2


def test_arity_is_checked_before_types():
    def add(a: float, b: float) -> float:
        return a + b

    resolution = _resolve("add", add)

    with pytest.raises(ArityMismatch) as exc_info:
        coerce_arguments(resolution, ["x"])

    assert exc_info.value.message == "Function accepts 2 params <float, float>, provided 1"


def test_mode_conflict_is_checked_first():
    def handle(ctx: Context) -> None:
        return None

    resolution = _resolve("handle", handle)

    with pytest.raises(ModeConflict):
        coerce_arguments(resolution, ["unexpected"], raw_payload='{"x": 1}')


def test_json_mode_requires_context_only_callable():
    def no_context(data: Dict[str, Any]) -> None:
        return None

    def with_extra(ctx: Context, data: str) -> None:
        return None

    def json_only(ctx: Context) -> None:
        return None

    with pytest.raises(JSONModeRequiresContext):
        coerce_arguments(_resolve("no_context", no_context), [], raw_payload="{}")
    with pytest.raises(NotJSONModeCallable) as exc_info:
        coerce_arguments(_resolve("with_extra", with_extra), [], raw_payload="{}")
    assert exc_info.value.message == "Function 'with_extra' is not JSONMode"

    assert coerce_arguments(_resolve("json_only", json_only), [], raw_payload="{}") == []


def test_numbers_without_a_finite_float_form_are_rejected():
    huge = int("9" * 400)

    with pytest.raises(ParameterTypeMismatch):
        coerce_value(0, huge, TypeTag.NUMBER)
    with pytest.raises(ParameterTypeMismatch):
        coerce_value(0, float("nan"), TypeTag.NUMBER)
    with pytest.raises(ParameterTypeMismatch):
        coerce_value(0, float("inf"), TypeTag.ANY)
    with pytest.raises(UnsupportedArrayElement):
        normalize_array([1, huge])
    with pytest.raises(UnsupportedArrayElement):
        normalize_array([float("-inf")])

    assert coerce_value(0, huge, TypeTag.INTEGER) == huge


def test_unsupported_array_element_names_the_value():
    with pytest.raises(UnsupportedArrayElement) as exc_info:
        normalize_array([{"a": 1}])

    assert exc_info.value.message == (
        "parameter contains an array with an unsupported type '{'a': 1}' (dict)"
    )
