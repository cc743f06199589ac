#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Tests for callable signature introspection.
"""

from typing import Any, Dict, List, Optional, Tuple

import pytest

from genkai.core.context import Context
from genkai.core.signature import Failure, introspect
from genkai.core.types import TypeTag
from genkai.core.utils.exceptions import NotCallable


class LookupError_(Exception):
    pass


def test_context_first_parameter_and_failure_tuple():
    def echo(ctx: Context, text: str) -> Tuple[str, Failure]:
        return text, None

    signature = introspect(echo, name="echo")

    assert signature.param_types == (TypeTag.CONTEXT, TypeTag.TEXT)
    assert signature.param_names == ("ctx", "text")
    assert signature.has_context is True
    assert signature.required_count == 1
    assert signature.return_count == 2
    assert signature.last_is_failure is True
    assert signature.describe_params() == ["Context", "str"]


def test_single_failure_return_accepts_custom_exception_types():
    def login(ctx: Context, name: str) -> Optional[LookupError_]:
        return None

    signature = introspect(login, name="login")

    assert signature.return_count == 1
    assert signature.last_is_failure is True


def test_plain_returns_are_not_failures():
    def add(a: float, b: float) -> float:
        return a + b

    def pair(a: int) -> Tuple[int, str]:
        return a, str(a)

    def reset() -> None:
        return None

    def untyped(value):
        return value

    assert introspect(add, "add").return_count == 1
    assert introspect(add, "add").last_is_failure is False
    assert introspect(pair, "pair").return_count == 2
    assert introspect(pair, "pair").last_is_failure is False
    assert introspect(reset, "reset").return_count == 0
    untyped_signature = introspect(untyped, "untyped")
    assert untyped_signature.param_types == (TypeTag.ANY,)
    assert untyped_signature.return_count == 1


def test_collection_annotations_map_to_tags():
    def collect(
        names: List[str],
        flags: List[bool],
        scores: List[float],
        anything: list,
        options: Dict[str, Any],
        raw: dict,
        count: int,
    ) -> None:
        return None

    signature = introspect(collect, "collect")

    assert signature.param_types == (
        TypeTag.TEXT_LIST,
        TypeTag.BOOL_LIST,
        TypeTag.NUMBER_LIST,
        TypeTag.LIST,
        TypeTag.OBJECT,
        TypeTag.OBJECT,
        TypeTag.INTEGER,
    )
    assert signature.has_context is False


def test_bound_methods_skip_self():
    class Account:
        def login(self, ctx: Context, name: str) -> Failure:
            return None

    signature = introspect(Account().login, "acct.login")

    assert signature.param_types == (TypeTag.CONTEXT, TypeTag.TEXT)


def test_unsupported_annotation_is_rejected():
    def maybe(value: Optional[str]) -> None:
        return None

    with pytest.raises(NotCallable) as exc_info:
        introspect(maybe, "maybe")

    assert "unsupported annotation" in exc_info.value.message


def test_keyword_only_and_variadic_parameters_are_rejected():
    def variadic(*values: str) -> None:
        return None

    def keyword_only(*, value: str) -> None:
        return None

    with pytest.raises(NotCallable):
        introspect(variadic, "variadic")
    with pytest.raises(NotCallable):
        introspect(keyword_only, "keyword_only")


def test_context_must_be_first():
    def late(text: str, ctx: Context) -> None:
        return None

    with pytest.raises(NotCallable) as exc_info:
        introspect(late, "late")

    assert "first parameter" in exc_info.value.message
