#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Tests for invocation and result marshalling.
"""

from typing import Tuple

import pytest

from genkai.core.invoker import capture_returns, invoke
from genkai.core.marshal import marshal_result
from genkai.core.registry import CallableEntry
from genkai.core.signature import Failure, Signature
from genkai.core.utils.exceptions import (
    InvocationError,
    MissingPayload,
    ReturnShapeMismatch,
)


def _signature(return_count, last_is_failure):
    return Signature(
        param_types=(),
        param_names=(),
        return_count=return_count,
        last_is_failure=last_is_failure,
    )


def test_single_failure_return_with_error():
    envelope = marshal_result("7", [ValueError("user not found")], _signature(1, True))

    assert envelope.to_wire() == {"id": "7", "e": "user not found"}
    assert envelope.failed is True


def test_single_failure_return_without_error_keeps_null_value():
    envelope = marshal_result(None, [None], _signature(1, True))

    assert envelope.to_wire() == {"r": [None]}


def test_multiple_returns_with_failure_split_last_value():
    ok = marshal_result(None, ["hi", 3, None], _signature(3, True))
    failed = marshal_result(None, ["", 0, "boom"], _signature(3, True))

    assert ok.to_wire() == {"r": ["hi", 3]}
    assert failed.to_wire() == {"r": ["", 0], "e": "boom"}


def test_no_failure_returns_everything():
    assert marshal_result(None, [1, "a"], _signature(2, False)).to_wire() == {"r": [1, "a"]}
    assert marshal_result(None, [], _signature(0, False)).to_wire() == {"r": []}


def test_capture_returns_follows_declared_count():
    def pair() -> Tuple[str, Failure]:
        return "x", None

    entry = CallableEntry.from_callable("pair", pair)

    assert capture_returns(entry, ("x", None)) == ["x", None]
    with pytest.raises(ReturnShapeMismatch):
        capture_returns(entry, "x")
    with pytest.raises(ReturnShapeMismatch):
        capture_returns(entry, ("x", None, 1))


def test_invoke_translates_raised_exceptions():
    def explode() -> str:
        raise RuntimeError("kaboom")

    entry = CallableEntry.from_callable("explode", explode)

    with pytest.raises(InvocationError) as exc_info:
        invoke(entry, [])

    assert exc_info.value.message == "Function 'explode' raised RuntimeError: kaboom"
    assert isinstance(exc_info.value.cause, RuntimeError)


def test_invoke_passes_dispatch_errors_through():
    def needs_payload() -> str:
        raise MissingPayload()

    entry = CallableEntry.from_callable("needs_payload", needs_payload)

    with pytest.raises(MissingPayload):
        invoke(entry, [])
