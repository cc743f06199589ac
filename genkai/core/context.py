#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Per-request invocation context.

A callable opts into receiving the context by annotating its first parameter
with ``Context``. The transport owns the context; the dispatcher only reads it
and passes it through.
"""

import threading
import time
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Optional, Type, TypeVar

from pydantic import TypeAdapter, ValidationError

from ..protocols.models import RequestEnvelope
from .utils.exceptions import DecodeFailure, MissingPayload

T = TypeVar("T")


@lru_cache(maxsize=256)
def _adapter_for(shape: Any) -> TypeAdapter:
    return TypeAdapter(shape)


def _shape_name(shape: Any) -> str:
    return getattr(shape, "__name__", None) or repr(shape)


@dataclass
class Context:
    """
    Session, request and cancellation data for one call.

    ``cancel_event`` is set by the transport when the caller goes away;
    ``deadline`` is an optional ``time.monotonic()`` timestamp. Neither is
    enforced by the dispatcher, long-running callables may poll them.
    """

    request: RequestEnvelope
    session: str = ""
    cancel_event: threading.Event = field(default_factory=threading.Event)
    deadline: Optional[float] = None

    @property
    def cancelled(self) -> bool:
        return self.cancel_event.is_set()

    def remaining(self) -> Optional[float]:
        """
        Seconds left before the deadline, ``None`` when there is no deadline.
        """
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def bind_json(self, shape: Type[T]) -> T:
        """
        Decode the raw request payload into ``shape``.

        ``shape`` may be anything pydantic can validate: a dataclass, a
        ``BaseModel``, a ``TypedDict``, ``dict``... Decoding only happens
        when a callable asks for it.
        """
        raw_payload = self.request.raw_payload
        if not raw_payload:
            raise MissingPayload()

        try:
            adapter = _adapter_for(shape)
        except TypeError:
            # unhashable shape
            adapter = TypeAdapter(shape)

        try:
            return adapter.validate_json(raw_payload)
        except ValidationError as exc:
            raise DecodeFailure(_shape_name(shape), str(exc), cause=exc) from exc
