#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Wire protocol adapters for genkai.
"""

import json
import math
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Union

from ..core.utils.exceptions import GenkaiError, InvalidRequestError
from .models import RequestEnvelope, ResultEnvelope


def _reject_constant(token: str) -> Any:
    raise InvalidRequestError("request body is not valid JSON: '{0}' is not a number".format(token))


def _parse_finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise InvalidRequestError("request body is not valid JSON: number '{0}' is out of range".format(text))
    return value


class ProtocolAdapter(ABC):
    """
    Base contract for wire adapters: decode requests, render outcomes.
    """

    @abstractmethod
    def parse_request(self, payload: Any) -> RequestEnvelope:
        """
        Turn an already decoded payload into a request envelope.
        """

    @abstractmethod
    def render_result(self, envelope: ResultEnvelope) -> Dict[str, Any]:
        """
        Render a successful dispatch.
        """

    @abstractmethod
    def render_error(self, exc: BaseException) -> Dict[str, Any]:
        """
        Render a dispatch failure.
        """


class GenkaiWireAdapter(ProtocolAdapter):
    """
    The ``{id, fn, p, json}`` / ``{id, r, e}`` wire format.

    Dispatch failures render as a body with only ``e`` populated, the same
    shape a transport uses for malformed requests.
    """

    def decode(self, body: Union[str, bytes, bytearray]) -> RequestEnvelope:
        """
        Decode a raw JSON request body.
        """
        if not body:
            raise InvalidRequestError("request body is empty")
        try:
            payload = json.loads(
                body,
                parse_constant=_reject_constant,
                parse_float=_parse_finite_float,
            )
        except (ValueError, RecursionError) as exc:
            # JSONDecodeError and UnicodeDecodeError are ValueErrors
            raise InvalidRequestError("request body is not valid JSON: {0}".format(exc), cause=exc) from exc
        return self.parse_request(payload)

    def parse_request(self, payload: Any) -> RequestEnvelope:
        return RequestEnvelope.from_wire(payload)

    def render_result(self, envelope: ResultEnvelope) -> Dict[str, Any]:
        return envelope.to_wire()

    def render_error(self, exc: BaseException) -> Dict[str, Any]:
        return self.error_message(self.describe_error(exc))

    @staticmethod
    def describe_error(exc: BaseException) -> str:
        if isinstance(exc, GenkaiError):
            return exc.message
        return "{0}".format(exc) or exc.__class__.__name__

    @staticmethod
    def error_message(message: Optional[str]) -> Dict[str, Any]:
        return {"e": message or "unknown error"}
