#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Wire envelope models for genkai.

Request wire shape::

    {"id": "optional", "fn": "operation or Object.Method", "p": [...], "json": "..."}

Result wire shape::

    {"id": "optional", "r": [...], "e": "optional failure"}

Keys whose value is absent are omitted from the rendered result.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from ..core.utils.exceptions import InvalidRequestError


@dataclass
class RequestEnvelope:
    """
    One incoming call: operation name plus either positional params or a raw payload.
    """

    operation: str
    params: List[Any] = field(default_factory=list)
    id: Optional[str] = None
    raw_payload: Optional[str] = None

    @property
    def json_mode(self) -> bool:
        return bool(self.raw_payload)

    @staticmethod
    def _normalize_id(raw_id: Any) -> Optional[str]:
        if raw_id is None:
            return None
        if not isinstance(raw_id, str):
            raise InvalidRequestError("request id must be a string")
        return raw_id

    @classmethod
    def from_wire(cls, payload: Any) -> "RequestEnvelope":
        """
        Build a request from a decoded wire payload.

        Accepted shapes:
        - ``fn``: required, non-empty string
        - ``p``: list, or null/missing for no params
        - ``json``: string, or null/missing
        - ``id``: string, or null/missing
        """
        if not isinstance(payload, Mapping):
            raise InvalidRequestError("request payload must be an object")

        operation = payload.get("fn")
        if not isinstance(operation, str) or not operation.strip():
            raise InvalidRequestError("Key: 'fn' is required and must be a non-empty string")

        raw_params = payload.get("p")
        if raw_params is None:
            params: List[Any] = []
        elif isinstance(raw_params, list):
            params = list(raw_params)
        else:
            raise InvalidRequestError("p must be a list")

        raw_payload = payload.get("json")
        if raw_payload is not None and not isinstance(raw_payload, str):
            raise InvalidRequestError("json must be a string")

        return cls(
            operation=operation.strip(),
            params=params,
            id=cls._normalize_id(payload.get("id")),
            raw_payload=raw_payload or None,
        )

    def to_wire(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"fn": self.operation}
        if self.id:
            payload["id"] = self.id
        if self.params:
            payload["p"] = list(self.params)
        if self.raw_payload:
            payload["json"] = self.raw_payload
        return payload


@dataclass
class ResultEnvelope:
    """
    Normalized outcome of one successful dispatch.

    ``returns`` holds the regular return values, ``error`` the stringified
    failure value reported by the callable itself.
    """

    id: Optional[str] = None
    returns: Optional[List[Any]] = None
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    def to_wire(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        if self.id:
            payload["id"] = self.id
        if self.returns is not None:
            payload["r"] = list(self.returns)
        if self.error is not None:
            payload["e"] = self.error
        return payload
