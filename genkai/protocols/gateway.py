#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Transport-agnostic request gateway for genkai.

Transports hand the gateway a request body plus whatever they know about the
caller (session, cancellation); the gateway always answers with a wire dict
and never raises for request-level failures.
"""

import logging
import threading
from typing import TYPE_CHECKING, Any, Dict, Optional, Union

from ..core.context import Context
from ..core.utils.exceptions import DispatchError
from .adapter import GenkaiWireAdapter
from .models import RequestEnvelope

if TYPE_CHECKING:
    from ..core.dispatcher import Dispatcher

logger = logging.getLogger(__name__)


class RequestGateway:
    """
    Glue between a wire adapter and a ``Dispatcher``.
    """

    def __init__(self, dispatcher: "Dispatcher", adapter: Optional[GenkaiWireAdapter] = None) -> None:
        self._dispatcher = dispatcher
        self._adapter = adapter or GenkaiWireAdapter()

    @property
    def dispatcher(self) -> "Dispatcher":
        return self._dispatcher

    @property
    def adapter(self) -> GenkaiWireAdapter:
        return self._adapter

    def build_context(
        self,
        request: RequestEnvelope,
        *,
        session: str = "",
        cancel_event: Optional[threading.Event] = None,
        deadline: Optional[float] = None,
    ) -> Context:
        return Context(
            request=request,
            session=session or "",
            cancel_event=cancel_event if cancel_event is not None else threading.Event(),
            deadline=deadline,
        )

    def dispatch(self, request: RequestEnvelope, **context_kwargs: Any) -> Dict[str, Any]:
        context = self.build_context(request, **context_kwargs)
        try:
            envelope = self._dispatcher.execute(context)
        except DispatchError as exc:
            return self._adapter.render_error(exc)
        return self._adapter.render_result(envelope)

    def handle(self, payload: Any, **context_kwargs: Any) -> Dict[str, Any]:
        """
        Handle an already decoded payload (e.g. a dict from a JSON body).
        """
        try:
            request = self._adapter.parse_request(payload)
        except DispatchError as exc:
            logger.warning("Rejected malformed request: %s", exc)
            return self._adapter.render_error(exc)
        return self.dispatch(request, **context_kwargs)

    def handle_body(self, body: Union[str, bytes, bytearray], **context_kwargs: Any) -> Dict[str, Any]:
        """
        Handle a raw JSON request body.
        """
        try:
            request = self._adapter.decode(body)
        except DispatchError as exc:
            logger.warning("Rejected malformed request: %s", exc)
            return self._adapter.render_error(exc)
        return self.dispatch(request, **context_kwargs)
