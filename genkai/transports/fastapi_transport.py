#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
FastAPI transport for genkai.

Installs a single POST route (``/__genkai_endpoint`` unless configured
otherwise). Every outcome, including malformed bodies and dispatch failures,
is answered with HTTP 200 and a wire body; failures carry only ``e``.

The session identifier is read from the ``genkai-session`` header. Dispatch
runs in the threadpool because registered callables may block; the context's
``cancel_event`` is set as soon as the client disconnects or the response is
produced.
"""

import asyncio
import logging
import threading
from typing import Any, Dict, Optional, Union

from fastapi import APIRouter, FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from ..core.config import get_settings
from ..core.dispatcher import Dispatcher
from ..core.utils.exceptions import InvalidResultError
from ..protocols.gateway import RequestGateway

logger = logging.getLogger(__name__)

_DISCONNECT_POLL_SECONDS = 0.5


async def _watch_disconnect(request: Request, cancel_event: threading.Event) -> None:
    while not cancel_event.is_set():
        if await request.is_disconnected():
            logger.debug("Client disconnected from %s, cancelling", request.url.path)
            cancel_event.set()
            return
        await asyncio.sleep(_DISCONNECT_POLL_SECONDS)


def _render(gateway: RequestGateway, payload: Dict[str, Any]) -> JSONResponse:
    try:
        return JSONResponse(status_code=status.HTTP_200_OK, content=jsonable_encoder(payload))
    except (TypeError, ValueError) as exc:
        # e.g. a callable returned NaN or an object JSON cannot carry
        logger.warning("Could not serialize genkai response: %s", exc)
        failure = InvalidResultError("result is not JSON serializable: {0}".format(exc), cause=exc)
        return JSONResponse(status_code=status.HTTP_200_OK, content=gateway.adapter.render_error(failure))


def create_router(
    dispatcher: Dispatcher,
    path: Optional[str] = None,
    *,
    session_header: Optional[str] = None,
) -> APIRouter:
    """Build a router exposing ``dispatcher`` on ``path``."""
    settings = get_settings()
    route_path = path or settings.endpoint_path
    if not route_path.startswith("/"):
        route_path = "/" + route_path
    header_name = session_header or settings.session_header
    gateway = RequestGateway(dispatcher)
    router = APIRouter(tags=["genkai"])

    @router.post(route_path, status_code=status.HTTP_200_OK)
    async def genkai_endpoint(request: Request) -> JSONResponse:
        body = await request.body()
        cancel_event = threading.Event()
        watcher = asyncio.create_task(_watch_disconnect(request, cancel_event))
        try:
            payload = await run_in_threadpool(
                gateway.handle_body,
                body,
                session=request.headers.get(header_name, ""),
                cancel_event=cancel_event,
            )
        finally:
            cancel_event.set()
            watcher.cancel()
        return _render(gateway, payload)

    return router


def install(
    app: Union[FastAPI, APIRouter],
    dispatcher: Dispatcher,
    path: Optional[str] = None,
    *,
    session_header: Optional[str] = None,
) -> None:
    """
    Mount the genkai endpoint on ``app``.

    ``path`` overrides the configured endpoint path.
    """
    router = create_router(dispatcher, path, session_header=session_header)
    app.include_router(router)
    logger.info(
        "genkai endpoint installed at %s",
        ", ".join(route.path for route in router.routes),
    )
