#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Session manager demo served over HTTP.

Run:
    uv run python examples/manager_server.py

Then, for example:
    curl -X POST localhost:9302/__genkai_endpoint \
        -H 'genkai-session: s1' -d '{"fn": "register", "p": ["bob"]}'
    curl -X POST localhost:9302/__genkai_endpoint \
        -H 'genkai-session: s1' -d '{"fn": "manager.login", "p": ["bob"]}'
"""

import logging
import queue
import threading
from typing import Any, Dict, Tuple

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from genkai import Context, Dispatcher, Failure, get_settings, install


class ManagerError(Exception):
    pass


class Manager:
    """
    Per-user key/value store with a blocking per-user pipe.

    The pipe is an unbounded queue: ``push`` returns immediately and values
    wait in order until ``pop`` takes them. Only ``pop`` blocks, until a value
    arrives or the caller disconnects.
    """

    def __init__(self) -> None:
        self.store: Dict[str, str] = {}
        self.sessions: Dict[str, str] = {}
        self.pipes: Dict[str, "queue.Queue[str]"] = {}
        self._lock = threading.Lock()

    def register(self, username: str) -> Failure:
        with self._lock:
            self.store[username] = ""
            self.pipes[username] = queue.Queue()
        return None

    def login(self, ctx: Context, username: str) -> Failure:
        with self._lock:
            if username not in self.store:
                return ManagerError("user not found")
            self.sessions[ctx.session] = username
        return None

    def details(self, ctx: Context) -> Tuple[Dict[str, Any], Failure]:
        user = self.sessions.get(ctx.session, "")
        if user not in self.store:
            return {}, ManagerError("session not found")
        return {"session": ctx.session, "user": user, "store": self.store[user]}, None

    def get_store(self, ctx: Context) -> Tuple[str, Failure]:
        user = self.sessions.get(ctx.session, "")
        if user not in self.store:
            return "", ManagerError("session not found")
        return self.store[user], None

    def set_store(self, ctx: Context, value: str) -> Failure:
        with self._lock:
            user = self.sessions.get(ctx.session)
            if user is None:
                return ManagerError("session not found")
            if user not in self.store:
                return ManagerError("user not found")
            self.store[user] = value
        return None

    def push(self, ctx: Context, value: str) -> Failure:
        pipe = self.pipes.get(self.sessions.get(ctx.session, ""))
        if pipe is None:
            return ManagerError("session not found")
        pipe.put(value)
        return None

    def pop(self, ctx: Context) -> Tuple[str, Failure]:
        pipe = self.pipes.get(self.sessions.get(ctx.session, ""))
        if pipe is None:
            return "", ManagerError("session not found")
        # Blocks the serving thread until something is pushed or the caller leaves.
        while not ctx.cancelled:
            try:
                return pipe.get(timeout=0.5), None
            except queue.Empty:
                continue
        return "", ManagerError("cancelled")


def build_app() -> FastAPI:
    manager = Manager()
    dispatcher = Dispatcher()

    @dispatcher.operation
    def ping(ctx: Context) -> Tuple[Dict[str, Any], Failure]:
        return {"session": ctx.session, "users": sorted(manager.store)}, None

    dispatcher.register_operation("register", manager.register)
    dispatcher.register_operation("login", manager.login)
    dispatcher.register_operation("getStore", manager.get_store)
    dispatcher.register_operation("setStore", manager.set_store)
    dispatcher.register_operation("details", manager.details)
    dispatcher.register_operation("push", manager.push)
    dispatcher.register_operation("pop", manager.pop)
    dispatcher.register_object("manager", manager)

    app = FastAPI(title="genkai manager demo")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*", get_settings().session_header],
    )
    install(app, dispatcher)
    return app


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    uvicorn.run(build_app(), host="localhost", port=9302)
