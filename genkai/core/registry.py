#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Registry of dispatchable operations and objects.

Registration is a setup-time activity: hosts register everything before they
start serving and the tables are then only read. Concurrent registration
while serving is not guarded here; a host that needs it must serialize
registration against lookups itself. The only structure written while
serving is each object's lazily filled method table, which carries its own
lock.
"""

import inspect
import threading
import types
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from .config import DEFAULT_METHOD_SEPARATOR
from .signature import Signature, introspect
from .utils.exceptions import (
    DuplicateName,
    InvalidName,
    NotAnObject,
    NotCallable,
    RegistrationError,
)

# Values that are data, not stateful objects with methods.
_PLAIN_VALUE_TYPES = (
    str,
    bytes,
    bytearray,
    bool,
    int,
    float,
    complex,
    list,
    tuple,
    dict,
    set,
    frozenset,
    type(None),
)


@dataclass(frozen=True)
class CallableEntry:
    """
    A registered callable together with its introspected signature.
    """

    name: str
    func: Callable[..., Any]
    signature: Signature

    @classmethod
    def from_callable(cls, name: str, func: Any) -> "CallableEntry":
        if inspect.isclass(func) or not callable(func):
            raise NotCallable(name)
        if inspect.iscoroutinefunction(func) or inspect.isasyncgenfunction(func):
            raise NotCallable(name, "coroutine functions cannot be dispatched synchronously")
        return cls(name=name, func=func, signature=introspect(func, name=name))


class ObjectEntry:
    """
    A registered instance whose public methods are dispatchable.

    Methods are resolved on first use and cached; nothing is expanded at
    registration time.
    """

    def __init__(self, name: str, instance: Any, separator: str = DEFAULT_METHOD_SEPARATOR) -> None:
        self.name = name
        self.instance = instance
        self.separator = separator
        self._methods: Dict[str, CallableEntry] = {}
        self._lock = threading.Lock()

    def _lookup_attribute(self, method_name: str) -> Optional[Any]:
        if not method_name or method_name.startswith("_"):
            return None
        static = inspect.getattr_static(self.instance, method_name, None)
        if static is None or isinstance(static, property):
            return None
        target = getattr(self.instance, method_name, None)
        if target is None or not inspect.isroutine(target):
            return None
        return target

    def method(self, method_name: str) -> Optional[CallableEntry]:
        """
        Return the entry for ``method_name`` or ``None`` if it is not dispatchable.

        Raises ``NotCallable`` when the method exists but its signature
        cannot be served.
        """
        entry = self._methods.get(method_name)
        if entry is not None:
            return entry

        target = self._lookup_attribute(method_name)
        if target is None:
            return None

        entry = CallableEntry.from_callable(
            "{0}{1}{2}".format(self.name, self.separator, method_name), target
        )
        with self._lock:
            return self._methods.setdefault(method_name, entry)

    def methods(self) -> Mapping[str, CallableEntry]:
        """
        All public methods that can be dispatched, keyed by method name.
        """
        available: Dict[str, CallableEntry] = {}
        for method_name, _ in inspect.getmembers(self.instance, predicate=inspect.isroutine):
            try:
                entry = self.method(method_name)
            except RegistrationError:
                continue
            if entry is not None:
                available[method_name] = entry
        return available


class Registry:
    """
    Process-owned tables of operations and objects.
    """

    def __init__(self, separator: str = DEFAULT_METHOD_SEPARATOR) -> None:
        if len(separator) != 1:
            raise ValueError("separator must be a single character")
        self.separator = separator
        self._operations: Dict[str, CallableEntry] = {}
        self._objects: Dict[str, ObjectEntry] = {}

    def _validate_name(self, name: Any) -> str:
        if not isinstance(name, str) or not name.strip():
            raise InvalidName(str(name), "name cannot be empty")
        normalized = name.strip()
        if self.separator in normalized:
            raise InvalidName(
                normalized,
                "name cannot contain the method separator '{0}'".format(self.separator),
            )
        return normalized

    def register_operation(self, name: str, func: Any) -> None:
        """
        Register a free-standing callable under ``name``.
        """
        operation_name = self._validate_name(name)
        entry = CallableEntry.from_callable(operation_name, func)
        if operation_name in self._operations:
            raise DuplicateName(operation_name, "operation")
        self._operations[operation_name] = entry

    def register_object(self, name: str, instance: Any) -> None:
        """
        Register a stateful instance whose methods are reachable as ``name.Method``.
        """
        object_name = self._validate_name(name)
        if (
            isinstance(instance, _PLAIN_VALUE_TYPES)
            or inspect.isclass(instance)
            or inspect.isroutine(instance)
            or isinstance(instance, types.ModuleType)
        ):
            raise NotAnObject(object_name)
        if object_name in self._objects:
            raise DuplicateName(object_name, "object")
        self._objects[object_name] = ObjectEntry(object_name, instance, separator=self.separator)

    def operation(
        self,
        func: Optional[Callable[..., Any]] = None,
        *,
        name: Optional[str] = None,
    ) -> Union[Callable[[Callable[..., Any]], Callable[..., Any]], Callable[..., Any]]:
        """
        Decorator shortcut for ``register_operation``.
        """

        def decorator(target: Callable[..., Any]) -> Callable[..., Any]:
            self.register_operation(name or getattr(target, "__name__", ""), target)
            return target

        if func is not None and callable(func):
            return decorator(func)
        return decorator

    def get_operation(self, name: str) -> Optional[CallableEntry]:
        return self._operations.get(name)

    def get_object(self, name: str) -> Optional[ObjectEntry]:
        return self._objects.get(name)

    def operation_names(self) -> List[str]:
        return sorted(self._operations.keys())

    def object_names(self) -> List[str]:
        return sorted(self._objects.keys())

    def describe(self) -> Dict[str, List[str]]:
        """
        Declared parameter types of every dispatchable name.
        """
        described: Dict[str, List[str]] = {}
        for name in self.operation_names():
            described[name] = self._operations[name].signature.describe_params()
        for object_name in self.object_names():
            for method_name, entry in self._objects[object_name].methods().items():
                qualified = "{0}{1}{2}".format(object_name, self.separator, method_name)
                described[qualified] = entry.signature.describe_params()
        return described
