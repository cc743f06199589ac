#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Turn an incoming operation name into a registered callable.
"""

from dataclasses import dataclass

from .registry import CallableEntry, Registry
from .utils.exceptions import (
    NestedAccessNotSupported,
    NotCallable,
    UnknownMethod,
    UnknownObject,
    UnknownOperation,
)


@dataclass(frozen=True)
class Resolution:
    entry: CallableEntry
    has_context: bool


class NameResolver:
    """
    Resolve plain names against the operations table and ``Object.Method``
    names against registered objects, one level deep only.
    """

    def __init__(self, registry: Registry) -> None:
        self._registry = registry

    def resolve(self, operation: str) -> Resolution:
        separator = self._registry.separator
        if separator in operation:
            entry = self._resolve_method(operation, separator)
        else:
            entry = self._registry.get_operation(operation)
            if entry is None:
                raise UnknownOperation(operation)
        return Resolution(entry=entry, has_context=entry.signature.has_context)

    def _resolve_method(self, operation: str, separator: str) -> CallableEntry:
        elements = operation.split(separator)
        if len(elements) != 2:
            raise NestedAccessNotSupported(operation)

        object_name, method_name = elements
        object_entry = self._registry.get_object(object_name)
        if object_entry is None:
            raise UnknownObject(object_name)

        try:
            entry = object_entry.method(method_name)
        except NotCallable as exc:
            raise UnknownMethod(object_name, method_name, reason=exc.reason) from exc
        if entry is None:
            raise UnknownMethod(object_name, method_name)
        return entry
