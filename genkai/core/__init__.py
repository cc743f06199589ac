#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
genkai core module exports (lazy-loaded).
"""

from importlib import import_module
from typing import Any, Dict, Tuple

_EXPORT_MAP: Dict[str, Tuple[str, str]] = {
    "Dispatcher": ("genkai.core.dispatcher", "Dispatcher"),
    "Registry": ("genkai.core.registry", "Registry"),
    "CallableEntry": ("genkai.core.registry", "CallableEntry"),
    "ObjectEntry": ("genkai.core.registry", "ObjectEntry"),
    "NameResolver": ("genkai.core.resolver", "NameResolver"),
    "Resolution": ("genkai.core.resolver", "Resolution"),
    "Context": ("genkai.core.context", "Context"),
    "Signature": ("genkai.core.signature", "Signature"),
    "Failure": ("genkai.core.signature", "Failure"),
    "introspect": ("genkai.core.signature", "introspect"),
    "TypeTag": ("genkai.core.types", "TypeTag"),
    "coerce_arguments": ("genkai.core.coercion", "coerce_arguments"),
    "invoke": ("genkai.core.invoker", "invoke"),
    "marshal_result": ("genkai.core.marshal", "marshal_result"),
    "GenkaiSettings": ("genkai.core.config", "GenkaiSettings"),
    "get_settings": ("genkai.core.config", "get_settings"),
}

__all__ = sorted(_EXPORT_MAP.keys())


def __getattr__(name: str) -> Any:
    if name not in _EXPORT_MAP:
        raise AttributeError("module 'genkai.core' has no attribute '{0}'".format(name))

    module_name, attr_name = _EXPORT_MAP[name]
    module = import_module(module_name)
    value = getattr(module, attr_name)
    globals()[name] = value
    return value
