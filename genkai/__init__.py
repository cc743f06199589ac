#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
genkai public API with lazy imports.

The HTTP transport is only imported when ``install`` is requested, so the
dispatch core can be used without FastAPI being imported.
"""

from importlib import import_module
from typing import Any, Dict, Tuple

from ._version import __version__

_EXPORT_MAP: Dict[str, Tuple[str, str]] = {
    "Dispatcher": ("genkai.core.dispatcher", "Dispatcher"),
    "Registry": ("genkai.core.registry", "Registry"),
    "Context": ("genkai.core.context", "Context"),
    "Failure": ("genkai.core.signature", "Failure"),
    "TypeTag": ("genkai.core.types", "TypeTag"),
    "GenkaiSettings": ("genkai.core.config", "GenkaiSettings"),
    "get_settings": ("genkai.core.config", "get_settings"),
    "RequestEnvelope": ("genkai.protocols.models", "RequestEnvelope"),
    "ResultEnvelope": ("genkai.protocols.models", "ResultEnvelope"),
    "RequestGateway": ("genkai.protocols.gateway", "RequestGateway"),
    "GenkaiWireAdapter": ("genkai.protocols.adapter", "GenkaiWireAdapter"),
    "GenkaiError": ("genkai.core.utils.exceptions", "GenkaiError"),
    "DispatchError": ("genkai.core.utils.exceptions", "DispatchError"),
    "RegistrationError": ("genkai.core.utils.exceptions", "RegistrationError"),
    "DEFAULT_ENDPOINT_PATH": ("genkai.core.config", "DEFAULT_ENDPOINT_PATH"),
    "install": ("genkai.transports.fastapi_transport", "install"),
}

__all__ = ["__version__", *sorted(_EXPORT_MAP.keys())]


def __getattr__(name: str) -> Any:
    """
    Resolve public API symbols lazily.
    """
    if name not in _EXPORT_MAP:
        raise AttributeError("module 'genkai' has no attribute '{0}'".format(name))

    module_name, attr_name = _EXPORT_MAP[name]
    module = import_module(module_name)
    value = getattr(module, attr_name)
    globals()[name] = value
    return value
