#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
genkai wire envelopes, adapters and the request gateway (lazy-loaded).

Core modules import ``genkai.protocols.models`` directly; keeping this
package lazy lets them do so without pulling in the gateway, which itself
depends on the core.
"""

from importlib import import_module
from typing import Any, Dict, Tuple

_EXPORT_MAP: Dict[str, Tuple[str, str]] = {
    "RequestEnvelope": ("genkai.protocols.models", "RequestEnvelope"),
    "ResultEnvelope": ("genkai.protocols.models", "ResultEnvelope"),
    "ProtocolAdapter": ("genkai.protocols.adapter", "ProtocolAdapter"),
    "GenkaiWireAdapter": ("genkai.protocols.adapter", "GenkaiWireAdapter"),
    "RequestGateway": ("genkai.protocols.gateway", "RequestGateway"),
}

__all__ = sorted(_EXPORT_MAP.keys())


def __getattr__(name: str) -> Any:
    if name not in _EXPORT_MAP:
        raise AttributeError("module 'genkai.protocols' has no attribute '{0}'".format(name))

    module_name, attr_name = _EXPORT_MAP[name]
    module = import_module(module_name)
    value = getattr(module, attr_name)
    globals()[name] = value
    return value
