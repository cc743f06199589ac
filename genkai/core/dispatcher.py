#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
genkai dispatcher: the single entry point a transport calls per request.

Pipeline::

    NameResolver -> coerce_arguments -> invoke -> marshal_result

Exactly one resolve and one invoke happen per request, synchronously, on the
caller's thread. The dispatcher imposes no timeout; a callable that blocks
blocks the serving thread until it returns.

Usage Example:
    >>> dispatcher = Dispatcher()
    >>> @dispatcher.operation
    ... def echo(ctx: Context, text: str) -> Tuple[str, Failure]:
    ...     return text, None
    >>> request = RequestEnvelope(operation="echo", params=["hi"])
    >>> dispatcher.execute(Context(request=request)).to_wire()
    {'r': ['hi']}
"""

import time
from typing import Any, Callable, Dict, List, Optional, Union

from ..protocols.models import ResultEnvelope
from .coercion import coerce_arguments
from .config import get_settings
from .context import Context
from .invoker import invoke
from .marshal import marshal_result
from .registry import Registry
from .resolver import NameResolver
from .utils.exceptions import DispatchError, InvocationError
from .utils.logger import ModernLogger, set_package_level


class Dispatcher(ModernLogger):
    """
    Resolve, validate, invoke and marshal one request against a ``Registry``.
    """

    def __init__(
        self,
        registry: Optional[Registry] = None,
        *,
        separator: Optional[str] = None,
        log_level: Optional[Union[int, str]] = None,
    ) -> None:
        settings = get_settings()
        set_package_level(settings.log_level)
        ModernLogger.__init__(self, name="Dispatcher", level=log_level)
        if registry is not None and separator is not None and registry.separator != separator:
            raise ValueError(
                "separator '{0}' conflicts with registry separator '{1}'".format(
                    separator, registry.separator
                )
            )
        self.registry = registry or Registry(separator=separator or settings.method_separator)
        self._resolver = NameResolver(self.registry)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register_operation(self, name: str, func: Any) -> None:
        self.registry.register_operation(name, func)
        signature = self.registry.get_operation(name.strip()).signature
        self.info(
            "Registered operation '%s' <%s> -> %d return(s)",
            name.strip(),
            ", ".join(signature.describe_params()),
            signature.return_count,
        )

    def register_object(self, name: str, instance: Any) -> None:
        self.registry.register_object(name, instance)
        self.info(
            "Registered object '%s' (%s)", name.strip(), type(instance).__name__
        )

    def operation(
        self,
        func: Optional[Callable[..., Any]] = None,
        *,
        name: Optional[str] = None,
    ) -> Union[Callable[[Callable[..., Any]], Callable[..., Any]], Callable[..., Any]]:
        """
        Decorator registering a function as an operation.

        Supports both ``@dispatcher.operation`` and
        ``@dispatcher.operation(name="custom")``.
        """

        def decorator(target: Callable[..., Any]) -> Callable[..., Any]:
            self.register_operation(name or getattr(target, "__name__", ""), target)
            return target

        if func is not None and callable(func):
            return decorator(func)
        return decorator

    def describe(self) -> Dict[str, List[str]]:
        return self.registry.describe()

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def execute(self, context: Context) -> ResultEnvelope:
        """
        Dispatch the request carried by ``context``.

        Returns the result envelope; a failure value reported by the callable
        is embedded in ``ResultEnvelope.error``. Raises ``DispatchError``
        when the request cannot be dispatched or the callable raised.
        """
        request = context.request
        started = time.perf_counter()

        try:
            resolution = self._resolver.resolve(request.operation)
            arguments = coerce_arguments(resolution, request.params, request.raw_payload)
            if resolution.has_context:
                arguments.insert(0, context)
            outputs = invoke(resolution.entry, arguments)
        except InvocationError as exc:
            self.error(
                "Operation '%s' raised: %s", request.operation, exc.message, exc_info=exc.cause
            )
            raise
        except DispatchError as exc:
            self.warning(
                "Dispatch of '%s' failed (%s): %s",
                request.operation,
                exc.__class__.__name__,
                exc.message,
            )
            raise

        envelope = marshal_result(request.id, outputs, resolution.entry.signature)
        self.debug(
            "Dispatched '%s' in %.2fms (failed=%s)",
            request.operation,
            (time.perf_counter() - started) * 1000.0,
            envelope.failed,
        )
        return envelope
