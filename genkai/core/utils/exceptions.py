#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Exception hierarchy for genkai.

Three families share the ``GenkaiError`` base:

* ``RegistrationError``: malformed registrations. Raised at setup time and
  meant to stop the host process before it starts serving.
* ``DispatchError``: everything that can go wrong while resolving,
  validating or invoking one request. Transports render these as a failure
  envelope (``{"e": "..."}``) instead of letting them escape.
* ``PayloadError``: raw-payload decoding failures raised from inside a
  callable through ``Context.bind_json``. They are dispatch errors too.
"""

from typing import Any, Dict, List, Optional, Sequence


class GenkaiError(Exception):
    """
    Base class for all genkai errors.
    """

    def __init__(self, message: str, *, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
        }
        if self.cause is not None:
            payload["cause"] = "{0}: {1}".format(type(self.cause).__name__, self.cause)
        return payload

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Registration (setup-time) errors
# ---------------------------------------------------------------------------


class RegistrationError(GenkaiError):
    """
    Raised when a host application registers something that cannot be served.
    """

    def __init__(self, message: str, *, name: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message, cause=cause)
        self.name = name


class NotCallable(RegistrationError):
    def __init__(self, name: str, reason: str = "", *, cause: Optional[BaseException] = None) -> None:
        message = "item passed as '{0}' is not a func".format(name)
        if reason:
            message = "{0}: {1}".format(message, reason)
        super().__init__(message, name=name, cause=cause)
        self.reason = reason


class NotAnObject(RegistrationError):
    def __init__(self, name: str) -> None:
        super().__init__(
            "item passed as '{0}' is not a struct".format(name),
            name=name,
        )


class DuplicateName(RegistrationError):
    def __init__(self, name: str, kind: str) -> None:
        super().__init__(
            "{0} '{1}' is already registered".format(kind, name),
            name=name,
        )
        self.kind = kind


class InvalidName(RegistrationError):
    def __init__(self, name: str, reason: str) -> None:
        super().__init__(
            "invalid registration name '{0}': {1}".format(name, reason),
            name=name,
        )
        self.reason = reason


# ---------------------------------------------------------------------------
# Dispatch (request-time) errors
# ---------------------------------------------------------------------------


class DispatchError(GenkaiError):
    """
    Base class for request-time failures returned from ``Dispatcher.execute``.
    """


class InvalidRequestError(DispatchError):
    """
    The incoming wire payload is not a valid request envelope.
    """


class UnknownOperation(DispatchError):
    def __init__(self, operation: str) -> None:
        super().__init__("function '{0}' does not exist".format(operation))
        self.operation = operation


class UnknownObject(DispatchError):
    def __init__(self, object_name: str) -> None:
        super().__init__("struct '{0}' does not exist".format(object_name))
        self.object_name = object_name


class UnknownMethod(DispatchError):
    def __init__(self, object_name: str, method_name: str, reason: str = "") -> None:
        message = "method '{0}' from struct '{1}' does not exist".format(
            method_name, object_name
        )
        if reason:
            message = "{0} ({1})".format(message, reason)
        super().__init__(message)
        self.object_name = object_name
        self.method_name = method_name


class NestedAccessNotSupported(DispatchError):
    def __init__(self, operation: str) -> None:
        super().__init__("struct access is only limited to top level")
        self.operation = operation


class ModeConflict(DispatchError):
    def __init__(self, operation: str) -> None:
        super().__init__(
            "Passed request contains both JSONMode and normal parameters"
        )
        self.operation = operation


class JSONModeRequiresContext(DispatchError):
    def __init__(self, operation: str) -> None:
        super().__init__(
            "Function '{0}' is treated as JSONMode but no context has been "
            "requested in the function, please use the non-JSON client".format(operation)
        )
        self.operation = operation


class NotJSONModeCallable(DispatchError):
    def __init__(self, operation: str) -> None:
        super().__init__("Function '{0}' is not JSONMode".format(operation))
        self.operation = operation


class ArityMismatch(DispatchError):
    def __init__(self, operation: str, required: int, declared: Sequence[str], provided: int) -> None:
        super().__init__(
            "Function accepts {0} params <{1}>, provided {2}".format(
                required, ", ".join(declared), provided
            )
        )
        self.operation = operation
        self.required = required
        self.declared: List[str] = list(declared)
        self.provided = provided


class HeterogeneousArray(DispatchError):
    def __init__(self, kind: str) -> None:
        super().__init__(
            "array parameter does not contain uniform types: '{0}'".format(kind)
        )
        self.kind = kind


class UnsupportedArrayElement(DispatchError):
    def __init__(self, element: Any) -> None:
        super().__init__(
            "parameter contains an array with an unsupported type '{0}' ({1})".format(
                element, type(element).__name__
            )
        )
        self.element = element


class ParameterTypeMismatch(DispatchError):
    def __init__(self, index: int, supplied_type: str, supplied_value: Any, expected_type: str) -> None:
        super().__init__(
            "Parameter '{0}' mismatch: supplied '<{1}:{2}>', expected '<{3}>'".format(
                index, supplied_value, supplied_type, expected_type
            )
        )
        self.index = index
        self.supplied_type = supplied_type
        self.supplied_value = supplied_value
        self.expected_type = expected_type


class InvalidResultError(DispatchError):
    """
    A dispatch produced values the wire format cannot carry.
    """


class ReturnShapeMismatch(DispatchError):
    def __init__(self, operation: str, declared: int, received: Any) -> None:
        super().__init__(
            "Function '{0}' declares {1} return values but returned {2!r}".format(
                operation, declared, received
            )
        )
        self.operation = operation
        self.declared = declared


class InvocationError(DispatchError):
    """
    The target callable raised instead of returning.
    """

    def __init__(self, operation: str, message: str, *, cause: Optional[BaseException] = None) -> None:
        super().__init__(message, cause=cause)
        self.operation = operation


class PayloadError(DispatchError):
    """
    Raw-payload (JSON mode) decoding failure.
    """


class MissingPayload(PayloadError):
    def __init__(self) -> None:
        super().__init__("The function is JSONMode but no JSON was supplied")


class DecodeFailure(PayloadError):
    def __init__(self, shape: str, detail: str, *, cause: Optional[BaseException] = None) -> None:
        super().__init__(
            "could not decode JSON payload into '{0}': {1}".format(shape, detail),
            cause=cause,
        )
        self.shape = shape
        self.detail = detail


class ExceptionTranslator:
    """
    Map foreign exceptions onto the genkai taxonomy.
    """

    @staticmethod
    def as_invocation_error(exc: BaseException, operation: str) -> DispatchError:
        """
        Wrap an exception raised by a registered callable.

        Dispatch errors (e.g. a ``MissingPayload`` raised by ``bind_json``)
        pass through unchanged so callers see the original failure.
        """
        if isinstance(exc, DispatchError):
            return exc
        detail = str(exc) or exc.__class__.__name__
        return InvocationError(
            operation=operation,
            message="Function '{0}' raised {1}: {2}".format(
                operation, exc.__class__.__name__, detail
            ),
            cause=exc,
        )


__all__ = [
    "GenkaiError",
    "RegistrationError",
    "NotCallable",
    "NotAnObject",
    "DuplicateName",
    "InvalidName",
    "DispatchError",
    "InvalidRequestError",
    "UnknownOperation",
    "UnknownObject",
    "UnknownMethod",
    "NestedAccessNotSupported",
    "ModeConflict",
    "JSONModeRequiresContext",
    "NotJSONModeCallable",
    "ArityMismatch",
    "HeterogeneousArray",
    "UnsupportedArrayElement",
    "ParameterTypeMismatch",
    "ReturnShapeMismatch",
    "InvalidResultError",
    "InvocationError",
    "PayloadError",
    "MissingPayload",
    "DecodeFailure",
    "ExceptionTranslator",
]
