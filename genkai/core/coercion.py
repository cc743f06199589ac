#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Argument validation and coercion against a resolved signature.

Checks run in a fixed order so the first failure a caller sees is stable:
calling-convention conflicts, then arity, then each argument left to right.
"""

import math
from typing import Any, List, Optional, Sequence

from .resolver import Resolution
from .types import TypeTag, accepts, element_kind, tag_of
from .utils.exceptions import (
    ArityMismatch,
    HeterogeneousArray,
    JSONModeRequiresContext,
    ModeConflict,
    NotJSONModeCallable,
    ParameterTypeMismatch,
    UnsupportedArrayElement,
)


def _finite_float(value: Any) -> Optional[float]:
    """
    ``float(value)``, or ``None`` when the number has no finite float form.
    """
    try:
        converted = float(value)
    except OverflowError:
        return None
    return converted if math.isfinite(converted) else None


def normalize_array(values: Sequence[Any]) -> List[Any]:
    """
    Check that ``values`` is a homogeneous array of a supported kind.

    The kind of element 0 decides; numbers come back as ``float``.
    """
    if len(values) == 0:
        return list(values)

    kind = element_kind(values[0])
    if kind is None:
        raise UnsupportedArrayElement(values[0])

    normalized: List[Any] = []
    for item in values:
        if element_kind(item) is not kind:
            raise HeterogeneousArray(kind.value)
        if kind is TypeTag.NUMBER:
            number = _finite_float(item)
            if number is None:
                raise UnsupportedArrayElement(item)
            normalized.append(number)
        else:
            normalized.append(item)
    return normalized


def coerce_value(index: int, value: Any, expected: TypeTag) -> Any:
    """
    Normalize one argument and match it against the declared tag at ``index``.
    """
    if isinstance(value, (list, tuple)):
        value = normalize_array(value)

    supplied = tag_of(value)
    if accepts(expected, supplied):
        widened = expected is TypeTag.NUMBER and supplied is TypeTag.INTEGER
        if supplied is not TypeTag.NUMBER and not widened:
            return value
        number = _finite_float(value)
        if number is not None:
            return number

    raise ParameterTypeMismatch(
        index=index,
        supplied_type=supplied.value,
        supplied_value=value,
        expected_type=expected.value,
    )


def check_calling_convention(resolution: Resolution, params: Sequence[Any], raw_payload: Optional[str]) -> None:
    entry = resolution.entry
    signature = entry.signature

    if raw_payload and len(params) > 0:
        raise ModeConflict(entry.name)
    if raw_payload and not resolution.has_context:
        raise JSONModeRequiresContext(entry.name)
    if raw_payload and len(signature.param_types) != 1:
        raise NotJSONModeCallable(entry.name)

    if len(params) != signature.required_count:
        raise ArityMismatch(
            operation=entry.name,
            required=signature.required_count,
            declared=signature.describe_params(),
            provided=len(params),
        )


def coerce_arguments(
    resolution: Resolution,
    params: Sequence[Any],
    raw_payload: Optional[str] = None,
) -> List[Any]:
    """
    Validate ``params`` for the resolved callable and return the coerced list.

    The context parameter, when declared, is not part of ``params``; it is
    exempt from coercion and indices in diagnostics count it.
    """
    check_calling_convention(resolution, params, raw_payload)

    param_types = resolution.entry.signature.param_types
    offset = 1 if resolution.has_context else 0
    return [
        coerce_value(position + offset, value, param_types[position + offset])
        for position, value in enumerate(params)
    ]


__all__ = [
    "normalize_array",
    "coerce_value",
    "check_calling_convention",
    "coerce_arguments",
]
