#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Perform the call and capture declared return values positionally.
"""

from typing import Any, List, Sequence

from .registry import CallableEntry
from .utils.exceptions import ExceptionTranslator, ReturnShapeMismatch


def capture_returns(entry: CallableEntry, result: Any) -> List[Any]:
    """
    Spread ``result`` into the ``return_count`` values the signature declares.
    """
    declared = entry.signature.return_count
    if declared == 0:
        return []
    if declared == 1:
        return [result]
    if not isinstance(result, (tuple, list)) or len(result) != declared:
        raise ReturnShapeMismatch(entry.name, declared, result)
    return list(result)


def invoke(entry: CallableEntry, arguments: Sequence[Any]) -> List[Any]:
    """
    Call ``entry`` with the final argument list (context included).

    Exceptions raised by the callable are translated into dispatch errors; the
    serving process never sees them.
    """
    try:
        result = entry.func(*arguments)
    except Exception as exc:
        translated = ExceptionTranslator.as_invocation_error(exc, operation=entry.name)
        if translated is exc:
            raise
        raise translated from exc
    return capture_returns(entry, result)
