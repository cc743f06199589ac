#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Build the result envelope from captured return values.
"""

from typing import Any, List, Optional

from ..protocols.models import ResultEnvelope
from .signature import Signature


def _stringify_failure(value: Any) -> str:
    return "{0}".format(value)


def marshal_result(request_id: Optional[str], outputs: List[Any], signature: Signature) -> ResultEnvelope:
    """
    Split ``outputs`` into regular returns and the optional failure value.

    * single failure-kind return: a non-null value becomes ``error`` and
      ``returns`` is omitted, a null value is returned as ``[None]``
    * several returns ending in a failure-kind one: all but the last are
      ``returns`` (possibly empty), a non-null last value becomes ``error``
    * no failure-kind return: every value is in ``returns``
    """
    envelope = ResultEnvelope(id=request_id)

    if not signature.last_is_failure or not outputs:
        envelope.returns = list(outputs)
        return envelope

    failure = outputs[-1]
    if signature.return_count == 1:
        if failure is not None:
            envelope.error = _stringify_failure(failure)
        else:
            envelope.returns = list(outputs)
        return envelope

    envelope.returns = list(outputs[:-1])
    if failure is not None:
        envelope.error = _stringify_failure(failure)
    return envelope
