#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Utility exports for genkai core.
"""

from .logger import ModernLogger
from .exceptions import *  # noqa: F401,F403 - flat re-export of the error taxonomy
from .exceptions import DispatchError, ExceptionTranslator, GenkaiError, RegistrationError

__all__ = [
    "ModernLogger",
    "GenkaiError",
    "RegistrationError",
    "DispatchError",
    "ExceptionTranslator",
]
