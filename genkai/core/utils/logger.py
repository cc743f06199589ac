#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Logging mixin shared by genkai components.

Classes inherit from ``ModernLogger`` and call ``self.info(...)`` and friends
directly. Records are emitted on the ``genkai.<name>`` logger; handlers are
left to the host application.

Component loggers are process-wide: every instance built with the same
``name`` shares one ``logging.Logger``. A ``level`` is therefore only applied
when it is passed explicitly; otherwise the component inherits the level of
the ``genkai`` package logger (see ``set_package_level``).
"""

import logging
from typing import Any, Optional, Union

_ROOT_LOGGER_NAME = "genkai"


def _normalize_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    if not isinstance(resolved, int):
        raise ValueError("Unknown log level: {0}".format(level))
    return resolved


def set_package_level(level: Union[int, str]) -> None:
    """
    Set the level of the ``genkai`` package logger unless the host already did.
    """
    root = logging.getLogger(_ROOT_LOGGER_NAME)
    if root.level == logging.NOTSET:
        root.setLevel(_normalize_level(level))


class ModernLogger:
    """
    Mixin exposing level methods bound to a named component logger.
    """

    def __init__(self, name: Optional[str] = None, level: Union[int, str, None] = None) -> None:
        component = name or self.__class__.__name__
        self._logger = logging.getLogger("{0}.{1}".format(_ROOT_LOGGER_NAME, component))
        if level is not None:
            self._logger.setLevel(_normalize_level(level))

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._logger.error(msg, *args, **kwargs)

    def critical(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._logger.critical(msg, *args, **kwargs)
