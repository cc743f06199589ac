#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Signature introspection for registered callables.

A callable's annotations are read once, at registration time, and reduced to
a ``Signature``: ordered parameter tags, whether parameter 0 is the reserved
``Context``, how many values it returns and whether the last of them is a
failure value.

Return annotations follow these conventions::

    def ping(ctx: Context) -> str: ...                         # 1 return
    def login(ctx: Context, name: str) -> Failure: ...         # 1 failure return
    def echo(ctx: Context, text: str) -> Tuple[str, Failure]:  # 2 returns, last is failure
    def reset() -> None: ...                                   # 0 returns

``Failure`` is ``Optional[Exception]``; any ``Optional[E]`` or ``E`` where
``E`` subclasses ``BaseException`` counts as a failure-kind return.
"""

import collections.abc
import inspect
import types
from dataclasses import dataclass
from typing import (
    Any,
    Callable,
    Dict,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    Union,
    get_args,
    get_origin,
)

from .context import Context
from .types import TypeTag
from .utils.exceptions import NotCallable

Failure = Optional[Exception]

_SCALAR_TAGS: Dict[Any, TypeTag] = {
    str: TypeTag.TEXT,
    bool: TypeTag.BOOL,
    int: TypeTag.INTEGER,
    float: TypeTag.NUMBER,
    type(None): TypeTag.NULL,
    None: TypeTag.NULL,
}

_LIST_ELEMENT_TAGS: Dict[Any, TypeTag] = {
    str: TypeTag.TEXT_LIST,
    bool: TypeTag.BOOL_LIST,
    float: TypeTag.NUMBER_LIST,
    Any: TypeTag.LIST,
}

_UNION_TYPES: Tuple[Any, ...] = (Union, getattr(types, "UnionType", Union))
_MAPPING_ORIGINS = (dict, collections.abc.Mapping, collections.abc.MutableMapping)
_SEQUENCE_ORIGINS = (list, collections.abc.Sequence, collections.abc.MutableSequence)


@dataclass(frozen=True)
class Signature:
    """
    Introspected calling convention of one callable.
    """

    param_types: Tuple[TypeTag, ...]
    param_names: Tuple[str, ...]
    return_count: int
    last_is_failure: bool

    @property
    def has_context(self) -> bool:
        return bool(self.param_types) and self.param_types[0] is TypeTag.CONTEXT

    @property
    def required_count(self) -> int:
        """
        Number of positional arguments a caller must supply.
        """
        return len(self.param_types) - (1 if self.has_context else 0)

    def describe_params(self) -> List[str]:
        return [tag.value for tag in self.param_types]


def _is_failure_annotation(annotation: Any) -> bool:
    if get_origin(annotation) in _UNION_TYPES:
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        return len(members) == 1 and _is_failure_annotation(members[0])
    return inspect.isclass(annotation) and issubclass(annotation, BaseException)


def _tag_for_annotation(annotation: Any) -> Optional[TypeTag]:
    if annotation is inspect.Parameter.empty or annotation is Any:
        return TypeTag.ANY
    if inspect.isclass(annotation) and issubclass(annotation, Context):
        return TypeTag.CONTEXT
    if annotation in _SCALAR_TAGS:
        return _SCALAR_TAGS[annotation]

    origin = get_origin(annotation)
    if annotation in (dict, Dict, Mapping) or origin in _MAPPING_ORIGINS:
        return TypeTag.OBJECT
    if annotation in (list, List, Sequence) or origin in _SEQUENCE_ORIGINS:
        args = get_args(annotation)
        if not args:
            return TypeTag.LIST
        return _LIST_ELEMENT_TAGS.get(args[0])
    return None


def _describe_annotation(annotation: Any) -> str:
    if inspect.isclass(annotation):
        return annotation.__name__
    return repr(annotation).replace("typing.", "")


def _count_returns(annotation: Any) -> Tuple[int, bool]:
    if annotation is inspect.Signature.empty:
        return 1, False
    if annotation is None or annotation is type(None):
        return 0, False
    if get_origin(annotation) in (tuple, Tuple):
        args = get_args(annotation)
        if not args or args == ((),):
            return 0, False
        if len(args) == 2 and args[1] is Ellipsis:
            # Variable-length tuple is a single value.
            return 1, False
        return len(args), _is_failure_annotation(args[-1])
    return 1, _is_failure_annotation(annotation)


def introspect(func: Callable[..., Any], name: str) -> Signature:
    """
    Build the ``Signature`` of ``func`` or raise ``NotCallable``.
    """
    try:
        sig = inspect.signature(func, eval_str=True)
    except (TypeError, ValueError, NameError) as exc:
        raise NotCallable(name, "signature cannot be introspected", cause=exc) from exc

    tags: List[TypeTag] = []
    names: List[str] = []
    for index, param in enumerate(sig.parameters.values()):
        if param.kind not in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            raise NotCallable(
                name,
                "parameter '{0}' is not positional ({1})".format(param.name, param.kind.description),
            )
        tag = _tag_for_annotation(param.annotation)
        if tag is None:
            raise NotCallable(
                name,
                "parameter '{0}' has unsupported annotation '{1}'".format(
                    param.name, _describe_annotation(param.annotation)
                ),
            )
        if tag is TypeTag.CONTEXT and index != 0:
            raise NotCallable(
                name,
                "Context must be the first parameter, found at position {0}".format(index),
            )
        tags.append(tag)
        names.append(param.name)

    return_count, last_is_failure = _count_returns(sig.return_annotation)
    return Signature(
        param_types=tuple(tags),
        param_names=tuple(names),
        return_count=return_count,
        last_is_failure=last_is_failure,
    )
