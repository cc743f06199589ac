#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Closed set of type tags shared by signature introspection and argument
coercion.

Incoming wire values are modelled as ``Null | Bool | Number | Text | Object |
ArrayOf(Bool | Number | Text)``. Declared parameter annotations are mapped to
the same tags at registration time, so matching an argument against its
parameter is a lookup over this enum and never touches ``typing`` at request
time.
"""

from enum import Enum
from typing import Any, Dict, Mapping, Optional


class TypeTag(str, Enum):
    """
    Type tags for declared parameters and supplied values.
    """

    ANY = "Any"
    CONTEXT = "Context"
    NULL = "None"
    BOOL = "bool"
    INTEGER = "int"
    NUMBER = "float"
    TEXT = "str"
    OBJECT = "dict"
    LIST = "list"
    BOOL_LIST = "List[bool]"
    NUMBER_LIST = "List[float]"
    TEXT_LIST = "List[str]"

    @property
    def is_list(self) -> bool:
        return self in _LIST_TAGS


_LIST_TAGS = frozenset(
    {TypeTag.LIST, TypeTag.BOOL_LIST, TypeTag.NUMBER_LIST, TypeTag.TEXT_LIST}
)

# Supported array element kinds and the list tag they normalize to.
ARRAY_TAG_BY_ELEMENT: Dict[TypeTag, TypeTag] = {
    TypeTag.TEXT: TypeTag.TEXT_LIST,
    TypeTag.BOOL: TypeTag.BOOL_LIST,
    TypeTag.NUMBER: TypeTag.NUMBER_LIST,
}


def element_kind(value: Any) -> Optional[TypeTag]:
    """
    Kind of one array element, or ``None`` for unsupported elements.

    ``bool`` is checked before numbers because it subclasses ``int``; JSON
    integers and floats are the same kind.
    """
    if isinstance(value, str):
        return TypeTag.TEXT
    if isinstance(value, bool):
        return TypeTag.BOOL
    if isinstance(value, (int, float)):
        return TypeTag.NUMBER
    return None


def tag_of(value: Any) -> TypeTag:
    """
    Concrete tag of an already normalized argument value.
    """
    if value is None:
        return TypeTag.NULL
    if isinstance(value, bool):
        return TypeTag.BOOL
    if isinstance(value, int):
        return TypeTag.INTEGER
    if isinstance(value, float):
        return TypeTag.NUMBER
    if isinstance(value, str):
        return TypeTag.TEXT
    if isinstance(value, Mapping):
        return TypeTag.OBJECT
    if isinstance(value, list):
        if not value:
            return TypeTag.LIST
        kind = element_kind(value[0])
        return ARRAY_TAG_BY_ELEMENT.get(kind, TypeTag.LIST) if kind else TypeTag.LIST
    return TypeTag.ANY


def accepts(expected: TypeTag, supplied: TypeTag) -> bool:
    """
    Whether a value tagged ``supplied`` may bind to a parameter tagged ``expected``.
    """
    if expected is TypeTag.ANY or expected is supplied:
        return True
    # JSON has a single number type; integers bind to float parameters.
    if expected is TypeTag.NUMBER and supplied is TypeTag.INTEGER:
        return True
    if expected is TypeTag.LIST and supplied.is_list:
        return True
    # An empty array carries no element kind.
    if supplied is TypeTag.LIST and expected.is_list:
        return True
    return False
