"""
Classification of part definitions.

Attribute and class definitions are loosely typed trees. Each node is tagged
once with a ``Shape`` and the resolvers dispatch on the tag with ``match``.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Any


class Shape(Enum):
    CALLABLE = auto()
    TEXT = auto()
    MAP = auto()
    NESTED = auto()  # list whose items are all structured: per-item parts
    FLAT = auto()  # any other list
    EMPTY = auto()  # None / False
    OTHER = auto()


SEQUENCE_TYPES = (list, tuple)


def is_sequence(value: Any) -> bool:
    return isinstance(value, SEQUENCE_TYPES)


def is_structured(value: Any) -> bool:
    return isinstance(value, (list, tuple, dict))


def shape_of(value: Any, *, nested_items: tuple[type, ...] = (list, tuple, dict)) -> Shape:
    """
    Tag a definition node.

    ``nested_items`` decides which item types turn a list into a NESTED node:
    attribute definitions nest on lists and maps, class definitions only on
    lists (maps there are conditional leaves).
    """
    if isinstance(value, str):
        return Shape.TEXT
    if isinstance(value, dict):
        return Shape.MAP
    if is_sequence(value):
        if value and all(isinstance(item, nested_items) for item in value):
            return Shape.NESTED
        return Shape.FLAT
    if value is None or value is False:
        return Shape.EMPTY
    if callable(value):
        return Shape.CALLABLE
    return Shape.OTHER
