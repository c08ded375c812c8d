"""Value model: variant tags, equality and text rendering.

Quill values are plain Python objects (see quill/__init__.py). This module
is the single place that knows how to tell the variants apart.
"""

from __future__ import annotations

from enum import Enum

from quill import QuillValue
from quill.errors import QuillInternalError
from quill.types.function import Function
from quill.types.nil import Nil, NilType


class ValueType(Enum):
    NIL = "nil"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    FUNCTION = "function"

    def __str__(self) -> str:
        return self.value


def type_of(value: QuillValue) -> ValueType:
    # bool before any numeric check: True must never pass for a Number.
    if isinstance(value, NilType):
        return ValueType.NIL
    if isinstance(value, bool):
        return ValueType.BOOL
    if isinstance(value, float):
        return ValueType.NUMBER
    if isinstance(value, str):
        return ValueType.STRING
    if isinstance(value, Function):
        return ValueType.FUNCTION
    raise QuillInternalError(f"Unknown value type {type(value).__name__}")


def values_equal(a: QuillValue, b: QuillValue) -> bool:
    """Equality as seen by `==`: values of different types are simply unequal."""
    kind = type_of(a)
    if kind is not type_of(b):
        return False
    if kind is ValueType.NIL:
        return True
    if kind is ValueType.FUNCTION:
        return a.node is b.node
    return a == b


def format_number(num: float) -> str:
    """Shortest text that reads back as `num`, without a trailing '.0'."""
    text = repr(num)
    if text.endswith(".0"):
        text = text[:-2]
    return text


def render(value: QuillValue) -> str:
    """Text written by print/println/panic for a value."""
    kind = type_of(value)
    if kind is ValueType.NIL:
        return "(nil)"
    if kind is ValueType.BOOL:
        return "true" if value else "false"
    if kind is ValueType.NUMBER:
        return format_number(value)
    if kind is ValueType.STRING:
        return value
    return "<function>"


__all__ = ["ValueType", "type_of", "values_equal", "format_number", "render", "Nil"]
