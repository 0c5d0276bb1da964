"""Runtime values.

AmchiScript values are plain Python objects: ``float`` for numbers,
``str``, ``bool``, ``None`` for ``rikam``, ``list`` for lists and
:class:`FunctionValue` for functions. :func:`type_of` tags a value with its
:class:`ValueType` so operators can match on the tag of each operand.


File: values.py
Copyright: © 2025 AmchiScript contributors.
Version: 0.1.0
License: MIT
"""

from __future__ import annotations

import math
import re
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from amchiscript.ast_nodes import FunctionDeclaration
    from amchiscript.environment import Environment


_NUMERIC_STRING = re.compile(r'[+-]?(?:\d+(?:\.\d*)?|\.\d+)')


class ValueType(Enum):
    """
    Tag of a runtime value.
    """
    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"
    NULL = "null"
    FUNCTION = "function"
    LIST = "list"


class FunctionValue:
    """Runtime representation of a user-defined function."""

    def __init__(self, declaration: FunctionDeclaration, closure: Environment):
        self.declaration = declaration
        # Scope the function was defined in; calls run in a child of it.
        self.closure = closure

    @property
    def name(self) -> str:
        return self.declaration.name

    @property
    def parameters(self) -> tuple[str, ...]:
        return self.declaration.parameters

    def __repr__(self) -> str:
        return f"<kaamKar {self.name}>"


def type_of(value: Any) -> ValueType:
    """
    Return the tag for a runtime value.

    Raises:
        TypeError: If ``value`` is not an AmchiScript value.
    """
    # bool is checked before int since it is an int subclass
    if value is None:
        return ValueType.NULL
    if isinstance(value, bool):
        return ValueType.BOOLEAN
    if isinstance(value, (int, float)):
        return ValueType.NUMBER
    if isinstance(value, str):
        return ValueType.STRING
    if isinstance(value, list):
        return ValueType.LIST
    if isinstance(value, FunctionValue):
        return ValueType.FUNCTION
    raise TypeError(f"Not an AmchiScript value: {value!r}")


def is_truthy(value: Any) -> bool:
    """
    Truthiness: ``rikam``, ``khota``, zero, NaN and ``""`` are false.
    """
    match type_of(value):
        case ValueType.NULL:
            return False
        case ValueType.BOOLEAN:
            return value
        case ValueType.NUMBER:
            return value != 0 and not math.isnan(value)
        case ValueType.STRING:
            return value != ""
        case _:
            return True


def parse_number(text: str) -> float | None:
    """
    Parse ``text`` as a number, or return ``None`` if it is not numeric.

    Surrounding whitespace is ignored.
    """
    text = text.strip()
    if not _NUMERIC_STRING.fullmatch(text):
        return None
    return float(text)


def format_number(value: float) -> str:
    """
    Format a number the way scripts expect to see it printed.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer():
        return str(int(value))
    return repr(value)


def stringify(value: Any) -> str:
    """
    Convert a runtime value to the text printed by ``dakhava``.
    """
    match type_of(value):
        case ValueType.NULL:
            return "nil"
        case ValueType.BOOLEAN:
            return "true" if value else "false"
        case ValueType.NUMBER:
            return format_number(value)
        case ValueType.STRING:
            return value
        case ValueType.LIST:
            return "[" + ", ".join(stringify(item) for item in value) + "]"
        case ValueType.FUNCTION:
            return repr(value)
