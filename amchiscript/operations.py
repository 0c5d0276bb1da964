"""Shared definitions for AST operator identifiers.

This module centralizes the operator symbols used by the parser and
interpreter to label binary and unary expression nodes. Word operators
(``mothaAheKa`` and friends) are normalized to their symbolic form by the
parser, so the interpreter only ever sees the members below.
"""

from enum import Enum


class Op(str, Enum):
    """
    Enumeration of supported operators.
    """

    # Arithmetic
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"

    # Comparison
    EQ = "=="
    NE = "!="
    GT = ">"
    LT = "<"
    GE = ">="
    LE = "<="

    # Logical
    AND = "ani"
    OR = "kimva"
    NOT = "nahi"

    def __str__(self) -> str:  # pragma: no cover - trivial
        """
        Return the underlying string value for nicer debug output.
        """
        return self.value


# Token type -> operator, per precedence level.
EQUALITY_OPS = {
    'EQUAL': Op.EQ,
    'EQUAL_WORD': Op.EQ,
    'NOT_EQUAL': Op.NE,
}

RELATIONAL_OPS = {
    'GREATER': Op.GT,
    'GREATER_WORD': Op.GT,
    'GREATER_EQUAL': Op.GE,
    'LESS': Op.LT,
    'LESS_WORD': Op.LT,
    'LESS_EQUAL': Op.LE,
}

ADDITIVE_OPS = {
    'PLUS': Op.ADD,
    'MINUS': Op.SUB,
}

MULTIPLICATIVE_OPS = {
    'MULTIPLY': Op.MUL,
    'DIVIDE': Op.DIV,
    'MODULO': Op.MOD,
}

UNARY_OPS = {
    'MINUS': Op.SUB,
    'NOT': Op.NOT,
}


__all__ = [
    "Op",
    "EQUALITY_OPS",
    "RELATIONAL_OPS",
    "ADDITIVE_OPS",
    "MULTIPLICATIVE_OPS",
    "UNARY_OPS",
]
