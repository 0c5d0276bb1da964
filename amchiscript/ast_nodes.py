"""AST node definitions for AmchiScript.

Nodes are frozen dataclasses and child sequences are tuples, so a tree is
never mutated once the parser has built it. Every node carries an optional
source ``line`` used in runtime diagnostics; it is keyword-only and takes no
part in equality, so two trees parsed from differently laid out sources
compare equal when their structure matches.


File: ast_nodes.py
Copyright: © 2025 AmchiScript contributors.
Version: 0.1.0
License: MIT
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from amchiscript.operations import Op


@dataclass(frozen=True)
class Node:
    """Base class for all AST nodes."""

    line: int | None = field(default=None, kw_only=True, compare=False)


# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Literal(Node):
    value: Any
    raw: str


@dataclass(frozen=True)
class Identifier(Node):
    name: str


@dataclass(frozen=True)
class BinaryExpression(Node):
    left: Expression
    operator: Op
    right: Expression


@dataclass(frozen=True)
class UnaryExpression(Node):
    operator: Op
    argument: Expression


@dataclass(frozen=True)
class CallExpression(Node):
    callee: Identifier
    arguments: tuple[Expression, ...] = ()


@dataclass(frozen=True)
class MemberExpression(Node):
    """``object[property]`` when computed, ``object.property`` otherwise."""

    object: Expression
    property: Expression
    computed: bool


@dataclass(frozen=True)
class ListExpression(Node):
    elements: tuple[Expression, ...] = ()


Expression = Union[
    Literal,
    Identifier,
    BinaryExpression,
    UnaryExpression,
    CallExpression,
    MemberExpression,
    ListExpression,
]


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class VarDeclaration(Node):
    name: str
    initializer: Expression | None = None


@dataclass(frozen=True)
class Assignment(Node):
    identifier: str
    value: Expression


@dataclass(frozen=True)
class PrintStatement(Node):
    expressions: tuple[Expression, ...]


@dataclass(frozen=True)
class BlockStatement(Node):
    body: tuple[Statement, ...] = ()


@dataclass(frozen=True)
class IfStatement(Node):
    """
    ``alternate`` is a :class:`BlockStatement` for a plain else branch and a
    nested :class:`IfStatement` for an else-if chain.
    """

    condition: Expression
    consequent: BlockStatement
    alternate: BlockStatement | IfStatement | None = None


@dataclass(frozen=True)
class WhileStatement(Node):
    condition: Expression
    body: BlockStatement


@dataclass(frozen=True)
class FunctionDeclaration(Node):
    name: str
    parameters: tuple[str, ...]
    body: BlockStatement


@dataclass(frozen=True)
class ReturnStatement(Node):
    value: Expression | None = None


@dataclass(frozen=True)
class BreakStatement(Node):
    pass


@dataclass(frozen=True)
class ContinueStatement(Node):
    pass


@dataclass(frozen=True)
class ExpressionStatement(Node):
    expression: Expression


Statement = Union[
    VarDeclaration,
    Assignment,
    PrintStatement,
    BlockStatement,
    IfStatement,
    WhileStatement,
    FunctionDeclaration,
    ReturnStatement,
    BreakStatement,
    ContinueStatement,
    ExpressionStatement,
]


@dataclass(frozen=True)
class Program(Node):
    body: tuple[Statement, ...] = ()


EXPRESSION_TYPES = (
    Literal,
    Identifier,
    BinaryExpression,
    UnaryExpression,
    CallExpression,
    MemberExpression,
    ListExpression,
)

STATEMENT_TYPES = (
    VarDeclaration,
    Assignment,
    PrintStatement,
    BlockStatement,
    IfStatement,
    WhileStatement,
    FunctionDeclaration,
    ReturnStatement,
    BreakStatement,
    ContinueStatement,
    ExpressionStatement,
)
