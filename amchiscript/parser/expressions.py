"""
Expression parsing utilities for AmchiScript.

These functions operate on a `amchiscript.parser.parser.Parser` instance and
implement the recursive descent logic for expressions, maintaining
operator precedence and associativity. Every binary level loops over
operators of the same precedence, so all binary operators associate to the
left.
"""

from typing import TYPE_CHECKING

from amchiscript.ast_nodes import (
    BinaryExpression,
    CallExpression,
    Identifier,
    ListExpression,
    Literal,
    MemberExpression,
    UnaryExpression,
)
from amchiscript.operations import (
    ADDITIVE_OPS,
    EQUALITY_OPS,
    MULTIPLICATIVE_OPS,
    RELATIONAL_OPS,
    UNARY_OPS,
    Op,
)

if TYPE_CHECKING:
    from amchiscript.parser import Parser


# Keywords that name a built-in function when followed by "(".
BUILTIN_CALLS = {
    'INPUT': 'ghye',
    'PRINT': 'dakhava',
    'LIST': 'yadi',
    'APPEND': 'jod',
    'LENGTH': 'moj',
}

_CONSTANTS = {
    'TRUE': True,
    'FALSE': False,
    'NULL': None,
}


def _parse_arguments(parser: 'Parser') -> tuple:
    """Parse a parenthesized, comma separated argument list."""
    parser.consume('LPAREN', 'Expected "(" before arguments.')
    args = []
    if not parser.check('RPAREN'):
        args.append(parser.expr())
        while parser.match('COMMA'):
            args.append(parser.expr())
    parser.consume('RPAREN', 'Expected ")" after arguments.')
    return tuple(args)


def _parse_number(raw: str) -> float:
    return float(raw)


# ---- Highest precedence ----

def parse_primary(parser: 'Parser'):
    """Parse a literal, name, call, list literal or parenthesized expression."""
    tok = parser.curr_token

    if tok.type in _CONSTANTS:
        parser.advance()
        return Literal(_CONSTANTS[tok.type], tok.value, line=tok.line)

    if tok.type == 'NUMBER':
        parser.advance()
        return Literal(_parse_number(tok.value), tok.value, line=tok.line)

    if tok.type == 'STRING':
        parser.advance()
        return Literal(tok.value, tok.value, line=tok.line)

    if tok.type in BUILTIN_CALLS and parser.peek().type == 'LPAREN':
        parser.advance()
        callee = Identifier(BUILTIN_CALLS[tok.type], line=tok.line)
        return CallExpression(callee, _parse_arguments(parser), line=tok.line)

    if tok.type == 'IDENTIFIER':
        parser.advance()
        ident = Identifier(tok.value, line=tok.line)
        if parser.check('LPAREN'):
            return CallExpression(ident, _parse_arguments(parser), line=tok.line)
        return ident

    if tok.type == 'LBRACKET':
        parser.advance()
        elements = []
        if not parser.check('RBRACKET'):
            elements.append(parser.expr())
            while parser.match('COMMA'):
                elements.append(parser.expr())
        parser.consume('RBRACKET', 'Expected "]" after list elements.')
        return ListExpression(tuple(elements), line=tok.line)

    if tok.type == 'LPAREN':
        parser.advance()
        node = parser.expr()
        parser.consume('RPAREN', 'Expected ")" after expression.')
        return node

    raise parser.error('Expected expression.')


def parse_postfix(parser: 'Parser'):
    """Parse index (``a[i]``) and member (``a.b``) accessors."""
    result = parser.primary()
    while parser.check('LBRACKET', 'DOT'):
        tok = parser.advance()
        if tok.type == 'LBRACKET':
            index = parser.expr()
            parser.consume('RBRACKET', 'Expected "]" after index.')
            result = MemberExpression(result, index, True, line=tok.line)
        else:
            name_tok = parser.consume('IDENTIFIER', 'Expected property name after ".".')
            prop = Identifier(name_tok.value, line=name_tok.line)
            result = MemberExpression(result, prop, False, line=tok.line)
    return result


def parse_unary(parser: 'Parser'):
    """Parse prefix negation (``-``) and logical not (``nahi``)."""
    tok = parser.curr_token
    if tok.type in UNARY_OPS:
        parser.advance()
        return UnaryExpression(UNARY_OPS[tok.type], parser.unary(), line=tok.line)
    return parser.postfix()


def _parse_binary_level(parser: 'Parser', operators: dict, operand) -> object:
    """Parse one left-associative precedence level."""
    result = operand()
    while parser.curr_token.type in operators:
        op_tok = parser.advance()
        result = BinaryExpression(result, operators[op_tok.type], operand(), line=op_tok.line)
    return result


def parse_term(parser: 'Parser'):
    """Parse multiplication, division, and modulus expressions."""
    return _parse_binary_level(parser, MULTIPLICATIVE_OPS, parser.unary)


def parse_additive(parser: 'Parser'):
    """Parse addition and subtraction expressions."""
    return _parse_binary_level(parser, ADDITIVE_OPS, parser.term)


def parse_relational(parser: 'Parser'):
    """Parse relational expressions (>, >=, <, <=, mothaAheKa, lahanAheKa)."""
    return _parse_binary_level(parser, RELATIONAL_OPS, parser.additive)


def parse_equality(parser: 'Parser'):
    """Parse equality expressions (==, !=, sarkhaAheKa)."""
    return _parse_binary_level(parser, EQUALITY_OPS, parser.relational)


def parse_logical_and(parser: 'Parser'):
    """Parse logical AND expressions using the 'ani' keyword."""
    return _parse_binary_level(parser, {'AND': Op.AND}, parser.equality)


def parse_logical_or(parser: 'Parser'):
    """Parse logical OR expressions using the 'kimva' keyword."""
    return _parse_binary_level(parser, {'OR': Op.OR}, parser.logical_and)


# ---- Entry point ----

def parse_expr(parser: 'Parser'):
    """Parse an expression starting from the lowest-precedence operator."""
    return parser.logical_or()
