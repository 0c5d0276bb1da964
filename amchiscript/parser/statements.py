"""Statement parsing utilities for AmchiScript.

These functions operate on a `amchiscript.parser.parser.Parser` instance and
handle the various statement forms in the language such as declarations,
blocks, conditionals, loops, and function definitions.


File: statements.py
Copyright: © 2025 AmchiScript contributors.
Version: 0.1.0
License: MIT
"""

from typing import TYPE_CHECKING

from amchiscript.ast_nodes import (
    Assignment,
    BlockStatement,
    BreakStatement,
    ContinueStatement,
    ExpressionStatement,
    FunctionDeclaration,
    IfStatement,
    PrintStatement,
    ReturnStatement,
    VarDeclaration,
    WhileStatement,
)
from amchiscript.parser.expressions import BUILTIN_CALLS

if TYPE_CHECKING:
    from amchiscript.parser import Parser


def parse_statement(parser: 'Parser'):
    """
    Parse a single statement, dispatching on its leading token.

    Args:
        parser: The parser instance.

    Returns:
        The statement node.
    """
    tok = parser.curr_token
    if tok.type == 'VAR':
        return parse_declaration(parser)
    elif tok.type == 'IDENTIFIER' and parser.peek().type == 'ASSIGN':
        return parse_assignment(parser)
    elif tok.type == 'PRINT' and not _is_print_call(parser):
        return parse_print(parser)
    elif tok.type == 'IF':
        return parse_if(parser)
    elif tok.type == 'WHILE':
        return parse_while(parser)
    elif tok.type == 'FUNCTION':
        return parse_func_def(parser)
    elif tok.type == 'RETURN':
        return parse_return(parser)
    elif tok.type == 'BREAK':
        parser.advance()
        parser.consume('SEMICOLON', 'Expected ";" after "thamb".')
        return BreakStatement(line=tok.line)
    elif tok.type == 'CONTINUE':
        parser.advance()
        parser.consume('SEMICOLON', 'Expected ";" after "pudheJa".')
        return ContinueStatement(line=tok.line)
    elif tok.type == 'LBRACE':
        return parse_block(parser)
    elif tok.type == 'IDENTIFIER' or tok.type in BUILTIN_CALLS:
        return parse_expression_statement(parser)
    raise parser.error('Expected statement.')


def _is_print_call(parser: 'Parser') -> bool:
    """
    Return True when ``dakhava`` starts a call such as ``dakhava(a, b);`` or
    ``dakhava();`` rather than a print statement such as ``dakhava (x);``.

    The call form is recognized by a comma directly inside the parentheses
    that follow the keyword, or by empty parentheses.
    """
    if parser.peek().type != 'LPAREN':
        return False
    if parser.peek(2).type == 'RPAREN':
        return True
    depth = 0
    for tok in parser.tokens[parser.position + 1:]:
        if tok.type in ('LPAREN', 'LBRACKET'):
            depth += 1
        elif tok.type in ('RPAREN', 'RBRACKET'):
            depth -= 1
            if depth == 0:
                return False
        elif tok.type == 'COMMA' and depth == 1:
            return True
        elif tok.type in ('SEMICOLON', 'EOF'):
            return False
    return False


def parse_block(parser: 'Parser') -> BlockStatement:
    """
    Parse a block of statements enclosed in braces.

    Syntax:
        { <statement>* }
    """
    tok = parser.consume('LBRACE', 'Expected "{" to start a block.')
    statements = []
    while not parser.check('RBRACE', 'EOF'):
        statements.append(parser.statement())
    parser.consume('RBRACE', 'Expected "}" after block.')
    return BlockStatement(tuple(statements), line=tok.line)


def parse_declaration(parser: 'Parser') -> VarDeclaration:
    """
    Parse a ``heAhe`` variable declaration.

    Syntax:
        heAhe <identifier> [= <expression>] ;
    """
    tok = parser.advance()
    name_tok = parser.consume('IDENTIFIER', 'Expected variable name after "heAhe".')
    initializer = None
    if parser.match('ASSIGN'):
        initializer = parser.expr()
    parser.consume('SEMICOLON', 'Expected ";" after variable declaration.')
    return VarDeclaration(name_tok.value, initializer, line=tok.line)


def parse_assignment(parser: 'Parser') -> Assignment:
    """
    Parse reassignment of an existing variable.

    Syntax:
        <identifier> = <expression> ;
    """
    id_tok = parser.advance()
    parser.eat('ASSIGN')
    value = parser.expr()
    parser.consume('SEMICOLON', 'Expected ";" after assignment.')
    return Assignment(id_tok.value, value, line=id_tok.line)


def parse_print(parser: 'Parser') -> PrintStatement:
    """
    Parse a ``dakhava`` statement with one or more comma separated values.

    Syntax:
        dakhava <expression> (, <expression>)* ;
    """
    tok = parser.advance()
    expressions = [parser.expr()]
    while parser.match('COMMA'):
        expressions.append(parser.expr())
    parser.consume('SEMICOLON', 'Expected ";" after print statement.')
    return PrintStatement(tuple(expressions), line=tok.line)


def _parse_conditional(parser: 'Parser', keyword) -> IfStatement:
    """
    Parse the part of an if statement that follows its keyword.
    """
    parser.consume('LPAREN', f'Expected "(" after "{keyword.value}".')
    condition = parser.expr()
    parser.consume('RPAREN', 'Expected ")" after condition.')
    consequent = parser.block()

    alternate = None
    else_if = parser.match('ELSE_IF')
    if else_if:
        alternate = _parse_conditional(parser, else_if)
    elif parser.match('ELSE'):
        if parser.check('IF'):
            alternate = parse_if(parser)
        else:
            alternate = parser.block()

    return IfStatement(condition, consequent, alternate, line=keyword.line)


def parse_if(parser: 'Parser') -> IfStatement:
    """
    Parse a conditional with optional else-if and else branches.

    Syntax:
        jar (<condition>) { <block> }
        nahitarJar (<condition>) { <block> }
        nahitar jar (<condition>) { <block> }
        nahitar { <block> }
    """
    keyword = parser.advance()
    return _parse_conditional(parser, keyword)


def parse_while(parser: 'Parser') -> WhileStatement:
    """
    Parse a ``punhaKar`` loop.

    Syntax:
        punhaKar (<condition>) { <block> }
    """
    tok = parser.advance()
    parser.consume('LPAREN', 'Expected "(" after "punhaKar".')
    condition = parser.expr()
    parser.consume('RPAREN', 'Expected ")" after condition.')
    body = parser.block()
    return WhileStatement(condition, body, line=tok.line)


def parse_func_def(parser: 'Parser') -> FunctionDeclaration:
    """
    Parse a function definition.

    Syntax:
        kaamKar <name>(<params>) { <block> }
    """
    start_tok = parser.advance()
    name_tok = parser.consume('IDENTIFIER', 'Expected function name after "kaamKar".')
    parser.consume('LPAREN', 'Expected "(" after function name.')
    params: list[str] = []
    if not parser.check('RPAREN'):
        while True:
            param_tok = parser.consume('IDENTIFIER', 'Expected parameter name.')
            if param_tok.value in params:
                raise parser.error(f"Duplicate parameter '{param_tok.value}'.", param_tok)
            params.append(param_tok.value)
            if not parser.match('COMMA'):
                break
    parser.consume('RPAREN', 'Expected ")" after parameters.')
    body = parser.block()
    return FunctionDeclaration(name_tok.value, tuple(params), body, line=start_tok.line)


def parse_return(parser: 'Parser') -> ReturnStatement:
    """
    Parse a ``paratDe`` statement.

    Syntax:
        paratDe [<expression>] ;
    """
    tok = parser.advance()
    value = None
    if not parser.check('SEMICOLON'):
        value = parser.expr()
    parser.consume('SEMICOLON', 'Expected ";" after return value.')
    return ReturnStatement(value, line=tok.line)


def parse_expression_statement(parser: 'Parser') -> ExpressionStatement:
    """
    Parse an expression evaluated for its side effects, usually a call.

    Syntax:
        <expression> ;
    """
    tok = parser.curr_token
    expression = parser.expr()
    parser.consume('SEMICOLON', 'Expected ";" after expression.')
    return ExpressionStatement(expression, line=tok.line)
