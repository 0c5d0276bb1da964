"""
Main parser entry point for AmchiScript.

This module defines the `Parser` class, which coordinates the recursive
descent parsing process. The actual parsing routines are split across
`amchiscript.parser.expressions` and `amchiscript.parser.statements`.


File: parser.py
Copyright: © 2025 AmchiScript contributors.
Version: 0.1.0
License: MIT
"""

from amchiscript.ast_nodes import Program
from amchiscript.exceptions import ParseError
from amchiscript.lexer import TOKEN_LITERALS, Token

from . import expressions as _expr
from . import statements as _stmt


class Parser:
    """AmchiScript parser."""

    def __init__(self, tokens: list[Token], file: str = "<stdin>"):
        """
        Initialize the parser with a list of tokens.

        Parameters:
            tokens (list): A list of Token instances ending with ``EOF``.
            file (str): The name of the script.
        """
        if not tokens or tokens[-1].type != 'EOF':
            raise ValueError("Token list must end with an EOF token")
        self.tokens = tokens
        self.position = 0
        self.curr_token = self.tokens[self.position]
        self.source_file = file

    def peek(self, offset: int = 1) -> Token:
        """
        Return the token ``offset`` places ahead without consuming anything.
        """
        index = min(self.position + offset, len(self.tokens) - 1)
        return self.tokens[index]

    def check(self, *token_types: str) -> bool:
        """
        Return ``True`` if the current token has one of the given types.
        """
        return self.curr_token.type in token_types

    def advance(self) -> Token:
        """
        Consume the current token and return it. ``EOF`` is never consumed.
        """
        tok = self.curr_token
        if tok.type != 'EOF':
            self.position += 1
            self.curr_token = self.tokens[self.position]
        return tok

    def match(self, *token_types: str) -> Token | None:
        """
        Consume and return the current token if it has one of the given types.
        """
        if self.check(*token_types):
            return self.advance()
        return None

    def error(self, message: str, tok: Token | None = None) -> ParseError:
        """
        Build a parse error positioned at ``tok`` (default: the current token).
        """
        tok = tok or self.curr_token
        return ParseError(message, tok.line, tok.column)

    def consume(self, token_type: str, message: str) -> Token:
        """
        Consume the current token if it matches the expected type.

        Raises:
            ParseError: With ``message`` if the token does not match.
        """
        if self.curr_token.type == token_type:
            return self.advance()
        raise self.error(message)

    def eat(self, token_type: str) -> Token:
        """
        Consume a token of ``token_type``, reporting a generic message on mismatch.
        """
        expd_value = TOKEN_LITERALS.get(token_type, token_type)
        act_value = self.curr_token.value or TOKEN_LITERALS.get(self.curr_token.type, '')
        return self.consume(
            token_type,
            f"Expected '{expd_value}' but got '{act_value}'.",
        )

    # Expression wrappers
    def expr(self):
        """
        Parse a full expression starting from the lowest precedence.
        """
        return _expr.parse_expr(self)

    def logical_or(self):
        """
        Parse a ``kimva`` expression.
        """
        return _expr.parse_logical_or(self)

    def logical_and(self):
        """
        Parse an ``ani`` expression.
        """
        return _expr.parse_logical_and(self)

    def equality(self):
        """
        Parse an equality expression.
        """
        return _expr.parse_equality(self)

    def relational(self):
        """
        Parse a relational expression.
        """
        return _expr.parse_relational(self)

    def additive(self):
        """
        Parse an addition or subtraction expression.
        """
        return _expr.parse_additive(self)

    def term(self):
        """
        Parse multiplication, division and modulo.
        """
        return _expr.parse_term(self)

    def unary(self):
        """
        Parse a prefix ``-`` or ``nahi`` expression.
        """
        return _expr.parse_unary(self)

    def postfix(self):
        """
        Parse a primary followed by index or member accessors.
        """
        return _expr.parse_postfix(self)

    def primary(self):
        """
        Parse a literal, name, call, list or parenthesized group.
        """
        return _expr.parse_primary(self)

    # Statement wrappers
    def block(self):
        """
        Parse a block of statements enclosed in braces.
        """
        return _stmt.parse_block(self)

    def statement(self):
        """
        Parse a single statement.
        """
        return _stmt.parse_statement(self)

    def parse(self) -> Program:
        """
        Parse a whole program, including its start and end markers.

        Raises:
            ParseError: On the first token that does not fit the grammar.
        """
        start = self.consume(
            'PROGRAM_START',
            'Expected "chala suru karu" at the beginning of the program.',
        )
        self.consume('SEMICOLON', 'Expected ";" after "chala suru karu".')

        body = []
        while not self.check('PROGRAM_END', 'EOF'):
            body.append(self.statement())

        self.consume('PROGRAM_END', 'Expected "bas re ata" at the end of the program.')
        self.consume('SEMICOLON', 'Expected ";" after "bas re ata".')
        self.consume('EOF', 'Unexpected input after "bas re ata;".')
        return Program(tuple(body), line=start.line)
