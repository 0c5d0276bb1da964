"""Lexer for AmchiScript.

This lexer performs a single pass over the source code using a combined
regular expression of named groups. Each match yields a :class:`Token`
containing its type, value and source position.

Words are resolved in three steps: the multi-word program markers
(``chala suru karu`` and ``bas re ata``) are matched first, then single
words are looked up in the keyword table after lower-casing, and anything
left over is an identifier. Comments (``//`` to end of line and
``/* ... */``) and whitespace, newlines included, are skipped so
statements may span several lines.


File: lexer.py
Copyright: © 2025 AmchiScript contributors.
Version: 0.1.0
License: MIT
"""

import re
from dataclasses import dataclass

from amchiscript.exceptions import LexerError


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token with a type, value and 1-based position.
    """
    type: str
    value: str
    line: int
    column: int

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value!r}, line={self.line}, column={self.column})"


KEYWORDS: dict[str, str] = {
    # Variables and IO
    'heahe': 'VAR',
    'dakhava': 'PRINT',
    'ghye': 'INPUT',

    # Control flow
    'jar': 'IF',
    'nahitar': 'ELSE',
    'nahitarjar': 'ELSE_IF',
    'punhakar': 'WHILE',
    'pratyeksathi': 'FOR_EACH',
    'thamb': 'BREAK',
    'pudheja': 'CONTINUE',

    # Functions
    'kaamkar': 'FUNCTION',
    'paratde': 'RETURN',

    # Literals
    'khara': 'TRUE',
    'khota': 'FALSE',
    'rikam': 'NULL',

    # Lists
    'yadi': 'LIST',
    'jod': 'APPEND',
    'moj': 'LENGTH',

    # Word operators
    'mothaaheka': 'GREATER_WORD',
    'lahanaheka': 'LESS_WORD',
    'sarkhaaheka': 'EQUAL_WORD',
    'ani': 'AND',
    'kimva': 'OR',
    'nahi': 'NOT',
}

# Display text for each token type, used when reporting what was expected.
TOKEN_LITERALS: dict[str, str] = {
    'PROGRAM_START': 'chala suru karu',
    'PROGRAM_END': 'bas re ata',
    'VAR': 'heAhe',
    'PRINT': 'dakhava',
    'INPUT': 'ghye',
    'IF': 'jar',
    'ELSE': 'nahitar',
    'ELSE_IF': 'nahitarJar',
    'WHILE': 'punhaKar',
    'FOR_EACH': 'pratyekSathi',
    'BREAK': 'thamb',
    'CONTINUE': 'pudheJa',
    'FUNCTION': 'kaamKar',
    'RETURN': 'paratDe',
    'TRUE': 'khara',
    'FALSE': 'khota',
    'NULL': 'rikam',
    'LIST': 'yadi',
    'APPEND': 'jod',
    'LENGTH': 'moj',
    'GREATER_WORD': 'mothaAheKa',
    'LESS_WORD': 'lahanAheKa',
    'EQUAL_WORD': 'sarkhaAheKa',
    'AND': 'ani',
    'OR': 'kimva',
    'NOT': 'nahi',
    'ASSIGN': '=',
    'EQUAL': '==',
    'NOT_EQUAL': '!=',
    'GREATER_EQUAL': '>=',
    'LESS_EQUAL': '<=',
    'GREATER': '>',
    'LESS': '<',
    'PLUS': '+',
    'MINUS': '-',
    'MULTIPLY': '*',
    'DIVIDE': '/',
    'MODULO': '%',
    'LPAREN': '(',
    'RPAREN': ')',
    'LBRACE': '{',
    'RBRACE': '}',
    'LBRACKET': '[',
    'RBRACKET': ']',
    'SEMICOLON': ';',
    'COMMA': ',',
    'DOT': '.',
    'EOF': 'end of input',
}

_ESCAPES = {
    'n': '\n',
    't': '\t',
    'r': '\r',
    '\\': '\\',
    '"': '"',
    "'": "'",
}

_TOKEN_SPECIFICATION: list[tuple[str, str]] = [
    # Compound keywords
    ('PROGRAM_START',     r'(?i:\bchala[ \t]+suru[ \t]+karu\b)'),
    ('PROGRAM_END',       r'(?i:\bbas[ \t]+re[ \t]+ata\b)'),

    # Literals
    ('NUMBER',            r'\d+(?:\.\d+)?'),
    ('STRING',            r'"(?:[^"\\\n]|\\.)*"|\'(?:[^\'\\\n]|\\.)*\''),
    ('BAD_STRING',        r'["\']'),

    # Keywords and identifiers
    ('WORD',              r'[A-Za-z_][A-Za-z0-9_]*'),

    # Comments
    ('BLOCK_COMMENT',     r'/\*(?:.|\n)*?\*/'),
    ('BAD_COMMENT',       r'/\*'),
    ('LINE_COMMENT',      r'//[^\n]*'),

    # Comparison operators
    ('EQUAL',             r'=='),
    ('NOT_EQUAL',         r'!='),
    ('GREATER_EQUAL',     r'>='),
    ('LESS_EQUAL',        r'<='),
    ('ASSIGN',            r'='),
    ('GREATER',           r'>'),
    ('LESS',              r'<'),

    # Arithmetic operators
    ('PLUS',              r'\+'),
    ('MINUS',             r'-'),
    ('MULTIPLY',          r'\*'),
    ('DIVIDE',            r'/'),
    ('MODULO',            r'%'),

    # Delimiters
    ('LPAREN',            r'\('),
    ('RPAREN',            r'\)'),
    ('LBRACE',            r'\{'),
    ('RBRACE',            r'\}'),
    ('LBRACKET',          r'\['),
    ('RBRACKET',          r'\]'),
    ('SEMICOLON',         r';'),
    ('COMMA',             r','),
    ('DOT',               r'\.'),

    # Miscellaneous
    ('NEWLINE',           r'\n'),
    ('SKIP',              r'[ \t\r]+'),
    ('MISMATCH',          r'.'),
]

_TOKEN_REGEX = re.compile(
    '|'.join(f'(?P<{name}>{pattern})' for name, pattern in _TOKEN_SPECIFICATION)
)


def _unescape(body: str) -> str:
    """
    Resolve backslash escapes in the body of a string literal.
    """
    return re.sub(r'\\(.)', lambda m: _ESCAPES.get(m.group(1), m.group(1)), body)


def tokenize(code: str) -> list[Token]:
    """
    Convert a string of source code into a list of tokens.

    Parameters:
        code (str): The source code to tokenize.

    Returns:
        list[Token]: The tokens, always terminated by a single ``EOF`` token.

    Raises:
        LexerError: On an unterminated string or block comment, or an
            unexpected character.
    """
    tokens: list[Token] = []
    line_num = 1
    line_start = 0

    for match_obj in _TOKEN_REGEX.finditer(code):
        kind = match_obj.lastgroup
        value = match_obj.group()
        start = match_obj.start()
        column = start - line_start + 1

        if kind == 'NEWLINE':
            line_num += 1
            line_start = start + 1
            continue
        if kind in ('SKIP', 'LINE_COMMENT'):
            continue
        if kind == 'BLOCK_COMMENT':
            newlines = value.count('\n')
            if newlines:
                line_num += newlines
                line_start = start + value.rfind('\n') + 1
            continue
        if kind == 'BAD_COMMENT':
            raise LexerError('Unterminated block comment', line_num, column)
        if kind == 'BAD_STRING':
            raise LexerError('Unterminated string', line_num, column)
        if kind == 'MISMATCH':
            raise LexerError(f"Unexpected character '{value}'", line_num, column)

        if kind == 'STRING':
            tokens.append(Token('STRING', _unescape(value[1:-1]), line_num, column))
        elif kind == 'WORD':
            tokens.append(
                Token(KEYWORDS.get(value.lower(), 'IDENTIFIER'), value, line_num, column)
            )
        else:
            tokens.append(Token(kind, value, line_num, column))

    tokens.append(Token('EOF', '', line_num, len(code) - line_start + 1))
    return tokens
