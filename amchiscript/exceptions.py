"""Errors.

Lexer and parser errors derive from :class:`SyntaxError` and abort the
pipeline immediately. Runtime errors derive from :class:`RuntimeException`
so the interpreter can tell a misbehaving script apart from a defect in the
host.


File: exceptions.py
Copyright: © 2025 AmchiScript contributors.
Version: 0.1.0
License: MIT
"""


class LexerError(SyntaxError):
    """
    Error for source text that cannot be tokenized.
    """
    def __init__(self, message, line, column):
        self.line = line
        self.column = column
        super().__init__(f"{message} at line {line}, column {column}")


class ParseError(SyntaxError):
    """
    Error for a token sequence that does not match the grammar.
    """
    def __init__(self, message, line, column):
        self.line = line
        self.column = column
        super().__init__(f"Parse error at line {line}, column {column}: {message}")


class RuntimeException(Exception):
    """
    Base class for errors raised while a script is running.
    """
    def __init__(self, message, line=None):
        self.line = line
        if line is not None:
            message += f" on line {line}"
        super().__init__(message)


class UndefinedVariableException(RuntimeException):
    """
    Error for reading or assigning a variable that was never declared.
    """
    def __init__(self, varname, line=None, assignment=False):
        self.varname = varname
        if assignment:
            message = f"Cannot assign to undefined variable '{varname}'"
        else:
            message = f"Undefined variable '{varname}'"
        super().__init__(message, line)


class UnknownFunctionException(RuntimeException):
    """
    Error for calling a name that is not bound to a function.
    """
    def __init__(self, name, line=None):
        self.name = name
        super().__init__(f"Unknown function: {name}", line)


class ArityException(RuntimeException):
    """
    Error for calling a function with the wrong number of arguments.
    """
    def __init__(self, name, expected, actual, line=None):
        self.name = name
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Function '{name}' expects {expected} arguments, got {actual}",
            line,
        )


class UnknownOpException(RuntimeException):
    """
    Error for unknown operators, statement kinds and expression kinds.
    """
    def __init__(self, op, line=None):
        self.op = op
        super().__init__(f"Unknown operation '{op}'", line)


class TypeMismatchException(RuntimeException):
    """
    Error for an operator applied to values it does not support.
    """


class InputUnavailableException(RuntimeException):
    """
    Error for ``ghye()`` when neither an input provider nor a prompt exists.
    """
    def __init__(self, line=None):
        super().__init__(
            "Input handler not provided and prompt is not available", line
        )
