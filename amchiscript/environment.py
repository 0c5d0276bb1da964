"""Lexical scopes for the AmchiScript interpreter.

An :class:`Environment` maps names to runtime values and optionally points
at an enclosing environment. Environments form a tree rooted at the global
scope; lookups and assignments walk outward through the parents.


File: environment.py
Copyright: © 2025 AmchiScript contributors.
Version: 0.1.0
License: MIT
"""

from __future__ import annotations

from typing import Any, Optional

from amchiscript.exceptions import UndefinedVariableException


class Environment:
    """
    A single scope with an optional parent scope.
    """
    def __init__(self, parent: Optional[Environment] = None):
        self.values: dict[str, Any] = {}
        self.parent = parent

    def child(self) -> Environment:
        """
        Create a new scope nested inside this one.
        """
        return Environment(self)

    def define(self, name: str, value: Any) -> None:
        """
        Bind ``name`` in this scope, replacing any existing binding.
        """
        self.values[name] = value

    def get(self, name: str, line: int | None = None) -> Any:
        """
        Return the value bound to ``name`` in the nearest enclosing scope.

        Raises:
            UndefinedVariableException: If no scope defines ``name``.
        """
        scope: Optional[Environment] = self
        while scope is not None:
            if name in scope.values:
                return scope.values[name]
            scope = scope.parent
        raise UndefinedVariableException(name, line)

    def set(self, name: str, value: Any, line: int | None = None) -> None:
        """
        Rebind ``name`` in the nearest scope that already defines it.

        Raises:
            UndefinedVariableException: If no scope defines ``name``.
        """
        scope: Optional[Environment] = self
        while scope is not None:
            if name in scope.values:
                scope.values[name] = value
                return
            scope = scope.parent
        raise UndefinedVariableException(name, line, assignment=True)

    def has(self, name: str) -> bool:
        """
        Return ``True`` if ``name`` is bound in this scope or any parent.
        """
        scope: Optional[Environment] = self
        while scope is not None:
            if name in scope.values:
                return True
            scope = scope.parent
        return False

    def __repr__(self) -> str:
        return f"Environment({sorted(self.values)}, parent={'yes' if self.parent else 'no'})"
