"""Interpreter.

This is a tree-walk interpreter for evaluating the AST produced by the parser. It supports
arithmetic, variables, lists, function definitions and calls, conditionals, loops, and
output statements.

1. Execution Model
The interpreter evaluates the AST in a top-down, recursive manner. Statements are executed
via `execute()` and expressions are evaluated via `evaluate()`. Both take the environment
to work in as an explicit argument; the interpreter itself keeps no "current scope" field.

2. Environment
`interpret()` runs a program in the interpreter's global `Environment`. Blocks share the
scope of the construct that owns them. A function call creates a child of the environment
the function was defined in, binds the parameters there and runs the body in it.

3. Control Flow
`execute()` returns an `Outcome`. `thamb` and `pudheJa` produce BREAK and CONTINUE outcomes
that the nearest `punhaKar` loop consumes; `paratDe` produces a RETURN outcome that the
enclosing call consumes. A signal that escapes its boundary is a runtime error.

4. Values and Operators
Numbers are floats. Operators match on the `ValueType` tag of each operand. `ani` and
`kimva` evaluate both sides before deciding. Division and modulo by zero follow IEEE float semantics.

5. Error Handling
Errors raised by a running script derive from `RuntimeException`. `interpret()` logs them
and stops the program; any other exception is logged as an unknown error and re-raised.


File: interpreter.py
Copyright: © 2025 AmchiScript contributors.
Version: 0.1.0
License: MIT
"""

import asyncio
import inspect
import logging
import math
import sys
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Optional

from amchiscript.ast_nodes import (
    Assignment,
    BinaryExpression,
    BlockStatement,
    BreakStatement,
    CallExpression,
    ContinueStatement,
    ExpressionStatement,
    FunctionDeclaration,
    Identifier,
    IfStatement,
    ListExpression,
    Literal,
    MemberExpression,
    PrintStatement,
    Program,
    ReturnStatement,
    UnaryExpression,
    VarDeclaration,
    WhileStatement,
)
from amchiscript.control import BREAK, CONTINUE, NORMAL, Outcome, Signal
from amchiscript.environment import Environment
from amchiscript.exceptions import (
    ArityException,
    InputUnavailableException,
    RuntimeException,
    TypeMismatchException,
    UnknownFunctionException,
    UnknownOpException,
)
from amchiscript.operations import Op
from amchiscript.values import (
    FunctionValue,
    ValueType,
    is_truthy,
    parse_number,
    stringify,
    type_of,
)

logger = logging.getLogger(__name__)

NUMERIC = (ValueType.NUMBER, ValueType.BOOLEAN)

_STRAY_SIGNALS = {
    Signal.BREAK: "'thamb' used outside of a loop",
    Signal.CONTINUE: "'pudheJa' used outside of a loop",
    Signal.RETURN: "'paratDe' used outside of a function",
}


def loose_equals(lhs: Any, rhs: Any) -> bool:
    """
    Compare two values for ``==``.

    ``rikam`` only equals ``rikam``. Numbers and booleans compare
    numerically, and a number equals a string holding the same number.
    Lists and functions compare by identity.
    """
    match (type_of(lhs), type_of(rhs)):
        case (ValueType.NULL, ValueType.NULL):
            return True
        case (ValueType.NULL, _) | (_, ValueType.NULL):
            return False
        case (ValueType.STRING, ValueType.STRING):
            return lhs == rhs
        case (left, right) if left in NUMERIC and right in NUMERIC:
            return lhs == rhs
        case (ValueType.STRING, right) if right in NUMERIC:
            number = parse_number(lhs)
            return number is not None and number == rhs
        case (left, ValueType.STRING) if left in NUMERIC:
            number = parse_number(rhs)
            return number is not None and lhs == number
        case _:
            return lhs is rhs


async def _resolve(awaitable):
    return await awaitable


def _divide(lhs: float, rhs: float) -> float:
    if rhs == 0:
        if lhs == 0 or math.isnan(lhs):
            return math.nan
        return math.copysign(math.inf, lhs)
    return lhs / rhs


def _modulo(lhs: float, rhs: float) -> float:
    # Remainder takes the sign of the dividend.
    if rhs == 0 or math.isinf(lhs):
        return math.nan
    return math.fmod(lhs, rhs)


class Interpreter:
    """Tree-walk interpreter for AmchiScript."""

    def __init__(
        self,
        output: Optional[Callable[[str], None]] = None,
        input: Optional[Callable[[], str]] = None,  # pylint: disable=redefined-builtin
        coerce_numeric_strings: bool = False,
        file: str = "<stdin>",
    ):
        """
        Initialize the interpreter.

        Parameters:
            output: Receives one string per printed line. Defaults to ``print``.
            input: Returns the text for ``ghye()``, directly or as an awaitable.
                Without it the host prompt (``input()``) is used when stdin is
                available.
            coerce_numeric_strings: Evaluate string literals that hold a
                number (``"42"``) as numbers.
            file: Script name used in log messages.
        """
        self.output = output if output is not None else print
        self.input_provider = input
        self.coerce_numeric_strings = coerce_numeric_strings
        self.file = file
        self.globals = Environment()
        # Event loop of an interpret_async caller; input coroutines run there.
        self.host_loop: Optional[asyncio.AbstractEventLoop] = None
        self.builtins: dict[str, Callable[[list, Optional[int]], Any]] = {
            'ghye': self._builtin_input,
            'dakhava': self._builtin_print,
            'yadi': self._builtin_list,
            'jod': self._builtin_append,
            'moj': self._builtin_length,
        }

    def interpret(self, program: Program) -> bool:
        """
        Run a program in the global environment.

        Returns:
            bool: ``True`` if the program ran to completion, ``False`` if it
            stopped on a runtime error (which is logged).

        Raises:
            Exception: Any error that is not a ``RuntimeException`` is logged
                and re-raised.
        """
        try:
            for stmt in program.body:
                outcome = self.execute(stmt, self.globals)
                if not outcome.is_normal:
                    raise RuntimeException(_STRAY_SIGNALS[outcome.signal], stmt.line)
        except RuntimeException as e:
            logger.error("Runtime error in %s: %s", self.file, e)
            return False
        except Exception:
            logger.exception("Unknown error while running %s", self.file)
            raise
        return True

    async def interpret_async(self, program: Program) -> bool:
        """
        Run a program from a coroutine without blocking the event loop.

        The program runs in a worker thread. Awaitables returned by the
        input provider are scheduled on the calling loop, so a provider may
        wait on queues, futures or streams owned by that loop.
        """
        self.host_loop = asyncio.get_running_loop()
        try:
            return await asyncio.to_thread(self.interpret, program)
        finally:
            self.host_loop = None

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def execute(self, stmt, env: Environment) -> Outcome:
        """
        Execute a single statement in ``env``.

        Returns:
            Outcome: ``NORMAL`` unless the statement breaks, continues or
            returns.

        Raises:
            UnknownOpException: For a node that is not a statement.
        """
        match stmt:
            case VarDeclaration():
                value = None
                if stmt.initializer is not None:
                    value = self.evaluate(stmt.initializer, env)
                env.define(stmt.name, value)

            case Assignment():
                value = self.evaluate(stmt.value, env)
                env.set(stmt.identifier, value, stmt.line)

            case PrintStatement():
                values = [self.evaluate(expr, env) for expr in stmt.expressions]
                self.output(''.join(stringify(value) for value in values))

            case IfStatement():
                if is_truthy(self.evaluate(stmt.condition, env)):
                    return self.execute(stmt.consequent, env)
                if stmt.alternate is not None:
                    return self.execute(stmt.alternate, env)

            case WhileStatement():
                return self.execute_while(stmt, env)

            case BlockStatement():
                return self.execute_block(stmt, env)

            case FunctionDeclaration():
                env.define(stmt.name, FunctionValue(stmt, env))

            case ReturnStatement():
                value = None
                if stmt.value is not None:
                    value = self.evaluate(stmt.value, env)
                return Outcome.returned(value)

            case BreakStatement():
                return BREAK

            case ContinueStatement():
                return CONTINUE

            case ExpressionStatement():
                self.evaluate(stmt.expression, env)

            case _:
                raise UnknownOpException(
                    f"statement {type(stmt).__name__}", getattr(stmt, 'line', None)
                )
        return NORMAL

    def execute_block(self, block: BlockStatement, env: Environment) -> Outcome:
        """
        Execute the statements of a block in ``env``, stopping at the first
        non-normal outcome.
        """
        for stmt in block.body:
            outcome = self.execute(stmt, env)
            if not outcome.is_normal:
                return outcome
        return NORMAL

    def execute_while(self, stmt: WhileStatement, env: Environment) -> Outcome:
        """
        Run a ``punhaKar`` loop, consuming its BREAK and CONTINUE outcomes.
        """
        while is_truthy(self.evaluate(stmt.condition, env)):
            outcome = self.execute_block(stmt.body, env)
            if outcome.signal is Signal.BREAK:
                break
            if outcome.signal is Signal.RETURN:
                return outcome
        return NORMAL

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def evaluate(self, expr, env: Environment) -> Any:
        """
        Recursively evaluate an expression node in ``env``.

        Raises:
            RuntimeException: For undefined names, bad operands, unknown
                functions and arity mismatches.
        """
        match expr:
            case Literal():
                if self.coerce_numeric_strings and isinstance(expr.value, str):
                    number = parse_number(expr.value)
                    if number is not None:
                        return number
                return expr.value

            case Identifier():
                return env.get(expr.name, expr.line)

            case BinaryExpression():
                lhs = self.evaluate(expr.left, env)
                rhs = self.evaluate(expr.right, env)
                return self.binary_op(expr.operator, lhs, rhs, expr.line)

            case UnaryExpression():
                operand = self.evaluate(expr.argument, env)
                return self.unary_op(expr.operator, operand, expr.line)

            case CallExpression():
                return self.call(expr, env)

            case MemberExpression():
                return self.member(expr, env)

            case ListExpression():
                return [self.evaluate(element, env) for element in expr.elements]

        raise UnknownOpException(
            f"expression {type(expr).__name__}", getattr(expr, 'line', None)
        )

    def binary_op(self, op: Op, lhs: Any, rhs: Any, line: Optional[int] = None) -> Any:
        """
        Apply a binary operator to two evaluated operands.
        """
        match op:
            case Op.AND:
                return rhs if is_truthy(lhs) else lhs
            case Op.OR:
                return lhs if is_truthy(lhs) else rhs
            case Op.EQ:
                return loose_equals(lhs, rhs)
            case Op.NE:
                return not loose_equals(lhs, rhs)
            case Op.ADD:
                return self._add(lhs, rhs, line)
            case Op.SUB | Op.MUL | Op.DIV | Op.MOD:
                return self._arithmetic(op, lhs, rhs, line)
            case Op.GT | Op.GE | Op.LT | Op.LE:
                return self._compare(op, lhs, rhs, line)
        raise UnknownOpException(op, line)

    def _add(self, lhs, rhs, line):
        match (type_of(lhs), type_of(rhs)):
            case (ValueType.STRING, _) | (_, ValueType.STRING):
                return stringify(lhs) + stringify(rhs)
            case (ValueType.LIST, ValueType.LIST):
                return lhs + rhs
            case (left, right) if left in NUMERIC and right in NUMERIC:
                return float(lhs) + float(rhs)
            case (left, right):
                raise TypeMismatchException(
                    f"Cannot apply '+' to {left.value} and {right.value}", line
                )

    def _arithmetic(self, op, lhs, rhs, line):
        left, right = type_of(lhs), type_of(rhs)
        if left not in NUMERIC or right not in NUMERIC:
            raise TypeMismatchException(
                f"Cannot apply '{op.value}' to {left.value} and {right.value}", line
            )
        lhs, rhs = float(lhs), float(rhs)
        match op:
            case Op.SUB:
                return lhs - rhs
            case Op.MUL:
                return lhs * rhs
            case Op.DIV:
                return _divide(lhs, rhs)
            case _:
                return _modulo(lhs, rhs)

    def _compare(self, op, lhs, rhs, line):
        match (type_of(lhs), type_of(rhs)):
            case (left, right) if left in NUMERIC and right in NUMERIC:
                pass
            case (ValueType.STRING, ValueType.STRING):
                pass
            case (left, right):
                raise TypeMismatchException(
                    f"Cannot compare {left.value} and {right.value} with '{op.value}'", line
                )
        match op:
            case Op.GT:
                return lhs > rhs
            case Op.GE:
                return lhs >= rhs
            case Op.LT:
                return lhs < rhs
            case _:
                return lhs <= rhs

    def unary_op(self, op: Op, operand: Any, line: Optional[int] = None) -> Any:
        """
        Apply ``-`` or ``nahi`` to an evaluated operand.
        """
        match op:
            case Op.SUB:
                if type_of(operand) not in NUMERIC:
                    raise TypeMismatchException(
                        f"Unary minus (-) requires a number, got {type_of(operand).value}", line
                    )
                return -float(operand)
            case Op.NOT:
                return not is_truthy(operand)
        raise UnknownOpException(op, line)

    def member(self, expr: MemberExpression, env: Environment) -> Any:
        """
        Evaluate ``object[index]`` on a list or string.
        """
        target = self.evaluate(expr.object, env)
        target_type = type_of(target)
        if not expr.computed:
            raise TypeMismatchException(
                f"Cannot read property '{expr.property.name}' of {target_type.value}", expr.line
            )
        if target_type not in (ValueType.LIST, ValueType.STRING):
            raise TypeMismatchException(f"{target_type.value} is not indexable", expr.line)

        index = self.evaluate(expr.property, env)
        if type_of(index) is not ValueType.NUMBER or not float(index).is_integer():
            raise TypeMismatchException(
                f"Index must be a whole number, got {stringify(index)}", expr.line
            )
        index = int(index)
        if not 0 <= index < len(target):
            raise RuntimeException(f"Index {index} out of range", expr.line)
        return target[index]

    def call(self, expr: CallExpression, env: Environment) -> Any:
        """
        Evaluate a call to a built-in or a user-defined function.

        Raises:
            UnknownFunctionException: If the callee is not a function.
            ArityException: If the argument count differs from the
                parameter count.
        """
        name = expr.callee.name
        builtin = self.builtins.get(name)
        if builtin is not None:
            args = [self.evaluate(arg, env) for arg in expr.arguments]
            return builtin(args, expr.line)

        if not env.has(name):
            raise UnknownFunctionException(name, expr.line)
        func = env.get(name, expr.line)
        if not isinstance(func, FunctionValue):
            raise UnknownFunctionException(name, expr.line)
        if len(expr.arguments) != len(func.parameters):
            raise ArityException(name, len(func.parameters), len(expr.arguments), expr.line)

        args = [self.evaluate(arg, env) for arg in expr.arguments]
        return self.call_function(func, args)

    def call_function(self, func: FunctionValue, args: list) -> Any:
        """
        Run a function body in a new scope nested in its closure.

        Returns:
            The value of the first ``paratDe`` reached, or ``None``.
        """
        call_env = func.closure.child()
        for param, arg in zip(func.parameters, args):
            call_env.define(param, arg)

        logger.debug("Calling %s with %d argument(s)", func.name, len(args))
        outcome = self.execute_block(func.declaration.body, call_env)
        match outcome.signal:
            case Signal.RETURN:
                return outcome.value
            case Signal.BREAK | Signal.CONTINUE:
                raise RuntimeException(
                    f"{_STRAY_SIGNALS[outcome.signal]} in function '{func.name}'"
                )
        return None

    # ------------------------------------------------------------------
    # Built-in functions
    # ------------------------------------------------------------------

    def _builtin_input(self, args: list, line: Optional[int]) -> str:
        if args:
            raise ArityException('ghye', 0, len(args), line)
        if self.input_provider is not None:
            text = self.input_provider()
            if inspect.isawaitable(text):
                text = self._wait_for(text)
            if not isinstance(text, str):
                raise TypeMismatchException(
                    f"Input provider must return text, got {type(text).__name__}", line
                )
            return text
        if sys.stdin is None or sys.stdin.closed:
            raise InputUnavailableException(line)
        try:
            return input()
        except (EOFError, OSError) as e:
            raise InputUnavailableException(line) from e

    def _wait_for(self, awaitable):
        if self.host_loop is not None:
            future = asyncio.run_coroutine_threadsafe(_resolve(awaitable), self.host_loop)
            return future.result()
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(_resolve(awaitable))
        # A loop is running on this thread and cannot be re-entered.
        with ThreadPoolExecutor(max_workers=1) as pool:
            return pool.submit(asyncio.run, _resolve(awaitable)).result()

    def _builtin_print(self, args: list, line: Optional[int]) -> None:
        self.output(' '.join(stringify(arg) for arg in args))
        return None

    def _builtin_list(self, args: list, line: Optional[int]) -> list:
        return list(args)

    def _builtin_append(self, args: list, line: Optional[int]) -> list:
        if len(args) != 2:
            raise ArityException('jod', 2, len(args), line)
        target, value = args
        if type_of(target) is not ValueType.LIST:
            raise TypeMismatchException(
                f"jod() expects a list, got {type_of(target).value}", line
            )
        target.append(value)
        return target

    def _builtin_length(self, args: list, line: Optional[int]) -> float:
        if len(args) != 1:
            raise ArityException('moj', 1, len(args), line)
        target = args[0]
        if type_of(target) not in (ValueType.LIST, ValueType.STRING):
            raise TypeMismatchException(
                f"moj() works on lists and strings, got {type_of(target).value}", line
            )
        return float(len(target))
