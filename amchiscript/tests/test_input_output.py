"""
Tests for ghye() input and dakhava output
"""
import asyncio
import io
import sys

import pytest

from amchiscript.exceptions import (
    ArityException,
    InputUnavailableException,
    TypeMismatchException,
)
from amchiscript.interpreter import Interpreter
from amchiscript.tests.utils import parse_source, program, run_source


def test_input_provider():
    _, lines, _ = run_source(
        program('heAhe naav = ghye();', 'dakhava "Namaskar, ", naav, "!";'),
        input=lambda: "Rahul",
    )
    assert lines == ['Namaskar, Rahul!']


def test_async_input_provider():
    async def provider():
        return "Sneha"

    _, lines, _ = run_source(program("dakhava ghye();"), input=provider)
    assert lines == ['Sneha']


def test_async_input_inside_running_loop():
    """
    Test ``ghye()`` awaiting a queue owned by the loop that runs the program.
    """
    lines = []

    async def host():
        answers = asyncio.Queue()
        await answers.put("Meera")
        interpreter = Interpreter(output=lines.append, input=answers.get)
        completed = await interpreter.interpret_async(
            parse_source(program('dakhava "Namaskar, ", ghye();'))
        )
        assert interpreter.host_loop is None
        return completed

    assert asyncio.run(host())
    assert lines == ['Namaskar, Meera']


def test_async_input_with_blocking_interpret_inside_loop():
    async def provider():
        await asyncio.sleep(0)
        return "Omkar"

    async def host():
        return run_source(program("dakhava ghye();"), input=provider)

    _, lines, completed = asyncio.run(host())
    assert completed
    assert lines == ['Omkar']


def test_interpret_async_with_plain_provider():
    lines = []
    interpreter = Interpreter(output=lines.append, input=lambda: "Tara")
    ast = parse_source(program("dakhava ghye();"))
    assert asyncio.run(interpreter.interpret_async(ast))
    assert lines == ['Tara']


@pytest.mark.parametrize("answer", [None, 42, ["x"]])
def test_input_provider_must_return_text(answer):
    interpreter = Interpreter(output=lambda text: None, input=lambda: answer)
    stmt = parse_source(program("dakhava ghye();")).body[0]
    with pytest.raises(TypeMismatchException) as excinfo:
        interpreter.execute(stmt, interpreter.globals)
    assert "Input provider must return text" in str(excinfo.value)


def test_input_is_returned_verbatim():
    _, lines, _ = run_source(program("dakhava ghye() + 1;"), input=lambda: "42")
    assert lines == ['421']


def test_input_provider_called_once_per_call():
    answers = iter(["pahila", "dusra"])
    _, lines, _ = run_source(
        program("dakhava ghye();", "dakhava ghye();"),
        input=lambda: next(answers),
    )
    assert lines == ['pahila', 'dusra']


def test_input_falls_back_to_host_prompt(monkeypatch):
    monkeypatch.setattr(sys, "stdin", io.StringIO(""))
    monkeypatch.setattr("builtins.input", lambda: "typed")
    _, lines, _ = run_source(program("dakhava ghye();"))
    assert lines == ['typed']


def test_input_unavailable_without_stdin(monkeypatch):
    monkeypatch.setattr(sys, "stdin", None)
    interpreter = Interpreter(output=lambda text: None)
    stmt = parse_source(program("dakhava ghye();")).body[0]
    with pytest.raises(InputUnavailableException) as excinfo:
        interpreter.execute(stmt, interpreter.globals)
    assert "Input handler not provided" in str(excinfo.value)


def test_input_unavailable_on_eof(monkeypatch):
    def at_eof():
        raise EOFError

    monkeypatch.setattr(sys, "stdin", io.StringIO(""))
    monkeypatch.setattr("builtins.input", at_eof)
    interpreter = Interpreter(output=lambda text: None)
    stmt = parse_source(program("ghye();")).body[0]
    with pytest.raises(InputUnavailableException):
        interpreter.execute(stmt, interpreter.globals)


def test_input_takes_no_arguments():
    interpreter = Interpreter(output=lambda text: None, input=lambda: "x")
    stmt = parse_source(program('ghye("prompt");')).body[0]
    with pytest.raises(ArityException):
        interpreter.execute(stmt, interpreter.globals)


def test_dakhava_call_form():
    """
    Test ``dakhava(...)`` used as an expression: values joined by spaces, result nil.
    """
    _, lines, _ = run_source(program('heAhe r = dakhava("a", 1, khara);', "dakhava r;"))
    assert lines == ['a 1 true', 'nil']


def test_dakhava_statement_with_parentheses():
    _, lines, _ = run_source(program("dakhava(1 + 2);"))
    assert lines == ['3']


def test_output_sink_receives_one_string_per_statement():
    received = []
    interpreter = Interpreter(output=received.append)
    interpreter.interpret(parse_source(program('dakhava "a", "b";', 'dakhava "c";')))
    assert received == ['ab', 'c']


def test_dakhava_call_statement_joins_with_spaces():
    _, lines, _ = run_source(program('dakhava("a", "b", 3);', "dakhava();"))
    assert lines == ['a b 3', '']
