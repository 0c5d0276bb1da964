"""
Tests for punhaKar loops, thamb and pudheJa
"""
import logging

from amchiscript.ast_nodes import BreakStatement, ContinueStatement, Literal, ReturnStatement
from amchiscript.control import BREAK, CONTINUE, Outcome, Signal
from amchiscript.interpreter import Interpreter
from amchiscript.tests.utils import program, run_source


def test_break_leaves_loop():
    _, lines, _ = run_source(program(
        "heAhe i = 0;",
        "punhaKar (i < 10) {",
        "    i = i + 1;",
        "    jar (i == 3) { thamb; }",
        "    dakhava i;",
        "}",
        'dakhava "done";',
    ))
    assert lines == ['1', '2', 'done']


def test_continue_skips_rest_of_body():
    _, lines, _ = run_source(program(
        "heAhe i = 0;",
        "punhaKar (i < 5) {",
        "    i = i + 1;",
        "    jar (i % 2 == 0) { pudheJa; }",
        "    dakhava i;",
        "}",
    ))
    assert lines == ['1', '3', '5']


def test_break_only_leaves_innermost_loop():
    _, lines, _ = run_source(program(
        "heAhe i = 0;",
        "punhaKar (i < 2) {",
        "    i = i + 1;",
        "    heAhe j = 0;",
        "    punhaKar (khara) {",
        "        j = j + 1;",
        "        jar (j > 2) { thamb; }",
        '        dakhava i + "-" + j;',
        "    }",
        "}",
    ))
    assert lines == ['1-1', '1-2', '2-1', '2-2']


def test_loop_condition_false_from_start():
    _, lines, _ = run_source(program("punhaKar (khota) { dakhava 1; }", 'dakhava "after";'))
    assert lines == ['after']


def test_loop_truthiness_of_numbers_and_strings():
    _, lines, _ = run_source(program(
        "heAhe n = 3;",
        "punhaKar (n) { dakhava n; n = n - 1; }",
        'heAhe s = "x";',
        'punhaKar (s) { dakhava s; s = ""; }',
    ))
    assert lines == ['3', '2', '1', 'x']


def test_break_outside_loop(caplog):
    caplog.set_level(logging.ERROR, logger="amchiscript.interpreter")
    _, _, completed = run_source(program("thamb;"))
    assert not completed
    assert "'thamb' used outside of a loop on line 2" in caplog.text


def test_continue_in_if_outside_loop(caplog):
    caplog.set_level(logging.ERROR, logger="amchiscript.interpreter")
    _, _, completed = run_source(program("jar (khara) { pudheJa; }"))
    assert not completed
    assert "'pudheJa' used outside of a loop" in caplog.text


def test_control_statements_return_outcomes():
    """
    Test that control statements report their signal instead of raising.
    """
    interpreter = Interpreter(output=lambda text: None)
    env = interpreter.globals
    assert interpreter.execute(BreakStatement(), env) is BREAK
    assert interpreter.execute(ContinueStatement(), env) is CONTINUE
    outcome = interpreter.execute(ReturnStatement(Literal(1, "1")), env)
    assert outcome == Outcome(Signal.RETURN, 1)
    assert not outcome.is_normal
