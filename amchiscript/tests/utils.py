"""
Utility functions shared across AmchiScript tests.
"""
from amchiscript.interpreter import Interpreter
from amchiscript.lexer import tokenize
from amchiscript.parser import Parser


def program(*lines: str) -> str:
    """
    Wrap statements in the start and end markers.
    """
    return "chala suru karu;\n" + "\n".join(lines) + "\nbas re ata;\n"


def parse_source(source: str):
    """
    Parse source code and return the Program node.
    """
    return Parser(tokenize(source), "<test>").parse()


def run_source(source: str, **options):
    """
    Run source code with output collected in a list.

    Returns:
        tuple: (interpreter, printed lines, whether the run completed)
    """
    lines: list[str] = []
    interpreter = Interpreter(output=lines.append, file="<test>", **options)
    completed = interpreter.interpret(parse_source(source))
    return interpreter, lines, completed
