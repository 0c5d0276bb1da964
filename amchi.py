"""
AmchiScript Interpreter

This is the main entry point for the AmchiScript interpreter.

Workflow:
1. The source script is read from the file specified on the command line.
2. The Lexer tokenizes the source code into meaningful tokens.
3. The Parser processes tokens into an AST, checking the program markers.
4. The Interpreter walks the AST, evaluating expressions and executing statements.

Environment variables:
    AMCHIDEBUG        Print the tokens and the AST before running.
    AMCHI_LOG_LEVEL   Logging level (default WARNING).
"""
import logging
import os
import sys

from amchiscript.exceptions import LexerError, ParseError
from amchiscript.interpreter import Interpreter
from amchiscript.lexer import tokenize
from amchiscript.parser import Parser


def print_usage():
    """
    Print usage.
    """
    print()
    print("AmchiScript Interpreter")
    print()
    print("Usage:")
    print("    amchi <script.amchi>")
    print()
    print("Arguments:")
    print("    <script.amchi>")
    print("        Path to an AmchiScript source file to execute. The program must")
    print("        start with 'chala suru karu;' and end with 'bas re ata;'.")
    print()
    print("Example:")
    print("    amchi namaskar.amchi")
    print()
    print("Options:")
    print("    -h, --help")
    print("        Show this help message and exit.")


def configure_logging():
    """
    Send log records to stderr at the level named by AMCHI_LOG_LEVEL.
    """
    level_name = os.environ.get('AMCHI_LOG_LEVEL', 'WARNING').upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(message)s", stream=sys.stderr)


def debug_print_tokens_ast(tokens, ast):
    """
    Print tokenized source and AST
    """
    print("\nTokens:\n")
    for token in tokens:
        print(token)
    print("\nAST:\n")
    print(ast)
    print(" ")


def run_script(script_name: str) -> int:
    """
    Run an AmchiScript file and return the process exit status.
    """
    try:
        with open(script_name, "r", encoding="utf-8") as f:
            code = f.read()
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading file: {script_name}", file=sys.stderr)
        print(str(e), file=sys.stderr)
        return 1

    try:
        tokens = tokenize(code)
        ast = Parser(tokens, script_name).parse()
    except (LexerError, ParseError) as e:
        print(f"{type(e).__name__}: {e}", file=sys.stderr)
        return 1

    if os.environ.get('AMCHIDEBUG'):
        debug_print_tokens_ast(tokens, ast)

    interpreter = Interpreter(file=script_name)
    return 0 if interpreter.interpret(ast) else 1


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for the CLI.

    Behaviour:
    - One argument equal to ``-h`` or ``--help``: print usage and exit.
    - One argument that is not an option: treat it as the path to a script and run it.
    - Any other pattern: print usage and return a non-zero exit code.
    """
    if argv is None:
        argv = sys.argv
    args = argv[1:]
    if len(args) == 1 and args[0] in ('-h', '--help'):
        print_usage()
        return 0
    if len(args) == 1:
        configure_logging()
        return run_script(args[0])
    print_usage()
    return 1


if __name__ == "__main__":
    sys.exit(main(sys.argv))
