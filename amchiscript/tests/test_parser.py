"""
Tests for the AmchiScript parser
"""
from dataclasses import fields

import pytest

from amchiscript.ast_nodes import (
    EXPRESSION_TYPES,
    STATEMENT_TYPES,
    Assignment,
    BinaryExpression,
    BlockStatement,
    BreakStatement,
    CallExpression,
    ExpressionStatement,
    FunctionDeclaration,
    Identifier,
    IfStatement,
    ListExpression,
    Literal,
    MemberExpression,
    Node,
    PrintStatement,
    Program,
    ReturnStatement,
    UnaryExpression,
    VarDeclaration,
    WhileStatement,
)
from amchiscript.exceptions import ParseError
from amchiscript.lexer import tokenize
from amchiscript.operations import Op
from amchiscript.parser import Parser
from amchiscript.tests.utils import parse_source, program


def parse_expr(text: str):
    """
    Parse a single expression by wrapping it in a print statement.
    """
    stmt = parse_source(program(f"dakhava {text};")).body[0]
    assert isinstance(stmt, PrintStatement)
    return stmt.expressions[0]


def num(value):
    return Literal(value, str(value))


def walk(node):
    """
    Yield every AST node below (and including) ``node``.
    """
    yield node
    for f in fields(node):
        child = getattr(node, f.name)
        children = child if isinstance(child, tuple) else (child,)
        for item in children:
            if isinstance(item, Node):
                yield from walk(item)


def test_hello_world_program():
    ast = parse_source('chala suru karu; dakhava "Hello, World!"; bas re ata;')
    assert ast == Program((
        PrintStatement((Literal("Hello, World!", "Hello, World!"),)),
    ))


def test_empty_program():
    assert parse_source("chala suru karu;\nbas re ata;") == Program(())


def test_declarations_and_assignment():
    """
    Test declarations with and without initializer, and assignment.
    """
    ast = parse_source(program("heAhe x;", "heAhe y = 5;", "x = y;"))
    assert ast.body == (
        VarDeclaration("x"),
        VarDeclaration("y", num(5)),
        Assignment("x", Identifier("y")),
    )
    assert [stmt.line for stmt in ast.body] == [2, 3, 4]


def test_print_with_several_expressions():
    stmt = parse_source(program('dakhava "Age: ", 25;')).body[0]
    assert stmt == PrintStatement((Literal("Age: ", "Age: "), num(25)))


def test_precedence_of_multiplication_over_addition():
    assert parse_expr("1 + 2 * 3") == BinaryExpression(
        num(1), Op.ADD, BinaryExpression(num(2), Op.MUL, num(3))
    )


def test_binary_operators_are_left_associative():
    assert parse_expr("10 - 3 - 2") == BinaryExpression(
        BinaryExpression(num(10), Op.SUB, num(3)), Op.SUB, num(2)
    )


def test_parentheses_override_precedence():
    assert parse_expr("(1 + 2) * 3") == BinaryExpression(
        BinaryExpression(num(1), Op.ADD, num(2)), Op.MUL, num(3)
    )


def test_logical_precedence():
    """
    Test that ``kimva`` binds looser than ``ani``, which binds looser than ``==``.
    """
    a, b, c = Identifier("a"), Identifier("b"), Identifier("c")
    assert parse_expr("a kimva b ani c == 1") == BinaryExpression(
        a, Op.OR, BinaryExpression(b, Op.AND, BinaryExpression(c, Op.EQ, num(1)))
    )


def test_word_operators():
    a, b = Identifier("a"), Identifier("b")
    assert parse_expr("a mothaAheKa b") == BinaryExpression(a, Op.GT, b)
    assert parse_expr("a lahanAheKa b") == BinaryExpression(a, Op.LT, b)
    assert parse_expr("a sarkhaAheKa b") == BinaryExpression(a, Op.EQ, b)


def test_unary_operators():
    assert parse_expr("-x") == UnaryExpression(Op.SUB, Identifier("x"))
    assert parse_expr("nahi nahi khara") == UnaryExpression(
        Op.NOT, UnaryExpression(Op.NOT, Literal(True, "khara"))
    )
    assert parse_expr("-2 * 3") == BinaryExpression(
        UnaryExpression(Op.SUB, num(2)), Op.MUL, num(3)
    )


def test_constants():
    assert parse_expr("khara") == Literal(True, "khara")
    assert parse_expr("khota") == Literal(False, "khota")
    assert parse_expr("rikam") == Literal(None, "rikam")
    assert parse_expr("2.5") == Literal(2.5, "2.5")


def test_calls_lists_and_indexing():
    assert parse_expr("add(1, x)") == CallExpression(Identifier("add"), (num(1), Identifier("x")))
    assert parse_expr("ghye()") == CallExpression(Identifier("ghye"), ())
    assert parse_expr("[1, 2][0]") == MemberExpression(
        ListExpression((num(1), num(2))), num(0), True
    )
    assert parse_expr("l.length") == MemberExpression(
        Identifier("l"), Identifier("length"), False
    )


def test_builtin_call_as_statement():
    stmt = parse_source(program("jod(l, 3);")).body[0]
    assert stmt == ExpressionStatement(
        CallExpression(Identifier("jod"), (Identifier("l"), num(3)))
    )


def test_if_branches_are_blocks():
    """
    Test that a conditional's consequent is always a block.
    """
    stmt = parse_source(program("jar (x) { dakhava 1; }")).body[0]
    assert stmt == IfStatement(
        Identifier("x"), BlockStatement((PrintStatement((num(1),)),))
    )


def test_else_if_forms_are_equivalent():
    """
    Test that ``nahitarJar`` and ``nahitar jar`` produce the same tree.
    """
    joined = parse_source(program(
        "jar (a) { dakhava 1; } nahitarJar (b) { dakhava 2; } nahitar { dakhava 3; }"
    ))
    spaced = parse_source(program(
        "jar (a) {",
        "    dakhava 1;",
        "} nahitar jar (b) {",
        "    dakhava 2;",
        "} nahitar {",
        "    dakhava 3;",
        "}",
    ))
    assert joined == spaced
    inner = joined.body[0].alternate
    assert isinstance(inner, IfStatement)
    assert inner.condition == Identifier("b")
    assert inner.alternate == BlockStatement((PrintStatement((num(3),)),))


def test_while_and_break():
    stmt = parse_source(program("punhaKar (khara) { thamb; }")).body[0]
    assert stmt == WhileStatement(
        Literal(True, "khara"), BlockStatement((BreakStatement(),))
    )


def test_function_declaration_and_return():
    stmt = parse_source(program("kaamKar add(a, b) { paratDe a + b; }")).body[0]
    assert stmt == FunctionDeclaration(
        "add",
        ("a", "b"),
        BlockStatement((
            ReturnStatement(BinaryExpression(Identifier("a"), Op.ADD, Identifier("b"))),
        )),
    )
    empty = parse_source(program("kaamKar f() { paratDe; }")).body[0]
    assert empty.body.body == (ReturnStatement(),)


def test_every_node_is_a_known_variant():
    """
    Test that every node in a parsed tree is a statement or expression variant.
    """
    ast = parse_source(program(
        "heAhe l = [1, 2];",
        "kaamKar f(n) {",
        "    punhaKar (n > 0) { n = n - 1; jar (n == 2) { pudheJa; } }",
        "    paratDe -n;",
        "}",
        "jar (nahi f(3) kimva l[0]) { dakhava moj(l); } nahitar { f(1); }",
    ))
    for node in walk(ast):
        if node is ast:
            continue
        assert isinstance(node, EXPRESSION_TYPES + STATEMENT_TYPES)


def test_missing_end_marker():
    """
    Test the error for a program that never says "bas re ata".
    """
    with pytest.raises(ParseError) as excinfo:
        parse_source("chala suru karu;\ndakhava 1;\n")
    assert str(excinfo.value) == (
        'Parse error at line 3, column 1: Expected "bas re ata" at the end of the program.'
    )


def test_missing_start_marker():
    with pytest.raises(ParseError) as excinfo:
        parse_source("dakhava 1;\nbas re ata;")
    assert 'Expected "chala suru karu" at the beginning of the program.' in str(excinfo.value)
    assert (excinfo.value.line, excinfo.value.column) == (1, 1)


def test_input_after_end_marker():
    with pytest.raises(ParseError) as excinfo:
        parse_source("chala suru karu;\nbas re ata;\ndakhava 1;")
    assert 'Unexpected input after "bas re ata;".' in str(excinfo.value)


@pytest.mark.parametrize("body,message", [
    ("dakhava 1", 'Expected ";" after print statement.'),
    ("heAhe = 1;", 'Expected variable name after "heAhe".'),
    ("5;", "Expected statement."),
    ("dakhava != khara;", "Expected expression."),
    ("jar x { }", 'Expected "(" after "jar".'),
    ("kaamKar f(a, a) { }", "Duplicate parameter 'a'."),
    ("pratyekSathi (x) { }", "Expected statement."),
])
def test_syntax_errors(body, message):
    """
    Test that malformed statements raise a ParseError with a clear message.
    """
    with pytest.raises(ParseError) as excinfo:
        parse_source(program(body))
    assert message in str(excinfo.value)


def test_parser_requires_eof_token():
    tokens = [t for t in tokenize("chala suru karu; bas re ata;") if t.type != 'EOF']
    with pytest.raises(ValueError):
        Parser(tokens)
    with pytest.raises(ValueError):
        Parser([])


def test_literal_values_relex_to_the_same_value():
    """
    Test that printing a number literal's value and re-lexing it gives the same value.
    """
    for text in ("7", "3.5", "0.25", "100"):
        literal = parse_expr(text)
        again = parse_expr(str(literal.value))
        assert again.value == literal.value
    assert parse_expr('"x"') == Literal("x", "x")


def test_unclosed_block_at_end_of_input():
    with pytest.raises(ParseError) as excinfo:
        parse_source("chala suru karu;\njar (x) { dakhava 1;")
    assert 'Expected "}" after block.' in str(excinfo.value)


def test_dakhava_call_form_at_statement_start():
    """
    Test that ``dakhava(a, b);`` is a call while ``dakhava (x), y;`` prints.
    """
    call = parse_source(program('dakhava("a", 1);')).body[0]
    assert call == ExpressionStatement(
        CallExpression(Identifier("dakhava"), (Literal("a", "a"), num(1)))
    )
    empty = parse_source(program("dakhava();")).body[0]
    assert empty == ExpressionStatement(CallExpression(Identifier("dakhava"), ()))
    printed = parse_source(program("dakhava (f(1, 2)), 3;")).body[0]
    assert printed == PrintStatement((
        CallExpression(Identifier("f"), (num(1), num(2))),
        num(3),
    ))
