import json

import hypothesis.strategies as st
from hypothesis import given

from monkey.monkey_ast import (
    BlockStatement,
    Boolean,
    CallExpression,
    ExpressionStatement,
    FunctionLiteral,
    Identifier,
    IfExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    PrefixExpression,
    Program,
    ReturnStatement,
)
from monkey.monkey_lexer import Token


def ident(name: str) -> Identifier:
    return Identifier(Token("IDENT", name), name)


def integer(n: int) -> IntegerLiteral:
    return IntegerLiteral(Token("INT", str(n)), n)


def block(*statements: ExpressionStatement) -> BlockStatement:
    return BlockStatement(Token("LBRACE", "{"), list(statements))


def test_program_string() -> None:
    program = Program(
        [
            LetStatement(
                Token("LET", "let"),
                ident("myVar"),
                ident("anotherVar"),
            )
        ]
    )
    assert str(program) == "let myVar = anotherVar;"


def test_empty_program() -> None:
    program = Program()
    assert program.statements == []
    assert str(program) == ""
    assert program.token_literal() == ""


def test_program_token_literal_is_first_statement() -> None:
    program = Program(
        [
            ReturnStatement(Token("RETURN", "return"), integer(5)),
            ExpressionStatement(ident("x")),
        ]
    )
    assert program.token_literal() == "return"


def test_return_statement_string() -> None:
    assert str(ReturnStatement(Token("RETURN", "return"), integer(5))) == "return 5;"
    assert str(ReturnStatement(Token("RETURN", "return"))) == "return;"


def test_prefix_and_infix_are_parenthesized() -> None:
    neg_a = PrefixExpression(Token("MINUS", "-"), "-", ident("a"))
    expr = InfixExpression(Token("ASTERISK", "*"), neg_a, "*", ident("b"))
    assert str(ExpressionStatement(expr)) == "((-a) * b);"


def test_boolean_string() -> None:
    assert str(Boolean(Token("TRUE", "true"), True)) == "true"
    assert str(Boolean(Token("FALSE", "false"), False)) == "false"


def test_if_expression_string() -> None:
    cond = InfixExpression(Token("LT", "<"), ident("x"), "<", ident("y"))
    node = IfExpression(
        Token("IF", "if"),
        cond,
        block(ExpressionStatement(ident("x"))),
        block(ExpressionStatement(ident("y"))),
    )
    assert str(node) == "if (x < y) { x; } else { y; }"

    no_else = IfExpression(Token("IF", "if"), cond, block(ExpressionStatement(ident("x"))))
    assert str(no_else) == "if (x < y) { x; }"


def test_function_literal_string() -> None:
    body = block(
        ExpressionStatement(
            InfixExpression(Token("PLUS", "+"), ident("x"), "+", ident("y"))
        )
    )
    fn = FunctionLiteral(Token("FUNCTION", "fn"), [ident("x"), ident("y")], body)
    assert str(fn) == "fn(x, y) { (x + y); }"
    assert str(FunctionLiteral(Token("FUNCTION", "fn"), [], block())) == "fn() { }"


def test_call_expression_string_and_literal() -> None:
    call = CallExpression(
        Token("LPAREN", "("),
        ident("add"),
        [integer(1), InfixExpression(Token("ASTERISK", "*"), integer(2), "*", integer(3))],
    )
    assert str(call) == "add(1, (2 * 3))"
    assert call.token_literal() == "add"
    assert ExpressionStatement(call).token_literal() == "add"


def test_infix_token_literal_is_operator() -> None:
    expr = InfixExpression(Token("PLUS", "+"), integer(5), "+", integer(5))
    assert ExpressionStatement(expr).token_literal() == "+"


def test_children_in_source_order() -> None:
    cond = ident("c")
    cons = block(ExpressionStatement(ident("x")))
    alt = block()
    node = IfExpression(Token("IF", "if"), cond, cons, alt)
    assert node.children() == [cond, cons, alt]

    let = LetStatement(Token("LET", "let"), ident("a"), integer(1))
    assert let.children() == [ident("a"), integer(1)]
    assert integer(1).children() == []


def test_structural_equality() -> None:
    a = ExpressionStatement(InfixExpression(Token("PLUS", "+"), ident("a"), "+", ident("b")))
    b = ExpressionStatement(InfixExpression(Token("PLUS", "+"), ident("a"), "+", ident("b")))
    c = ExpressionStatement(InfixExpression(Token("MINUS", "-"), ident("a"), "-", ident("b")))
    assert a == b
    assert a != c
    assert a != "not a node"


def test_to_dict_basic() -> None:
    node = LetStatement(Token("LET", "let"), ident("x"), integer(5))
    d = node.to_dict()
    assert d["kind"] == "let_statement"
    assert d["token"] == "let"
    assert d["name"] == {"kind": "identifier", "token": "x", "value": "x"}
    assert d["value"] == {"kind": "integer_literal", "token": "5", "value": 5}


def test_to_dict_lists_and_optional_children() -> None:
    fn = FunctionLiteral(Token("FUNCTION", "fn"), [ident("x")], block())
    d = fn.to_dict()
    assert [p["value"] for p in d["parameters"]] == ["x"]
    assert d["body"]["statements"] == []

    node = IfExpression(Token("IF", "if"), ident("c"), block())
    assert node.to_dict()["alternative"] is None


def test_to_dict_is_json_serializable() -> None:
    program = Program(
        [ExpressionStatement(PrefixExpression(Token("BANG", "!"), "!", Boolean(Token("TRUE", "true"), True)))]
    )
    text = json.dumps(program.to_dict())
    assert json.loads(text)["statements"][0]["expression"]["operator"] == "!"


@given(st.integers(min_value=0, max_value=2**63 - 1))  # type: ignore[misc]
def test_integer_literal_renders_its_text(n: int) -> None:
    assert str(integer(n)) == str(n)


@given(st.from_regex(r"[a-z_]{1,10}", fullmatch=True))  # type: ignore[misc]
def test_identifier_eq_same_name(name: str) -> None:
    assert ident(name) == ident(name)
    assert ident(name) != ident(name + "x")
