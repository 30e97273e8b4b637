import dataclasses
import json

import pytest
from hypothesis import given
from hypothesis import strategies as st

from monkey.monkey_ast import (
    BlockStatement,
    BooleanLiteral,
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
    StringLiteral,
)
from monkey.monkey_constants import TokenKind
from monkey.monkey_lexer import Token
from monkey.monkey_parser import parse


def tok(kind: TokenKind, literal: str, line: int = 1, col: int = 1) -> Token:
    return Token(kind, literal, line, col)


def ident(name: str, line: int = 1, col: int = 1) -> Identifier:
    return Identifier(tok(TokenKind.IDENT, name, line, col), name)


def integer(value: int) -> IntegerLiteral:
    return IntegerLiteral(tok(TokenKind.INT, str(value)), value)


def test_program_string() -> None:
    program = Program(
        (
            LetStatement(
                tok(TokenKind.LET, "let"), ident("myVar"), ident("anotherVar")
            ),
        )
    )
    assert str(program) == "let myVar = anotherVar"
    assert program.token_literal() == "let"


def test_empty_program() -> None:
    program = Program()
    assert str(program) == ""
    assert program.token_literal() == ""
    assert program.to_dict() == {"kind": "program", "statements": []}


def test_expression_strings() -> None:
    plus = tok(TokenKind.PLUS, "+")
    infix = InfixExpression(plus, ident("a"), "+", integer(2))
    prefix = PrefixExpression(tok(TokenKind.MINUS, "-"), "-", infix)
    assert str(infix) == "(a + 2)"
    assert str(prefix) == "(-(a + 2))"

    call = CallExpression(tok(TokenKind.LPAREN, "("), ident("f"), (ident("x"), infix))
    assert str(call) == "f(x, (a + 2))"
    assert str(CallExpression(tok(TokenKind.LPAREN, "("), ident("g"), ())) == "g()"

    assert str(StringLiteral(tok(TokenKind.STRING, "hi"), "hi")) == '"hi"'
    assert str(BooleanLiteral(tok(TokenKind.TRUE, "true"), True)) == "true"


def test_block_and_control_flow_strings() -> None:
    lbrace = tok(TokenKind.LBRACE, "{")
    body = BlockStatement(
        lbrace,
        (
            ExpressionStatement(tok(TokenKind.IDENT, "x"), ident("x")),
            ReturnStatement(tok(TokenKind.RETURN, "return"), ident("y")),
        ),
    )
    empty = BlockStatement(lbrace, ())
    assert str(body) == "{ x; return y }"
    assert str(empty) == "{ }"

    cond = InfixExpression(tok(TokenKind.LT, "<"), ident("x"), "<", ident("y"))
    if_exp = IfExpression(tok(TokenKind.IF, "if"), cond, body, None)
    assert str(if_exp) == "if ((x < y)) { x; return y }"
    if_else = dataclasses.replace(if_exp, alternative=empty)
    assert str(if_else) == "if ((x < y)) { x; return y } else { }"

    fn = FunctionLiteral(tok(TokenKind.FUNCTION, "fn"), (ident("x"), ident("y")), body)
    assert str(fn) == "fn(x, y) { x; return y }"


def test_integer_keeps_source_spelling() -> None:
    node = IntegerLiteral(tok(TokenKind.INT, "0x10"), 16)
    assert str(node) == "0x10"
    assert node.value == 16


def test_equality_ignores_token_positions() -> None:
    assert ident("a", 1, 1) == ident("a", 7, 3)
    assert ident("a") != ident("b")
    first, _ = parse("a + b * c")
    second, _ = parse("\n\n  a   +  b*c")
    assert first == second


def test_nodes_are_frozen() -> None:
    node = ident("a")
    with pytest.raises(dataclasses.FrozenInstanceError):
        node.value = "b"  # type: ignore[misc]


def test_kinds_are_distinct() -> None:
    classes = [
        Identifier,
        IntegerLiteral,
        BooleanLiteral,
        StringLiteral,
        PrefixExpression,
        InfixExpression,
        IfExpression,
        FunctionLiteral,
        CallExpression,
        LetStatement,
        ReturnStatement,
        ExpressionStatement,
        BlockStatement,
        Program,
    ]
    assert len({cls.kind for cls in classes}) == len(classes)


def test_to_dict_shape() -> None:
    program, errors = parse("let x = add(1, y);")
    assert errors == []
    data = program.to_dict()
    assert data["kind"] == "program"
    let = data["statements"][0]
    assert let["kind"] == "let"
    assert let["literal"] == "let"
    assert (let["line"], let["col"]) == (1, 1)
    assert let["name"] == {
        "kind": "identifier",
        "literal": "x",
        "line": 1,
        "col": 5,
        "value": "x",
    }
    call = let["value"]
    assert call["kind"] == "call"
    assert call["function"]["value"] == "add"
    assert [a["kind"] for a in call["arguments"]] == ["integer", "identifier"]


def test_to_dict_is_json_serializable() -> None:
    program, _ = parse('if (x) { fn(a) { "s" } } else { !true }')
    text = json.dumps(program.to_dict())
    assert '"kind": "if"' in text
    assert '"alternative": {' in text


def test_to_dict_if_without_else() -> None:
    program, _ = parse("if (x) { y }")
    exp = program.to_dict()["statements"][0]["expression"]
    assert exp["alternative"] is None


@given(st.integers(min_value=0, max_value=2**63 - 1))  # type: ignore[misc]
def test_integer_string_reparses(value: int) -> None:
    program, errors = parse(str(integer(value)))
    assert errors == []
    assert program == Program(
        (ExpressionStatement(tok(TokenKind.INT, str(value)), integer(value)),)
    )
