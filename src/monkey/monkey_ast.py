"""
Defines the abstract syntax tree (AST) node set for the Monkey programming language.

The node set is closed: `Statement` and `Expression` are unions over the concrete
node classes below, and the evaluator handles each member explicitly.

Statements:
    LetStatement, ReturnStatement, ExpressionStatement, BlockStatement

Expressions:
    Identifier, IntegerLiteral, BooleanLiteral, StringLiteral, PrefixExpression,
    InfixExpression, IfExpression, FunctionLiteral, CallExpression

Root:
    Program

Each node:
    - is a frozen dataclass built once, bottom-up, by the parser; child sequences are tuples.
    - keeps the `token` it originated from. The token is excluded from equality, so two
      trees compare equal when their structure matches, regardless of source positions.
    - exposes a class-level `kind` string used for dispatch (e.g. "infix", "call").
    - reconstructs source text via `str(node)`. The reconstruction is fully parenthesized
      and re-parses to an equal tree.
    - converts to plain dictionaries via `to_dict()` for JSON output and debugging.

Example:
    node = InfixExpression(tok, left=Identifier(a_tok, "a"), operator="+", right=Identifier(b_tok, "b"))
    str(node)  # "(a + b)"
"""

from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, TypedDict, Union

from monkey.monkey_lexer import Token


class ASTDict(TypedDict, total=False):
    """
    Serialized form of an AST node.

    Fields:
        kind (str): Node kind (e.g. "let", "infix", "call").
        literal (str): Literal text of the originating token.
        line (int): Source line of the originating token.
        col (int): Source column of the originating token.

    The remaining keys mirror the node's own fields, with child nodes serialized
    recursively and tuples turned into lists.
    """

    kind: str
    literal: str
    line: int
    col: int
    name: "ASTDict"
    value: Any
    return_value: "ASTDict"
    expression: "ASTDict"
    statements: list["ASTDict"]
    operator: str
    left: "ASTDict"
    right: "ASTDict"
    condition: "ASTDict"
    consequence: "ASTDict"
    alternative: "ASTDict | None"
    parameters: list["ASTDict"]
    body: "ASTDict"
    function: "ASTDict"
    arguments: list["ASTDict"]


def _serialize(value: Any) -> Any:
    if isinstance(value, _NodeMixin):
        return value.to_dict()
    if isinstance(value, tuple):
        return [_serialize(v) for v in value]
    return value


class _NodeMixin:
    kind: ClassVar[str]
    token: Token

    def token_literal(self) -> str:
        return self.token.literal

    def to_dict(self) -> ASTDict:
        out: dict[str, Any] = {
            "kind": self.kind,
            "literal": self.token.literal,
            "line": self.token.line,
            "col": self.token.col,
        }
        for f in fields(self):  # type: ignore[arg-type]
            if f.name != "token":
                out[f.name] = _serialize(getattr(self, f.name))
        return out  # type: ignore[return-value]


# Expressions


@dataclass(frozen=True)
class Identifier(_NodeMixin):
    kind: ClassVar[str] = "identifier"
    token: Token = field(compare=False, repr=False)
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class IntegerLiteral(_NodeMixin):
    kind: ClassVar[str] = "integer"
    token: Token = field(compare=False, repr=False)
    value: int

    def __str__(self) -> str:
        return self.token.literal


@dataclass(frozen=True)
class BooleanLiteral(_NodeMixin):
    kind: ClassVar[str] = "boolean"
    token: Token = field(compare=False, repr=False)
    value: bool

    def __str__(self) -> str:
        return self.token.literal


@dataclass(frozen=True)
class StringLiteral(_NodeMixin):
    kind: ClassVar[str] = "string"
    token: Token = field(compare=False, repr=False)
    value: str

    def __str__(self) -> str:
        return f'"{self.value}"'


@dataclass(frozen=True)
class PrefixExpression(_NodeMixin):
    kind: ClassVar[str] = "prefix"
    token: Token = field(compare=False, repr=False)
    operator: str
    right: "Expression"

    def __str__(self) -> str:
        return f"({self.operator}{self.right})"


@dataclass(frozen=True)
class InfixExpression(_NodeMixin):
    kind: ClassVar[str] = "infix"
    token: Token = field(compare=False, repr=False)
    left: "Expression"
    operator: str
    right: "Expression"

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


@dataclass(frozen=True)
class IfExpression(_NodeMixin):
    kind: ClassVar[str] = "if"
    token: Token = field(compare=False, repr=False)
    condition: "Expression"
    consequence: "BlockStatement"
    alternative: "BlockStatement | None"

    def __str__(self) -> str:
        out = f"if ({self.condition}) {self.consequence}"
        if self.alternative is not None:
            out += f" else {self.alternative}"
        return out


@dataclass(frozen=True)
class FunctionLiteral(_NodeMixin):
    """An unevaluated function template: ordered parameters plus a body block."""

    kind: ClassVar[str] = "function"
    token: Token = field(compare=False, repr=False)
    parameters: tuple[Identifier, ...]
    body: "BlockStatement"

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        return f"{self.token.literal}({params}) {self.body}"


@dataclass(frozen=True)
class CallExpression(_NodeMixin):
    kind: ClassVar[str] = "call"
    token: Token = field(compare=False, repr=False)
    function: "Expression"
    arguments: tuple["Expression", ...]

    def __str__(self) -> str:
        args = ", ".join(str(a) for a in self.arguments)
        return f"{self.function}({args})"


# Statements


@dataclass(frozen=True)
class LetStatement(_NodeMixin):
    kind: ClassVar[str] = "let"
    token: Token = field(compare=False, repr=False)
    name: Identifier
    value: "Expression"

    def __str__(self) -> str:
        return f"{self.token.literal} {self.name} = {self.value}"


@dataclass(frozen=True)
class ReturnStatement(_NodeMixin):
    kind: ClassVar[str] = "return"
    token: Token = field(compare=False, repr=False)
    return_value: "Expression"

    def __str__(self) -> str:
        return f"{self.token.literal} {self.return_value}"


@dataclass(frozen=True)
class ExpressionStatement(_NodeMixin):
    kind: ClassVar[str] = "expression_statement"
    token: Token = field(compare=False, repr=False)
    expression: "Expression"

    def __str__(self) -> str:
        return str(self.expression)


@dataclass(frozen=True)
class BlockStatement(_NodeMixin):
    kind: ClassVar[str] = "block"
    token: Token = field(compare=False, repr=False)
    statements: tuple["Statement", ...]

    def __str__(self) -> str:
        if not self.statements:
            return "{ }"
        return "{ " + "; ".join(str(s) for s in self.statements) + " }"


@dataclass(frozen=True)
class Program:
    """Root of a parsed source: the ordered top-level statements."""

    kind: ClassVar[str] = "program"
    statements: tuple["Statement", ...] = ()

    def token_literal(self) -> str:
        return self.statements[0].token_literal() if self.statements else ""

    def __str__(self) -> str:
        return "; ".join(str(s) for s in self.statements)

    def to_dict(self) -> ASTDict:
        return {
            "kind": self.kind,
            "statements": [s.to_dict() for s in self.statements],
        }


Expression = Union[
    Identifier,
    IntegerLiteral,
    BooleanLiteral,
    StringLiteral,
    PrefixExpression,
    InfixExpression,
    IfExpression,
    FunctionLiteral,
    CallExpression,
]

Statement = Union[LetStatement, ReturnStatement, ExpressionStatement, BlockStatement]

Node = Union[Program, Statement, Expression]


__all__ = [
    "ASTDict",
    "BlockStatement",
    "BooleanLiteral",
    "CallExpression",
    "Expression",
    "ExpressionStatement",
    "FunctionLiteral",
    "Identifier",
    "IfExpression",
    "InfixExpression",
    "IntegerLiteral",
    "LetStatement",
    "Node",
    "PrefixExpression",
    "Program",
    "ReturnStatement",
    "Statement",
    "StringLiteral",
]
