"""
Monkey Language Parser

Turns a Monkey token stream into a precedence-correct abstract syntax tree.

Statements are parsed by recursive descent; expressions by operator-precedence
("Pratt") parsing. Every token kind that can begin an expression registers a
prefix routine, every kind that can continue one registers an infix routine, and
a single loop in `parse_expression()` uses the binding powers from
`monkey_constants.PRECEDENCES` to decide how far to extend the left-hand side.
That loop alone produces both precedence (`a + b * c` -> `(a + (b * c))`) and
left-associativity (`a - b - c` -> `((a - b) - c)`).

Supported Constructs
--------------------
- Statements: `let x = <expr>;`, `return <expr>;`, `{ ... }` blocks, bare expressions
- Expressions:
    * identifiers, integer / boolean / string literals
    * prefix `!` and `-`
    * infix `+ - * / < > == !=`
    * grouping with `( ... )`
    * `if (<cond>) { ... } else { ... }`
    * function literals `fn(x, y) { ... }`
    * calls `callee(arg, ...)`, including inside arithmetic

Parser Behavior
---------------
- Best-effort: malformed input never raises. Each failed expectation appends a
  message to `Parser.errors` and the routine returns None; callers drop the
  incomplete node and parsing continues with the next token, so one pass can
  report several independent errors.
- Blocks consume their own closing `}`; `if` looks at the peek token for `else`.
- Callers must check `errors` before using the returned Program.

Entry Points
------------
- `Parser(tokens).parse_program()`: parse a token iterable (e.g. a `Lexer`).
- `parse(source)`: lex and parse a source string, returning `(program, errors)`.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from types import MappingProxyType
from typing import Mapping

from monkey.monkey_ast import (
    BlockStatement,
    BooleanLiteral,
    CallExpression,
    Expression,
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
    Statement,
    StringLiteral,
)
from monkey.monkey_constants import Precedence, TokenKind, operator_tokens, precedence_of
from monkey.monkey_lexer import CharacterStream, Lexer, Token

PrefixParseFn = Callable[[], "Expression | None"]
InfixParseFn = Callable[["Expression"], "Expression | None"]

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class Parser:
    """
    Monkey Parser Class

    Pulls tokens one at a time from any iterable of `Token` objects and builds a
    `Program`. The source is read lazily; once it is exhausted the parser sees an
    endless run of EOF tokens.

    Attributes
    ----------
    cur_token : Token
        The token under examination.
    peek_token : Token
        One token of lookahead.
    errors : list[str]
        Syntax errors in the order they were found.
    prefix_parse_fns : Mapping[TokenKind, PrefixParseFn]
        Routines for tokens that can begin an expression.
    infix_parse_fns : Mapping[TokenKind, InfixParseFn]
        Routines for tokens that can continue an expression, given its left-hand side.

    Methods
    -------
    parse_program() -> Program
        Parse every statement up to EOF.
    parse_statement() -> Statement | None
        Parse the statement starting at `cur_token`.
    parse_expression(precedence) -> Expression | None
        Parse an expression binding no looser than `precedence`.
    """

    def __init__(self, tokens: Iterable[Token]) -> None:
        self._tokens: Iterator[Token] = iter(tokens)
        self._last_token: Token = Token(TokenKind.EOF, "")
        self.errors: list[str] = []

        self.prefix_parse_fns: Mapping[TokenKind, PrefixParseFn] = MappingProxyType(
            {
                TokenKind.IDENT: self.parse_identifier,
                TokenKind.INT: self.parse_integer_literal,
                TokenKind.STRING: self.parse_string_literal,
                TokenKind.TRUE: self.parse_boolean_literal,
                TokenKind.FALSE: self.parse_boolean_literal,
                TokenKind.BANG: self.parse_prefix_expression,
                TokenKind.MINUS: self.parse_prefix_expression,
                TokenKind.LPAREN: self.parse_grouped_expression,
                TokenKind.IF: self.parse_if_expression,
                TokenKind.FUNCTION: self.parse_function_literal,
            }
        )

        infix: dict[TokenKind, InfixParseFn] = {
            op: self.parse_infix_expression for op in operator_tokens
        }
        infix[TokenKind.LPAREN] = self.parse_call_expression
        self.infix_parse_fns: Mapping[TokenKind, InfixParseFn] = MappingProxyType(infix)

        # Fill cur_token and peek_token
        self.cur_token: Token = self._pull()
        self.peek_token: Token = self._pull()

    # Cursor helpers

    def _pull(self) -> Token:
        tok = next(self._tokens, None)
        if tok is None:
            # Synthesize EOF at the last known position
            last = self._last_token
            return Token(TokenKind.EOF, "", last.line, last.col)
        self._last_token = tok
        return tok

    def next_token(self) -> None:
        self.cur_token = self.peek_token
        self.peek_token = self._pull()

    def cur_token_is(self, kind: TokenKind) -> bool:
        return self.cur_token.type == kind

    def peek_token_is(self, kind: TokenKind) -> bool:
        return self.peek_token.type == kind

    def expect_peek(self, kind: TokenKind) -> bool:
        """Advance if the peek token is `kind`; otherwise record an error and stay put."""
        if self.peek_token_is(kind):
            self.next_token()
            return True
        self.peek_error(kind)
        return False

    def peek_precedence(self) -> Precedence:
        return precedence_of(self.peek_token.type)

    def cur_precedence(self) -> Precedence:
        return precedence_of(self.cur_token.type)

    # Error channel

    def _error(self, msg: str, tok: Token) -> None:
        self.errors.append(f"{msg} at line {tok.line}, col {tok.col}")

    def peek_error(self, kind: TokenKind) -> None:
        tok = self.peek_token
        self._error(
            f"expected next token to be {kind.value}, got {tok.type.value} instead", tok
        )

    def no_prefix_parse_fn_error(self, tok: Token) -> None:
        self._error(f"no prefix parse function for {tok.type.value} found", tok)

    # Statements

    def parse_program(self) -> Program:
        """Parse all statements until EOF."""
        statements: list[Statement] = []
        while not self.cur_token_is(TokenKind.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
            self.next_token()
        return Program(tuple(statements))

    def parse_statement(self) -> Statement | None:
        kind = self.cur_token.type
        if kind == TokenKind.LET:
            return self.parse_let_statement()
        if kind == TokenKind.RETURN:
            return self.parse_return_statement()
        if kind == TokenKind.LBRACE:
            block = self.parse_block_statement()
            if self.peek_token_is(TokenKind.SEMICOLON):
                self.next_token()
            return block
        return self.parse_expression_statement()

    def parse_let_statement(self) -> LetStatement | None:
        tok = self.cur_token

        if not self.expect_peek(TokenKind.IDENT):
            return None
        name = Identifier(self.cur_token, self.cur_token.literal)

        if not self.expect_peek(TokenKind.ASSIGN):
            return None

        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if self.peek_token_is(TokenKind.SEMICOLON):
            self.next_token()
        if value is None:
            return None

        return LetStatement(tok, name, value)

    def parse_return_statement(self) -> ReturnStatement | None:
        tok = self.cur_token
        self.next_token()

        value = self.parse_expression(Precedence.LOWEST)
        if self.peek_token_is(TokenKind.SEMICOLON):
            self.next_token()
        if value is None:
            return None

        return ReturnStatement(tok, value)

    def parse_expression_statement(self) -> ExpressionStatement | None:
        tok = self.cur_token
        expression = self.parse_expression(Precedence.LOWEST)
        if self.peek_token_is(TokenKind.SEMICOLON):
            self.next_token()
        if expression is None:
            return None

        return ExpressionStatement(tok, expression)

    def parse_block_statement(self) -> BlockStatement | None:
        """Parse `{ ... }` starting at the `{`; leaves `cur_token` on the closing `}`."""
        tok = self.cur_token
        statements: list[Statement] = []
        self.next_token()

        while not self.cur_token_is(TokenKind.RBRACE):
            if self.cur_token_is(TokenKind.EOF):
                self._error("expected '}' to close block, got EOF", self.cur_token)
                return None
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
            self.next_token()

        return BlockStatement(tok, tuple(statements))

    # Expressions

    def parse_expression(self, precedence: Precedence) -> Expression | None:
        prefix = self.prefix_parse_fns.get(self.cur_token.type)
        if prefix is None:
            self.no_prefix_parse_fn_error(self.cur_token)
            return None
        left = prefix()

        while (
            left is not None
            and not self.peek_token_is(TokenKind.SEMICOLON)
            and precedence < self.peek_precedence()
        ):
            infix = self.infix_parse_fns.get(self.peek_token.type)
            if infix is None:
                return left
            self.next_token()
            left = infix(left)

        return left

    def parse_identifier(self) -> Expression | None:
        return Identifier(self.cur_token, self.cur_token.literal)

    def parse_integer_literal(self) -> Expression | None:
        tok = self.cur_token
        try:
            value = int(tok.literal, 0)
        except ValueError:
            value = None
        if value is None or not INT64_MIN <= value <= INT64_MAX:
            self._error(f"could not parse {tok.literal!r} as integer", tok)
            return None
        return IntegerLiteral(tok, value)

    def parse_boolean_literal(self) -> Expression | None:
        tok = self.cur_token
        if tok.literal not in ("true", "false"):
            self._error(f"could not parse {tok.literal!r} as boolean", tok)
            return None
        return BooleanLiteral(tok, tok.literal == "true")

    def parse_string_literal(self) -> Expression | None:
        return StringLiteral(self.cur_token, self.cur_token.literal)

    def parse_prefix_expression(self) -> Expression | None:
        tok = self.cur_token
        self.next_token()
        right = self.parse_expression(Precedence.PREFIX)
        if right is None:
            return None
        return PrefixExpression(tok, tok.literal, right)

    def parse_infix_expression(self, left: Expression) -> Expression | None:
        tok = self.cur_token
        precedence = self.cur_precedence()
        self.next_token()
        right = self.parse_expression(precedence)
        if right is None:
            return None
        return InfixExpression(tok, left, tok.literal, right)

    def parse_grouped_expression(self) -> Expression | None:
        self.next_token()
        expression = self.parse_expression(Precedence.LOWEST)
        if expression is None:
            return None
        if not self.expect_peek(TokenKind.RPAREN):
            return None
        return expression

    def parse_if_expression(self) -> Expression | None:
        tok = self.cur_token

        if not self.expect_peek(TokenKind.LPAREN):
            return None
        self.next_token()
        condition = self.parse_expression(Precedence.LOWEST)
        if condition is None:
            return None
        if not self.expect_peek(TokenKind.RPAREN):
            return None

        if not self.expect_peek(TokenKind.LBRACE):
            return None
        consequence = self.parse_block_statement()
        if consequence is None:
            return None

        alternative: BlockStatement | None = None
        if self.peek_token_is(TokenKind.ELSE):
            self.next_token()
            if not self.expect_peek(TokenKind.LBRACE):
                return None
            alternative = self.parse_block_statement()
            if alternative is None:
                return None

        return IfExpression(tok, condition, consequence, alternative)

    def parse_function_literal(self) -> Expression | None:
        tok = self.cur_token

        if not self.expect_peek(TokenKind.LPAREN):
            return None
        parameters = self.parse_function_parameters()
        if parameters is None:
            return None

        if not self.expect_peek(TokenKind.LBRACE):
            return None
        body = self.parse_block_statement()
        if body is None:
            return None

        return FunctionLiteral(tok, parameters, body)

    def parse_function_parameters(self) -> tuple[Identifier, ...] | None:
        """Parse `(a, b, ...)` starting at the `(`; leaves `cur_token` on the `)`."""
        if self.peek_token_is(TokenKind.RPAREN):
            self.next_token()
            return ()

        params: list[Identifier] = []
        if not self.expect_peek(TokenKind.IDENT):
            return None
        params.append(Identifier(self.cur_token, self.cur_token.literal))

        while self.peek_token_is(TokenKind.COMMA):
            self.next_token()
            if not self.expect_peek(TokenKind.IDENT):
                return None
            params.append(Identifier(self.cur_token, self.cur_token.literal))

        if not self.expect_peek(TokenKind.RPAREN):
            return None
        return tuple(params)

    def parse_call_expression(self, function: Expression) -> Expression | None:
        tok = self.cur_token
        arguments = self.parse_call_arguments()
        if arguments is None:
            return None
        return CallExpression(tok, function, arguments)

    def parse_call_arguments(self) -> tuple[Expression, ...] | None:
        """Parse `(x, y + 1, ...)` starting at the `(`; leaves `cur_token` on the `)`."""
        if self.peek_token_is(TokenKind.RPAREN):
            self.next_token()
            return ()

        args: list[Expression] = []
        self.next_token()
        arg = self.parse_expression(Precedence.LOWEST)
        if arg is None:
            return None
        args.append(arg)

        while self.peek_token_is(TokenKind.COMMA):
            self.next_token()
            self.next_token()
            arg = self.parse_expression(Precedence.LOWEST)
            if arg is None:
                return None
            args.append(arg)

        if not self.expect_peek(TokenKind.RPAREN):
            return None
        return tuple(args)


def parse(source: str) -> tuple[Program, list[str]]:
    """Lex and parse `source`, returning the program and the list of syntax errors."""
    parser = Parser(Lexer(CharacterStream(source)))
    program = parser.parse_program()
    return program, parser.errors


__all__ = ["INT64_MAX", "INT64_MIN", "Parser", "parse"]
