"""
Token kinds, keyword/operator lookup and operator precedence for Monkey.

Exports:
    TokenKind: Closed enumeration of every token type the lexer can produce.
    token_hashmap: Literal text -> TokenKind for keywords and operators.
    operator_tokens: Token kinds that may appear as infix operators.
    Precedence: Binding power levels, lowest to highest.
    PRECEDENCES: Infix-capable token kind -> Precedence.
    lookup_ident(): Keyword lookup for identifier-shaped text.
    precedence_of(): Binding power of a token kind.
"""

from enum import Enum, IntEnum
from types import MappingProxyType
from typing import Mapping


class TokenKind(str, Enum):
    ILLEGAL = "ILLEGAL"
    EOF = "EOF"

    # Identifiers and literals
    IDENT = "IDENT"
    INT = "INT"
    STRING = "STRING"

    # Operators
    ASSIGN = "="
    PLUS = "+"
    MINUS = "-"
    BANG = "!"
    ASTERISK = "*"
    SLASH = "/"
    LT = "<"
    GT = ">"
    EQ = "=="
    NOT_EQ = "!="

    # Delimiters
    COMMA = ","
    SEMICOLON = ";"
    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"

    # Keywords
    FUNCTION = "FUNCTION"
    LET = "LET"
    TRUE = "TRUE"
    FALSE = "FALSE"
    IF = "IF"
    ELSE = "ELSE"
    RETURN = "RETURN"

    def __str__(self) -> str:
        return self.value


keywords: Mapping[str, TokenKind] = MappingProxyType(
    {
        "fn": TokenKind.FUNCTION,
        "let": TokenKind.LET,
        "true": TokenKind.TRUE,
        "false": TokenKind.FALSE,
        "if": TokenKind.IF,
        "else": TokenKind.ELSE,
        "return": TokenKind.RETURN,
    }
)

operator_tokens: tuple[TokenKind, ...] = (
    TokenKind.PLUS,
    TokenKind.MINUS,
    TokenKind.ASTERISK,
    TokenKind.SLASH,
    TokenKind.LT,
    TokenKind.GT,
    TokenKind.EQ,
    TokenKind.NOT_EQ,
)

_symbols = (
    TokenKind.ASSIGN,
    TokenKind.BANG,
    TokenKind.COMMA,
    TokenKind.SEMICOLON,
    TokenKind.LPAREN,
    TokenKind.RPAREN,
    TokenKind.LBRACE,
    TokenKind.RBRACE,
) + operator_tokens

token_hashmap: Mapping[str, TokenKind] = MappingProxyType(
    {**{kind.value: kind for kind in _symbols}, **keywords}
)


def lookup_ident(ident: str) -> TokenKind:
    """Return the keyword kind for `ident`, or IDENT when it is not reserved."""
    return keywords.get(ident, TokenKind.IDENT)


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2  # == !=
    LESSGREATER = 3  # < >
    SUM = 4  # + -
    PRODUCT = 5  # * /
    PREFIX = 6  # -x !x
    CALL = 7  # f(x)


PRECEDENCES: Mapping[TokenKind, Precedence] = MappingProxyType(
    {
        TokenKind.EQ: Precedence.EQUALS,
        TokenKind.NOT_EQ: Precedence.EQUALS,
        TokenKind.LT: Precedence.LESSGREATER,
        TokenKind.GT: Precedence.LESSGREATER,
        TokenKind.PLUS: Precedence.SUM,
        TokenKind.MINUS: Precedence.SUM,
        TokenKind.ASTERISK: Precedence.PRODUCT,
        TokenKind.SLASH: Precedence.PRODUCT,
        TokenKind.LPAREN: Precedence.CALL,
    }
)


def precedence_of(kind: TokenKind) -> Precedence:
    return PRECEDENCES.get(kind, Precedence.LOWEST)


__all__ = [
    "PRECEDENCES",
    "Precedence",
    "TokenKind",
    "keywords",
    "lookup_ident",
    "operator_tokens",
    "precedence_of",
    "token_hashmap",
]
