"""
Lexical analyzer for the Monkey programming language.

This module turns raw source text into the token stream consumed by the parser:

Classes:
    CharacterStream: Stream abstraction for reading characters with line/column tracking.
    Token: A single token with kind, literal text, and source location.
    Lexer: Converts a CharacterStream into a sequence of tokens, one at a time.

Features:
    - Skips whitespace and single-line comments (`#`)
    - Longest-match recognition of operators (`==` before `=`)
    - Recognizes:
        * Identifiers and keywords (`fn`, `let`, `if`, `else`, `return`, `true`, `false`)
        * Integer literals, including base-prefixed text such as `0x1F`
        * Double-quoted strings
        * Operators and delimiters
    - Never raises on bad input: unknown characters and unterminated strings
      become ILLEGAL tokens for the parser to report.

Example:
    >>> lexer = Lexer(CharacterStream("let x = 5;"))
    >>> lexer.next_token()
    Token(LET, 'let')

Exports:
    - CharacterStream
    - Token
    - Lexer
    - tokenize
"""

from collections.abc import Iterator
from typing import Any

from monkey.monkey_constants import TokenKind, lookup_ident, token_hashmap

_MAX_OPERATOR_LEN = max(len(k) for k, v in token_hashmap.items() if not k.isalpha())


class CharacterStream:
    """
    A utility for reading characters from a string source with line and column tracking.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Raises:
            EOFError: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise EOFError(
                f"Attempted to read past end of source at position={self.position}, line={self.line}"
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """Returns the character `offset` places ahead, or "" when out of bounds."""
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class Token:
    """Represents a single lexical token.

    Attributes:
        type (TokenKind): The token kind (e.g. IDENT, INT, EOF).
        literal (str): The source text of the token.
        line (int): The 1-based line number where the token starts (0 if synthetic).
        col (int): The 1-based column number where the token starts (0 if synthetic).
    """

    def __init__(self, type_: TokenKind, literal: str, line: int = 0, col: int = 0):
        self.type = type_
        self.literal = literal
        self.line = line
        self.col = col

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.literal!r})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.type == other.type
            and self.literal == other.literal
            and self.line == other.line
            and self.col == other.col
        )

    def __hash__(self) -> int:
        return hash((self.type, self.literal, self.line, self.col))


class Lexer:
    """Lexical analyzer for Monkey source.

    Tokens are produced on demand by `next_token()`. Iterating a Lexer yields
    every token up to and including the final EOF token, which lets it be handed
    straight to the parser as a token source.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream

    def __iter__(self) -> Iterator[Token]:
        while True:
            tok = self.next_token()
            yield tok
            if tok.type == TokenKind.EOF:
                return

    def peek(self) -> str:
        return self.stream.peek()

    def advance(self) -> str:
        return self.stream.next()

    def skip_whitespace(self) -> None:
        """Skips all whitespace and comments in the stream."""
        while not self.stream.end_of_file():
            if self.peek() in " \t\r\n":
                self.advance()
            elif self.peek() == "#":
                self.skip_comment()
            else:
                break

    def skip_comment(self) -> None:
        while not self.stream.end_of_file() and self.peek() != "\n":
            self.advance()

    def match_operator(self) -> Token | None:
        """Matches the longest operator or delimiter at the current position.

        Returns:
            Token | None: A Token if a match is found, otherwise None.
        """
        line, col = self.stream.line, self.stream.column
        max_token = None
        candidate = ""

        for i in range(_MAX_OPERATOR_LEN):
            ch = self.stream.peek(i)
            if ch == "":
                break
            candidate += ch
            if candidate in token_hashmap:
                max_token = candidate

        if max_token:
            for _ in range(len(max_token)):
                self.advance()
            return Token(token_hashmap[max_token], max_token, line, col)

        return None

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream.

        Once the source is exhausted every further call returns an EOF token.
        """
        self.skip_whitespace()

        if self.stream.end_of_file():
            return Token(TokenKind.EOF, "", self.stream.line, self.stream.column)

        ch = self.peek()
        line, col = self.stream.line, self.stream.column

        # 1. Identifier or keyword
        if ch.isalpha() or ch == "_":
            ident = ""
            while not self.stream.end_of_file() and (
                self.peek().isalnum() or self.peek() == "_"
            ):
                ident += self.advance()
            return Token(lookup_ident(ident), ident, line, col)

        # 2. Integer; base prefixes and malformed digits stay in one token
        if ch.isdigit():
            num = ""
            while not self.stream.end_of_file() and (
                self.peek().isalnum() or self.peek() == "_"
            ):
                num += self.advance()
            return Token(TokenKind.INT, num, line, col)

        # 3. String
        if ch == '"':
            self.advance()
            val = ""
            while not self.stream.end_of_file() and self.peek() != '"':
                val += self.advance()
            if self.stream.end_of_file():
                return Token(TokenKind.ILLEGAL, '"' + val, line, col)
            self.advance()
            return Token(TokenKind.STRING, val, line, col)

        # 4. Operator or delimiter
        token = self.match_operator()
        if token:
            return token

        # 5. Unknown character
        return Token(TokenKind.ILLEGAL, self.advance(), line, col)


def tokenize(source: str) -> list[Token]:
    """Lex `source` completely, returning every token including the trailing EOF."""
    return list(Lexer(CharacterStream(source)))


__all__ = ["CharacterStream", "Lexer", "Token", "tokenize"]
