"""Scanner for tss stylesheet source text."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from .exceptions import ParseError, ParseErrorKind

_IDENT_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_-]*")
# A color value: optional '#', then a run of word characters
_COLOR_RE = re.compile(r"#?[A-Za-z0-9_-]*")
_WHITESPACE = " \t\r\n\f\v"


class TokenType(str, Enum):
    """Token categories produced by the scanner."""

    IDENT = "identifier"
    COLOR = "color"
    COLON = "':'"
    SEMICOLON = "';'"
    COMMA = "','"
    PLUS = "'+'"
    TILDE = "'~'"
    GT = "'>'"
    PIPE = "'|'"
    LBRACE = "'{'"
    RBRACE = "'}'"
    EOF = "end of input"


_PUNCTUATION: dict[str, TokenType] = {
    ":": TokenType.COLON,
    ";": TokenType.SEMICOLON,
    ",": TokenType.COMMA,
    "+": TokenType.PLUS,
    "~": TokenType.TILDE,
    ">": TokenType.GT,
    "|": TokenType.PIPE,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
}


@dataclass(frozen=True, slots=True)
class Token:
    """A lexical token; ``start`` is a character index into the source."""

    type: TokenType
    text: str
    start: int

    def describe(self) -> str:
        """Short description for error messages."""
        if self.type in (TokenType.IDENT, TokenType.COLOR):
            return f"{self.type.value} {self.text!r}"
        return self.type.value


class Lexer:
    """Produces tokens on demand with one token of lookahead.

    Whitespace and ``#`` line comments are skipped between tokens. Color
    values are scanned separately through :meth:`read_color`, because a
    ``#`` in value position starts an RGB literal rather than a comment.
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self.pos = 0
        self._peeked: Token | None = None

    def peek(self) -> Token:
        """Return the next token without consuming it."""
        if self._peeked is None:
            self._peeked = self._scan()
        return self._peeked

    def next(self) -> Token:
        """Consume and return the next token."""
        token = self.peek()
        self._peeked = None
        return token

    def read_color(self) -> Token:
        """Consume a color value token.

        Only whitespace is skipped before the value, so ``#`` here always
        begins an RGB literal. Returns an EOF token at end of input, and a
        COLOR token with empty text when the next character cannot start a
        color.
        """
        assert self._peeked is None, "read_color() called with a token already peeked"
        self._skip_whitespace()
        start = self.pos
        if start >= len(self.source):
            return Token(TokenType.EOF, "", start)
        match = _COLOR_RE.match(self.source, start)
        text = match.group() if match else ""
        self.pos = start + len(text)
        return Token(TokenType.COLOR, text, start)

    def error(self, kind: ParseErrorKind, message: str, pos: int) -> ParseError:
        """Build a ParseError located at a character index."""
        line = self.source.count("\n", 0, pos) + 1
        column = pos - (self.source.rfind("\n", 0, pos) + 1) + 1
        offset = len(self.source[:pos].encode("utf-8"))
        return ParseError(kind, message, offset=offset, line=line, column=column)

    def _skip_whitespace(self) -> None:
        while self.pos < len(self.source) and self.source[self.pos] in _WHITESPACE:
            self.pos += 1

    def _skip_trivia(self) -> None:
        source = self.source
        while self.pos < len(source):
            ch = source[self.pos]
            if ch in _WHITESPACE:
                self.pos += 1
            elif ch == "#":
                newline = source.find("\n", self.pos)
                self.pos = len(source) if newline == -1 else newline + 1
            else:
                break

    def _scan(self) -> Token:
        self._skip_trivia()
        start = self.pos
        if start >= len(self.source):
            return Token(TokenType.EOF, "", start)

        ch = self.source[start]
        token_type = _PUNCTUATION.get(ch)
        if token_type is not None:
            self.pos += 1
            return Token(token_type, ch, start)

        match = _IDENT_RE.match(self.source, start)
        if match:
            self.pos = match.end()
            return Token(TokenType.IDENT, match.group(), start)

        raise self.error(ParseErrorKind.UNEXPECTED_TOKEN, f"unexpected character {ch!r}", start)
