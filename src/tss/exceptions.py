"""Custom exceptions for tss."""

from __future__ import annotations

from enum import Enum


class TssError(Exception):
    """Base exception for all tss errors."""

    pass


class ParseErrorKind(str, Enum):
    """Category of a stylesheet parse failure."""

    UNEXPECTED_TOKEN = "unexpected-token"
    UNTERMINATED_RULE = "unterminated-rule"
    UNKNOWN_HIGHLIGHT_NAME = "unknown-highlight-name"
    INVALID_COLOR_LITERAL = "invalid-color-literal"
    INVALID_ATTRIBUTE = "invalid-attribute"
    DUPLICATE_PROPERTY = "duplicate-property"


class ParseError(TssError):
    """Raised when stylesheet parsing fails.

    Attributes:
        kind: What went wrong
        offset: Byte offset into the UTF-8 encoded source
        line: 1-based line number
        column: 1-based column (in characters)
        message: Human-readable description without the position prefix
    """

    def __init__(
        self,
        kind: ParseErrorKind,
        message: str,
        *,
        offset: int = 0,
        line: int = 1,
        column: int = 1,
    ) -> None:
        super().__init__(f"{line}:{column}: {kind.value}: {message}")
        self.kind = kind
        self.message = message
        self.offset = offset
        self.line = line
        self.column = column


class MissingHighlightError(TssError, LookupError):
    """Raised when a highlight group is absent from the base theme."""

    pass


class ThemeError(TssError):
    """Raised when a base theme file is invalid."""

    pass


class TreeError(TssError):
    """Raised when a syntax tree description is invalid."""

    pass
