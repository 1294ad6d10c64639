"""Semantic highlight groups referenced by ``selector: group;`` rules."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum

from .exceptions import MissingHighlightError
from .style import StyleProperties


class Highlight(str, Enum):
    """Closed set of highlight-group names.

    The value is the spelling used in stylesheets and base theme files.
    """

    CANVAS = "canvas"
    COMMENT = "comment"
    CONSTANT = "constant"
    STRING = "string"
    ESCAPE_SEQ = "escape-seq"
    CHAR = "char"
    NUMBER = "number"
    BOOLEAN = "boolean"
    FLOAT = "float"
    IDENTIFIER = "identifier"
    FUNCTION = "function"
    STATEMENT = "statement"
    CONDITIONAL = "conditional"
    REPEAT = "repeat"
    LABEL = "label"
    OPERATOR = "operator"
    KEYWORD = "keyword"
    EXCEPTION = "exception"
    PREPROCESSOR = "preprocessor"
    INCLUDE = "include"
    DEFINE = "define"
    MACRO = "macro"
    PRECONDIT = "precondit"
    TYPE = "type"
    STORAGE_CLASS = "storage-class"
    STRUCTURE = "structure"
    TYPEDEF = "typedef"
    SPECIAL = "special"
    SPECIAL_CHAR = "special-char"
    TAG = "tag"
    DELIMITER = "delimiter"
    SPECIAL_COMMENT = "special-comment"
    DEBUG = "debug"
    UNDERLINED = "underlined"
    IGNORE = "ignore"
    ERROR = "error"
    TODO = "todo"
    LINE_NR = "line-nr"
    PROMPT = "prompt"
    STATUS_LINE = "status-line"
    TAB_LINE = "tab-line"
    TAB_OPTION = "tab-option"
    TAB_SELECT = "tab-select"

    @classmethod
    def from_name(cls, name: str) -> Highlight:
        """Look up a group by its stylesheet spelling.

        Raises:
            ValueError: If the name is not a highlight group
        """
        try:
            return cls(name)
        except ValueError:
            raise ValueError(f"unknown highlight group {name!r}") from None


# Base theme: highlight group -> concrete style, supplied by the host
HighlightTable = Mapping[Highlight, StyleProperties]


def lookup_highlight(table: HighlightTable, name: Highlight) -> StyleProperties:
    """Return the base theme entry for a highlight group.

    Raises:
        MissingHighlightError: If the table has no entry for the group
    """
    try:
        return table[name]
    except KeyError:
        raise MissingHighlightError(f"highlight group {name.value!r} not in base theme") from None
