"""tss - stylesheet compiler and style resolution for syntax trees."""

from tss.cache import StyleCache
from tss.cascade import matching_rules, resolve, resolve_tree
from tss.colors import (
    AnsiColor,
    Attribute,
    Color,
    ColorName,
    NamedColor,
    RgbColor,
    parse_attrs,
    parse_color,
)
from tss.exceptions import (
    MissingHighlightError,
    ParseError,
    ParseErrorKind,
    ThemeError,
    TreeError,
    TssError,
)
from tss.highlights import Highlight, HighlightTable
from tss.matcher import matches
from tss.models import (
    Combinator,
    Declaration,
    HighlightDeclaration,
    PropertiesDeclaration,
    Rule,
    SelectorChain,
    Stylesheet,
)
from tss.parser import StylesheetParser, parse_stylesheet
from tss.style import ResolvedStyle, StyleProperties, merge
from tss.tree import NodeRef, SimpleNode, TreeSitterNode, build_tree

__version__ = "0.1.0"

__all__ = [
    "AnsiColor",
    "Attribute",
    "Color",
    "ColorName",
    "Combinator",
    "Declaration",
    "Highlight",
    "HighlightDeclaration",
    "HighlightTable",
    "MissingHighlightError",
    "NamedColor",
    "NodeRef",
    "ParseError",
    "ParseErrorKind",
    "PropertiesDeclaration",
    "ResolvedStyle",
    "RgbColor",
    "Rule",
    "SelectorChain",
    "SimpleNode",
    "StyleCache",
    "StyleProperties",
    "Stylesheet",
    "StylesheetParser",
    "ThemeError",
    "TreeError",
    "TreeSitterNode",
    "TssError",
    "build_tree",
    "matches",
    "matching_rules",
    "merge",
    "parse_attrs",
    "parse_color",
    "parse_stylesheet",
    "resolve",
    "resolve_tree",
]
