"""Parser for tss stylesheets.

Grammar::

    stylesheet  := hl_rule*
    hl_rule     := selectors ":" style ";"
    selectors   := selector ("," selector)*
    selector    := ATOM (combinator? ATOM)*      # no combinator: descendant
    combinator  := "+" | "~" | ">"
    style       := HIGHLIGHT | "{" props "}" | props
    props       := prop ("," prop)*
    prop        := ("fg" | "bg") ":" COLOR
                 | ("attr" | "attribute" | "attrb") ":" NAME ("|" NAME)*

Example::

    string: fg:green, attr: bold;
    function + identifier: fg:#ffcc00;
    block > comment: fg:darkgrey, attr: italic|dim;
"""

from __future__ import annotations

from pathlib import Path

from .colors import NO_ATTRIBUTES, Attribute, Color, parse_attribute, parse_color
from .exceptions import ParseError, ParseErrorKind
from .highlights import Highlight
from .lexer import Lexer, Token, TokenType
from .logger import get_logger
from .models import (
    Combinator,
    Declaration,
    HighlightDeclaration,
    PropertiesDeclaration,
    Rule,
    SelectorChain,
    Stylesheet,
)
from .style import StyleProperties

logger = get_logger()

_COMBINATORS: dict[TokenType, Combinator] = {
    TokenType.PLUS: Combinator.TWIN,
    TokenType.TILDE: Combinator.SIBLING,
    TokenType.GT: Combinator.CHILD,
}

# Lowercased property spelling -> canonical key
_PROPERTY_KEYS: dict[str, str] = {
    "fg": "fg",
    "bg": "bg",
    "attr": "attr",
    "attrb": "attr",
    "attribute": "attr",
}


class _RuleParser:
    """Recursive-descent parser over a single source string."""

    def __init__(self, source: str) -> None:
        self.lexer = Lexer(source)
        self._rule_start = 0

    def parse(self) -> Stylesheet:
        rules: list[Rule] = []
        while self.lexer.peek().type is not TokenType.EOF:
            rules.append(self._rule())
        return Stylesheet(rules=tuple(rules))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _fail(self, kind: ParseErrorKind, message: str, token: Token) -> ParseError:
        return self.lexer.error(kind, message, token.start)

    def _unterminated(self, token: Token) -> ParseError:
        line = self.lexer.source.count("\n", 0, self._rule_start) + 1
        return self._fail(
            ParseErrorKind.UNTERMINATED_RULE,
            f"end of input inside rule starting on line {line}",
            token,
        )

    def _expect(self, token_type: TokenType, what: str) -> Token:
        token = self.lexer.next()
        if token.type is token_type:
            return token
        if token.type is TokenType.EOF:
            raise self._unterminated(token)
        raise self._fail(
            ParseErrorKind.UNEXPECTED_TOKEN, f"expected {what}, found {token.describe()}", token
        )

    # ------------------------------------------------------------------
    # Rules and selectors
    # ------------------------------------------------------------------

    def _rule(self) -> Rule:
        self._rule_start = self.lexer.peek().start
        selectors = [self._selector()]
        while self.lexer.peek().type is TokenType.COMMA:
            self.lexer.next()
            selectors.append(self._selector())
        self._expect(TokenType.COLON, "',', a combinator or ':' after selector")
        declaration = self._declaration()
        self._expect(TokenType.SEMICOLON, "';' at end of rule")
        return Rule(selectors=tuple(selectors), declaration=declaration)

    def _selector(self) -> SelectorChain:
        atoms = [self._expect(TokenType.IDENT, "node kind").text]
        combinators: list[Combinator] = []
        while True:
            token = self.lexer.peek()
            combinator = _COMBINATORS.get(token.type)
            if combinator is not None:
                self.lexer.next()
            elif token.type is TokenType.IDENT:
                combinator = Combinator.DESCENDANT
            else:
                break
            combinators.append(combinator)
            atoms.append(self._expect(TokenType.IDENT, "node kind").text)
        return SelectorChain(atoms=tuple(atoms), combinators=tuple(combinators))

    # ------------------------------------------------------------------
    # Declarations
    # ------------------------------------------------------------------

    def _declaration(self) -> Declaration:
        token = self.lexer.peek()
        if token.type is TokenType.LBRACE:
            self.lexer.next()
            declaration = self._properties()
            self._expect(TokenType.RBRACE, "',' or '}' after property")
            return declaration
        if token.type is TokenType.IDENT and token.text.lower() in _PROPERTY_KEYS:
            return self._properties()

        token = self._expect(TokenType.IDENT, "highlight group or properties")
        try:
            name = Highlight.from_name(token.text)
        except ValueError as e:
            raise self._fail(ParseErrorKind.UNKNOWN_HIGHLIGHT_NAME, str(e), token) from e
        return HighlightDeclaration(name=name)

    def _properties(self) -> PropertiesDeclaration:
        seen: set[str] = set()
        fg: Color | None = None
        bg: Color | None = None
        attrs: Attribute | None = None
        while True:
            key_token = self._expect(TokenType.IDENT, "property name")
            key = _PROPERTY_KEYS.get(key_token.text.lower())
            if key is None:
                raise self._fail(
                    ParseErrorKind.UNEXPECTED_TOKEN,
                    f"unknown property {key_token.text!r} (expected fg, bg or attr)",
                    key_token,
                )
            if key in seen:
                raise self._fail(
                    ParseErrorKind.DUPLICATE_PROPERTY,
                    f"property {key!r} given more than once",
                    key_token,
                )
            seen.add(key)
            self._expect(TokenType.COLON, f"':' after {key_token.text!r}")

            if key == "fg":
                fg = self._color()
            elif key == "bg":
                bg = self._color()
            else:
                attrs = self._attrs()

            if self.lexer.peek().type is not TokenType.COMMA:
                break
            self.lexer.next()

        return PropertiesDeclaration(StyleProperties(fg=fg, bg=bg, attrs=attrs))

    def _color(self) -> Color:
        token = self.lexer.read_color()
        if token.type is TokenType.EOF:
            raise self._unterminated(token)
        if not token.text:
            found = self.lexer.peek()
            raise self._fail(
                ParseErrorKind.UNEXPECTED_TOKEN, f"expected color, found {found.describe()}", found
            )
        try:
            return parse_color(token.text)
        except ValueError as e:
            raise self._fail(ParseErrorKind.INVALID_COLOR_LITERAL, str(e), token) from e

    def _attrs(self) -> Attribute:
        attrs = NO_ATTRIBUTES
        while True:
            token = self._expect(TokenType.IDENT, "attribute name")
            try:
                flag = parse_attribute(token.text)
            except ValueError as e:
                raise self._fail(ParseErrorKind.INVALID_ATTRIBUTE, str(e), token) from e
            if flag & attrs:
                raise self._fail(
                    ParseErrorKind.INVALID_ATTRIBUTE, f"duplicate attribute {token.text!r}", token
                )
            attrs |= flag
            if self.lexer.peek().type is not TokenType.PIPE:
                return attrs
            self.lexer.next()


def parse_stylesheet(source: str) -> Stylesheet:
    """Parse tss source text into a Stylesheet.

    Parsing is all-or-nothing: the first error aborts the whole stylesheet.

    Raises:
        ParseError: With kind and source position of the first problem
    """
    stylesheet = _RuleParser(source).parse()
    logger.checks(
        f"Parsed {len(stylesheet)} rules "
        f"({sum(len(rule.selectors) for rule in stylesheet)} selectors)"
    )
    return stylesheet


class StylesheetParser:
    """Parser for tss files and strings.

    File acquisition is a convenience for tools; the engine itself only
    needs :func:`parse_stylesheet`.
    """

    def parse_string(self, source: str) -> Stylesheet:
        """Parse stylesheet text."""
        return parse_stylesheet(source)

    def parse_file(self, file_path: Path | str) -> Stylesheet:
        """Parse a UTF-8 encoded stylesheet file."""
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        try:
            source = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise ParseError(
                ParseErrorKind.UNEXPECTED_TOKEN, f"stylesheet is not valid UTF-8: {e}"
            ) from e

        logger.changes(f"Loading stylesheet {path}")
        return parse_stylesheet(source)
