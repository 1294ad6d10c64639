"""Tests for stylesheet data models and highlight groups."""

from __future__ import annotations

import pytest

from tss.colors import AnsiColor, Attribute, ColorName, NamedColor
from tss.exceptions import MissingHighlightError
from tss.highlights import Highlight, lookup_highlight
from tss.models import (
    Combinator,
    HighlightDeclaration,
    PropertiesDeclaration,
    Rule,
    SelectorChain,
    Stylesheet,
)
from tss.parser import parse_stylesheet
from tss.style import StyleProperties


class TestSelectorChain:
    """Structural invariants of selector chains."""

    def test_requires_atom(self) -> None:
        with pytest.raises(ValueError, match="at least one atom"):
            SelectorChain(())

    def test_combinator_count(self) -> None:
        with pytest.raises(ValueError, match="needs 1 combinators"):
            SelectorChain(("a", "b"))

    def test_target_is_last_atom(self) -> None:
        chain = SelectorChain(("block", "comment"), (Combinator.CHILD,))
        assert chain.target == "comment"

    def test_str(self) -> None:
        chain = SelectorChain(
            ("a", "b", "c", "d"), (Combinator.TWIN, Combinator.DESCENDANT, Combinator.SIBLING)
        )
        assert str(chain) == "a + b c ~ d"


class TestDeclarations:
    def test_empty_properties_rejected(self) -> None:
        with pytest.raises(ValueError):
            PropertiesDeclaration(StyleProperties())

    def test_properties_str(self) -> None:
        declaration = PropertiesDeclaration(
            StyleProperties(
                fg=NamedColor(ColorName.DARK_RED),
                bg=AnsiColor(17),
                attrs=Attribute.BOLD | Attribute.FRAMED,
            )
        )
        assert str(declaration) == "fg: dark-red, bg: 17, attr: bold|framed"

    def test_rule_requires_selector(self) -> None:
        with pytest.raises(ValueError):
            Rule(selectors=(), declaration=HighlightDeclaration(Highlight.STRING))

    def test_rule_str(self) -> None:
        rule = Rule(
            selectors=(SelectorChain(("a",)), SelectorChain(("b",))),
            declaration=HighlightDeclaration(Highlight.SPECIAL_CHAR),
        )
        assert str(rule) == "a, b: special-char;"


class TestStylesheet:
    """Stylesheet iteration and serialization."""

    def test_chains_in_cascade_order(self) -> None:
        stylesheet = parse_stylesheet("a, b: string; c: comment;")
        assert [(str(chain), str(decl)) for chain, decl in stylesheet.chains()] == [
            ("a", "string"),
            ("b", "string"),
            ("c", "comment"),
        ]

    def test_to_tss_reparses_equal(self) -> None:
        source = """
        # comments are dropped
        x  >  y, p q: { fg: DarkGray, bg: 0x0A };
        a~b+c: attrb: Underline|bold;
        z: tab-line;
        """
        stylesheet = parse_stylesheet(source)
        text = stylesheet.to_tss()

        assert text == (
            "x > y, p q: fg: dark-grey, bg: 10;\n"
            "a ~ b + c: attr: bold|underlined;\n"
            "z: tab-line;\n"
        )
        assert parse_stylesheet(text) == stylesheet

    def test_empty(self) -> None:
        assert Stylesheet().to_tss() == ""
        assert len(Stylesheet()) == 0


class TestHighlights:
    def test_from_name(self) -> None:
        assert Highlight.from_name("status-line") is Highlight.STATUS_LINE

    def test_from_name_exact_spelling(self) -> None:
        """Highlight names are matched exactly, without normalization."""
        with pytest.raises(ValueError, match="unknown highlight group"):
            Highlight.from_name("status_line")
        with pytest.raises(ValueError):
            Highlight.from_name("Comment")

    def test_lookup_missing(self) -> None:
        with pytest.raises(MissingHighlightError, match="'todo' not in base theme"):
            lookup_highlight({}, Highlight.TODO)

    def test_missing_highlight_is_lookup_error(self) -> None:
        with pytest.raises(LookupError):
            lookup_highlight({}, Highlight.TODO)
