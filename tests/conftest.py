"""Pytest configuration and fixtures for tss tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from tss.colors import Attribute, ColorName, NamedColor, RgbColor
from tss.highlights import Highlight
from tss.logger import reset_logger
from tss.style import StyleProperties
from tss.tree import SimpleNode


@pytest.fixture(autouse=True)
def clean_logger() -> Iterator[None]:
    """Reset the tss logger before and after each test for isolation."""
    reset_logger()
    yield
    reset_logger()


@pytest.fixture
def sibling_tree() -> dict[str, SimpleNode]:
    """A parent with children [function, identifier, operator]."""
    function = SimpleNode("function")
    identifier = SimpleNode("identifier")
    operator = SimpleNode("operator")
    parent = SimpleNode("arguments", [function, identifier, operator])
    return {
        "parent": parent,
        "function": function,
        "identifier": identifier,
        "operator": operator,
    }


@pytest.fixture
def nested_tree() -> dict[str, SimpleNode]:
    """block[comment, inner[comment]] - one direct and one nested comment."""
    direct = SimpleNode("comment")
    nested = SimpleNode("comment")
    inner = SimpleNode("inner", [nested])
    block = SimpleNode("block", [direct, inner])
    return {"block": block, "direct": direct, "inner": inner, "nested": nested}


@pytest.fixture
def base_theme() -> dict[Highlight, StyleProperties]:
    """Small base theme; deliberately has no entry for 'todo'."""
    return {
        Highlight.STRING: StyleProperties(fg=NamedColor(ColorName.GREEN)),
        Highlight.COMMENT: StyleProperties(
            fg=NamedColor(ColorName.DARK_GREY), attrs=Attribute.ITALIC
        ),
        Highlight.KEYWORD: StyleProperties(fg=RgbColor(0xFF, 0x00, 0xFF), attrs=Attribute.BOLD),
    }
