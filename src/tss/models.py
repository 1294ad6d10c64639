"""Data models for parsed stylesheets."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Union

from .colors import format_attrs, format_color
from .highlights import Highlight
from .style import StyleProperties


class Combinator(str, Enum):
    """Structural relation between two adjacent selector atoms."""

    TWIN = "+"  # right atom immediately follows the left one
    SIBLING = "~"  # right atom follows the left one somewhere under the same parent
    CHILD = ">"  # right atom is a direct child of the left one
    DESCENDANT = " "  # right atom is nested anywhere below the left one


@dataclass(frozen=True, slots=True)
class SelectorChain:
    """Node-kind atoms joined left to right by combinators.

    ``combinators[i]`` joins ``atoms[i]`` and ``atoms[i + 1]``. The chain
    targets nodes whose kind is the last atom.
    """

    atoms: tuple[str, ...]
    combinators: tuple[Combinator, ...] = ()

    def __post_init__(self) -> None:
        if not self.atoms:
            raise ValueError("selector chain needs at least one atom")
        if len(self.combinators) != len(self.atoms) - 1:
            raise ValueError(
                f"selector chain with {len(self.atoms)} atoms needs "
                f"{len(self.atoms) - 1} combinators, got {len(self.combinators)}"
            )

    @property
    def target(self) -> str:
        """Kind of the nodes this chain can match."""
        return self.atoms[-1]

    def __str__(self) -> str:
        parts = [self.atoms[0]]
        for combinator, atom in zip(self.combinators, self.atoms[1:]):
            if combinator is Combinator.DESCENDANT:
                parts.append(f" {atom}")
            else:
                parts.append(f" {combinator.value} {atom}")
        return "".join(parts)


@dataclass(frozen=True, slots=True)
class HighlightDeclaration:
    """Declaration that borrows a style from the base theme."""

    name: Highlight

    def __str__(self) -> str:
        return self.name.value


@dataclass(frozen=True, slots=True)
class PropertiesDeclaration:
    """Declaration with explicit fg/bg/attr properties."""

    properties: StyleProperties

    def __post_init__(self) -> None:
        if self.properties.is_empty():
            raise ValueError("properties declaration needs at least one property")

    def __str__(self) -> str:
        parts: list[str] = []
        if self.properties.fg is not None:
            parts.append(f"fg: {format_color(self.properties.fg)}")
        if self.properties.bg is not None:
            parts.append(f"bg: {format_color(self.properties.bg)}")
        if self.properties.attrs is not None:
            parts.append(f"attr: {format_attrs(self.properties.attrs)}")
        return ", ".join(parts)


Declaration = Union[HighlightDeclaration, PropertiesDeclaration]


@dataclass(frozen=True, slots=True)
class Rule:
    """One or more selector chains sharing a declaration."""

    selectors: tuple[SelectorChain, ...]
    declaration: Declaration

    def __post_init__(self) -> None:
        if not self.selectors:
            raise ValueError("rule needs at least one selector")

    def __str__(self) -> str:
        selectors = ", ".join(str(chain) for chain in self.selectors)
        return f"{selectors}: {self.declaration};"


@dataclass(frozen=True, slots=True)
class Stylesheet:
    """Rules in file order. Later rules win when they set the same color."""

    rules: tuple[Rule, ...] = ()

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    def chains(self) -> Iterator[tuple[SelectorChain, Declaration]]:
        """Yield every selector chain with its declaration, in cascade order."""
        for rule in self.rules:
            for chain in rule.selectors:
                yield chain, rule.declaration

    def to_tss(self) -> str:
        """Serialize back to tss source text that parses to an equal stylesheet."""
        return "".join(f"{rule}\n" for rule in self.rules)


EMPTY_STYLESHEET = Stylesheet()
