"""Cascade resolution: combine every matching rule into one style per node."""

from __future__ import annotations

from collections.abc import Iterator

from .exceptions import MissingHighlightError
from .highlights import HighlightTable, lookup_highlight
from .logger import debug_enabled, get_logger
from .matcher import MatchMemo, matches
from .models import Declaration, HighlightDeclaration, Rule, Stylesheet
from .style import EMPTY_STYLE, ResolvedStyle, StyleProperties, merge
from .tree import NodeRef, walk

logger = get_logger()


def declaration_properties(
    declaration: Declaration, base_theme: HighlightTable
) -> StyleProperties | None:
    """Return the partial style a declaration contributes.

    Returns None when a highlight declaration names a group missing from the
    base theme; such a rule contributes nothing.
    """
    if isinstance(declaration, HighlightDeclaration):
        try:
            return lookup_highlight(base_theme, declaration.name)
        except MissingHighlightError as e:
            logger.checks(f"Skipping declaration: {e}")
            return None
    return declaration.properties


def matching_rules(
    stylesheet: Stylesheet, node: NodeRef, memo: MatchMemo | None = None
) -> list[tuple[int, Rule]]:
    """Return ``(position, rule)`` for each rule with a chain matching ``node``, in file order."""
    if memo is None:
        memo = {}
    return [
        (position, rule)
        for position, rule in enumerate(stylesheet.rules)
        if any(matches(chain, node, memo) for chain in rule.selectors)
    ]


def resolve(
    stylesheet: Stylesheet,
    node: NodeRef,
    base_theme: HighlightTable,
    memo: MatchMemo | None = None,
) -> ResolvedStyle:
    """Compute the effective style of a node.

    Rules are applied in file order; within a rule the first matching chain
    applies the declaration once. Later rules replace fg/bg set by earlier
    ones and add to their attributes. There is no specificity weighting.

    Args:
        stylesheet: Parsed stylesheet
        node: Node to style
        base_theme: Styles for highlight-group declarations
        memo: Optional match memo for a pass over many nodes

    Returns:
        The resolved style; unset colors stay None
    """
    style = EMPTY_STYLE
    for position, rule in matching_rules(stylesheet, node, memo):
        properties = declaration_properties(rule.declaration, base_theme)
        if properties is None:
            continue
        if debug_enabled():
            logger.debug(f"{node.kind()}: rule {position} '{rule}' applies")
        style = merge(style, properties)
    return style


def resolve_tree(
    stylesheet: Stylesheet, root: NodeRef, base_theme: HighlightTable
) -> Iterator[tuple[NodeRef, int, ResolvedStyle]]:
    """Resolve every node under ``root`` in pre-order.

    Yields ``(node, depth, style)``. Match results are shared across the
    pass, so the tree must not change while the iterator is consumed.
    """
    memo: MatchMemo = {}
    for node, depth in walk(root):
        yield node, depth, resolve(stylesheet, node, base_theme, memo)
