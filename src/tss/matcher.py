"""Selector chain matching against syntax tree nodes."""

from __future__ import annotations

from collections.abc import Hashable, Iterable

from .models import Combinator, SelectorChain
from .tree import NodeRef, ancestors, previous_siblings

# (id(chain), atom index, node) -> result; valid for one resolution pass
MatchMemo = dict[tuple[int, int, Hashable], bool]


def matches(chain: SelectorChain, node: NodeRef, memo: MatchMemo | None = None) -> bool:
    """Check whether a selector chain matches a node.

    The chain is evaluated right to left: the node must have the kind of the
    last atom, and some node related to it by the preceding combinator must
    match the rest of the chain. Each (atom, node) pair is evaluated at most
    once per memo, so backtracking stays polynomial in the tree size.

    Args:
        chain: Selector chain to test
        node: Candidate target node
        memo: Optional memo shared across calls within one pass over an
            unchanged tree and stylesheet. Without one, a memo local to
            this call is used.

    Returns:
        True if the chain matches; never raises for any tree shape
    """
    if memo is None:
        memo = {}
    return _matches_upto(chain, len(chain.atoms) - 1, node, memo)


def _matches_upto(chain: SelectorChain, end: int, node: NodeRef, memo: MatchMemo) -> bool:
    """Match ``chain.atoms[: end + 1]`` with ``node`` as the atom at ``end``."""
    if node.kind() != chain.atoms[end]:
        return False
    if end == 0:
        return True

    key = (id(chain), end, node)
    if key in memo:
        return memo[key]

    result = any(
        _matches_upto(chain, end - 1, candidate, memo)
        for candidate in related_nodes(chain.combinators[end - 1], node)
    )
    memo[key] = result
    return result


def related_nodes(combinator: Combinator, node: NodeRef) -> Iterable[NodeRef]:
    """Nodes that may match the atom on the left of ``combinator``.

    - CHILD: the parent
    - TWIN: the immediately preceding sibling
    - SIBLING: every preceding sibling, nearest first
    - DESCENDANT: every ancestor, nearest first
    """
    if combinator is Combinator.CHILD:
        parent = node.parent()
        return () if parent is None else (parent,)
    if combinator is Combinator.TWIN:
        parent = node.parent()
        index = node.index_in_parent()
        if parent is None or index == 0:
            return ()
        return (parent.children()[index - 1],)
    if combinator is Combinator.SIBLING:
        return previous_siblings(node)
    return ancestors(node)
