"""Caller-side cache of resolved styles.

The engine is stateless; this wrapper is for hosts that redraw the same
tree many times. A cache is scoped to one tree version and one stylesheet:
call :meth:`StyleCache.invalidate` after the tree changes and
:meth:`StyleCache.swap` to switch themes.
"""

from __future__ import annotations

from .cascade import resolve
from .highlights import HighlightTable
from .logger import get_logger
from .matcher import MatchMemo
from .models import Stylesheet
from .style import ResolvedStyle
from .tree import NodeRef

logger = get_logger()


class StyleCache:
    """Memoizes :func:`tss.cascade.resolve` per node.

    Attributes:
        version: Incremented on every invalidate() and swap(). Hosts that keep
            their own per-node render state can store the version alongside
            it and redraw when the numbers differ.
    """

    def __init__(self, stylesheet: Stylesheet, base_theme: HighlightTable) -> None:
        self._stylesheet = stylesheet
        self._base_theme = base_theme
        self._styles: dict[NodeRef, ResolvedStyle] = {}
        self._memo: MatchMemo = {}
        self.version = 0

    @property
    def stylesheet(self) -> Stylesheet:
        """Stylesheet used for new resolutions."""
        return self._stylesheet

    def get(self, node: NodeRef) -> ResolvedStyle:
        """Return the cached style for ``node``, resolving it on a miss."""
        style = self._styles.get(node)
        if style is None:
            style = resolve(self._stylesheet, node, self._base_theme, self._memo)
            self._styles[node] = style
        return style

    def __len__(self) -> int:
        return len(self._styles)

    def __contains__(self, node: object) -> bool:
        return node in self._styles

    def invalidate(self) -> None:
        """Drop every cached result (call after the tree is edited or re-parsed)."""
        logger.changes(f"Invalidating {len(self._styles)} cached styles")
        self._styles.clear()
        self._memo.clear()
        self.version += 1

    def swap(self, stylesheet: Stylesheet, base_theme: HighlightTable | None = None) -> None:
        """Switch to a new stylesheet (and optionally base theme) and clear the cache."""
        self._stylesheet = stylesheet
        if base_theme is not None:
            self._base_theme = base_theme
        logger.changes(f"Swapped stylesheet ({len(stylesheet)} rules)")
        self.invalidate()
