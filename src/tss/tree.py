"""Syntax tree interface consumed by the matcher, plus two implementations.

The engine never assumes a concrete tree type: anything implementing
:class:`NodeRef` can be matched and resolved. :class:`SimpleNode` is an
in-memory tree (tests, fixtures, the CLI) and :class:`TreeSitterNode`
adapts py-tree-sitter nodes.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from pathlib import Path
from typing import Any, Protocol

import yaml
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from .exceptions import TreeError

# ============================================================================
# Public Protocol
# ============================================================================


class NodeRef(Protocol):
    """Read-only handle on one syntax tree node.

    Implementations must be hashable with value semantics per node, so that
    caches can be keyed by node.
    """

    def kind(self) -> str:
        """Node kind name, e.g. 'string' or 'function_definition'."""
        ...

    def parent(self) -> NodeRef | None:
        """Parent node, or None for the root."""
        ...

    def children(self) -> Sequence[NodeRef]:
        """Direct children in source order."""
        ...

    def index_in_parent(self) -> int:
        """Position among the parent's children (0 for the root)."""
        ...


def previous_siblings(node: NodeRef) -> list[NodeRef]:
    """Siblings before ``node`` in its parent's child order, nearest first."""
    parent = node.parent()
    if parent is None:
        return []
    siblings = parent.children()
    return [siblings[i] for i in range(node.index_in_parent() - 1, -1, -1)]


def ancestors(node: NodeRef) -> Iterator[NodeRef]:
    """Yield the parent, grandparent, ... of ``node``."""
    current = node.parent()
    while current is not None:
        yield current
        current = current.parent()


def walk(root: NodeRef) -> Iterator[tuple[NodeRef, int]]:
    """Yield ``(node, depth)`` for every node under ``root`` in pre-order."""
    stack: list[tuple[NodeRef, int]] = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        yield node, depth
        stack.extend((child, depth + 1) for child in reversed(node.children()))


# ============================================================================
# In-memory tree
# ============================================================================


class SimpleNode:
    """In-memory syntax node.

    Parent links and indexes are filled in when a node is passed as a child
    to its parent's constructor. Hash and equality are by identity.
    """

    __slots__ = ("_children", "_index", "_kind", "_parent", "start_byte", "end_byte")

    def __init__(
        self,
        kind: str,
        children: Sequence[SimpleNode] = (),
        *,
        start_byte: int = 0,
        end_byte: int = 0,
    ) -> None:
        self._kind = kind
        self._children: tuple[SimpleNode, ...] = tuple(children)
        self._parent: SimpleNode | None = None
        self._index = 0
        self.start_byte = start_byte
        self.end_byte = end_byte
        for index, child in enumerate(self._children):
            if child._parent is not None:
                raise ValueError(f"node {child._kind!r} already has a parent")
            child._parent = self
            child._index = index

    def kind(self) -> str:
        return self._kind

    def parent(self) -> SimpleNode | None:
        return self._parent

    def children(self) -> Sequence[SimpleNode]:
        return self._children

    def index_in_parent(self) -> int:
        return self._index

    def find(self, kind: str) -> list[SimpleNode]:
        """All nodes of a kind under (and including) this node, in pre-order."""
        found: list[SimpleNode] = []
        for node, _ in walk(self):
            if node.kind() == kind:
                assert isinstance(node, SimpleNode)
                found.append(node)
        return found

    def __repr__(self) -> str:
        return f"SimpleNode({self._kind!r}, children={len(self._children)})"


# ============================================================================
# py-tree-sitter adapter
# ============================================================================


class TreeSitterNode:
    """Adapter exposing a py-tree-sitter ``Node`` as a :class:`NodeRef`.

    Only the ``type``, ``parent``, ``children``, ``id``, ``start_byte`` and
    ``end_byte`` attributes of the wrapped node are used, so the
    tree-sitter bindings are not imported here. Wrappers compare equal when
    they wrap the same node.
    """

    __slots__ = ("_index", "node")

    def __init__(self, node: Any, index: int | None = None) -> None:
        self.node = node
        self._index = index

    def kind(self) -> str:
        return str(self.node.type)

    def parent(self) -> TreeSitterNode | None:
        parent = self.node.parent
        return None if parent is None else TreeSitterNode(parent)

    def children(self) -> Sequence[TreeSitterNode]:
        return [TreeSitterNode(child, index) for index, child in enumerate(self.node.children)]

    def index_in_parent(self) -> int:
        if self._index is None:
            parent = self.node.parent
            if parent is None:
                self._index = 0
            else:
                ids = [child.id for child in parent.children]
                self._index = ids.index(self.node.id)
        return self._index

    @property
    def byte_range(self) -> tuple[int, int]:
        """Byte range of the node in the parsed source."""
        return (self.node.start_byte, self.node.end_byte)

    def __hash__(self) -> int:
        return hash(self.node.id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TreeSitterNode):
            return NotImplemented
        return self.node.id == other.node.id

    def __repr__(self) -> str:
        return f"TreeSitterNode({self.kind()!r}, {self.byte_range})"


# ============================================================================
# Tree descriptions (fixtures and CLI input)
# ============================================================================


class TreeNodeSchema(BaseModel):
    """Schema for a node in a YAML/JSON tree description."""

    kind: str = Field(..., min_length=1)
    start_byte: int = 0
    end_byte: int = 0
    children: list[TreeNodeSchema] = Field(default_factory=list)


def _from_schema(schema: TreeNodeSchema) -> SimpleNode:
    return SimpleNode(
        schema.kind,
        [_from_schema(child) for child in schema.children],
        start_byte=schema.start_byte,
        end_byte=schema.end_byte,
    )


def build_tree(data: Mapping[str, Any]) -> SimpleNode:
    """Build a SimpleNode tree from nested ``{kind, children}`` mappings.

    Example:
        build_tree({"kind": "block", "children": [{"kind": "comment"}]})

    Raises:
        TreeError: If the description is malformed
    """
    try:
        schema = TreeNodeSchema.model_validate(data)
    except PydanticValidationError as e:
        raise TreeError(f"Invalid tree description: {e}") from e
    return _from_schema(schema)


def load_tree(file_path: Path | str) -> SimpleNode:
    """Load a tree description from a YAML (or JSON) file."""
    path = Path(file_path)
    if not path.exists():
        raise TreeError(f"File not found: {file_path}")

    try:
        with path.open(encoding="utf-8") as f:
            data: Any = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise TreeError(f"Failed to parse YAML: {e}") from e
    except UnicodeDecodeError as e:
        raise TreeError(f"Tree file {path} is not valid UTF-8: {e}") from e

    if not isinstance(data, dict):
        raise TreeError("Tree file must contain a mapping at the root level")
    return build_tree(data)  # type: ignore[arg-type]
