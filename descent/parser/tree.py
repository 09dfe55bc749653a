"""
Parse tree storage.

Nodes live in an arena owned by a single `ParseTree`: each node is stored at
the index equal to its id and refers to its children by id. A node is added
once all of its children exist, so ids follow creation order and the root
is always the last node.

Author: xwest
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .grammar import EPSILON


@dataclass(frozen=True)
class ParseTreeNode:
    """A parse tree node; `children` holds child ids in order."""
    id: int
    label: str
    children: Tuple[int, ...] = ()

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def is_epsilon(self) -> bool:
        return self.label == EPSILON


class ParseTree:
    """
    Arena of parse tree nodes.

    Built through `add` while a parse is running; read-only afterwards by
    convention.
    """

    def __init__(self):
        self.nodes: List[ParseTreeNode] = []

    def add(self, label: str, children: Tuple[int, ...] = ()) -> int:
        """Append a node and return its id."""
        node_id = len(self.nodes)
        self.nodes.append(ParseTreeNode(node_id, label, tuple(children)))
        return node_id

    def __len__(self) -> int:
        return len(self.nodes)

    def __getitem__(self, node_id: int) -> ParseTreeNode:
        return self.nodes[node_id]

    def __iter__(self) -> Iterator[ParseTreeNode]:
        return iter(self.nodes)

    @property
    def root(self) -> Optional[ParseTreeNode]:
        return self.nodes[-1] if self.nodes else None

    def children(self, node: ParseTreeNode) -> List[ParseTreeNode]:
        return [self.nodes[child_id] for child_id in node.children]

    def walk(self) -> Iterator[Tuple[ParseTreeNode, int]]:
        """Yield (node, depth) pairs in pre-order, left to right."""
        if not self.nodes:
            return
        stack = [(self.root, 0)]
        while stack:
            node, depth = stack.pop()
            yield node, depth
            for child_id in reversed(node.children):
                stack.append((self.nodes[child_id], depth + 1))

    def leaves(self) -> List[str]:
        """Leaf labels in left-to-right order, ε markers included."""
        return [node.label for node, _ in self.walk() if node.is_leaf]

    def shape(self) -> Tuple:
        """
        Nested (label, children) tuples describing the tree without ids.

        Two trees with equal shapes have the same labels and child counts at
        every position.
        """
        if not self.nodes:
            return ()
        built: Dict[int, Tuple] = {}
        # Children always have smaller ids than their parent
        for node in self.nodes:
            built[node.id] = (node.label, tuple(built[c] for c in node.children))
        return built[self.root.id]

    def to_dict(self, node: Optional[ParseTreeNode] = None) -> Optional[Dict[str, Any]]:
        """Nested {id, label, children} dictionaries starting at `node` (default root)."""
        if node is None:
            node = self.root
            if node is None:
                return None
        built: Dict[int, Dict[str, Any]] = {}
        for current in self.nodes[: node.id + 1]:
            built[current.id] = {
                "id": current.id,
                "label": current.label,
                "children": [built[c] for c in current.children],
            }
        return built[node.id]

    def __repr__(self) -> str:
        root = self.root
        return f"ParseTree({len(self.nodes)} nodes, root={root.label if root else None!r})"
