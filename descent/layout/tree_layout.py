"""
Parse tree layout engine.

Computes x/y coordinates for every node of a parse tree so it can be drawn
as a non-overlapping tree:

    1. Depth pass: root at depth 0, each child one level below its parent.
    2. Post-order x pass: leaves take the next free slot left to right,
       each internal node sits at the midpoint of its first and last child.
    3. Collection pass: final coordinates, edges and the bounding size.

Centering uses the first and last child only, not the mean of all children.
Grammar nodes have at most three children, so the two rarely differ by much,
but the rule is kept as is because changing it moves rendered nodes.

Author: xwest
"""

import logging
from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..parser.grammar import OPERATOR_LABELS, is_nonterminal
from ..parser.tree import ParseTree


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutConfig:
    """Fixed geometry used by the layout, in drawing units."""
    node_width: float = 60
    node_height: float = 50
    level_height: float = 80
    min_sibling_separation: float = 20
    top_padding: float = 20
    edge_anchor_offset: float = 18      # node radius, so edges stop at the boundary
    width_margin: float = 40
    height_margin: float = 60


DEFAULT_LAYOUT_CONFIG = LayoutConfig()


class NodeKind(Enum):
    """Rendering category of a node, in priority order."""
    EPSILON = "epsilon"
    OPERATOR = "operator"
    TERMINAL = "terminal"
    NON_TERMINAL = "nonterminal"


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class LayoutNode:
    """A positioned tree node with its classification flags."""
    id: int
    label: str
    x: float
    y: float
    depth: int
    is_leaf: bool
    is_epsilon: bool
    is_operator: bool
    is_non_terminal: bool

    @property
    def kind(self) -> NodeKind:
        if self.is_epsilon:
            return NodeKind.EPSILON
        if self.is_operator:
            return NodeKind.OPERATOR
        if self.is_leaf and not self.is_non_terminal:
            return NodeKind.TERMINAL
        return NodeKind.NON_TERMINAL

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "x": self.x,
            "y": self.y,
            "depth": self.depth,
            "isLeaf": self.is_leaf,
            "isEpsilon": self.is_epsilon,
            "isOperator": self.is_operator,
            "isNonTerminal": self.is_non_terminal,
            "kind": self.kind.value,
        }


@dataclass(frozen=True)
class Edge:
    """Parent-to-child connector between node boundaries."""
    from_id: int
    to_id: int
    from_point: Point
    to_point: Point

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fromId": self.from_id,
            "toId": self.to_id,
            "from": self.from_point.to_dict(),
            "to": self.to_point.to_dict(),
        }


@dataclass
class TreeLayout:
    """Positioned nodes (pre-order), edges and the overall drawing size."""
    nodes: List[LayoutNode] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)
    width: float = 0
    height: float = 0

    def node(self, node_id: int) -> LayoutNode:
        for node in self.nodes:
            if node.id == node_id:
                return node
        raise KeyError(node_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
            "width": self.width,
            "height": self.height,
        }


def compute_tree_layout(tree: Optional[ParseTree],
                        config: Optional[LayoutConfig] = None) -> TreeLayout:
    """
    Compute layout positions for all nodes in the tree.

    Args:
        tree: Parse tree from the parser, or None
        config: Geometry overrides, DEFAULT_LAYOUT_CONFIG when None

    Returns:
        TreeLayout; empty with zero size when there is no tree
    """
    if tree is None or tree.root is None:
        return TreeLayout()
    if config is None:
        config = DEFAULT_LAYOUT_CONFIG

    root = tree.root

    # Step 1: depths, pre-order
    depths: Dict[int, int] = {}
    stack = [(root.id, 0)]
    while stack:
        node_id, depth = stack.pop()
        depths[node_id] = depth
        for child_id in tree[node_id].children:
            stack.append((child_id, depth + 1))

    # Step 2: raw x positions, post-order
    raw_x: Dict[int, float] = {}
    next_x = 0.0
    stack = [(root.id, False)]
    while stack:
        node_id, children_done = stack.pop()
        node = tree[node_id]

        if node.is_leaf:
            raw_x[node_id] = next_x
            next_x += config.node_width + config.min_sibling_separation
            continue

        if not children_done:
            stack.append((node_id, True))
            for child_id in reversed(node.children):
                stack.append((child_id, False))
            continue

        first, last = node.children[0], node.children[-1]
        raw_x[node_id] = (raw_x[first] + raw_x[last]) / 2

    # Step 3: collect nodes and edges
    def center(node_id: int) -> Point:
        return Point(
            raw_x[node_id] + config.node_width / 2,
            depths[node_id] * config.level_height + config.node_height / 2 + config.top_padding,
        )

    layout = TreeLayout()
    max_x = 0.0
    max_depth = 0

    # Each edge is recorded just before the subtree it leads into
    stack = [(root.id, None)]
    while stack:
        node_id, parent_id = stack.pop()
        node = tree[node_id]
        position = center(node_id)

        if parent_id is not None:
            parent = center(parent_id)
            layout.edges.append(Edge(
                from_id=parent_id,
                to_id=node_id,
                from_point=Point(parent.x, parent.y + config.edge_anchor_offset),
                to_point=Point(position.x, position.y - config.edge_anchor_offset),
            ))

        layout.nodes.append(LayoutNode(
            id=node.id,
            label=node.label,
            x=position.x,
            y=position.y,
            depth=depths[node_id],
            is_leaf=node.is_leaf,
            is_epsilon=node.is_epsilon,
            is_operator=node.label in OPERATOR_LABELS,
            is_non_terminal=is_nonterminal(node.label),
        ))

        max_x = max(max_x, position.x)
        max_depth = max(max_depth, depths[node_id])

        stack.extend((child_id, node_id) for child_id in reversed(node.children))

    layout.width = max_x + config.node_width + config.width_margin
    layout.height = (max_depth + 1) * config.level_height + config.height_margin

    logger.debug("laid out %d nodes in %.0fx%.0f", len(layout.nodes), layout.width, layout.height)
    return layout
