"""
descent Layout Package

Turns a parse tree into 2-D node and edge coordinates plus the drawing size
needed to show it.

Author: xwest
"""

from .tree_layout import (
    LayoutConfig, DEFAULT_LAYOUT_CONFIG, LayoutNode, NodeKind, Edge, Point,
    TreeLayout, compute_tree_layout,
)

__all__ = [
    "compute_tree_layout",
    "TreeLayout",
    "LayoutNode",
    "NodeKind",
    "Edge",
    "Point",
    "LayoutConfig",
    "DEFAULT_LAYOUT_CONFIG",
]
