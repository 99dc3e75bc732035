"""Shared schemas for navtree."""

from navtree.schemas.tree import (
    FlattenedItems,
    FlattenedNode,
    Highlight,
    MovePlacement,
    NavNode,
    Projection,
    TreeItems,
)

__all__ = [
    "FlattenedItems",
    "FlattenedNode",
    "Highlight",
    "MovePlacement",
    "NavNode",
    "Projection",
    "TreeItems",
]
