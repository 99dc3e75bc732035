"""Render a navigation tree as an indented text outline."""

from __future__ import annotations

from typing import Iterable

from navtree.schemas import NavNode
from navtree.tree import iter_tree


def count_items(tree: Iterable[NavNode]) -> int:
    """Count every item in the tree."""
    return sum(1 for _ in iter_tree(tree))


def render_outline(tree: Iterable[NavNode], *, show_collapsed: bool = False) -> str:
    """Render one line per item, indented four spaces per level.

    Highlighted items are marked with ``*``. Children of collapsed items are
    skipped unless ``show_collapsed`` is set; the collapsed item then shows
    how many descendants it hides.
    """
    lines: list[str] = []
    hide_below: int | None = None
    for node, _parent, depth in iter_tree(tree):
        if hide_below is not None and depth > hide_below:
            continue
        hide_below = None

        marker = "*" if node.highlighted == "on" else "-"
        line = f"{' ' * (depth * 4)}{marker} {node.label or node.id}"
        if node.url:
            line += f" ({node.url})"
        if node.collapsed and node.children and not show_collapsed:
            line += f" [+{count_items(node.children)}]"
            hide_below = depth
        lines.append(line)
    return "\n".join(lines)
