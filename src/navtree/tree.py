"""Conversions between the nested tree and its flattened pre-order form."""

from __future__ import annotations

from typing import Any, Iterable, Iterator

from navtree.exceptions import StructureError
from navtree.schemas import FlattenedNode, NavNode

_NODE_FIELDS = tuple(NavNode.model_fields)


def node_fields(node: NavNode, **overrides: Any) -> dict[str, Any]:
    """Return the ``NavNode`` fields of ``node`` as a shallow dict."""
    fields = {name: getattr(node, name) for name in _NODE_FIELDS}
    fields.update(overrides)
    return fields


def iter_tree(tree: Iterable[NavNode]) -> Iterator[tuple[NavNode, NavNode | None, int]]:
    """Yield ``(node, parent, depth)`` in pre-order.

    Uses an explicit stack so arbitrarily deep trees do not hit the
    recursion limit.
    """
    stack: list[tuple[NavNode, NavNode | None, int]] = [
        (node, None, 0) for node in reversed(list(tree))
    ]
    while stack:
        node, parent, depth = stack.pop()
        yield node, parent, depth
        stack.extend((child, node, depth + 1) for child in reversed(node.children))


def flatten_tree(tree: Iterable[NavNode]) -> list[FlattenedNode]:
    """Flatten a tree into its depth-annotated pre-order traversal.

    Args:
        tree: Root items in display order.

    Returns:
        One ``FlattenedNode`` per item. Roots have ``parent_id=None`` and
        ``depth=0``; ``index`` is the position in the returned list.
    """
    flattened: list[FlattenedNode] = []
    for node, parent, depth in iter_tree(tree):
        flattened.append(
            FlattenedNode(
                **node_fields(node),
                parent_id=parent.id if parent is not None else None,
                depth=depth,
                index=len(flattened),
            )
        )
    return flattened


def build_tree(flattened: Iterable[FlattenedNode]) -> list[NavNode]:
    """Rebuild a nested tree from a flattened pre-order sequence.

    Each item becomes the last child of the nearest preceding item that is
    exactly one level shallower. Children lists are created fresh; the
    ``children`` carried by the flattened items are ignored.

    Args:
        flattened: Items in the order they should appear.

    Returns:
        Root items of the rebuilt tree.

    Raises:
        StructureError: If the first item is not a root, an item is more than
            one level deeper than its predecessor, or an id repeats.
    """
    items: list[FlattenedNode] = []
    child_positions: list[list[int]] = []
    root_positions: list[int] = []
    # levels[d] collects the positions of the next items of depth d.
    levels: list[list[int]] = [root_positions]
    seen: set[str] = set()

    for position, item in enumerate(flattened):
        if item.depth >= len(levels):
            raise StructureError(
                f"Item {item.id!r} at position {position} has depth {item.depth}, "
                f"expected at most {len(levels) - 1}"
            )
        if item.id in seen:
            raise StructureError(f"Duplicate item id {item.id!r} at position {position}")
        seen.add(item.id)

        del levels[item.depth + 1 :]
        levels[item.depth].append(position)
        items.append(item)
        child_positions.append([])
        levels.append(child_positions[-1])

    # Children follow their parent, so nodes are built back to front.
    nodes: dict[int, NavNode] = {}
    for position in range(len(items) - 1, -1, -1):
        children = [nodes[child] for child in child_positions[position]]
        nodes[position] = NavNode(**node_fields(items[position], children=children))
    return [nodes[position] for position in root_positions]


def remove_children_of(flattened: Iterable[FlattenedNode], ids: Iterable[str]) -> list[FlattenedNode]:
    """Drop the descendants of every item whose id is in ``ids``.

    The items named in ``ids`` stay in the list. Descendants are recognized
    by the contiguous run of deeper items that follows their ancestor.
    """
    hidden = set(ids)
    result: list[FlattenedNode] = []
    hide_below: int | None = None

    for item in flattened:
        if hide_below is not None and item.depth > hide_below:
            continue
        hide_below = item.depth if item.id in hidden else None
        result.append(item)

    return result


def find_item(tree: Iterable[NavNode], item_id: str) -> NavNode | None:
    """Return the node with ``item_id`` at any depth, or None."""
    for node, _parent, _depth in iter_tree(tree):
        if node.id == item_id:
            return node
    return None


def find_flat_index(flattened: list[FlattenedNode], item_id: str | None) -> int | None:
    """Return the position of ``item_id`` in a flattened list, or None."""
    if item_id is None:
        return None
    for position, item in enumerate(flattened):
        if item.id == item_id:
            return position
    return None


def validate_tree(tree: Iterable[NavNode]) -> None:
    """Check that ids are unique across the whole tree.

    Raises:
        StructureError: If an id appears more than once.
    """
    seen: set[str] = set()
    for node, _parent, _depth in iter_tree(tree):
        if node.id in seen:
            raise StructureError(f"Duplicate item id {node.id!r}")
        seen.add(node.id)
