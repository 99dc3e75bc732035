"""Drag projection: where a dragged item would land if dropped now."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Sequence, TypeVar

from navtree.config import NAVTREE_INDENTATION_WIDTH
from navtree.schemas import FlattenedNode, MovePlacement, NavNode, Projection
from navtree.tree import build_tree, find_flat_index, flatten_tree

T = TypeVar("T")


@dataclass(frozen=True)
class MoveSimulation:
    """A flattened list with the active item moved onto the hovered slot.

    Attributes:
        items: The list after the move. The input list is left untouched.
        active_item: The dragged item.
        over_index: Slot the active item occupies in ``items``.
        previous_item: Item directly above the slot, if any.
        next_item: Item directly below the slot, if any.
    """

    items: list[FlattenedNode]
    active_item: FlattenedNode
    over_index: int
    previous_item: FlattenedNode | None
    next_item: FlattenedNode | None


def array_move(items: Sequence[T], from_index: int, to_index: int) -> list[T]:
    """Return a copy of ``items`` with one element moved to ``to_index``."""
    moved = list(items)
    moved.insert(to_index, moved.pop(from_index))
    return moved


def simulate_move(
    flattened: list[FlattenedNode],
    active_id: str,
    over_id: str | None,
) -> MoveSimulation | None:
    """Simulate dropping ``active_id`` onto the row of ``over_id``.

    Returns:
        The simulation, or None when either id is not in ``flattened``.
    """
    active_index = find_flat_index(flattened, active_id)
    over_index = find_flat_index(flattened, over_id)
    if active_index is None or over_index is None:
        return None

    moved = array_move(flattened, active_index, over_index)
    return MoveSimulation(
        items=moved,
        active_item=flattened[active_index],
        over_index=over_index,
        previous_item=moved[over_index - 1] if over_index > 0 else None,
        next_item=moved[over_index + 1] if over_index + 1 < len(moved) else None,
    )


def get_drag_depth(offset: float, indentation_width: float) -> int:
    """Convert a horizontal offset into whole indentation levels.

    Halves round toward positive infinity, matching pointer rounding in
    the browser.
    """
    if indentation_width <= 0:
        raise ValueError(f"indentation_width must be positive, got {indentation_width}")
    return math.floor(offset / indentation_width + 0.5)


def get_projection(
    flattened: list[FlattenedNode],
    active_id: str,
    over_id: str | None,
    offset: float,
    indentation_width: float = NAVTREE_INDENTATION_WIDTH,
) -> Projection | None:
    """Project the depth and parent of a dragged item.

    ``flattened`` is the display list, with the descendants of the active
    item (and of collapsed items) already removed.

    The projected depth is the active item's depth plus the horizontal drag
    depth, clamped so the item is at most one level deeper than the row
    above it and no shallower than the row below it.

    Args:
        flattened: Display list in render order.
        active_id: Id of the dragged item.
        over_id: Id of the hovered row, or None when outside any row.
        offset: Cumulative horizontal pointer offset. Positive indents.
        indentation_width: Offset units per depth level.

    Returns:
        The projection, or None when ``active_id`` or ``over_id`` is not in
        the list. Callers treat None as "keep the original depth".
    """
    simulation = simulate_move(flattened, active_id, over_id)
    if simulation is None:
        return None

    previous_item = simulation.previous_item
    next_item = simulation.next_item
    projected_depth = simulation.active_item.depth + get_drag_depth(offset, indentation_width)
    max_depth = previous_item.depth + 1 if previous_item is not None else 0
    min_depth = next_item.depth if next_item is not None else 0

    if projected_depth >= max_depth:
        depth = max_depth
    elif projected_depth < min_depth:
        depth = min_depth
    else:
        depth = projected_depth

    return Projection(
        depth=depth,
        parent_id=_find_parent_id(simulation, depth),
        max_depth=max_depth,
        min_depth=min_depth,
    )


def _find_parent_id(simulation: MoveSimulation, depth: int) -> str | None:
    if depth == 0:
        return None
    for item in reversed(simulation.items[: simulation.over_index]):
        if item.depth == depth - 1:
            return item.id
    return None


def classify_move(
    flattened: list[FlattenedNode],
    active_id: str,
    over_id: str | None,
    projection: Projection,
) -> MovePlacement | None:
    """Describe where a projected drop lands relative to its neighbours.

    Returns:
        ``before`` the next row when dropped at the top, ``nested`` under the
        row above when deeper than it, otherwise ``after`` the nearest
        preceding sibling. None when the move cannot be simulated.
    """
    simulation = simulate_move(flattened, active_id, over_id)
    if simulation is None:
        return None

    previous_item = simulation.previous_item
    if previous_item is None:
        if simulation.next_item is None:
            return None
        return MovePlacement(kind="before", reference_id=simulation.next_item.id)

    if projection.depth > previous_item.depth:
        return MovePlacement(kind="nested", reference_id=previous_item.id)

    by_id = {item.id: item for item in simulation.items}
    sibling: FlattenedNode | None = previous_item
    while sibling is not None and projection.depth < sibling.depth:
        sibling = by_id.get(sibling.parent_id) if sibling.parent_id is not None else None
    if sibling is None:
        return None
    return MovePlacement(kind="after", reference_id=sibling.id)


def apply_projection(
    tree: Iterable[NavNode],
    active_id: str,
    over_id: str | None,
    projection: Projection,
    collapsed_ids: Iterable[str] = (),
) -> list[NavNode]:
    """Commit a drag: move the active item and rebuild the tree.

    The active item travels with its whole subtree, and collapsed items keep
    their hidden descendants, so the move is performed on the same display
    rows the projection was computed against. The moved subtree is shifted
    by ``projection.depth - active.depth`` levels.

    Returns:
        The new tree. The input tree is returned as a new list, unchanged,
        when either id is unknown.

    Raises:
        StructureError: If the resulting order is not a valid pre-order.
    """
    tree = list(tree)
    blocks = _display_blocks(flatten_tree(tree), set(collapsed_ids) | {active_id})
    heads = [block[0] for block in blocks]
    active_index = find_flat_index(heads, active_id)
    over_index = find_flat_index(heads, over_id)
    if active_index is None or over_index is None:
        return tree

    active_block = blocks[active_index]
    delta = projection.depth - active_block[0].depth
    reordered: list[FlattenedNode] = []
    for block in array_move(blocks, active_index, over_index):
        if block is not active_block:
            reordered.extend(block)
            continue
        head, *descendants = block
        reordered.append(head.model_copy(update={"depth": projection.depth, "parent_id": projection.parent_id}))
        reordered.extend(item.model_copy(update={"depth": item.depth + delta}) for item in descendants)

    return build_tree(reordered)


def _display_blocks(flattened: list[FlattenedNode], hidden: set[str]) -> list[list[FlattenedNode]]:
    """Group each display row with the hidden descendants that follow it."""
    blocks: list[list[FlattenedNode]] = []
    hide_below: int | None = None
    for item in flattened:
        if hide_below is not None and item.depth > hide_below:
            blocks[-1].append(item)
            continue
        hide_below = item.depth if item.id in hidden else None
        blocks.append([item])
    return blocks
