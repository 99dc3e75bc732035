"""Keyboard-driven dragging.

Arrow keys move a keyboard drag one step at a time. Left and right change
the horizontal offset by one indentation level, up and down change the
hovered row. All drag state is passed in and returned explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from navtree.config import NAVTREE_INDENTATION_WIDTH
from navtree.projection import get_projection
from navtree.schemas import FlattenedNode
from navtree.tree import find_flat_index

Direction = Literal["left", "right", "up", "down"]
DIRECTIONS: tuple[str, ...] = ("left", "right", "up", "down")


@dataclass(frozen=True)
class KeyboardStep:
    """Drag input after one key press."""

    over_id: str | None
    offset: float


def keyboard_step(
    flattened: list[FlattenedNode],
    active_id: str,
    over_id: str | None,
    offset: float,
    direction: Direction,
    indentation_width: float = NAVTREE_INDENTATION_WIDTH,
) -> KeyboardStep:
    """Apply one arrow key to a keyboard drag.

    Args:
        flattened: Display list the drag runs against.
        active_id: Id of the dragged item.
        over_id: Currently hovered row, None to start from the active row.
        offset: Current horizontal offset.
        direction: Arrow key pressed.
        indentation_width: Offset units per depth level.

    Returns:
        The new hover target and offset. Moves past the allowed depth range
        or the ends of the list leave the input unchanged.

    Raises:
        ValueError: If ``direction`` is not an arrow direction.
    """
    if direction not in DIRECTIONS:
        raise ValueError(f"Unsupported direction {direction!r}, expected one of {DIRECTIONS}")

    active_index = find_flat_index(flattened, active_id)
    if active_index is None:
        return KeyboardStep(over_id=over_id, offset=offset)
    active_depth = flattened[active_index].depth
    over_index = find_flat_index(flattened, over_id)
    if over_index is None:
        over_index = active_index
    current_over = flattened[over_index].id

    projection = get_projection(flattened, active_id, current_over, offset, indentation_width)
    depth = projection.depth if projection is not None else active_depth

    if direction in ("left", "right"):
        if projection is None:
            return KeyboardStep(over_id=current_over, offset=offset)
        if direction == "right" and depth < projection.max_depth:
            depth += 1
        elif direction == "left" and depth > projection.min_depth:
            depth -= 1
        return KeyboardStep(over_id=current_over, offset=(depth - active_depth) * indentation_width)

    target = over_index - 1 if direction == "up" else over_index + 1
    if not 0 <= target < len(flattened):
        return KeyboardStep(over_id=current_over, offset=offset)
    return KeyboardStep(
        over_id=flattened[target].id,
        offset=(depth - active_depth) * indentation_width,
    )
