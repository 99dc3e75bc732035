"""Interactive editing session over a canonical navigation tree."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Callable, Iterable

from navtree.config import NAVTREE_INDENTATION_WIDTH
from navtree.exceptions import NotFoundError, StructureError
from navtree.keyboard import Direction, keyboard_step
from navtree.mutations import (
    UpdateType,
    add_child_item,
    add_item,
    count_children,
    remove_item,
    set_property,
    update_by_type,
)
from navtree.projection import apply_projection, classify_move, get_projection
from navtree.schemas import FlattenedNode, MovePlacement, NavNode, Projection
from navtree.tree import find_item, flatten_tree, iter_tree, remove_children_of, validate_tree
from navtree.utils.logging_config import get_logger

logger = get_logger(__name__)

ChangeListener = Callable[[list[NavNode]], None]


@dataclass(frozen=True)
class DragState:
    """In-progress drag. Only the latest pointer input is kept.

    Attributes:
        active_id: Item being dragged.
        over_id: Row under the pointer, None when outside every row.
        offset: Cumulative horizontal offset since the drag started.
        projection: Projection for ``over_id`` and ``offset``, if defined.
    """

    active_id: str
    over_id: str | None = None
    offset: float = 0.0
    projection: Projection | None = None


class TreeEditor:
    """Single writer of the canonical tree.

    The tree is replaced, never mutated, and every replacement is announced
    to the change listeners with the full tree before it is installed. A
    listener that raises aborts the change. Drag moves only update the drag
    state; the tree changes once, when the drag ends.
    """

    def __init__(
        self,
        items: Iterable[NavNode] | None = None,
        *,
        indentation_width: float = NAVTREE_INDENTATION_WIDTH,
        listeners: Iterable[ChangeListener] = (),
    ) -> None:
        self._items: list[NavNode] = list(items or [])
        validate_tree(self._items)
        self.indentation_width = indentation_width
        self._listeners: list[ChangeListener] = list(listeners)
        self._drag: DragState | None = None

    @property
    def items(self) -> list[NavNode]:
        return list(self._items)

    @property
    def drag(self) -> DragState | None:
        return self._drag

    def subscribe(self, listener: ChangeListener) -> None:
        """Register a callback receiving the full tree after each change."""
        self._listeners.append(listener)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def collapsed_ids(self) -> list[str]:
        return [node.id for node, _parent, _depth in iter_tree(self._items) if node.collapsed and node.children]

    def flattened_items(self) -> list[FlattenedNode]:
        """Display list: collapsed subtrees and the dragged subtree are hidden."""
        hidden = self.collapsed_ids()
        if self._drag is not None:
            hidden.append(self._drag.active_id)
        return remove_children_of(flatten_tree(self._items), hidden)

    def get_item(self, item_id: str) -> NavNode:
        """Return the item with ``item_id``.

        Raises:
            NotFoundError: If no item has that id.
        """
        node = find_item(self._items, item_id)
        if node is None:
            raise NotFoundError(f"Item {item_id!r} not found")
        return node

    def child_count(self, item_id: str) -> int:
        return count_children(self._items, item_id)

    # ------------------------------------------------------------------
    # Drag lifecycle
    # ------------------------------------------------------------------

    def start_drag(self, active_id: str) -> DragState:
        """Begin dragging ``active_id`` from its own row.

        Raises:
            NotFoundError: If ``active_id`` is not in the tree.
        """
        self.get_item(active_id)
        self._drag = DragState(active_id=active_id, over_id=active_id)
        self._drag = dataclasses.replace(self._drag, projection=self._project(self._drag))
        logger.debug("Drag started", extra={"active_id": active_id})
        return self._drag

    def move_drag(self, over_id: str | None, offset: float) -> Projection | None:
        """Record the latest pointer input and return its projection.

        Returns None when no drag is active or the pointer is outside every row.
        """
        if self._drag is None:
            return None
        drag = dataclasses.replace(self._drag, over_id=over_id, offset=offset)
        self._drag = dataclasses.replace(drag, projection=self._project(drag))
        return self._drag.projection

    def keyboard_move(self, direction: Direction) -> DragState | None:
        """Apply one arrow key to the active drag."""
        if self._drag is None:
            return None
        step = keyboard_step(
            self.flattened_items(),
            self._drag.active_id,
            self._drag.over_id,
            self._drag.offset,
            direction,
            self.indentation_width,
        )
        drag = dataclasses.replace(self._drag, over_id=step.over_id, offset=step.offset)
        self._drag = dataclasses.replace(drag, projection=self._project(drag))
        return self._drag

    def placement(self) -> MovePlacement | None:
        """Classify the current drop position for narration."""
        if self._drag is None or self._drag.projection is None:
            return None
        return classify_move(
            self.flattened_items(), self._drag.active_id, self._drag.over_id, self._drag.projection
        )

    def end_drag(self) -> list[NavNode]:
        """Commit the active drag and return the resulting tree.

        Without a projection the tree is left as it is.

        Raises:
            StructureError: If the drop would produce an invalid tree. The
                previous tree is kept.
        """
        drag, self._drag = self._drag, None
        if drag is None or drag.projection is None:
            return self.items

        try:
            new_items = apply_projection(
                self._items, drag.active_id, drag.over_id, drag.projection, self.collapsed_ids()
            )
        except StructureError:
            logger.warning(
                "Drop rejected",
                extra={"active_id": drag.active_id, "over_id": drag.over_id, "depth": drag.projection.depth},
            )
            raise
        return self._commit(new_items, "drop")

    def cancel_drag(self) -> None:
        """Discard the active drag without touching the tree."""
        if self._drag is not None:
            logger.debug("Drag cancelled", extra={"active_id": self._drag.active_id})
        self._drag = None

    def _project(self, drag: DragState) -> Projection | None:
        return get_projection(
            self.flattened_items(), drag.active_id, drag.over_id, drag.offset, self.indentation_width
        )

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------

    def replace(self, items: Iterable[NavNode]) -> list[NavNode]:
        """Replace the whole tree, e.g. with a value loaded by the host.

        Raises:
            StructureError: If ids are not unique.
        """
        items = list(items)
        validate_tree(items)
        return self._commit(items, "replace")

    def remove(self, item_id: str) -> list[NavNode]:
        return self._commit(remove_item(self._items, item_id), "remove")

    def update(self, item_id: str, field: UpdateType, value: str | None = None) -> list[NavNode]:
        return self._commit(update_by_type(self._items, item_id, field, value), "update")

    def toggle_collapsed(self, item_id: str) -> list[NavNode]:
        return self._commit(set_property(self._items, item_id, "collapsed", lambda old: not old), "collapse")

    def add_item(self, after_id: str | None = None, item: NavNode | None = None) -> list[NavNode]:
        return self._commit(add_item(self._items, after_id, item), "add")

    def add_child_item(
        self, parent_id: str, after_child_id: str | None = None, item: NavNode | None = None
    ) -> list[NavNode]:
        return self._commit(add_child_item(self._items, parent_id, after_child_id, item), "add_child")

    def _commit(self, new_items: list[NavNode], reason: str) -> list[NavNode]:
        if new_items == self._items:
            return self.items
        for listener in self._listeners:
            listener(list(new_items))
        self._items = new_items
        if self._drag is not None:
            if find_item(new_items, self._drag.active_id) is None:
                self._drag = None
            else:
                self._drag = dataclasses.replace(self._drag, projection=self._project(self._drag))
        logger.info("Tree changed", extra={"reason": reason, "root_items": len(new_items)})
        return self.items
