"""navtree: flatten, project and rebuild drag-sortable navigation trees."""

from navtree.editor import DragState, TreeEditor
from navtree.exceptions import NavTreeError, NotFoundError, StorageError, StructureError
from navtree.keyboard import KeyboardStep, keyboard_step
from navtree.mutations import (
    add_child_item,
    add_item,
    count_children,
    create_item,
    remove_item,
    set_property,
    update_by_type,
)
from navtree.projection import (
    apply_projection,
    array_move,
    classify_move,
    get_drag_depth,
    get_projection,
    simulate_move,
)
from navtree.schemas import FlattenedNode, MovePlacement, NavNode, Projection
from navtree.storage import TreeStore
from navtree.tree import build_tree, find_item, flatten_tree, remove_children_of, validate_tree

__all__ = [
    "DragState",
    "FlattenedNode",
    "KeyboardStep",
    "MovePlacement",
    "NavNode",
    "NavTreeError",
    "NotFoundError",
    "Projection",
    "StorageError",
    "StructureError",
    "TreeEditor",
    "TreeStore",
    "add_child_item",
    "add_item",
    "apply_projection",
    "array_move",
    "build_tree",
    "classify_move",
    "count_children",
    "create_item",
    "find_item",
    "flatten_tree",
    "get_drag_depth",
    "get_projection",
    "keyboard_step",
    "remove_children_of",
    "remove_item",
    "set_property",
    "simulate_move",
    "update_by_type",
    "validate_tree",
]
