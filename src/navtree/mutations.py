"""Structural edits on the nested tree.

Every operation returns a new root list and leaves its argument untouched.
Only the ancestors of the edited node are re-created; every other node is
shared with the input tree. Unknown ids are a no-op, never an error.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Literal
from uuid import uuid4

from navtree.config import (
    DEFAULT_CHILD_LABEL,
    DEFAULT_CHILD_URL,
    DEFAULT_MAIN_LABEL,
    DEFAULT_MAIN_URL,
)
from navtree.exceptions import StructureError
from navtree.schemas import NavNode
from navtree.tree import find_item, iter_tree, node_fields

EDITABLE_FIELDS: frozenset[str] = frozenset({"label", "url", "highlighted", "collapsed"})
UpdateType = Literal["label", "url", "highlighted"]

Path = list[int]


def find_path(tree: Iterable[NavNode], item_id: str) -> Path | None:
    """Return the child indexes leading from the roots to ``item_id``."""
    stack: list[tuple[Path, NavNode]] = [
        ([index], node) for index, node in reversed(list(enumerate(tree)))
    ]
    while stack:
        path, node = stack.pop()
        if node.id == item_id:
            return path
        stack.extend(
            ([*path, index], child) for index, child in reversed(list(enumerate(node.children)))
        )
    return None


def _replace_siblings(
    tree: list[NavNode],
    path: Path,
    replace: Callable[[list[NavNode], int], list[NavNode]],
) -> list[NavNode]:
    """Swap the sibling list at the end of ``path`` and re-create its ancestors."""
    sibling_lists: list[list[NavNode]] = [tree]
    ancestors: list[NavNode] = []
    for index in path[:-1]:
        ancestor = sibling_lists[-1][index]
        ancestors.append(ancestor)
        sibling_lists.append(ancestor.children)

    siblings = replace(list(sibling_lists[-1]), path[-1])
    for level in range(len(ancestors) - 1, -1, -1):
        updated = ancestors[level].model_copy(update={"children": siblings})
        siblings = list(sibling_lists[level])
        siblings[path[level]] = updated
    return siblings


def remove_item(tree: Iterable[NavNode], item_id: str) -> list[NavNode]:
    """Remove ``item_id`` and its whole subtree, wherever it is."""
    tree = list(tree)
    path = find_path(tree, item_id)
    if path is None:
        return tree
    return _replace_siblings(tree, path, lambda siblings, index: siblings[:index] + siblings[index + 1 :])


def set_property(
    tree: Iterable[NavNode],
    item_id: str,
    key: str,
    updater: Callable[[Any], Any],
) -> list[NavNode]:
    """Replace ``key`` of one node with ``updater(old_value)``.

    Args:
        tree: Root items.
        item_id: Node to update, at any depth.
        key: One of ``label``, ``url``, ``highlighted`` or ``collapsed``.
        updater: Receives the old value and returns the new one.

    Returns:
        The updated tree, or an equal copy when ``item_id`` is unknown.

    Raises:
        ValueError: If ``key`` is not an editable field.
        pydantic.ValidationError: If the new value is invalid for ``key``.
    """
    if key not in EDITABLE_FIELDS:
        raise ValueError(f"Field {key!r} is not editable, expected one of {sorted(EDITABLE_FIELDS)}")
    tree = list(tree)
    path = find_path(tree, item_id)
    if path is None:
        return tree

    def _update(siblings: list[NavNode], index: int) -> list[NavNode]:
        node = siblings[index]
        new_value = updater(getattr(node, key))
        siblings[index] = type(node).model_validate(node_fields(node, **{key: new_value}))
        return siblings

    return _replace_siblings(tree, path, _update)


def count_children(tree: Iterable[NavNode], item_id: str) -> int:
    """Count the descendants of ``item_id``, excluding the item itself."""
    node = find_item(tree, item_id)
    if node is None:
        return 0
    return sum(1 for _ in iter_tree(node.children))


def toggle_highlight(value: str) -> str:
    return "off" if value == "on" else "on"


def update_by_type(
    tree: Iterable[NavNode],
    item_id: str,
    field: UpdateType,
    value: str | None = None,
) -> list[NavNode]:
    """Apply a text edit or a highlight toggle coming from the editor form.

    ``label`` and ``url`` are set to ``value``. ``highlighted`` is toggled and
    ``value`` is ignored.
    """
    if field == "highlighted":
        return set_property(tree, item_id, "highlighted", toggle_highlight)
    if field not in ("label", "url"):
        raise ValueError(f"Unsupported update type {field!r}")
    if value is None:
        raise ValueError(f"A value is required to update {field!r}")
    return set_property(tree, item_id, field, lambda _old: value)


def create_item(
    kind: Literal["main", "child"] = "main",
    id_factory: Callable[[], str] | None = None,
) -> NavNode:
    """Create a blank item with placeholder label and url."""
    item_id = id_factory() if id_factory is not None else str(uuid4())
    if kind == "main":
        return NavNode(id=item_id, label=DEFAULT_MAIN_LABEL, url=DEFAULT_MAIN_URL)
    return NavNode(id=item_id, label=DEFAULT_CHILD_LABEL, url=DEFAULT_CHILD_URL)


def _check_new_id(tree: list[NavNode], item: NavNode) -> None:
    existing = {node.id for node, _parent, _depth in iter_tree(tree)}
    for node, _parent, _depth in iter_tree([item]):
        if node.id in existing:
            raise StructureError(f"Item id {node.id!r} already exists")


def add_item(
    tree: Iterable[NavNode],
    after_id: str | None = None,
    item: NavNode | None = None,
) -> list[NavNode]:
    """Insert a sibling directly after ``after_id``.

    When ``after_id`` is None or unknown the item is inserted at the start
    of the root list. Without ``item`` a blank one is created.

    Raises:
        StructureError: If ``item`` reuses an id already in the tree.
    """
    tree = list(tree)
    path = find_path(tree, after_id) if after_id is not None else None
    if item is None:
        item = create_item("child" if path is not None and len(path) > 1 else "main")
    else:
        _check_new_id(tree, item)

    if path is None:
        return [item, *tree]
    new_item = item
    return _replace_siblings(
        tree, path, lambda siblings, index: siblings[: index + 1] + [new_item] + siblings[index + 1 :]
    )


def add_child_item(
    tree: Iterable[NavNode],
    parent_id: str,
    after_child_id: str | None = None,
    item: NavNode | None = None,
) -> list[NavNode]:
    """Insert a child of ``parent_id`` directly after ``after_child_id``.

    When ``after_child_id`` is None or not a child of ``parent_id`` the item
    becomes the first child. Unknown ``parent_id`` is a no-op.

    Raises:
        StructureError: If ``item`` reuses an id already in the tree.
    """
    tree = list(tree)
    path = find_path(tree, parent_id)
    if path is None:
        return tree
    if item is None:
        item = create_item("child")
    else:
        _check_new_id(tree, item)
    new_item = item

    def _insert(siblings: list[NavNode], index: int) -> list[NavNode]:
        parent = siblings[index]
        children = list(parent.children)
        position = next(
            (i + 1 for i, child in enumerate(children) if child.id == after_child_id),
            0,
        )
        children.insert(position, new_item)
        siblings[index] = parent.model_copy(update={"children": children})
        return siblings

    return _replace_siblings(tree, path, _insert)
