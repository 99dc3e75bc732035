"""Tests for the interactive editor session."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from navtree.editor import DragState, TreeEditor
from navtree.exceptions import NotFoundError, StorageError, StructureError
from navtree.schemas import MovePlacement, NavNode, Projection
from navtree.tree import flatten_tree


def _shape(tree: list[NavNode]) -> list[tuple[str, int, str | None]]:
    return [(row.id, row.depth, row.parent_id) for row in flatten_tree(tree)]


@pytest.fixture
def emitted() -> list[list[NavNode]]:
    return []


@pytest.fixture
def editor(scenario_tree: list[NavNode], emitted: list[list[NavNode]]) -> TreeEditor:
    return TreeEditor(scenario_tree, indentation_width=50, listeners=[emitted.append])


class TestConstruction:
    """Tests for TreeEditor construction and lookups."""

    def test_starts_empty(self) -> None:
        """Starts with an empty tree when no items are given."""
        assert TreeEditor().items == []
        assert TreeEditor(None).flattened_items() == []

    def test_rejects_duplicate_ids(self) -> None:
        """Raises StructureError when ids repeat."""
        with pytest.raises(StructureError):
            TreeEditor([NavNode(id="x"), NavNode(id="x")])

    def test_get_item(self, editor: TreeEditor) -> None:
        """Returns a nested item by id."""
        assert editor.get_item("4").id == "4"

    def test_get_item_missing(self, editor: TreeEditor) -> None:
        """Raises NotFoundError naming the missing id."""
        with pytest.raises(NotFoundError, match="'zzz'"):
            editor.get_item("zzz")

    def test_child_count(self, editor: TreeEditor) -> None:
        """Counts descendants and returns 0 for unknown ids."""
        assert editor.child_count("1") == 1
        assert editor.child_count("zzz") == 0


class TestDragLifecycle:
    """Tests for start, move, end and cancel."""

    def test_drop_commits_and_emits(self, editor: TreeEditor, emitted: list[list[NavNode]]) -> None:
        """Emits the new tree once, when the drag ends."""
        editor.start_drag("2")
        projection = editor.move_drag("4", 0)

        assert projection == Projection(depth=1, parent_id="1", max_depth=1, min_depth=1)
        assert emitted == []

        result = editor.end_drag()

        assert _shape(result) == [("1", 0, None), ("2", 1, "1"), ("4", 1, "1")]
        assert emitted == [result]
        assert editor.drag is None

    def test_only_latest_move_counts(self, editor: TreeEditor) -> None:
        """Drops at the last recorded position."""
        editor.start_drag("2")
        editor.move_drag("4", 0)
        editor.move_drag("1", 0)

        result = editor.end_drag()

        assert [node.id for node in result] == ["2", "1"]

    def test_start_hides_dragged_children(self, editor: TreeEditor) -> None:
        """Hides the dragged item's children from the display list."""
        state = editor.start_drag("1")

        assert state == DragState(
            active_id="1",
            over_id="1",
            offset=0.0,
            projection=Projection(depth=0, parent_id=None, max_depth=0, min_depth=0),
        )
        assert [row.id for row in editor.flattened_items()] == ["1", "2"]

    def test_start_unknown_item(self, editor: TreeEditor) -> None:
        """Raises NotFoundError and leaves no drag behind."""
        with pytest.raises(NotFoundError):
            editor.start_drag("zzz")
        assert editor.drag is None

    def test_cancel_discards_drag(
        self, editor: TreeEditor, emitted: list[list[NavNode]], scenario_tree: list[NavNode]
    ) -> None:
        """Cancelling keeps the tree and emits nothing."""
        editor.start_drag("2")
        editor.move_drag("4", 0)

        editor.cancel_drag()

        assert editor.drag is None
        assert editor.items == scenario_tree
        assert emitted == []

    def test_drop_outside_rows_keeps_tree(
        self, editor: TreeEditor, emitted: list[list[NavNode]], scenario_tree: list[NavNode]
    ) -> None:
        """Returns the tree unchanged when the pointer left every row."""
        editor.start_drag("2")
        assert editor.move_drag(None, 0) is None

        assert editor.end_drag() == scenario_tree
        assert emitted == []

    def test_move_without_drag(self, editor: TreeEditor) -> None:
        """Ignores moves and drops when no drag is active."""
        assert editor.move_drag("1", 0) is None
        assert editor.keyboard_move("up") is None
        assert editor.end_drag() == editor.items

    def test_rejected_drop_keeps_previous_tree(
        self, editor: TreeEditor, emitted: list[list[NavNode]], scenario_tree: list[NavNode]
    ) -> None:
        """Keeps the previous tree when a drop is rejected."""
        editor.start_drag("2")
        editor.move_drag("4", 0)

        with patch("navtree.editor.apply_projection", side_effect=StructureError("bad drop")):
            with pytest.raises(StructureError, match="bad drop"):
                editor.end_drag()

        assert editor.items == scenario_tree
        assert editor.drag is None
        assert emitted == []

    def test_keyboard_drag(self, editor: TreeEditor) -> None:
        """Moves the hover target with an arrow key."""
        editor.start_drag("2")

        state = editor.keyboard_move("up")

        assert state is not None
        assert state.over_id == "4"
        assert state.projection == Projection(depth=1, parent_id="1", max_depth=1, min_depth=1)
        assert editor.placement() == MovePlacement(kind="nested", reference_id="1")

    def test_drop_respects_collapsed_items(self, deep_tree: list[NavNode]) -> None:
        """Drops after a collapsed item's hidden children."""
        editor = TreeEditor(deep_tree, indentation_width=50)
        editor.toggle_collapsed("c")
        editor.start_drag("b")
        editor.move_drag("c", 50)

        result = editor.end_drag()

        assert [node.id for node in result] == ["a", "c"]
        assert [child.id for child in result[1].children] == ["c1", "b"]

    def test_edit_during_drag_reprojects_drop(self, deep_tree: list[NavNode]) -> None:
        """Recomputes the projection against the edited tree."""
        editor = TreeEditor(deep_tree, indentation_width=50)
        editor.start_drag("c")
        assert editor.move_drag("b", 50) == Projection(depth=1, parent_id="a", max_depth=2, min_depth=0)

        editor.remove("a")

        assert editor.drag is not None
        assert editor.drag.projection == Projection(depth=0, parent_id=None, max_depth=0, min_depth=0)
        result = editor.end_drag()
        assert _shape(result) == [("c", 0, None), ("c1", 1, "c"), ("b", 0, None)]

    def test_collapse_during_drag_reprojects(self, deep_tree: list[NavNode]) -> None:
        """Drops nothing when the hovered row is collapsed away."""
        editor = TreeEditor(deep_tree, indentation_width=50)
        editor.start_drag("b")
        editor.move_drag("a2", 50)

        editor.toggle_collapsed("a")

        assert editor.drag is not None
        assert editor.drag.projection is None
        assert editor.end_drag() == editor.items

    def test_removing_dragged_item_ends_drag(self, editor: TreeEditor) -> None:
        """Ends the drag when the dragged item is removed."""
        editor.start_drag("4")

        editor.remove("1")

        assert editor.drag is None


class TestEdits:
    """Tests for edits and change notification."""

    def test_remove_emits(self, editor: TreeEditor, emitted: list[list[NavNode]]) -> None:
        """Emits the tree without the removed subtree."""
        result = editor.remove("1")

        assert result == [NavNode(id="2")]
        assert emitted == [[NavNode(id="2")]]

    def test_unknown_id_does_not_emit(self, editor: TreeEditor, emitted: list[list[NavNode]]) -> None:
        """Does not emit when an edit changes nothing."""
        editor.remove("zzz")
        editor.update("zzz", "label", "x")
        editor.toggle_collapsed("zzz")

        assert emitted == []

    def test_update_and_toggle(self, editor: TreeEditor) -> None:
        """Sets a label and toggles the highlight."""
        editor.update("4", "label", "Child")
        editor.update("4", "highlighted")

        item = editor.get_item("4")
        assert (item.label, item.highlighted) == ("Child", "on")

    def test_collapse_hides_children(self, editor: TreeEditor, emitted: list[list[NavNode]]) -> None:
        """Hides children of a collapsed item."""
        editor.toggle_collapsed("1")

        assert editor.get_item("1").collapsed is True
        assert editor.collapsed_ids() == ["1"]
        assert [row.id for row in editor.flattened_items()] == ["1", "2"]
        assert len(emitted) == 1

    def test_add_items(self, editor: TreeEditor) -> None:
        """Inserts a sibling and then a child under it."""
        editor.add_item("1", NavNode(id="3"))
        editor.add_child_item("3", item=NavNode(id="5"))

        assert _shape(editor.items) == [
            ("1", 0, None),
            ("4", 1, "1"),
            ("3", 0, None),
            ("5", 1, "3"),
            ("2", 0, None),
        ]

    def test_replace_validates(self, editor: TreeEditor, scenario_tree: list[NavNode]) -> None:
        """Rejects a replacement tree with duplicate ids."""
        with pytest.raises(StructureError):
            editor.replace([NavNode(id="x", children=[NavNode(id="x")])])

        assert editor.items == scenario_tree

    def test_subscribe(self, editor: TreeEditor) -> None:
        """Notifies listeners registered after construction."""
        received: list[list[NavNode]] = []
        editor.subscribe(received.append)

        editor.replace([NavNode(id="9")])

        assert received == [[NavNode(id="9")]]

    def test_items_is_a_copy(self, editor: TreeEditor) -> None:
        """Returns a copy that callers cannot mutate."""
        editor.items.append(NavNode(id="9"))

        assert len(editor.items) == 2

    def test_failing_listener_keeps_previous_tree(self, scenario_tree: list[NavNode]) -> None:
        """Keeps the previous tree when a listener raises."""
        def _fail(items: list[NavNode]) -> None:
            raise StorageError("disk full")

        editor = TreeEditor(scenario_tree, listeners=[_fail])

        with pytest.raises(StorageError, match="disk full"):
            editor.remove("1")

        assert editor.items == scenario_tree

    def test_listeners_run_before_tree_changes(
        self, editor: TreeEditor, scenario_tree: list[NavNode]
    ) -> None:
        """Calls listeners before the new tree is visible."""
        seen_during_save: list[list[NavNode]] = []
        editor.subscribe(lambda _items: seen_during_save.append(editor.items))

        editor.remove("1")

        assert seen_during_save == [scenario_tree]
