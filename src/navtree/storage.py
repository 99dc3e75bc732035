"""JSON file persistence for the navigation field value."""

from __future__ import annotations

import asyncio
import os
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from navtree.exceptions import StorageError, StructureError
from navtree.schemas import NavNode
from navtree.tree import validate_tree
from navtree.utils.logging_config import get_logger

logger = get_logger(__name__)

_TREE_ADAPTER: TypeAdapter[list[NavNode] | None] = TypeAdapter(list[NavNode] | None)


def parse_tree(raw: str | bytes) -> list[NavNode]:
    """Parse a persisted field value.

    Empty input and JSON ``null`` mean "no value yet" and yield an empty tree.

    Raises:
        StorageError: If the value is not a valid tree.
    """
    if not raw or not raw.strip():
        return []
    try:
        items = _TREE_ADAPTER.validate_json(raw) or []
        validate_tree(items)
    except (ValidationError, StructureError) as exc:
        raise StorageError(f"Invalid navigation tree: {exc}") from exc
    return items


def dump_tree(items: list[NavNode]) -> str:
    """Serialize a tree to the persisted JSON shape."""
    return _TREE_ADAPTER.dump_json(items, indent=2).decode("utf-8")


class TreeStore:
    """Load and save the whole tree as one JSON document.

    Attributes:
        path: Location of the JSON file.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> list[NavNode]:
        """Read the tree, returning an empty tree when the file is missing.

        Raises:
            StorageError: If the file cannot be read or is not a valid tree.
        """
        if not self.path.exists():
            logger.debug("No stored tree at %s, starting empty", self.path)
            return []
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Cannot read {self.path}: {exc}") from exc
        return parse_tree(raw)

    def save(self, items: list[NavNode]) -> None:
        """Atomically replace the stored tree.

        Raises:
            StorageError: If the file cannot be written.
        """
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(dump_tree(items), encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as exc:
            raise StorageError(f"Cannot write {self.path}: {exc}") from exc
        logger.debug("Stored %d root items at %s", len(items), self.path)

    async def load_async(self) -> list[NavNode]:
        """Read the tree in a worker thread."""
        return await asyncio.to_thread(self.load)
