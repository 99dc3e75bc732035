"""Custom exceptions for navtree."""


class NavTreeError(Exception):
    """Base exception for navtree operations."""


class StructureError(NavTreeError):
    """Flattened sequence or tree violates the structural invariants."""


class NotFoundError(NavTreeError):
    """Item id is not present in the tree."""


class StorageError(NavTreeError):
    """Error while loading or saving a persisted tree."""
