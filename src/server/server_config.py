"""Server configuration."""

from __future__ import annotations

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000
API_TITLE = "navtree"
API_DESCRIPTION = "Edit a drag-sortable navigation menu tree."
