"""Local configuration for navtree."""

from __future__ import annotations

import os
from pathlib import Path


DEFAULT_INDENTATION_WIDTH = 50
DEFAULT_STORE_PATH = ".navtree/menu.json"
DEFAULT_LOG_LEVEL = "INFO"

DEFAULT_MAIN_LABEL = "Nav Item Label"
DEFAULT_MAIN_URL = "/placeholder-url"
DEFAULT_CHILD_LABEL = "Sub Item Label"
DEFAULT_CHILD_URL = "/placeholder-child-url"

# Offset units per depth level while dragging.
NAVTREE_INDENTATION_WIDTH = float(os.getenv("NAVTREE_INDENTATION_WIDTH", str(DEFAULT_INDENTATION_WIDTH)))
# JSON file backing the persisted menu value.
NAVTREE_STORE_PATH = Path(os.getenv("NAVTREE_STORE_PATH", DEFAULT_STORE_PATH)).expanduser().resolve()
NAVTREE_LOG_LEVEL = os.getenv("NAVTREE_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
