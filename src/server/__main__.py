"""Run the navigation editor API with ``python -m server`` or ``navtree-server``."""

import os

import uvicorn

from navtree.config import NAVTREE_LOG_LEVEL, NAVTREE_STORE_PATH
from navtree.utils.logging_config import configure_logging, get_logger
from server.server_config import DEFAULT_HOST, DEFAULT_PORT

logger = get_logger(__name__)


def main() -> None:
    """Serve the editor session for the configured store, reading HOST, PORT and RELOAD."""
    configure_logging()
    host = os.getenv("HOST", DEFAULT_HOST)
    port = int(os.getenv("PORT", str(DEFAULT_PORT)))
    reload = os.getenv("RELOAD", "false").lower() == "true"

    logger.info("Serving navigation tree", extra={"host": host, "port": port, "store": str(NAVTREE_STORE_PATH)})
    uvicorn.run(
        "server.main:app",
        host=host,
        port=port,
        reload=reload,
        log_level=NAVTREE_LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
