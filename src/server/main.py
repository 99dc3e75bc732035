"""FastAPI application hosting a navigation tree editor session."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from navtree.config import NAVTREE_STORE_PATH
from navtree.editor import TreeEditor
from navtree.exceptions import NotFoundError, StorageError, StructureError
from navtree.storage import TreeStore
from navtree.utils.logging_config import get_logger
from server.routers import drag, tree
from server.server_config import API_DESCRIPTION, API_TITLE

logger = get_logger(__name__)


def create_app(store: TreeStore | None = None) -> FastAPI:
    """Create the API application.

    Parameters
    ----------
    store : TreeStore | None
        Persistence for the tree. Defaults to ``NAVTREE_STORE_PATH``.

    Returns
    -------
    FastAPI
        Application whose editor session is created on startup from the
        stored tree and saves every change back to it before the change
        becomes visible.

    """
    tree_store = store or TreeStore(NAVTREE_STORE_PATH)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        items = await tree_store.load_async()
        app.state.editor = TreeEditor(items, listeners=[tree_store.save])
        app.state.editor_lock = asyncio.Lock()
        logger.info("Editor session started", extra={"store": str(tree_store.path), "root_items": len(items)})
        yield

    app = FastAPI(title=API_TITLE, description=API_DESCRIPTION, lifespan=lifespan)
    app.state.store = tree_store
    app.include_router(tree.router)
    app.include_router(drag.router)

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:  # noqa: ARG001
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": str(exc)})

    @app.exception_handler(StructureError)
    async def structure_error_handler(request: Request, exc: StructureError) -> JSONResponse:  # noqa: ARG001
        logger.warning("Rejected structural edit", extra={"path": request.url.path, "error": str(exc)})
        return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"error": str(exc)})

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
        logger.error("Storage failure", extra={"path": request.url.path, "error": str(exc)})
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": str(exc)})

    return app


app = create_app()
