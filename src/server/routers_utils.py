"""Shared helpers for the API routers."""

from __future__ import annotations

import asyncio
from typing import Annotated, Any, Callable, TypeVar

from fastapi import Depends, HTTPException, Request, status

from navtree.editor import TreeEditor
from server.models import DragStateResponse, ErrorResponse

COMMON_RESPONSES: dict[int | str, dict[str, Any]] = {
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse, "description": "Item not found"},
    status.HTTP_409_CONFLICT: {"model": ErrorResponse, "description": "Edit would break the tree structure"},
}


def get_editor(request: Request) -> TreeEditor:
    """Return the editor session owned by the application."""
    return request.app.state.editor


EditorDep = Annotated[TreeEditor, Depends(get_editor)]

T = TypeVar("T")


async def run_editor(request: Request, operation: Callable[..., T], *args: Any) -> T:
    """Run one editor call in a worker thread, one call at a time.

    The editor saves each change before installing it, so the disk write
    stays off the event loop and a failed write leaves the session as it was.

    Parameters
    ----------
    request : Request
        Incoming request, used to reach the application state.
    operation : Callable[..., T]
        Editor method or closure to run.
    *args : Any
        Positional arguments for ``operation``.

    Returns
    -------
    T
        Whatever ``operation`` returns.

    """
    async with request.app.state.editor_lock:
        return await asyncio.to_thread(operation, *args)


def drag_state_response(editor: TreeEditor) -> DragStateResponse:
    """Describe the active drag.

    Raises
    ------
    HTTPException
        **409** when no drag is in progress.

    """
    drag = editor.drag
    if drag is None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="No drag in progress")
    return DragStateResponse(
        active_id=drag.active_id,
        over_id=drag.over_id,
        offset=drag.offset,
        projection=drag.projection,
        placement=editor.placement(),
        child_count=editor.child_count(drag.active_id),
    )
