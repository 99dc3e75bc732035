"""Drag and drop endpoints for the API."""

from fastapi import APIRouter, HTTPException, Request, status

from navtree.editor import TreeEditor
from navtree.projection import classify_move, get_projection
from navtree.schemas import NavNode
from navtree.tree import flatten_tree, remove_children_of
from server.models import (
    DragMoveRequest,
    DragStartRequest,
    DragStateResponse,
    KeyboardRequest,
    ProjectionRequest,
    ProjectionResponse,
    TreeResponse,
)
from server.routers_utils import COMMON_RESPONSES, EditorDep, drag_state_response, run_editor

router = APIRouter(prefix="/api", responses=COMMON_RESPONSES)


def _require_drag(editor: TreeEditor) -> None:
    if editor.drag is None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="No drag in progress")


@router.post("/drag/start")
async def start_drag(request: Request, editor: EditorDep, start_request: DragStartRequest) -> DragStateResponse:
    """Start dragging an item. Its children are hidden until the drag ends."""

    def _start() -> DragStateResponse:
        editor.start_drag(start_request.active_id)
        return drag_state_response(editor)

    return await run_editor(request, _start)


@router.post("/drag/move")
async def move_drag(request: Request, editor: EditorDep, move_request: DragMoveRequest) -> DragStateResponse:
    """Record the latest hovered row and horizontal offset.

    A null ``projection`` means the pointer is outside every row.
    """

    def _move() -> DragStateResponse:
        _require_drag(editor)
        editor.move_drag(move_request.over_id, move_request.offset)
        return drag_state_response(editor)

    return await run_editor(request, _move)


@router.post("/drag/keyboard")
async def keyboard_drag(
    request: Request, editor: EditorDep, keyboard_request: KeyboardRequest
) -> DragStateResponse:
    """Move the active drag one step with an arrow key."""

    def _step() -> DragStateResponse:
        _require_drag(editor)
        editor.keyboard_move(keyboard_request.direction)
        return drag_state_response(editor)

    return await run_editor(request, _step)


@router.post("/drag/end")
async def end_drag(request: Request, editor: EditorDep) -> TreeResponse:
    """Drop the dragged item at its projected position.

    **Raises**

    - **409** - the drop would produce an invalid tree; the tree is unchanged
    """
    return TreeResponse(items=await run_editor(request, editor.end_drag))


@router.post("/drag/cancel")
async def cancel_drag(request: Request, editor: EditorDep) -> TreeResponse:
    """Abandon the active drag. The tree is unchanged."""

    def _cancel() -> list[NavNode]:
        editor.cancel_drag()
        return editor.items

    return TreeResponse(items=await run_editor(request, _cancel))


@router.post("/projection")
async def project(editor: EditorDep, projection_request: ProjectionRequest) -> ProjectionResponse:
    """Compute a projection without starting a drag."""
    hidden = [*editor.collapsed_ids(), projection_request.active_id]
    flattened = remove_children_of(flatten_tree(editor.items), hidden)
    projection = get_projection(
        flattened,
        projection_request.active_id,
        projection_request.over_id,
        projection_request.offset,
        projection_request.indentation_width or editor.indentation_width,
    )
    placement = None
    if projection is not None:
        placement = classify_move(
            flattened, projection_request.active_id, projection_request.over_id, projection
        )
    return ProjectionResponse(projection=projection, placement=placement)
