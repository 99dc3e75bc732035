"""Tree and item endpoints for the API."""

from fastapi import APIRouter, Request, status

from navtree.outline import count_items, render_outline
from navtree.schemas import NavNode
from navtree.tree import flatten_tree
from server.models import (
    AddChildRequest,
    AddItemRequest,
    FlatTreeResponse,
    ItemResponse,
    OutlineResponse,
    TreeRequest,
    TreeResponse,
    UpdateItemRequest,
)
from server.routers_utils import COMMON_RESPONSES, EditorDep, run_editor

router = APIRouter(prefix="/api", responses=COMMON_RESPONSES)


@router.get("/tree")
async def get_tree(editor: EditorDep) -> TreeResponse:
    """Return the canonical tree as persisted."""
    return TreeResponse(items=editor.items)


@router.put("/tree")
async def put_tree(request: Request, editor: EditorDep, tree_request: TreeRequest) -> TreeResponse:
    """Replace the whole tree.

    **Raises**

    - **409** - item ids are not unique
    """
    return TreeResponse(items=await run_editor(request, editor.replace, tree_request.items))


@router.get("/tree/flat")
async def get_flat_tree(editor: EditorDep, include_hidden: bool = False) -> FlatTreeResponse:
    """Return the rows to render.

    Children of collapsed items and of the dragged item are left out unless
    ``include_hidden`` is set.
    """
    items = flatten_tree(editor.items) if include_hidden else editor.flattened_items()
    return FlatTreeResponse(items=items)


@router.get("/tree/outline")
async def get_outline(editor: EditorDep, show_collapsed: bool = False) -> OutlineResponse:
    """Return a text outline of the tree."""
    items = editor.items
    return OutlineResponse(
        outline=render_outline(items, show_collapsed=show_collapsed),
        total_items=count_items(items),
    )


@router.post("/items", status_code=status.HTTP_201_CREATED)
async def create_item(request: Request, editor: EditorDep, add_request: AddItemRequest) -> TreeResponse:
    """Insert a sibling after ``afterId``, or at the top of the menu."""
    items = await run_editor(request, editor.add_item, add_request.after_id, add_request.item)
    return TreeResponse(items=items)


@router.post("/items/{item_id}/children", status_code=status.HTTP_201_CREATED)
async def create_child_item(
    request: Request, editor: EditorDep, item_id: str, add_request: AddChildRequest
) -> TreeResponse:
    """Insert a child of ``item_id`` after ``afterChildId``, or as its first child."""

    def _add() -> list[NavNode]:
        editor.get_item(item_id)
        return editor.add_child_item(item_id, add_request.after_child_id, add_request.item)

    return TreeResponse(items=await run_editor(request, _add))


@router.get("/items/{item_id}")
async def get_item(editor: EditorDep, item_id: str) -> ItemResponse:
    """Return one item and the size of its subtree."""
    return ItemResponse(item=editor.get_item(item_id), child_count=editor.child_count(item_id))


@router.patch("/items/{item_id}")
async def update_item(
    request: Request, editor: EditorDep, item_id: str, update_request: UpdateItemRequest
) -> TreeResponse:
    """Edit a label or url, or toggle the highlight.

    Unknown ids leave the tree unchanged.
    """
    items = await run_editor(request, editor.update, item_id, update_request.field, update_request.value)
    return TreeResponse(items=items)


@router.delete("/items/{item_id}")
async def delete_item(request: Request, editor: EditorDep, item_id: str) -> TreeResponse:
    """Remove an item with its whole subtree. Unknown ids leave the tree unchanged."""
    return TreeResponse(items=await run_editor(request, editor.remove, item_id))


@router.post("/items/{item_id}/collapse")
async def toggle_collapse(request: Request, editor: EditorDep, item_id: str) -> TreeResponse:
    """Toggle whether the children of ``item_id`` are shown."""
    return TreeResponse(items=await run_editor(request, editor.toggle_collapsed, item_id))
