"""Pydantic models for the editor API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from navtree.keyboard import Direction
from navtree.mutations import UpdateType
from navtree.schemas import FlattenedNode, MovePlacement, NavNode, Projection


class ApiModel(BaseModel):
    """Base model exchanging camelCase JSON with the editor UI."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TreeRequest(ApiModel):
    """Request model for replacing the whole tree."""

    items: list[NavNode] = Field(default_factory=list)


class TreeResponse(ApiModel):
    """The canonical tree, as persisted."""

    items: list[NavNode]


class FlatTreeResponse(ApiModel):
    """Flattened rows in render order."""

    items: list[FlattenedNode]


class OutlineResponse(ApiModel):
    """Text outline of the tree."""

    outline: str
    total_items: int


class ItemResponse(ApiModel):
    """A single item with the number of its descendants."""

    item: NavNode
    child_count: int


class AddItemRequest(ApiModel):
    """Request model for inserting a sibling.

    Attributes
    ----------
    after_id : str | None
        Item after which to insert. None inserts at the top.
    item : NavNode | None
        Item to insert. A blank item is created when omitted.

    """

    after_id: str | None = None
    item: NavNode | None = None


class AddChildRequest(ApiModel):
    """Request model for inserting a child."""

    after_child_id: str | None = None
    item: NavNode | None = None


class UpdateItemRequest(ApiModel):
    """Request model for a form edit.

    ``highlighted`` toggles and ignores ``value``; ``label`` and ``url``
    require it.
    """

    field: UpdateType
    value: str | None = None

    @model_validator(mode="after")
    def require_value_for_text(self) -> UpdateItemRequest:
        """Validate that text edits carry a value."""
        if self.field != "highlighted" and self.value is None:
            err = f"value is required when field is {self.field!r}"
            raise ValueError(err)
        return self


class DragStartRequest(ApiModel):
    active_id: str


class DragMoveRequest(ApiModel):
    over_id: str | None = None
    offset: float = 0.0


class KeyboardRequest(ApiModel):
    direction: Direction


class DragStateResponse(ApiModel):
    """Current drag, its projection and where it would land."""

    active_id: str
    over_id: str | None
    offset: float
    projection: Projection | None
    placement: MovePlacement | None
    child_count: int


class ProjectionRequest(ApiModel):
    """Request model for a one-off projection against the current tree."""

    active_id: str
    over_id: str | None = None
    offset: float = 0.0
    indentation_width: float | None = Field(default=None, gt=0)


class ProjectionResponse(ApiModel):
    """Projection, or null when the hovered row is unknown."""

    projection: Projection | None
    placement: MovePlacement | None = None


class ErrorResponse(ApiModel):
    """Error payload."""

    error: str
