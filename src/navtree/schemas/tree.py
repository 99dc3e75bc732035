"""Navigation tree models."""

from __future__ import annotations

from typing import Any, Literal, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

Highlight: TypeAlias = Literal["on", "off"]


class NavNode(BaseModel):
    """A navigation item and its ordered children.

    Nodes are immutable values: edits produce new nodes and untouched
    subtrees are shared between the old and the new tree.

    Attributes:
        id: Identifier, unique across the whole tree.
        label: Display text.
        url: Link target.
        highlighted: ``"on"`` or ``"off"``.
        collapsed: Whether the children are hidden in the editor.
        children: Nested items in display order.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    label: str = ""
    url: str = ""
    highlighted: Highlight = "off"
    collapsed: bool = False
    children: list["NavNode"] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _accept_child_items(cls, data: Any) -> Any:
        """Map the legacy ``childItems`` key onto ``children``."""
        if isinstance(data, dict) and "childItems" in data and "children" not in data:
            data = dict(data)
            data["children"] = data.pop("childItems") or []
        return data


class FlattenedNode(NavNode):
    """A node annotated with its position in the pre-order traversal.

    ``parent_id`` is always set explicitly and is ``None`` for roots.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    parent_id: str | None
    depth: int = Field(..., ge=0)
    index: int = Field(..., ge=0)


class Projection(BaseModel):
    """Depth and parent a dragged item would receive if dropped now."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    depth: int = Field(..., ge=0)
    parent_id: str | None
    max_depth: int = Field(..., ge=0)
    min_depth: int = Field(..., ge=0)


class MovePlacement(BaseModel):
    """Where a simulated move lands relative to a neighbouring item."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    kind: Literal["before", "after", "nested"]
    reference_id: str


TreeItems: TypeAlias = list[NavNode]
FlattenedItems: TypeAlias = list[FlattenedNode]
