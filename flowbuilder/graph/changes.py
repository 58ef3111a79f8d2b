"""Change records sent by the canvas on pointer gestures.

The canvas reports moves, selections, removals and new connections as
small records; ``apply_changes`` turns each one into the matching
GraphStore operation.
"""

import logging
from typing import Annotated, Iterable, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from ..errors import FlowNotFoundError
from .store import GraphStore

logger = logging.getLogger(__name__)


class PositionChange(BaseModel):
    """A node was dragged to a new position."""

    type: Literal["position"] = "position"
    id: str
    x: int | float
    y: int | float


class SelectChange(BaseModel):
    """A node was selected or deselected."""

    type: Literal["select"] = "select"
    id: str
    selected: bool


class RemoveChange(BaseModel):
    """A node was removed from the canvas."""

    type: Literal["remove"] = "remove"
    id: str


class EdgeRemoveChange(BaseModel):
    """An edge was removed from the canvas."""

    type: Literal["edge-remove"] = "edge-remove"
    id: str


class ConnectChange(BaseModel):
    """The user dragged a connection between two node handles."""

    model_config = ConfigDict(populate_by_name=True)

    type: Literal["connect"] = "connect"
    source: str
    target: str
    source_handle: str | None = Field(default=None, alias="sourceHandle")
    target_handle: str | None = Field(default=None, alias="targetHandle")


Change = Annotated[
    Union[PositionChange, SelectChange, RemoveChange, EdgeRemoveChange, ConnectChange],
    Field(discriminator="type"),
]

_change_list = TypeAdapter(list[Change])


def parse_changes(raw: list[dict]) -> list[Change]:
    """Validate raw change dicts from the canvas into change records."""
    return _change_list.validate_python(raw)


def apply_change(store: GraphStore, change: Change) -> str | None:
    """Apply one change record to the store.

    Returns:
        The new edge id for a connect change, otherwise None.

    Raises:
        NodeNotFoundError: If a move or select targets an unknown node.
    """
    if isinstance(change, PositionChange):
        store.move_node(change.id, change.x, change.y)
    elif isinstance(change, SelectChange):
        store.select_node(change.id, change.selected)
    elif isinstance(change, RemoveChange):
        try:
            store.delete_node(change.id)
        except FlowNotFoundError as e:
            logger.warning("Ignoring remove change: %s", e)
    elif isinstance(change, EdgeRemoveChange):
        try:
            store.disconnect_edge(change.id)
        except FlowNotFoundError as e:
            logger.warning("Ignoring edge remove change: %s", e)
    elif isinstance(change, ConnectChange):
        return store.connect_nodes(
            change.source,
            change.target,
            source_handle=change.source_handle,
            target_handle=change.target_handle,
        )
    return None


def apply_changes(store: GraphStore, changes: Iterable[Change | dict]) -> list[str]:
    """Apply a batch of change records in order.

    Args:
        store: The graph store to mutate.
        changes: Change records, or raw dicts to be validated first.

    Returns:
        Ids of edges created by connect changes.
    """
    records = [
        c if isinstance(c, BaseModel) else _change_list.validate_python([c])[0]
        for c in changes
    ]
    created = []
    for change in records:
        edge_id = apply_change(store, change)
        if edge_id is not None:
            created.append(edge_id)
    return created
