"""Graph layer: the in-memory store and its mutation operations."""

from .ids import SEED_NODE_ID, generate_id
from .layout import arranged_position, auto_arrange, default_position
from .store import GraphStore, seed_document
from .changes import (
    ConnectChange,
    EdgeRemoveChange,
    PositionChange,
    RemoveChange,
    SelectChange,
    apply_change,
    apply_changes,
    parse_changes,
)

__all__ = [
    "SEED_NODE_ID",
    "generate_id",
    "arranged_position",
    "auto_arrange",
    "default_position",
    "GraphStore",
    "seed_document",
    "ConnectChange",
    "EdgeRemoveChange",
    "PositionChange",
    "RemoveChange",
    "SelectChange",
    "apply_change",
    "apply_changes",
    "parse_changes",
]
