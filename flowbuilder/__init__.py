"""flowbuilder: graph state model for a node-and-edge flow editor."""

from .errors import (
    DocumentLoadError,
    EdgeNotFoundError,
    FlowError,
    FlowNotFoundError,
    FlowValidationError,
    NodeNotFoundError,
    SessionStateError,
)
from .schema.models import Edge, FlowDocument, Node
from .graph.store import GraphStore
from .session.controller import EditSession
from .editor import FlowEditor

__all__ = [
    "DocumentLoadError",
    "EdgeNotFoundError",
    "FlowError",
    "FlowNotFoundError",
    "FlowValidationError",
    "NodeNotFoundError",
    "SessionStateError",
    "Edge",
    "FlowDocument",
    "Node",
    "GraphStore",
    "EditSession",
    "FlowEditor",
]
