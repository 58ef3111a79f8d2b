"""Schema layer: flow document models and the serialization codec."""

from .models import (
    Edge,
    EdgeStyle,
    FlowDocument,
    MarkerEnd,
    Node,
    NodeData,
    Position,
)
from .codec import (
    export_document,
    format_for_path,
    import_document,
    load_document,
    save_document,
)

__all__ = [
    "Edge",
    "EdgeStyle",
    "FlowDocument",
    "MarkerEnd",
    "Node",
    "NodeData",
    "Position",
    "export_document",
    "format_for_path",
    "import_document",
    "load_document",
    "save_document",
]
