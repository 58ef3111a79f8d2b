"""Pydantic models for flow documents."""

from typing import Any, ClassVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializationInfo,
    SerializerFunctionWrapHandler,
    model_serializer,
)


class Position(BaseModel):
    """Free-form canvas coordinates of a node."""

    x: int | float
    y: int | float


class NodeData(BaseModel):
    """Editable fields of a node."""

    model_config = ConfigDict(extra="allow")

    label: str
    description: str = ""


class GraphElement(BaseModel):
    """Base for nodes and edges.

    Keys the model does not declare are kept as-is, nulls included.
    Declared optional fields named in ``omit_if_none`` are left out of
    the dump while they are None.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    omit_if_none: ClassVar[tuple[str, ...]] = ()

    id: str

    @model_serializer(mode="wrap")
    def _drop_unset_optionals(
        self, handler: SerializerFunctionWrapHandler, info: SerializationInfo
    ) -> dict[str, Any]:
        data = handler(self)
        fields = type(self).model_fields
        for name in self.omit_if_none:
            if getattr(self, name) is None:
                alias = fields[name].alias
                data.pop(alias if info.by_alias and alias else name, None)
        return data


class Node(GraphElement):
    """A labeled, positioned vertex in the diagram."""

    omit_if_none: ClassVar[tuple[str, ...]] = ("type",)

    type: str | None = None
    position: Position
    data: NodeData

    @property
    def label(self) -> str:
        return self.data.label

    @property
    def description(self) -> str:
        return self.data.description


class EdgeStyle(BaseModel):
    """Stroke attributes of an edge."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    stroke_width: int | float = Field(default=2, alias="strokeWidth")
    stroke: str = "black"


class MarkerEnd(BaseModel):
    """Arrow marker drawn at the target end of an edge."""

    model_config = ConfigDict(extra="allow")

    type: str = "arrowclosed"
    width: int | float = 20
    height: int | float = 20
    color: str = "black"


class Edge(GraphElement):
    """A directed connection between two node endpoints."""

    omit_if_none: ClassVar[tuple[str, ...]] = (
        "source_handle",
        "target_handle",
        "type",
        "style",
        "marker_end",
    )

    source: str
    target: str
    source_handle: str | None = Field(default=None, alias="sourceHandle")
    target_handle: str | None = Field(default=None, alias="targetHandle")
    type: str | None = None
    animated: bool = False
    style: EdgeStyle | None = None
    marker_end: MarkerEnd | None = Field(default=None, alias="markerEnd")

    def touches(self, node_id: str) -> bool:
        """Check if either endpoint is the given node."""
        return self.source == node_id or self.target == node_id


class FlowDocument(BaseModel):
    """Root model for a flow document: the complete graph."""

    nodes: list[Node]
    edges: list[Edge]

    def get_node(self, node_id: str) -> Node | None:
        """Get a node by id."""
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def get_node_ids(self) -> list[str]:
        """Get all node ids in document order."""
        return [node.id for node in self.nodes]
