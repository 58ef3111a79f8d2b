"""GraphStore: the single source of truth for an editing session."""

import logging
from typing import Callable

import networkx as nx

from ..errors import EdgeNotFoundError, FlowError, FlowValidationError, NodeNotFoundError
from ..schema.models import (
    Edge,
    EdgeStyle,
    FlowDocument,
    MarkerEnd,
    Node,
    NodeData,
    Position,
)
from ..validators.unique_ids import check_unique_ids
from .ids import SEED_NODE_ID, generate_id
from .layout import auto_arrange, default_position

logger = logging.getLogger(__name__)

Listener = Callable[["GraphStore"], None]

DEFAULT_EDGE_TYPE = "bezier"

_MAX_ID_ATTEMPTS = 100


def seed_document() -> FlowDocument:
    """Return the graph every new session starts with."""
    return FlowDocument(
        nodes=[
            Node(
                id=SEED_NODE_ID,
                type="default",
                position=Position(x=100, y=100),
                data=NodeData(label="Start"),
            )
        ],
        edges=[],
    )


class GraphStore:
    """Ordered nodes and edges of a flow graph.

    All mutation goes through the methods below. Each one computes the
    new state in full before swapping it in, so a failed call leaves the
    store as it was. Edge incidence is indexed in a networkx MultiDiGraph
    keyed by edge id.
    """

    def __init__(
        self,
        document: FlowDocument | None = None,
        id_factory: Callable[[], str] = generate_id,
    ):
        """Initialize a store from a document, or with the seed graph."""
        self._id_factory = id_factory
        self._listeners: list[Listener] = []
        self._nodes: dict[str, Node] = {}
        self._edges: dict[str, Edge] = {}
        self._index = nx.MultiDiGraph()
        self.selected_ids: set[str] = set()
        self._load(document if document is not None else seed_document())

    @property
    def index(self) -> nx.MultiDiGraph:
        """Get the networkx incidence index."""
        return self._index

    @property
    def nodes(self) -> list[Node]:
        """Nodes in insertion order."""
        return list(self._nodes.values())

    @property
    def edges(self) -> list[Edge]:
        """Edges in insertion order."""
        return list(self._edges.values())

    def __len__(self) -> int:
        return len(self._nodes)

    # -------------------------------------------------------------------------
    # Change notification
    # -------------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a callback run after every successful mutation.

        Exceptions raised by a listener are logged and do not reach the
        caller of the mutation.

        Returns:
            A function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        # Runs after the mutation is committed.
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Store listener %r failed", listener)

    # -------------------------------------------------------------------------
    # Mutation operations
    # -------------------------------------------------------------------------

    def add_node(self, label: str, description: str = "") -> str:
        """Append a node below the existing ones.

        Args:
            label: The node label (validated by the caller).
            description: Optional free text.

        Returns:
            The new node id.
        """
        node_id = self._new_id()
        node = Node(
            id=node_id,
            position=default_position(len(self._nodes)),
            data=NodeData(label=label, description=description),
        )
        self._nodes[node_id] = node
        self._index.add_node(node_id)

        logger.debug("Added node %s (%r)", node_id, label)
        self._notify()
        return node_id

    def update_node(self, node_id: str, label: str, description: str) -> None:
        """Replace the label and description of a node.

        Raises:
            NodeNotFoundError: If no node has this id.
        """
        node = self._require_node(node_id)
        data = node.data.model_copy(
            update={"label": label, "description": description}
        )
        self._nodes[node_id] = node.model_copy(update={"data": data})

        logger.debug("Updated node %s", node_id)
        self._notify()

    def delete_node(self, node_id: str) -> None:
        """Remove a node and every edge that starts or ends at it.

        Raises:
            NodeNotFoundError: If no node has this id.
        """
        self._require_node(node_id)

        doomed = self._incident_edge_ids(node_id)
        nodes = {nid: n for nid, n in self._nodes.items() if nid != node_id}
        edges = {eid: e for eid, e in self._edges.items() if eid not in doomed}

        self._nodes = nodes
        self._edges = edges
        self._index.remove_node(node_id)
        self.selected_ids.discard(node_id)

        logger.debug("Deleted node %s and %d edge(s)", node_id, len(doomed))
        self._notify()

    def connect_nodes(
        self,
        source: str,
        target: str,
        source_handle: str | None = None,
        target_handle: str | None = None,
    ) -> str:
        """Append an animated, arrow-tipped edge from source to target.

        Endpoints are not re-checked here; callers only connect nodes the
        canvas has shown them. Handles are passed through unchanged.

        Returns:
            The new edge id.
        """
        edge_id = self._new_id()
        edge = Edge(
            id=edge_id,
            source=source,
            target=target,
            source_handle=source_handle,
            target_handle=target_handle,
            type=DEFAULT_EDGE_TYPE,
            animated=True,
            style=EdgeStyle(),
            marker_end=MarkerEnd(),
        )
        self._edges[edge_id] = edge
        self._index.add_edge(source, target, key=edge_id)

        logger.debug("Connected %s -> %s as %s", source, target, edge_id)
        self._notify()
        return edge_id

    def disconnect_edge(self, edge_id: str) -> None:
        """Remove a single edge.

        Raises:
            EdgeNotFoundError: If no edge has this id.
        """
        edge = self._edges.get(edge_id)
        if edge is None:
            raise EdgeNotFoundError(edge_id)

        del self._edges[edge_id]
        self._index.remove_edge(edge.source, edge.target, key=edge_id)

        logger.debug("Disconnected edge %s", edge_id)
        self._notify()

    def move_node(self, node_id: str, x: int | float, y: int | float) -> None:
        """Set a node's canvas position.

        Raises:
            NodeNotFoundError: If no node has this id.
        """
        node = self._require_node(node_id)
        self._nodes[node_id] = node.model_copy(
            update={"position": Position(x=x, y=y)}
        )
        self._notify()

    def select_node(self, node_id: str, selected: bool = True) -> None:
        """Mark a node as selected or deselected on the canvas.

        Raises:
            NodeNotFoundError: If no node has this id.
        """
        self._require_node(node_id)
        if selected:
            self.selected_ids.add(node_id)
        else:
            self.selected_ids.discard(node_id)
        self._notify()

    def auto_arrange(self) -> None:
        """Stack all nodes vertically in store order."""
        arranged = auto_arrange(list(self._nodes.values()))
        self._nodes = {node.id: node for node in arranged}

        logger.debug("Arranged %d node(s)", len(arranged))
        self._notify()

    def replace(self, document: FlowDocument) -> None:
        """Discard the current graph and load a document in its place.

        Raises:
            FlowValidationError: If node or edge ids are not unique. The
                store is left untouched.
        """
        self._load(document)
        self.selected_ids = set()

        logger.info(
            "Replaced graph: %d node(s), %d edge(s)",
            len(self._nodes),
            len(self._edges),
        )
        self._notify()

    def snapshot(self) -> FlowDocument:
        """Return a deep copy of the current graph."""
        return FlowDocument(
            nodes=[node.model_copy(deep=True) for node in self._nodes.values()],
            edges=[edge.model_copy(deep=True) for edge in self._edges.values()],
        )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def has_node(self, node_id: str) -> bool:
        """Check if a node exists."""
        return node_id in self._nodes

    def get_node(self, node_id: str) -> Node | None:
        """Get a node by id."""
        return self._nodes.get(node_id)

    def get_edge(self, edge_id: str) -> Edge | None:
        """Get an edge by id."""
        return self._edges.get(edge_id)

    def node_ids(self) -> list[str]:
        """Get all node ids in store order."""
        return list(self._nodes)

    def edges_for_node(self, node_id: str) -> list[Edge]:
        """Get all edges that start or end at a node, in store order."""
        incident = self._incident_edge_ids(node_id)
        return [edge for eid, edge in self._edges.items() if eid in incident]

    def successors(self, node_id: str) -> list[str]:
        """Get ids of existing nodes this node has an edge to."""
        if not self._index.has_node(node_id):
            return []
        return [n for n in self._index.successors(node_id) if n in self._nodes]

    def predecessors(self, node_id: str) -> list[str]:
        """Get ids of existing nodes with an edge to this node."""
        if not self._index.has_node(node_id):
            return []
        return [n for n in self._index.predecessors(node_id) if n in self._nodes]

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _require_node(self, node_id: str) -> Node:
        node = self._nodes.get(node_id)
        if node is None:
            raise NodeNotFoundError(node_id)
        return node

    def _incident_edge_ids(self, node_id: str) -> set[str]:
        if not self._index.has_node(node_id):
            return set()
        incoming = self._index.in_edges(node_id, keys=True)
        outgoing = self._index.out_edges(node_id, keys=True)
        return {key for _, _, key in incoming} | {key for _, _, key in outgoing}

    def _new_id(self) -> str:
        for _ in range(_MAX_ID_ATTEMPTS):
            candidate = self._id_factory()
            if (
                candidate != SEED_NODE_ID
                and candidate not in self._nodes
                and candidate not in self._edges
            ):
                return candidate
        raise FlowError("Could not generate a unique id")

    def _load(self, document: FlowDocument) -> None:
        result = check_unique_ids(document)
        if result.has_errors:
            raise FlowValidationError(
                "Invalid document", [i.to_error_dict() for i in result.errors]
            )

        nodes = {node.id: node.model_copy(deep=True) for node in document.nodes}
        edges = {edge.id: edge.model_copy(deep=True) for edge in document.edges}

        index = nx.MultiDiGraph()
        index.add_nodes_from(nodes)
        for edge in edges.values():
            # Dangling endpoints from trusted imports become bare index nodes.
            index.add_edge(edge.source, edge.target, key=edge.id)

        self._nodes = nodes
        self._edges = edges
        self._index = index

