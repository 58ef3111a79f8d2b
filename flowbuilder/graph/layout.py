"""Default placement and the vertical auto-arrange layout."""

from ..schema.models import Node, Position

# New nodes cascade down from the seed node.
ADD_X = 150
ADD_Y_START = 100
ADD_Y_STEP = 70

ARRANGE_X = 100
ARRANGE_Y_START = 100
ARRANGE_Y_GAP = 80


def default_position(node_count: int) -> Position:
    """Position for a node appended to a graph holding ``node_count`` nodes."""
    return Position(x=ADD_X, y=ADD_Y_START + ADD_Y_STEP * node_count)


def arranged_position(index: int) -> Position:
    """Position of the node at ``index`` after auto-arrange."""
    return Position(x=ARRANGE_X, y=ARRANGE_Y_START + index * ARRANGE_Y_GAP)


def auto_arrange(nodes: list[Node]) -> list[Node]:
    """Stack nodes top-down in their current order.

    Only positions change; ids, data and order are kept. Applying the
    layout to its own output yields the same positions.

    Args:
        nodes: Nodes in store order.

    Returns:
        New node objects with updated positions.
    """
    return [
        node.model_copy(update={"position": arranged_position(idx)})
        for idx, node in enumerate(nodes)
    ]
