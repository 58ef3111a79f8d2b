"""Reference integrity validator."""

from ..schema.models import FlowDocument
from .base import ValidationResult


def check_reference_integrity(document: FlowDocument) -> ValidationResult:
    """Check that every edge endpoint references a defined node.

    Args:
        document: The flow document.

    Returns:
        ValidationResult with errors for dangling edges.
    """
    result = ValidationResult()

    node_ids = set(document.get_node_ids())

    for edge in document.edges:
        for end, node_id in (("source", edge.source), ("target", edge.target)):
            if node_id not in node_ids:
                result.add_error(
                    code="DANGLING_EDGE",
                    message=f"Edge {end} references undefined node '{node_id}'",
                    edge=edge.id,
                    endpoint=end,
                    referenced_node=node_id,
                )

    return result
