"""Identifier uniqueness validator."""

from collections import Counter

from ..schema.models import FlowDocument
from .base import ValidationResult


def check_unique_ids(document: FlowDocument) -> ValidationResult:
    """Check that node ids and edge ids are each unique.

    Args:
        document: The flow document.

    Returns:
        ValidationResult with one error per repeated id.
    """
    result = ValidationResult()

    node_counts = Counter(node.id for node in document.nodes)
    for node_id, count in node_counts.items():
        if count > 1:
            result.add_error(
                code="DUPLICATE_NODE_ID",
                message=f"Node id '{node_id}' is used {count} times",
                node=node_id,
                count=count,
            )

    edge_counts = Counter(edge.id for edge in document.edges)
    for edge_id, count in edge_counts.items():
        if count > 1:
            result.add_error(
                code="DUPLICATE_EDGE_ID",
                message=f"Edge id '{edge_id}' is used {count} times",
                edge=edge_id,
                count=count,
            )

    return result
