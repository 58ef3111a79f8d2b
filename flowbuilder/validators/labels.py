"""Node label validator."""

from ..schema.models import FlowDocument
from .base import ValidationResult


def check_labels(document: FlowDocument) -> ValidationResult:
    """Check that every node has a non-blank label."""
    result = ValidationResult()

    for node in document.nodes:
        if not node.data.label.strip():
            result.add_error(
                code="EMPTY_LABEL",
                message="Node has an empty label",
                node=node.id,
            )

    return result
