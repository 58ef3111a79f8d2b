"""Validation runner that orchestrates all validators."""

from pathlib import Path

from ..schema.codec import load_document
from ..schema.models import FlowDocument
from .base import ValidationResult
from .labels import check_labels
from .reference_integrity import check_reference_integrity
from .unique_ids import check_unique_ids


def run_validators(document: FlowDocument) -> ValidationResult:
    """Run all structural validators on a document.

    Args:
        document: The flow document.

    Returns:
        Combined ValidationResult from all validators.
    """
    result = ValidationResult()

    result.merge(check_unique_ids(document))
    result.merge(check_reference_integrity(document))
    result.merge(check_labels(document))

    return result


def validate_document_file(path: str | Path) -> ValidationResult:
    """Load and validate a document file.

    Raises:
        DocumentLoadError: If the file cannot be read.
        FlowValidationError: If the content is not a flow document.
    """
    return run_validators(load_document(path))
