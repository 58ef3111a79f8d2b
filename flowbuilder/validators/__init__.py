"""Structural validators for flow documents."""

from .base import ValidationIssue, ValidationResult
from .labels import check_labels
from .reference_integrity import check_reference_integrity
from .unique_ids import check_unique_ids
from .runner import run_validators, validate_document_file

__all__ = [
    "ValidationIssue",
    "ValidationResult",
    "check_labels",
    "check_reference_integrity",
    "check_unique_ids",
    "run_validators",
    "validate_document_file",
]
