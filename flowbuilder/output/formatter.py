"""Output formatting for graphs and validation results."""

import json
from typing import Literal

from ..schema.models import FlowDocument
from ..validators.base import ValidationIssue, ValidationResult


def format_validation_result(
    result: ValidationResult,
    format: Literal["text", "json"] = "text",
) -> str:
    """Format a validation result for output.

    Args:
        result: The validation result to format.
        format: Output format ("text" or "json").

    Returns:
        Formatted string representation.
    """
    if format == "json":
        return _format_result_json(result)
    return _format_result_text(result)


def format_graph(
    document: FlowDocument,
    format: Literal["text", "json"] = "text",
) -> str:
    """Format a graph listing for output.

    Args:
        document: The graph to describe.
        format: Output format ("text" or "json").

    Returns:
        Formatted string representation.
    """
    if format == "json":
        return json.dumps(document.model_dump(by_alias=True), indent=2)

    labels = {node.id: node.data.label for node in document.nodes}
    lines: list[str] = []

    lines.append(f"NODES ({len(document.nodes)}):")
    if document.nodes:
        for node in document.nodes:
            pos = node.position
            line = f"  {node.id}  {node.data.label!r} at ({pos.x}, {pos.y})"
            if node.data.description:
                line += f" - {node.data.description}"
            lines.append(line)
    else:
        lines.append("  (none)")

    lines.append("")

    lines.append(f"EDGES ({len(document.edges)}):")
    if document.edges:
        for edge in document.edges:
            source = labels.get(edge.source, "?")
            target = labels.get(edge.target, "?")
            lines.append(
                f"  {edge.id}  {edge.source} ({source}) -> {edge.target} ({target})"
            )
    else:
        lines.append("  (none)")

    return "\n".join(lines)


def _format_result_text(result: ValidationResult) -> str:
    """Format result as human-readable text."""
    lines: list[str] = ["ERRORS:"]
    if result.errors:
        for issue in result.errors:
            lines.append(f"  {_format_issue_text(issue)}")
    else:
        lines.append("  (none)")

    lines.append("")
    if result.is_valid:
        lines.append("Validation passed")
    else:
        lines.append(f"Validation failed: {len(result.errors)} error(s)")

    return "\n".join(lines)


def _format_issue_text(issue: ValidationIssue) -> str:
    location = f"[{issue.location}] " if issue.location else ""
    return f"✘ {issue.code}: {location}{issue.message}"


def _format_result_json(result: ValidationResult) -> str:
    """Format result as JSON."""
    data = {
        "valid": result.is_valid,
        "error_count": len(result.errors),
        "errors": [
            {
                "code": issue.code,
                "message": issue.message,
                "node": issue.node,
                "edge": issue.edge,
                "details": issue.details,
            }
            for issue in result.errors
        ],
    }
    return json.dumps(data, indent=2)
