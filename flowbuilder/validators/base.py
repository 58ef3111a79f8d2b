"""Validation issue and result types."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ValidationIssue:
    """A structural problem found in a flow document."""

    code: str
    message: str
    node: str | None = None
    edge: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def location(self) -> str:
        if self.edge:
            return f"edge {self.edge}"
        if self.node:
            return f"node {self.node}"
        return ""

    def __str__(self) -> str:
        where = f" [{self.location}]" if self.location else ""
        return f"{self.code}{where} - {self.message}"

    def to_error_dict(self) -> dict:
        """Render the issue in the ``errors`` shape of FlowValidationError."""
        loc = f"edges.{self.edge}" if self.edge else f"nodes.{self.node or ''}"
        return {"loc": loc.rstrip("."), "msg": self.message, "type": self.code}


@dataclass
class ValidationResult:
    """Issues collected by one or more validators."""

    errors: list[ValidationIssue] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add_error(
        self,
        code: str,
        message: str,
        node: str | None = None,
        edge: str | None = None,
        **details: Any,
    ) -> None:
        self.errors.append(
            ValidationIssue(code, message, node=node, edge=edge, details=details)
        )

    def merge(self, other: "ValidationResult") -> None:
        """Append the issues of another result to this one."""
        self.errors.extend(other.errors)
