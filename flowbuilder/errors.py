"""Exception classes for flowbuilder."""


class FlowError(Exception):
    """Base exception for flow editing errors."""

    pass


class FlowValidationError(FlowError):
    """Raised when user input or a document fails validation."""

    def __init__(self, message: str, errors: list[dict] | None = None):
        self.errors = errors or []
        super().__init__(message)


class FlowNotFoundError(FlowError):
    """Raised when an operation references an unknown id."""

    kind = "Item"

    def __init__(self, item_id: str):
        self.item_id = item_id
        super().__init__(f"{self.kind} not found: {item_id}")


class NodeNotFoundError(FlowNotFoundError):
    """Raised when no node has the given id."""

    kind = "Node"


class EdgeNotFoundError(FlowNotFoundError):
    """Raised when no edge has the given id."""

    kind = "Edge"


class DocumentLoadError(FlowError):
    """Raised when a document file cannot be read or written."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(message)


class SessionStateError(FlowError):
    """Raised when an edit action is not allowed in the current session state."""

    pass
