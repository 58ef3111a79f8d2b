"""Modal create/edit workflow over one node at a time."""

import logging

from ..errors import (
    FlowNotFoundError,
    FlowValidationError,
    NodeNotFoundError,
    SessionStateError,
)
from ..graph.store import GraphStore
from .models import EditBuffer, SessionState

logger = logging.getLogger(__name__)

LABEL_REQUIRED = "Label is required"


class EditSession:
    """Drives the add/edit node modal.

    The buffer is the only thing the form writes to; the store is touched
    only by ``save`` and ``delete``, and only after validation passes.
    """

    def __init__(self, store: GraphStore):
        self.store = store
        self.state = SessionState.CLOSED
        self.buffer: EditBuffer | None = None
        self.error = ""

    @property
    def is_open(self) -> bool:
        return self.state != SessionState.CLOSED

    # -------------------------------------------------------------------------
    # Opening
    # -------------------------------------------------------------------------

    def begin_add(self) -> EditBuffer:
        """Open the modal for a new node with an empty buffer."""
        self._require_state(SessionState.CLOSED, "add")
        self.error = ""
        self.buffer = EditBuffer()
        self.state = SessionState.ADDING_NEW
        return self.buffer

    def begin_edit(self, node_id: str) -> EditBuffer:
        """Open the modal for an existing node, filling the buffer from it.

        Raises:
            NodeNotFoundError: If no node has this id; the session stays closed.
        """
        self._require_state(SessionState.CLOSED, "edit")
        node = self.store.get_node(node_id)
        if node is None:
            raise NodeNotFoundError(node_id)

        self.error = ""
        self.buffer = EditBuffer(
            id=node.id,
            label=node.data.label or "",
            description=node.data.description or "",
            is_edit_mode=True,
        )
        self.state = SessionState.EDITING_EXISTING
        return self.buffer

    def node_activated(self, node_id: str) -> EditBuffer:
        """Handle a node click from the canvas."""
        return self.begin_edit(node_id)

    def update_buffer(
        self, label: str | None = None, description: str | None = None
    ) -> EditBuffer:
        """Write form input into the buffer."""
        buffer = self._require_open("update")
        if label is not None:
            buffer.label = label
        if description is not None:
            buffer.description = description
        return buffer

    # -------------------------------------------------------------------------
    # Closing
    # -------------------------------------------------------------------------

    def cancel(self) -> None:
        """Close the modal and drop the buffer without touching the store."""
        self._require_open("cancel")
        self._close()

    def save(self) -> str:
        """Validate the buffer and commit it to the store.

        Returns:
            The id of the added or updated node.

        Raises:
            FlowValidationError: If the label is blank. The session stays
                open with ``error`` set.
        """
        buffer = self._require_open("save")

        if not buffer.label.strip():
            self.error = LABEL_REQUIRED
            raise FlowValidationError(
                LABEL_REQUIRED,
                [{"loc": "label", "msg": LABEL_REQUIRED, "type": "missing"}],
            )
        self.error = ""

        if self.state == SessionState.ADDING_NEW:
            node_id = self.store.add_node(buffer.label, buffer.description)
        else:
            node_id = buffer.id
            try:
                self.store.update_node(node_id, buffer.label, buffer.description)
            except FlowNotFoundError as e:
                logger.warning("Save skipped: %s", e)
                self._close()
                self.error = str(e)
                return node_id

        self._close()
        return node_id

    def delete(self) -> str:
        """Delete the node under edit, with its edges.

        Returns:
            The id of the deleted node.
        """
        self._require_state(SessionState.EDITING_EXISTING, "delete")
        node_id = self.buffer.id

        try:
            self.store.delete_node(node_id)
        except FlowNotFoundError as e:
            logger.warning("Delete skipped: %s", e)
            self._close()
            self.error = str(e)
            return node_id

        self._close()
        return node_id

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _close(self) -> None:
        self.buffer = None
        self.state = SessionState.CLOSED

    def _require_state(self, state: SessionState, action: str) -> None:
        if self.state != state:
            raise SessionStateError(
                f"Cannot {action} while session is {self.state.value}"
            )

    def _require_open(self, action: str) -> EditBuffer:
        if self.buffer is None or not self.is_open:
            raise SessionStateError(f"Cannot {action}: no node is being edited")
        return self.buffer
