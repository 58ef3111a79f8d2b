"""FlowEditor: hosts the graph store and exposes the toolbar actions."""

import asyncio
import logging
from pathlib import Path

from .config import FlowSettings, get_settings
from .errors import DocumentLoadError, FlowValidationError
from .graph.changes import Change, apply_changes
from .graph.store import GraphStore
from .schema.codec import (
    DocumentFormat,
    export_document,
    format_for_path,
    import_document,
)
from .schema.models import FlowDocument
from .session.controller import EditSession
from .session.models import EditBuffer
from .validators.runner import run_validators

logger = logging.getLogger(__name__)


class FlowEditor:
    """Owner of a flow graph for the length of an editing session.

    The canvas reads ``snapshot()``, reports gestures through
    ``apply_changes`` and node clicks through ``node_activated``. The
    toolbar maps onto ``add``, ``auto_arrange``, ``export`` and
    ``import_content``.
    """

    def __init__(
        self,
        store: GraphStore | None = None,
        settings: FlowSettings | None = None,
    ):
        self.settings = settings or get_settings()
        self.store = store if store is not None else GraphStore()
        self.session = EditSession(self.store)
        self.notice = ""

    # -------------------------------------------------------------------------
    # Canvas hooks
    # -------------------------------------------------------------------------

    def snapshot(self) -> FlowDocument:
        """Current graph for drawing."""
        return self.store.snapshot()

    def apply_changes(self, changes: list[Change | dict]) -> list[str]:
        """Apply gesture change records from the canvas."""
        return apply_changes(self.store, changes)

    def node_activated(self, node_id: str) -> EditBuffer:
        """Open the edit modal for a clicked node."""
        return self.session.node_activated(node_id)

    # -------------------------------------------------------------------------
    # Toolbar actions
    # -------------------------------------------------------------------------

    def add(self) -> EditBuffer:
        """Open the modal for a new node."""
        return self.session.begin_add()

    def auto_arrange(self) -> None:
        """Stack all nodes vertically."""
        self.store.auto_arrange()

    def export(self, fmt: DocumentFormat | None = None) -> tuple[str, str]:
        """Serialize the graph for download.

        Returns:
            Tuple of (filename, document text).
        """
        fmt = fmt or self.settings.export_format
        text = export_document(self.store.snapshot(), fmt, self.settings.indent)
        filename = f"{self.settings.export_basename}.{fmt}"
        logger.info("Exported %d node(s) as %s", len(self.store), filename)
        return filename, text

    def import_content(
        self,
        text: str | bytes,
        fmt: DocumentFormat = "json",
        strict: bool | None = None,
    ) -> FlowDocument:
        """Replace the graph with a parsed document.

        On failure the graph is unchanged and ``notice`` holds the message.

        Args:
            text: Document content; bytes are decoded as UTF-8.
            fmt: Document format.
            strict: Reject dangling edges and empty labels. Defaults to the
                ``strict_import`` setting.

        Raises:
            FlowValidationError: If the document is malformed, or fails
                strict validation.
        """
        if strict is None:
            strict = self.settings.strict_import

        try:
            document = import_document(text, fmt)
            if strict:
                result = run_validators(document)
                if result.has_errors:
                    raise FlowValidationError(
                        "Invalid document",
                        [issue.to_error_dict() for issue in result.errors],
                    )
            self.store.replace(document)
        except FlowValidationError as e:
            self.notice = str(e)
            logger.warning("Import rejected: %s (%d error(s))", e, len(e.errors))
            raise

        self.notice = ""
        return document

    def import_file(self, path: str | Path, strict: bool | None = None) -> FlowDocument:
        """Read a document file and replace the graph with it.

        Raises:
            DocumentLoadError: If the file cannot be read.
            FlowValidationError: If the document is rejected.
        """
        try:
            raw = _read(path)
        except DocumentLoadError as e:
            self._unreadable(e)
            raise
        return self.import_content(raw, format_for_path(path), strict)

    async def aimport_file(
        self, path: str | Path, strict: bool | None = None
    ) -> FlowDocument:
        """Like ``import_file``, reading the file off the event loop."""
        try:
            raw = await asyncio.to_thread(_read, path)
        except DocumentLoadError as e:
            self._unreadable(e)
            raise
        return self.import_content(raw, format_for_path(path), strict)

    def dismiss_notice(self) -> None:
        self.notice = ""

    def _unreadable(self, error: DocumentLoadError) -> None:
        self.notice = f"Cannot read file: {error.path}"
        logger.warning("Import failed: %s", error)


def _read(path: str | Path) -> bytes:
    path = Path(path)
    try:
        return path.read_bytes()
    except OSError as e:
        raise DocumentLoadError(f"Cannot read file: {e}", str(path)) from e
