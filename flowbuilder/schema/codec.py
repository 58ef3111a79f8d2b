"""Serialization codec for flow documents (JSON and YAML)."""

import json
import logging
from pathlib import Path
from typing import Literal

import yaml
from pydantic import ValidationError

from ..errors import DocumentLoadError, FlowValidationError
from .models import FlowDocument

logger = logging.getLogger(__name__)

DocumentFormat = Literal["json", "yaml"]

INVALID_DOCUMENT = "Invalid document"


def format_for_path(path: str | Path) -> DocumentFormat:
    """Pick the document format from a file extension."""
    if Path(path).suffix.lower() in (".yaml", ".yml"):
        return "yaml"
    return "json"


def export_document(
    document: FlowDocument,
    fmt: DocumentFormat = "json",
    indent: int = 2,
) -> str:
    """Serialize a document to structured text.

    The output holds exactly the ``nodes`` and ``edges`` fields, in model
    field order, so the same graph always produces the same text.

    Args:
        document: The flow document to serialize.
        fmt: Output format ("json" or "yaml").
        indent: Indentation width.

    Returns:
        The serialized document.
    """
    data = document.model_dump(by_alias=True)

    if fmt == "yaml":
        return yaml.safe_dump(
            data, sort_keys=False, indent=indent, allow_unicode=True
        )
    return json.dumps(data, indent=indent, ensure_ascii=False) + "\n"


def import_document(
    text: str | bytes, fmt: DocumentFormat = "json"
) -> FlowDocument:
    """Parse structured text into a FlowDocument.

    Args:
        text: The document content. Bytes are decoded as UTF-8.
        fmt: Input format ("json" or "yaml").

    Returns:
        The parsed FlowDocument.

    Raises:
        FlowValidationError: If the text cannot be parsed or lacks
            the ``nodes``/``edges`` fields.
    """
    if isinstance(text, bytes):
        try:
            text = text.decode("utf-8")
        except UnicodeDecodeError as e:
            raise FlowValidationError(
                INVALID_DOCUMENT, [{"loc": "", "msg": str(e), "type": "decode_error"}]
            ) from e

    try:
        if fmt == "yaml":
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise FlowValidationError(
            INVALID_DOCUMENT, [{"loc": "", "msg": str(e), "type": "parse_error"}]
        ) from e

    if not isinstance(data, dict):
        raise FlowValidationError(
            INVALID_DOCUMENT,
            [
                {
                    "loc": "",
                    "msg": f"Expected mapping at root, got {type(data).__name__}",
                    "type": "root_type",
                }
            ],
        )

    try:
        return FlowDocument.model_validate(data)
    except ValidationError as e:
        errors = [
            {
                "loc": ".".join(str(x) for x in err["loc"]),
                "msg": err["msg"],
                "type": err["type"],
            }
            for err in e.errors()
        ]
        raise FlowValidationError(INVALID_DOCUMENT, errors) from e


def load_document(path: str | Path) -> FlowDocument:
    """Read and parse a document file.

    Raises:
        DocumentLoadError: If the file cannot be read.
        FlowValidationError: If the content is malformed.
    """
    path = Path(path)

    if not path.exists():
        raise DocumentLoadError(f"File not found: {path}", str(path))

    if not path.is_file():
        raise DocumentLoadError(f"Not a file: {path}", str(path))

    try:
        raw = path.read_bytes()
    except OSError as e:
        raise DocumentLoadError(f"Cannot read file: {e}", str(path)) from e

    document = import_document(raw, format_for_path(path))
    logger.info(
        "Loaded %s: %d node(s), %d edge(s)",
        path,
        len(document.nodes),
        len(document.edges),
    )
    return document


def save_document(
    document: FlowDocument, path: str | Path, indent: int = 2
) -> Path:
    """Serialize a document and write it to a file.

    Raises:
        DocumentLoadError: If the file cannot be written.
    """
    path = Path(path)
    text = export_document(document, format_for_path(path), indent=indent)

    try:
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise DocumentLoadError(f"Cannot write file: {e}", str(path)) from e

    logger.info("Saved %s", path)
    return path
