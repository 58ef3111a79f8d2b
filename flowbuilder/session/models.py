"""Data models for the node edit session."""

from dataclasses import dataclass
from enum import Enum


class SessionState(str, Enum):
    """State of the node edit modal."""

    CLOSED = "closed"
    ADDING_NEW = "adding_new"
    EDITING_EXISTING = "editing_existing"


@dataclass
class EditBuffer:
    """Uncommitted copy of a node's editable fields."""

    id: str = ""
    label: str = ""
    description: str = ""
    is_edit_mode: bool = False
