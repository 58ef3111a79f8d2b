"""Edit session: the add/edit node workflow."""

from .models import EditBuffer, SessionState
from .controller import LABEL_REQUIRED, EditSession

__all__ = [
    "EditBuffer",
    "SessionState",
    "EditSession",
    "LABEL_REQUIRED",
]
