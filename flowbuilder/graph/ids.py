"""Identifier generation for nodes and edges."""

import uuid

# Id of the node every new graph starts with.
SEED_NODE_ID = "1"

RESERVED_IDS = frozenset({SEED_NODE_ID})


def generate_id() -> str:
    """Return a fresh random identifier (UUID4, canonical text form)."""
    while True:
        candidate = str(uuid.uuid4())
        if candidate not in RESERVED_IDS:
            return candidate
