# Rev 0.2.0
"""Error taxonomy for the tracker core."""
from __future__ import annotations


class TrackerError(Exception):
    """Base class for clientdesk errors."""


class NotFoundError(TrackerError):
    """A mutation targeted a project or task id absent from the store."""

    def __init__(self, kind: str, entity_id: str):
        super().__init__(f"{kind} not found: {entity_id}")
        self.kind = kind
        self.entity_id = entity_id


class PersistenceError(TrackerError):
    """Reading or writing a storage slot did not succeed."""

    def __init__(self, key: str, message: str):
        super().__init__(f"storage slot '{key}': {message}")
        self.key = key
