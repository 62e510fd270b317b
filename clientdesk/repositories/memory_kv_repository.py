# Rev 0.2.0
from __future__ import annotations

from typing import Dict, List, Optional


class InMemoryKeyValueRepository:
    """Dict-backed persistence adapter; same contract as SQLiteKeyValueRepository."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._slots: Dict[str, str] = dict(initial or {})
        self.writes = 0

    def load(self, key: str) -> Optional[str]:
        return self._slots.get(key)

    def save(self, key: str, blob: str) -> None:
        self._slots[key] = blob
        self.writes += 1

    def keys(self) -> List[str]:
        return sorted(self._slots)
