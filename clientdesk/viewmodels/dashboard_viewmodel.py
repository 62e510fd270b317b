# Rev 0.2.0 — stats cards + recent projects
from __future__ import annotations
from typing import Any, Dict, List, Optional

from PySide6.QtCore import QObject, Signal

from clientdesk.services.project_query import client_for, compute_stats, recent_projects


class DashboardViewModel(QObject):
    """
    Emits:
      statsChanged({
        "total_projects": int,
        "active_projects": int,
        "completed_projects": int,
        "total_clients": int,
      })
      recentLoaded([{"id", "title", "client_name", "status", "progress"}, ...])
    """
    statsChanged = Signal(dict)
    recentLoaded = Signal(list)

    def __init__(self, service, recent_limit: int = 5):
        super().__init__()
        self._service = service
        self._recent_limit = recent_limit
        self._last: Optional[Dict[str, Any]] = None
        service.mutated.connect(self._on_mutated)

    def load(self) -> None:
        store = self._service.store
        stats = compute_stats(store.clients, store.projects).as_dict()
        self._last = stats
        self.statsChanged.emit(stats)

        recent: List[Dict[str, Any]] = []
        for p in recent_projects(store.projects, self._recent_limit):
            recent.append({
                "id": p.id,
                "title": p.title,
                "client_name": client_for(store.clients, p.client_id).name,
                "status": p.status,
                "progress": p.progress,
            })
        self.recentLoaded.emit(recent)

    def last(self) -> Optional[Dict[str, Any]]:
        return self._last

    def _on_mutated(self, kind: str, entity_id: str) -> None:
        self.load()
