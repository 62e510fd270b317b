# Rev 0.2.0
from __future__ import annotations

from typing import Any, Dict, List, Optional

from PySide6.QtCore import QObject, Signal

from clientdesk.models.entities import Project
from clientdesk.models.types import STATUS_ALL
from clientdesk.services.progress import task_counts
from clientdesk.services.project_query import client_for, filter_projects, is_unknown_client


class ProjectsViewModel(QObject):
    """
    VM for the project list (search box + status dropdown).
    Emits:
      - projectsReloaded(total: int, rows: list[dict])
    Reloads on every TrackerService.mutated.
    """

    projectsReloaded = Signal(int, list)

    def __init__(self, service):
        super().__init__()
        self._service = service
        self._search: str = ""
        self._status: str = STATUS_ALL
        self._last: List[Dict[str, Any]] = []
        service.mutated.connect(self._on_mutated)

    # ---- filters ----
    def set_filters(self, search: Optional[str] = None, status: Optional[str] = None) -> None:
        self._search = search or ""
        self._status = status or STATUS_ALL
        self.reload()

    # ---- queries ----
    def reload(self) -> None:
        store = self._service.store
        matched = filter_projects(store.projects, self._search, self._status)
        self._last = [self._row(p, store.clients) for p in matched]
        self.projectsReloaded.emit(len(store.projects), self._last)

    def rows(self) -> List[Dict[str, Any]]:
        return list(self._last)

    # ---- commands ----
    def set_status(self, project_id: str, status: str) -> bool:
        return self._service.set_project_status(project_id, status).ok

    def set_progress(self, project_id: str, progress: int) -> bool:
        return self._service.set_project_progress(project_id, progress).ok

    def toggle_task(self, project_id: str, task_id: str) -> bool:
        return self._service.toggle_task(project_id, task_id).ok

    # ---- internals ----
    def _on_mutated(self, kind: str, entity_id: str) -> None:
        self.reload()

    @staticmethod
    def _row(p: Project, clients) -> Dict[str, Any]:
        client = client_for(clients, p.client_id)
        done, total = task_counts(p.tasks)
        return {
            "id": p.id,
            "title": p.title,
            "description": p.description,
            "status": p.status,
            "priority": p.priority,
            "progress": p.progress,
            "due_date": p.due_date,
            "client_name": client.name,
            "client_company": client.company,
            "client_known": not is_unknown_client(client),
            "tasks_done": done,
            "tasks_total": total,
        }
