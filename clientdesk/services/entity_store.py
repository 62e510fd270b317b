# Rev 0.2.0
"""In-memory entity store (Rev 0.2.0)

Authoritative holder of clients and projects for one session. Owned by the
TrackerService; the swap helpers below are its only writers.
"""
from __future__ import annotations
from typing import Iterable, List, Optional, Tuple

from clientdesk.models.entities import Client, Project


class EntityStore:
    def __init__(self, clients: Iterable[Client] = (), projects: Iterable[Project] = ()):
        self._clients: List[Client] = list(clients)
        self._projects: List[Project] = list(projects)

    @classmethod
    def from_persister(cls, persister) -> "EntityStore":
        clients, projects = persister.load()
        return cls(clients, projects)

    # ---- reads ----
    @property
    def clients(self) -> Tuple[Client, ...]:
        return tuple(self._clients)

    @property
    def projects(self) -> Tuple[Project, ...]:
        return tuple(self._projects)

    def get_client(self, client_id: str) -> Optional[Client]:
        for c in self._clients:
            if c.id == client_id:
                return c
        return None

    def get_project(self, project_id: str) -> Optional[Project]:
        i = self.index_of_project(project_id)
        return None if i is None else self._projects[i]

    def index_of_project(self, project_id: str) -> Optional[int]:
        for i, p in enumerate(self._projects):
            if p.id == project_id:
                return i
        return None

    def has_client_id(self, client_id: str) -> bool:
        return self.get_client(client_id) is not None

    def has_project_id(self, project_id: str) -> bool:
        return self.index_of_project(project_id) is not None

    def has_task_id(self, task_id: str) -> bool:
        return any(t.id == task_id for p in self._projects for t in p.tasks)

    # ---- swaps (TrackerService only) ----
    def append_client(self, client: Client) -> None:
        self._clients.append(client)

    def append_project(self, project: Project) -> None:
        self._projects.append(project)

    def replace_project(self, index: int, project: Project) -> None:
        self._projects[index] = project
