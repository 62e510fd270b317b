# Rev 0.2.0
"""Read-only queries over the store: filtering, client lookup, dashboard stats."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Union

from clientdesk.models.entities import Client, Project
from clientdesk.models.types import STATUS_ALL


# Returned for a project whose client_id has no matching Client
UNKNOWN_CLIENT = Client(id="", name="Unknown Client", email="", phone="", company="")


@dataclass(frozen=True)
class DashboardStats:
    total_projects: int
    active_projects: int
    completed_projects: int
    total_clients: int

    def as_dict(self) -> dict:
        return {
            "total_projects": self.total_projects,
            "active_projects": self.active_projects,
            "completed_projects": self.completed_projects,
            "total_clients": self.total_clients,
        }


def _matches_search(p: Project, needle: str) -> bool:
    if not needle:
        return True
    return needle in p.title.lower() or needle in p.description.lower()


def _matches_status(p: Project, status_filter: str) -> bool:
    return status_filter == STATUS_ALL or p.status == status_filter


def filter_projects(
    projects: Iterable[Project],
    search_term: str = "",
    status_filter: str = STATUS_ALL,
) -> List[Project]:
    """
    Stable filter: case-insensitive substring on title or description AND
    exact status match (or STATUS_ALL). Input order is preserved.
    """
    needle = (search_term or "").lower()
    status_filter = status_filter or STATUS_ALL
    return [
        p for p in projects
        if _matches_search(p, needle) and _matches_status(p, status_filter)
    ]


def recent_projects(projects: Sequence[Project], limit: int = 5) -> List[Project]:
    """First `limit` projects in store order (dashboard list)."""
    return list(projects[: max(0, limit)])


def projects_for_client(projects: Iterable[Project], client_id: str) -> List[Project]:
    return [p for p in projects if p.client_id == client_id]


def client_for(clients: Iterable[Client], client_id: str) -> Client:
    for c in clients:
        if c.id == client_id:
            return c
    return UNKNOWN_CLIENT


def is_unknown_client(client: Union[Client, None]) -> bool:
    return client is None or client is UNKNOWN_CLIENT


def compute_stats(clients: Sequence[Client], projects: Sequence[Project]) -> DashboardStats:
    """Recomputed on every call; never cached."""
    return DashboardStats(
        total_projects=len(projects),
        active_projects=sum(1 for p in projects if p.status == "in-progress"),
        completed_projects=sum(1 for p in projects if p.status == "completed"),
        total_clients=len(clients),
    )
