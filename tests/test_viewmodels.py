# tests/test_viewmodels.py
from __future__ import annotations

from typing import Any, List

import pytest

from clientdesk.models.entities import ClientFields, ProjectFields
from clientdesk.services.tracker_service import TrackerService
from clientdesk.viewmodels.clients_viewmodel import ClientsViewModel
from clientdesk.viewmodels.dashboard_viewmodel import DashboardViewModel
from clientdesk.viewmodels.projects_viewmodel import ProjectsViewModel


def _project(client_id: str, title: str, description: str = "") -> ProjectFields:
    return ProjectFields(
        client_id=client_id, title=title, description=description,
        priority="medium", start_date="2024-01-01", due_date="2024-02-01",
    )


@pytest.fixture()
def seeded(service: TrackerService) -> TrackerService:
    ada = service.add_client(ClientFields("Ada", "ada@x", "1", "Analytical")).value
    service.add_project(_project(ada.id, "Website", "Landing pages"))
    service.add_project(_project("gone", "Logo refresh"))
    return service


def test_projects_vm_reloads_on_mutation(seeded: TrackerService):
    vm = ProjectsViewModel(seeded)
    emitted: List[Any] = []
    vm.projectsReloaded.connect(lambda total, rows: emitted.append((total, rows)))

    vm.set_filters(search="web")
    total, rows = emitted[-1]
    assert total == 2
    assert [r["title"] for r in rows] == ["Website"]
    assert rows[0]["client_name"] == "Ada"

    project_id = rows[0]["id"]
    task = seeded.add_task(project_id, "Hero section", "2024-01-15").value
    assert vm.toggle_task(project_id, task.id)
    row = vm.rows()[0]
    assert (row["tasks_done"], row["tasks_total"], row["progress"]) == (1, 1, 100)


def test_projects_vm_marks_unknown_client(seeded: TrackerService):
    vm = ProjectsViewModel(seeded)
    vm.set_filters(status="not-started")
    logo = [r for r in vm.rows() if r["title"] == "Logo refresh"][0]
    assert logo["client_known"] is False
    assert logo["client_name"] == "Unknown Client"


def test_projects_vm_commands(seeded: TrackerService):
    vm = ProjectsViewModel(seeded)
    vm.reload()
    pid = vm.rows()[0]["id"]
    assert vm.set_status(pid, "review")
    assert vm.set_progress(pid, 120)
    assert vm.rows()[0]["status"] == "review"
    assert vm.rows()[0]["progress"] == 100
    assert vm.set_status("ghost", "review") is False


def test_dashboard_vm_tracks_stats(seeded: TrackerService):
    vm = DashboardViewModel(seeded, recent_limit=1)
    stats: List[dict] = []
    recent: List[list] = []
    vm.statsChanged.connect(lambda d: stats.append(d))
    vm.recentLoaded.connect(lambda rows: recent.append(rows))

    vm.load()
    assert stats[-1] == {"total_projects": 2, "active_projects": 0, "completed_projects": 0, "total_clients": 1}
    assert [r["title"] for r in recent[-1]] == ["Website"]

    pid = seeded.store.projects[1].id
    seeded.set_project_status(pid, "completed")
    assert vm.last()["completed_projects"] == 1


def test_clients_vm_counts_projects(seeded: TrackerService):
    vm = ClientsViewModel(seeded)
    seen: List[list] = []
    vm.clientsReloaded.connect(lambda rows: seen.append(rows))

    new_id = vm.create_client("Bob", "bob@x", "2", "B Co")
    rows = seen[-1]
    assert [r["name"] for r in rows] == ["Ada", "Bob"]
    assert rows[0]["project_count"] == 1
    assert rows[1]["id"] == new_id
    assert rows[1]["project_count"] == 0
