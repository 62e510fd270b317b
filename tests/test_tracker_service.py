# tests/test_tracker_service.py
from __future__ import annotations

import json
from typing import List, Tuple

import pytest

from clientdesk.models.entities import ClientFields, ProjectFields
from clientdesk.models.errors import NotFoundError
from clientdesk.repositories.memory_kv_repository import InMemoryKeyValueRepository
from clientdesk.services.entity_store import EntityStore
from clientdesk.services.session_persister import SessionPersister
from clientdesk.services.tracker_service import TrackerService


def client_fields(name: str = "Ada Lovelace") -> ClientFields:
    return ClientFields(name=name, email="ada@example.com", phone="555-0100", company="Analytical Ltd")


def project_fields(client_id: str = "c1", **kw) -> ProjectFields:
    base = dict(
        client_id=client_id,
        title="Website redesign",
        description="New landing pages",
        priority="high",
        start_date="2024-01-08",
        due_date="2024-03-29",
    )
    base.update(kw)
    return ProjectFields(**base)


# --- A write-failing adapter ----------------------------------------------

class _BrokenAdapter(InMemoryKeyValueRepository):
    def save(self, key: str, blob: str) -> None:
        raise OSError("disk full")


@pytest.fixture()
def events(service: TrackerService) -> List[Tuple[str, str]]:
    seen: List[Tuple[str, str]] = []
    service.mutated.connect(lambda kind, eid: seen.append((kind, eid)))
    return seen


# --- clients ---------------------------------------------------------------

def test_add_client_twice_gives_distinct_ids(service: TrackerService, kv):
    a = service.add_client(client_fields()).value
    b = service.add_client(client_fields()).value
    assert a.id != b.id
    assert (a.name, a.email) == (b.name, b.email)
    assert [c.id for c in service.store.clients] == [a.id, b.id]
    stored = json.loads(kv.load("clients"))
    assert [c["id"] for c in stored] == [a.id, b.id]


def test_fresh_id_skips_ids_already_in_store(persister):
    ids = iter(["dup", "dup", "fresh"])
    svc = TrackerService(EntityStore(), persister, id_factory=lambda: next(ids))
    first = svc.add_client(client_fields()).value
    second = svc.add_client(client_fields()).value
    assert (first.id, second.id) == ("dup", "fresh")


# --- projects --------------------------------------------------------------

def test_add_project_initial_state(service: TrackerService, kv):
    p = service.add_project(project_fields()).value
    assert p.status == "not-started"
    assert p.progress == 0
    assert p.tasks == ()
    assert p.priority == "high"
    assert json.loads(kv.load("projects"))[0]["clientId"] == "c1"


def test_add_project_with_dangling_client_is_tolerated(service: TrackerService):
    result = service.add_project(project_fields(client_id="missing"))
    assert result.ok
    assert service.store.get_client("missing") is None


def test_add_project_clamps_supplied_progress(service: TrackerService):
    assert service.add_project(project_fields(progress=140)).value.progress == 100


def test_add_project_rejects_unknown_priority(service: TrackerService):
    with pytest.raises(ValueError):
        service.add_project(project_fields(priority="urgent"))
    assert service.store.projects == ()


@pytest.mark.parametrize("status", ["in-progress", "review", "completed", "not-started"])
def test_status_is_freely_settable(service: TrackerService, status):
    p = service.add_project(project_fields()).value
    service.set_project_status(p.id, "completed")
    assert service.set_project_status(p.id, status).ok
    assert service.store.get_project(p.id).status == status


def test_set_status_unknown_project(service: TrackerService, events):
    result = service.set_project_status("nope", "review")
    assert not result.ok
    assert result.code == "not_found"
    assert events == []
    with pytest.raises(NotFoundError):
        result.raise_for_status()


@pytest.mark.parametrize("value,expected", [(-5, 0), (0, 0), (64, 64), (100, 100), (250, 100)])
def test_manual_progress_is_clamped(service: TrackerService, value, expected):
    p = service.add_project(project_fields()).value
    assert service.set_project_progress(p.id, value).ok
    assert service.store.get_project(p.id).progress == expected


# --- tasks -----------------------------------------------------------------

def test_progress_scenario(service: TrackerService):
    p = service.add_project(project_fields()).value
    assert p.progress == 0

    tasks = [service.add_task(p.id, f"Task {i}", "2024-02-01").value for i in range(4)]
    assert [t.completed for t in tasks] == [False] * 4
    assert service.store.get_project(p.id).progress == 0

    service.toggle_task(p.id, tasks[0].id)
    assert service.store.get_project(p.id).progress == 25
    service.toggle_task(p.id, tasks[1].id)
    assert service.store.get_project(p.id).progress == 50

    service.set_project_progress(p.id, 90)
    assert service.store.get_project(p.id).progress == 90

    service.toggle_task(p.id, tasks[2].id)
    assert service.store.get_project(p.id).progress == 75


def test_manual_override_kept_with_zero_tasks(service: TrackerService):
    p = service.add_project(project_fields()).value
    service.set_project_progress(p.id, 40)
    service.set_project_status(p.id, "review")
    assert service.store.get_project(p.id).progress == 40


def test_add_task_recomputes_over_override(service: TrackerService):
    p = service.add_project(project_fields()).value
    service.set_project_progress(p.id, 80)
    service.add_task(p.id, "First", "2024-02-01")
    assert service.store.get_project(p.id).progress == 0


def test_tasks_preserve_insertion_order(service: TrackerService):
    p = service.add_project(project_fields()).value
    titles = ["Wireframes", "Copy", "Build", "QA"]
    for t in titles:
        service.add_task(p.id, t, "2024-02-01")
    assert [t.title for t in service.store.get_project(p.id).tasks] == titles


def test_toggle_twice_restores_progress(service: TrackerService):
    p = service.add_project(project_fields()).value
    ids = [service.add_task(p.id, f"T{i}", "").value.id for i in range(3)]
    service.toggle_task(p.id, ids[0])
    before = service.store.get_project(p.id)
    service.toggle_task(p.id, ids[1])
    service.toggle_task(p.id, ids[1])
    after = service.store.get_project(p.id)
    assert after.progress == before.progress
    assert after.tasks == before.tasks


def test_toggle_unknown_task_changes_nothing(service: TrackerService, events, kv):
    p = service.add_project(project_fields()).value
    t = service.add_task(p.id, "Only", "").value
    service.toggle_task(p.id, t.id)
    before = service.store.get_project(p.id)
    writes = kv.writes
    events.clear()

    result = service.toggle_task(p.id, "ghost")

    assert result.code == "not_found"
    assert isinstance(result.missing, NotFoundError)
    assert result.missing.kind == "task"
    assert service.store.get_project(p.id) == before
    assert kv.writes == writes
    assert events == []


def test_add_task_unknown_project(service: TrackerService):
    result = service.add_task("ghost", "x", "")
    assert result.code == "not_found"
    assert result.missing.kind == "project"


# --- events & persistence --------------------------------------------------

def test_mutated_fires_once_per_mutation(service: TrackerService, events):
    c = service.add_client(client_fields()).value
    p = service.add_project(project_fields(client_id=c.id)).value
    t = service.add_task(p.id, "x", "").value
    service.toggle_task(p.id, t.id)
    service.set_project_status(p.id, "review")
    service.set_project_progress(p.id, 10)
    assert events == [
        ("client", c.id),
        ("project", p.id),
        ("task", t.id),
        ("task", t.id),
        ("project", p.id),
        ("project", p.id),
    ]


def test_persistence_failure_keeps_memory_and_warns():
    svc = TrackerService(EntityStore(), SessionPersister(_BrokenAdapter()))
    failures: List[str] = []
    svc.persistenceFailed.connect(lambda msg: failures.append(msg))

    result = svc.add_client(client_fields())

    assert result.ok
    assert result.code == "applied"
    assert "disk full" in result.warning
    assert failures == [result.warning]
    assert len(svc.store.clients) == 1


def test_successful_mutation_has_no_warning(service: TrackerService):
    assert service.add_client(client_fields()).warning is None


def test_flush_writes_both_slots(service: TrackerService, kv):
    service.add_client(client_fields())
    assert kv.load("projects") is None
    assert service.flush() is None
    assert json.loads(kv.load("projects")) == []
    assert len(json.loads(kv.load("clients"))) == 1


@pytest.mark.parametrize("value,expected", [(float("inf"), 100), (float("-inf"), 0), (float("nan"), 0)])
def test_manual_progress_non_finite_is_clamped(service: TrackerService, value, expected):
    p = service.add_project(project_fields()).value
    assert service.set_project_progress(p.id, value).ok
    assert service.store.get_project(p.id).progress == expected


def test_task_ids_unique_across_projects(persister):
    ids = iter(["p1", "p2", "t1", "t1", "t2"])
    svc = TrackerService(EntityStore(), persister, id_factory=lambda: next(ids))
    first = svc.add_project(project_fields()).value
    second = svc.add_project(project_fields()).value
    a = svc.add_task(first.id, "A", "").value
    b = svc.add_task(second.id, "B", "").value
    assert (a.id, b.id) == ("t1", "t2")
