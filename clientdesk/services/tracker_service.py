# Rev 0.2.0

"""Tracker mutation service (Rev 0.2.0)
Single path for creating and altering clients, projects and tasks.

Each mutation:
  1. builds the replacement entity (nothing touched yet),
  2. swaps it into the EntityStore,
  3. writes the affected storage slot,
  4. emits ``mutated`` once.
A not-found target stops at step 1. A failed write keeps the in-memory change
and comes back as ``MutationResult.warning`` plus ``persistenceFailed``.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from typing import Any, Callable, Literal, Optional

from PySide6.QtCore import QObject, Signal

from clientdesk.models.entities import (
    Client, ClientFields, Project, ProjectFields, Task, clamp_progress,
)
from clientdesk.models.errors import NotFoundError, PersistenceError
from clientdesk.models.types import PRIORITIES, PROJECT_STATUSES, EntityType, ProjectStatus
from clientdesk.services.entity_store import EntityStore
from clientdesk.services.progress import apply_progress
from clientdesk.services.session_persister import SessionPersister
from clientdesk.utils.logging_setup import get_logger


ResultCode = Literal["applied", "not_found"]


@dataclass(frozen=True)
class MutationResult:
    ok: bool
    code: ResultCode
    value: Any = None
    warning: Optional[str] = None
    missing: Optional[NotFoundError] = None

    def raise_for_status(self) -> "MutationResult":
        if self.missing is not None:
            raise self.missing
        return self


def _new_id() -> str:
    return uuid.uuid4().hex


class TrackerService(QObject):
    """
    Emits:
      mutated(kind: str, entity_id: str)   -- once per applied mutation
      persistenceFailed(message: str)      -- storage write failed; memory kept
    """

    mutated = Signal(str, str)
    persistenceFailed = Signal(str)

    def __init__(
        self,
        store: EntityStore,
        persister: SessionPersister,
        *,
        id_factory: Callable[[], str] = _new_id,
    ):
        super().__init__()
        self._store = store
        self._persister = persister
        self._id_factory = id_factory
        self._log = get_logger("TrackerService")

    @property
    def store(self) -> EntityStore:
        return self._store

    # ---- clients ----
    def add_client(self, fields: ClientFields) -> MutationResult:
        client = Client(
            id=self._fresh_id(self._store.has_client_id),
            name=fields.name,
            email=fields.email,
            phone=fields.phone,
            company=fields.company,
        )
        self._store.append_client(client)
        self._log.info("Client added id=%s name=%r", client.id, client.name)
        return self._commit("client", client.id, client)

    # ---- projects ----
    def add_project(self, fields: ProjectFields) -> MutationResult:
        if fields.priority not in PRIORITIES:
            raise ValueError(f"unknown priority: {fields.priority!r}")
        project = Project(
            id=self._fresh_id(self._store.has_project_id),
            client_id=fields.client_id,
            title=fields.title,
            description=fields.description,
            status="not-started",
            priority=fields.priority,
            progress=clamp_progress(fields.progress),
            start_date=fields.start_date,
            due_date=fields.due_date,
            tasks=(),
        )
        if not self._store.has_client_id(project.client_id):
            self._log.debug("Project %s references unknown client %s", project.id, project.client_id)
        self._store.append_project(project)
        self._log.info("Project added id=%s title=%r", project.id, project.title)
        return self._commit("project", project.id, project)

    def set_project_status(self, project_id: str, status: ProjectStatus) -> MutationResult:
        if status not in PROJECT_STATUSES:
            raise ValueError(f"unknown status: {status!r}")
        idx = self._store.index_of_project(project_id)
        if idx is None:
            return self._not_found("project", project_id)
        project = self._store.projects[idx]
        updated = replace(project, status=status)
        self._store.replace_project(idx, updated)
        self._log.info("Project %s status %s -> %s", project_id, project.status, status)
        return self._commit("project", project_id, updated)

    def set_project_progress(self, project_id: str, progress: Any) -> MutationResult:
        """Manual override; the next task mutation recomputes and replaces it."""
        idx = self._store.index_of_project(project_id)
        if idx is None:
            return self._not_found("project", project_id)
        value = clamp_progress(progress)
        if value != progress:
            self._log.debug("Progress %r clamped to %d", progress, value)
        updated = replace(self._store.projects[idx], progress=value)
        self._store.replace_project(idx, updated)
        return self._commit("project", project_id, updated)

    # ---- tasks ----
    def add_task(self, project_id: str, title: str, due_date: str) -> MutationResult:
        idx = self._store.index_of_project(project_id)
        if idx is None:
            return self._not_found("project", project_id)
        project = self._store.projects[idx]
        task = Task(
            id=self._fresh_id(self._store.has_task_id),
            title=title,
            completed=False,
            due_date=due_date,
        )
        tasks = project.tasks + (task,)
        updated = replace(project, tasks=tasks, progress=apply_progress(project.progress, tasks))
        self._store.replace_project(idx, updated)
        self._log.info("Task added id=%s project=%s progress=%d", task.id, project_id, updated.progress)
        return self._commit("task", task.id, task)

    def toggle_task(self, project_id: str, task_id: str) -> MutationResult:
        idx = self._store.index_of_project(project_id)
        if idx is None:
            return self._not_found("project", project_id)
        project = self._store.projects[idx]
        if not any(t.id == task_id for t in project.tasks):
            return self._not_found("task", task_id)
        tasks = tuple(
            replace(t, completed=not t.completed) if t.id == task_id else t
            for t in project.tasks
        )
        updated = replace(project, tasks=tasks, progress=apply_progress(project.progress, tasks))
        self._store.replace_project(idx, updated)
        self._log.info("Task %s toggled project=%s progress=%d", task_id, project_id, updated.progress)
        return self._commit("task", task_id, updated)

    # ---- lifecycle ----
    def flush(self) -> Optional[str]:
        """Write both slots. Returns a warning string on failure."""
        try:
            self._persister.save_clients(self._store.clients)
            self._persister.save_projects(self._store.projects)
        except PersistenceError as e:
            return self._report_persistence_failure(e)
        return None

    # ---- internals ----
    def _fresh_id(self, taken: Callable[[str], bool]) -> str:
        new_id = self._id_factory()
        while taken(new_id):
            new_id = self._id_factory()
        return new_id

    def _commit(self, kind: EntityType, entity_id: str, value: Any) -> MutationResult:
        warning = None
        try:
            if kind == "client":
                self._persister.save_clients(self._store.clients)
            else:
                self._persister.save_projects(self._store.projects)
        except PersistenceError as e:
            warning = self._report_persistence_failure(e)
        self.mutated.emit(kind, entity_id)
        return MutationResult(ok=True, code="applied", value=value, warning=warning)

    def _report_persistence_failure(self, e: PersistenceError) -> str:
        self._log.error("Persistence failed: %s", e, exc_info=e)
        msg = str(e)
        self.persistenceFailed.emit(msg)
        return msg

    def _not_found(self, kind: EntityType, entity_id: str) -> MutationResult:
        self._log.warning("%s not found: %s", kind.capitalize(), entity_id)
        return MutationResult(ok=False, code="not_found", missing=NotFoundError(kind, entity_id))
