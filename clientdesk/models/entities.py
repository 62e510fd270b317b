# Rev 0.2.0
"""Entities for clients, projects and their tasks.

Entities are frozen: every mutation builds a replacement object
(``dataclasses.replace``) and the store swaps it in, so a half-applied
change is never observable.

Serialized form uses camelCase keys (clientId, startDate, dueDate) so blobs
written by earlier versions of the tracker load unchanged.
"""
from __future__ import annotations
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Tuple

from .types import PRIORITIES, PROGRESS_MAX, PROGRESS_MIN, PROJECT_STATUSES, Priority, ProjectStatus


def clamp_progress(value: Any) -> int:
    """Round half up to int and clamp into [0, 100]; NaN maps to 0, infinities to their bound."""
    f = float(value)
    if math.isnan(f):
        return PROGRESS_MIN
    if math.isinf(f):
        return PROGRESS_MAX if f > 0 else PROGRESS_MIN
    v = math.floor(f + 0.5)
    return max(PROGRESS_MIN, min(PROGRESS_MAX, v))


def _checked(value: str, allowed: Tuple[str, ...], what: str) -> str:
    if value not in allowed:
        raise ValueError(f"unknown {what}: {value!r}")
    return value


@dataclass(frozen=True)
class ClientFields:
    name: str
    email: str
    phone: str
    company: str


@dataclass(frozen=True)
class ProjectFields:
    client_id: str
    title: str
    description: str
    priority: Priority
    start_date: str
    due_date: str
    progress: int = 0


@dataclass(frozen=True)
class Client:
    id: str
    name: str
    email: str
    phone: str
    company: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "company": self.company,
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "Client":
        return cls(
            id=str(d["id"]),
            name=d.get("name") or "",
            email=d.get("email") or "",
            phone=d.get("phone") or "",
            company=d.get("company") or "",
        )


@dataclass(frozen=True)
class Task:
    id: str
    title: str
    completed: bool = False
    due_date: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "completed": self.completed,
            "dueDate": self.due_date,
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "Task":
        return cls(
            id=str(d["id"]),
            title=d.get("title") or "",
            completed=bool(d.get("completed", False)),
            due_date=d.get("dueDate") or "",
        )


@dataclass(frozen=True)
class Project:
    id: str
    client_id: str
    title: str
    description: str = ""
    status: ProjectStatus = "not-started"
    priority: Priority = "medium"
    progress: int = 0
    start_date: str = ""
    due_date: str = ""
    tasks: Tuple[Task, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "clientId": self.client_id,
            "title": self.title,
            "description": self.description,
            "status": self.status,
            "priority": self.priority,
            "progress": self.progress,
            "startDate": self.start_date,
            "dueDate": self.due_date,
            "tasks": [t.to_dict() for t in self.tasks],
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "Project":
        return cls(
            id=str(d["id"]),
            client_id=str(d.get("clientId") or ""),
            title=d.get("title") or "",
            description=d.get("description") or "",
            status=_checked(d.get("status") or "not-started", PROJECT_STATUSES, "status"),
            priority=_checked(d.get("priority") or "medium", PRIORITIES, "priority"),
            progress=clamp_progress(d.get("progress") or 0),
            start_date=d.get("startDate") or "",
            due_date=d.get("dueDate") or "",
            tasks=tuple(Task.from_dict(t) for t in (d.get("tasks") or [])),
        )
