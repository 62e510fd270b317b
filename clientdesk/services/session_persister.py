# Rev 0.2.0
"""Session persistence over a key-value adapter (Rev 0.2.0)

Two slots: one JSON array of clients, one JSON array of projects with nested
tasks. The adapter only needs ``load(key) -> str | None`` and
``save(key, blob) -> None``.
"""
from __future__ import annotations
import json
from typing import Any, List, Protocol, Sequence, Tuple

from clientdesk.models.entities import Client, Project
from clientdesk.models.errors import PersistenceError
from clientdesk.utils.logging_setup import get_logger


class KeyValueAdapter(Protocol):
    def load(self, key: str) -> str | None: ...
    def save(self, key: str, blob: str) -> None: ...


def encode_clients(clients: Sequence[Client]) -> str:
    return json.dumps([c.to_dict() for c in clients])


def encode_projects(projects: Sequence[Project]) -> str:
    return json.dumps([p.to_dict() for p in projects])


def _decode_array(key: str, blob: str) -> List[Any]:
    try:
        data = json.loads(blob)
    except ValueError as e:
        raise PersistenceError(key, f"invalid JSON ({e})") from e
    if not isinstance(data, list):
        raise PersistenceError(key, f"expected a JSON array, got {type(data).__name__}")
    return data


def decode_clients(blob: str, key: str = "clients") -> List[Client]:
    try:
        return [Client.from_dict(d) for d in _decode_array(key, blob)]
    except (KeyError, TypeError, AttributeError) as e:
        raise PersistenceError(key, f"malformed client record ({e!r})") from e


def decode_projects(blob: str, key: str = "projects") -> List[Project]:
    try:
        return [Project.from_dict(d) for d in _decode_array(key, blob)]
    except (KeyError, TypeError, ValueError, OverflowError, AttributeError) as e:
        raise PersistenceError(key, f"malformed project record ({e!r})") from e


class SessionPersister:
    def __init__(self, adapter: KeyValueAdapter, *, clients_key: str = "clients", projects_key: str = "projects"):
        self._adapter = adapter
        self.clients_key = clients_key
        self.projects_key = projects_key
        self._log = get_logger("SessionPersister")

    def load(self) -> Tuple[List[Client], List[Project]]:
        """Read both slots. Missing slots load empty; corrupt slots raise PersistenceError."""
        clients: List[Client] = []
        projects: List[Project] = []
        blob = self._read(self.clients_key)
        if blob is not None:
            clients = decode_clients(blob, self.clients_key)
        blob = self._read(self.projects_key)
        if blob is not None:
            projects = decode_projects(blob, self.projects_key)
        self._log.info("Loaded %d clients, %d projects", len(clients), len(projects))
        return clients, projects

    def save_clients(self, clients: Sequence[Client]) -> None:
        self._write(self.clients_key, encode_clients(clients))

    def save_projects(self, projects: Sequence[Project]) -> None:
        self._write(self.projects_key, encode_projects(projects))

    # ---- internals ----
    def _read(self, key: str) -> str | None:
        try:
            return self._adapter.load(key)
        except Exception as e:
            raise PersistenceError(key, f"load failed ({e})") from e

    def _write(self, key: str, blob: str) -> None:
        try:
            self._adapter.save(key, blob)
        except Exception as e:
            raise PersistenceError(key, f"save failed ({e})") from e
        self._log.debug("Saved slot %s (%d bytes)", key, len(blob))
