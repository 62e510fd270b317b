# Rev 0.2.0

"""Pytest fixtures for clientdesk (Rev 0.2.0)"""
from __future__ import annotations
import itertools
import pytest
from pathlib import Path
from PySide6.QtCore import QCoreApplication

from clientdesk.repositories.db import Database
from clientdesk.repositories.memory_kv_repository import InMemoryKeyValueRepository
from clientdesk.services.entity_store import EntityStore
from clientdesk.services.session_persister import SessionPersister
from clientdesk.services.tracker_service import TrackerService


@pytest.fixture(scope="session", autouse=True)
def qt_core_app():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture()
def db(tmp_path: Path):
    db = Database(path=tmp_path / "test.db")
    try:
        db.run_migrations()
        yield db
    finally:
        db.close()


@pytest.fixture()
def kv() -> InMemoryKeyValueRepository:
    return InMemoryKeyValueRepository()


@pytest.fixture()
def persister(kv) -> SessionPersister:
    return SessionPersister(kv)


@pytest.fixture()
def service(persister) -> TrackerService:
    counter = itertools.count(1)
    return TrackerService(EntityStore(), persister, id_factory=lambda: f"id{next(counter)}")


