# clientdesk application context
# Rev 0.2.0

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional
from .utils.config import load_settings
from .utils.logging_setup import get_logger
from .utils.paths import DB_PATH
from .repositories.db import Database
from .repositories.sqlite_kv_repository import SQLiteKeyValueRepository
from .services.entity_store import EntityStore
from .services.session_persister import SessionPersister
from .services.tracker_service import TrackerService
from .viewmodels.dashboard_viewmodel import DashboardViewModel

@dataclass
class AppContext:
    """Central container for shared app resources."""
    db_path: Path
    db: Database
    persister: SessionPersister
    store: EntityStore
    service: TrackerService
    settings: Dict[str, Any]

    @classmethod
    def create(cls, db_path: Path | str = DB_PATH, settings: Optional[Dict[str, Any]] = None) -> "AppContext":
        """Open DB, run migrations, load the session and wire the service."""
        log = get_logger("AppContext")
        settings = settings if settings is not None else load_settings()
        storage = settings["storage"]

        db = Database(db_path)
        try:
            db.run_migrations()
            persister = SessionPersister(
                SQLiteKeyValueRepository(db),
                clients_key=storage["clients_key"],
                projects_key=storage["projects_key"],
            )
            store = EntityStore.from_persister(persister)
        except Exception:
            db.close()
            raise
        service = TrackerService(store, persister)
        log.info("AppContext initialized with DB=%s", db_path)
        return cls(db_path=Path(db_path), db=db, persister=persister, store=store, service=service, settings=settings)

    def dashboard_viewmodel(self) -> DashboardViewModel:
        return DashboardViewModel(self.service, self.settings["dashboard"]["recent_projects_limit"])

    def close(self) -> Optional[str]:
        """Flush both slots, then close the connection. Returns a warning on flush failure."""
        warning = self.service.flush()
        self.db.close()
        return warning
