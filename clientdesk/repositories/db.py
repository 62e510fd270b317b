# Rev 0.2.0

"""SQLite connection & migration runner (Rev 0.2.0)
- WAL mode, foreign_keys=ON
- Applies SQL files in clientdesk/data/migrations in lexical order
- Tracks applied files in schema_migrations(filename TEXT PRIMARY KEY, applied_at UTC)
"""
from __future__ import annotations
import sqlite3
from pathlib import Path
from datetime import datetime, timezone


from clientdesk.utils.logging_setup import get_logger
from clientdesk.utils.paths import DB_PATH, MIGRATIONS_DIR


class Database:
    def __init__(self, path: Path | str = DB_PATH) -> None:
        self._log = get_logger("Database")
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(self.path, isolation_level=None)
        self.conn.execute("PRAGMA journal_mode=WAL;")
        self.conn.execute("PRAGMA foreign_keys=ON;")
        self.conn.execute(
        "CREATE TABLE IF NOT EXISTS schema_migrations (filename TEXT PRIMARY KEY, applied_at TEXT NOT NULL)"
        )
        self._log.info("SQLite open %s", self.path)


    def close(self) -> None:
        try:
            self.conn.close()
        except sqlite3.Error:
            self._log.exception("Error closing %s", self.path)


    def applied(self) -> set[str]:
        rows = self.conn.execute("SELECT filename FROM schema_migrations").fetchall()
        return {r[0] for r in rows}


    def apply_sql(self, sql: str) -> None:
        self.conn.executescript(sql)


    def run_migrations(self, migrations_dir: Path = MIGRATIONS_DIR) -> list[str]:
        applied = self.applied()
        to_apply = [p for p in sorted(migrations_dir.glob("*.sql")) if p.name not in applied]
        for p in to_apply:
            sql = p.read_text(encoding="utf-8")
            self.apply_sql(sql)
            self.conn.execute(
                "INSERT INTO schema_migrations(filename, applied_at) VALUES(?, ?)",
                (p.name, datetime.now(timezone.utc).isoformat()),
            )
            self._log.info("Applied migration %s", p.name)
        return [p.name for p in to_apply]
