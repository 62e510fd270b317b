# Rev 0.2.0
# clientdesk – SQLiteKeyValueRepository (Rev 0.2.0, schema 0001_kv_store)
from __future__ import annotations
import sqlite3
from typing import Any, List, Optional, Union


class SQLiteKeyValueRepository:
    """
    Persistence adapter over the 'kv_store' table.
    One row per slot; values are opaque text blobs (JSON in practice).
    Expected schema: kv_store(key TEXT PRIMARY KEY, value TEXT NOT NULL, updated_at_utc TEXT)
    """

    def __init__(self, db_or_conn: Union[sqlite3.Connection, Any]):
        self._db_or_conn = db_or_conn

    # ---------- public API ----------

    def load(self, key: str) -> Optional[str]:
        """
        Returns the stored blob for `key`, or None if the slot was never written.
        """
        row = self._conn().execute(
            "SELECT value FROM kv_store WHERE key = ?;", (key,)
        ).fetchone()
        return row[0] if row else None

    def save(self, key: str, blob: str) -> None:
        """
        Upserts `blob` into slot `key`. Raises sqlite3.Error on failure.
        """
        con = self._conn()
        con.execute(
            """
            INSERT INTO kv_store(key, value, updated_at_utc)
            VALUES (?, ?, datetime('now'))
            ON CONFLICT(key) DO UPDATE SET
                value = excluded.value,
                updated_at_utc = excluded.updated_at_utc
            """,
            (key, blob),
        )
        con.commit()

    def keys(self) -> List[str]:
        rows = self._conn().execute("SELECT key FROM kv_store ORDER BY key;").fetchall()
        return [r[0] for r in rows]

    # ---------- internals ----------

    def _conn(self) -> sqlite3.Connection:
        # You can pass a raw sqlite3.Connection directly
        if isinstance(self._db_or_conn, sqlite3.Connection):
            return self._db_or_conn

        # Or a wrapper with .conn (attribute) or .connect() (method)
        if hasattr(self._db_or_conn, "conn") and isinstance(self._db_or_conn.conn, sqlite3.Connection):
            return self._db_or_conn.conn
        if hasattr(self._db_or_conn, "connect"):
            c = self._db_or_conn.connect()
            if isinstance(c, sqlite3.Connection):
                return c

        raise RuntimeError(
            "SQLiteKeyValueRepository: could not obtain sqlite3.Connection "
            "from db wrapper (.conn or .connect())."
        )
