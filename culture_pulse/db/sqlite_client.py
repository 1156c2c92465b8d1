"""SQLite-backed key-value storage.

Updates:
    v0.1.0 - 2026-10-19 - Named slots holding serialized payloads.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Optional

KV_TABLE_SCHEMA = """
CREATE TABLE IF NOT EXISTS kv_store (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
);
"""


class SQLiteClient:
    """Lightweight wrapper around sqlite3 exposing named text slots."""

    def __init__(self, db_path: str | Path) -> None:
        """Initialize the SQLite client.

        Args:
            db_path (str | Path): Path to the SQLite database file, or ``:memory:``.
        """

        self._db_path = str(db_path)
        if self._db_path != ":memory:":
            Path(self._db_path).parent.mkdir(parents=True, exist_ok=True)
        self._connection: Optional[sqlite3.Connection] = None

    @property
    def connection(self) -> sqlite3.Connection:
        """Return or lazily initialize the SQLite connection."""
        if self._connection is None:
            self._connection = sqlite3.connect(self._db_path)
            self._connection.row_factory = sqlite3.Row
        return self._connection

    def initialize_schema(self) -> None:
        """Ensure the key-value table exists."""
        with self.connection as conn:
            conn.execute(KV_TABLE_SCHEMA)

    def get_value(self, key: str) -> str | None:
        """Return the raw text stored under ``key`` or ``None`` when absent."""

        with self.connection as conn:
            cursor = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,))
            row = cursor.fetchone()
        return None if row is None else row["value"]

    def set_value(self, key: str, value: str) -> None:
        """Replace the text stored under ``key`` in a single transaction."""

        with self.connection as conn:
            conn.execute(
                """
                INSERT INTO kv_store (key, value, updated_at)
                VALUES (?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (key, value),
            )

    def has_key(self, key: str) -> bool:
        with self.connection as conn:
            cursor = conn.execute("SELECT 1 FROM kv_store WHERE key = ? LIMIT 1", (key,))
            return cursor.fetchone() is not None

    def close(self) -> None:
        """Close and discard the active SQLite connection."""
        if self._connection is not None:
            self._connection.close()
            self._connection = None
