"""
Key-Value Stores — opaque blob storage behind the state repository.

The engine only needs synchronous get(key) / set(key, bytes). Two backends:
an in-memory dict for tests and embedding, and SQLite for on-device saves.
"""

import sqlite3
from typing import Dict, Optional, Protocol


class PersistenceError(Exception):
    """Raised when a backend cannot read or write a blob."""
    pass


class KeyValueStore(Protocol):
    """Backends signal failure by raising PersistenceError."""

    def get(self, key: str) -> Optional[bytes]:
        ...

    def set(self, key: str, value: bytes) -> None:
        ...


class InMemoryKeyValueStore:

    def __init__(self, initial: Optional[Dict[str, bytes]] = None):
        self._data: Dict[str, bytes] = dict(initial or {})

    def get(self, key: str) -> Optional[bytes]:
        return self._data.get(key)

    def set(self, key: str, value: bytes) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self):
        return list(self._data.keys())


class SQLiteKeyValueStore:
    """
    Single-table blob store.
    One writer only, so a plain upsert per key is enough.
    """

    def __init__(self, db_path: str = ":memory:"):
        self.db_path = db_path
        self._conn = sqlite3.connect(db_path, check_same_thread=False)
        self._init_schema()

    def _init_schema(self) -> None:
        """Create the blob table if it doesn't exist."""
        self._conn.execute("""
            CREATE TABLE IF NOT EXISTS kv (
                key TEXT PRIMARY KEY,
                value BLOB NOT NULL,
                updated_at TEXT NOT NULL DEFAULT (datetime('now'))
            )
        """)
        self._conn.commit()

    def get(self, key: str) -> Optional[bytes]:
        try:
            row = self._conn.execute(
                "SELECT value FROM kv WHERE key = ?", (key,)
            ).fetchone()
        except sqlite3.Error as e:
            raise PersistenceError(f"Failed to read {key}: {e}") from e
        return bytes(row[0]) if row else None

    def set(self, key: str, value: bytes) -> None:
        try:
            self._conn.execute(
                """
                INSERT INTO kv (key, value, updated_at) VALUES (?, ?, datetime('now'))
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (key, value),
            )
            self._conn.commit()
        except sqlite3.Error as e:
            raise PersistenceError(f"Failed to write {key}: {e}") from e

    def close(self) -> None:
        self._conn.close()
