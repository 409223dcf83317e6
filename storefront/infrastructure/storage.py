"""Durable local key/value storage.

A string-to-string mapping that persists across sessions. Keys are
namespaced by callers (e.g. ``comments_<slug>``); writes under one key
never touch another.
"""

import sqlite3
from pathlib import Path
from typing import Protocol

import structlog

logger = structlog.get_logger()


class KeyValueStorage(Protocol):
    """Storage contract used by the comment ledger."""

    def get(self, key: str) -> str | None:
        """Return the value stored under ``key``, or None if absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        ...


class InMemoryKeyValueStorage:
    """Process-local storage for tests and ephemeral sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def keys(self) -> list[str]:
        """List stored keys."""
        return list(self._data)


class SqliteKeyValueStorage:
    """SQLite-backed storage that survives process restarts.

    Each call opens a short-lived connection, so instances are safe to
    share across the event loop's callbacks.
    """

    def __init__(self, path: str | Path) -> None:
        """Initialize storage and create the table if needed.

        Args:
            path: SQLite database file path.
        """
        self.path = Path(path)
        self._ensure_db()

    def _connect(self) -> sqlite3.Connection:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        return sqlite3.connect(self.path)

    def _ensure_db(self) -> None:
        con = self._connect()
        try:
            with con:
                con.execute(
                    """
                    CREATE TABLE IF NOT EXISTS entries (
                        key TEXT PRIMARY KEY,
                        value TEXT NOT NULL
                    )
                    """
                )
        finally:
            con.close()
        logger.debug("Key/value storage ready", path=str(self.path))

    def get(self, key: str) -> str | None:
        con = self._connect()
        try:
            row = con.execute("SELECT value FROM entries WHERE key = ?", (key,)).fetchone()
        finally:
            con.close()
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        con = self._connect()
        try:
            with con:
                con.execute(
                    "INSERT INTO entries (key, value) VALUES (?, ?) "
                    "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                    (key, value),
                )
        finally:
            con.close()
