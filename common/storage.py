"""Persistence utilities for the expense tracker core services."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Any, List, Optional, Sequence

from .exceptions import StorageError

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS expenses (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    amount REAL NOT NULL,
    category TEXT NOT NULL,
    note TEXT,
    date TEXT NOT NULL
);
"""


class SQLiteStorage:
    """Embedded SQLite database holding the expenses table."""

    def __init__(self, base_path: Path, filename: str = "expenses.db") -> None:
        self._base_path = base_path
        self._base_path.mkdir(parents=True, exist_ok=True)
        self._path = self._base_path / filename
        try:
            # Flask's dev server may hand requests to worker threads; access stays sequential.
            self._conn = sqlite3.connect(str(self._path), check_same_thread=False)
        except sqlite3.Error as exc:
            raise StorageError(f"Unable to open database {self._path}") from exc
        self._conn.row_factory = sqlite3.Row

    def create_schema(self) -> None:
        try:
            self._conn.executescript(SCHEMA)
        except sqlite3.Error as exc:
            logger.error("Schema creation failed for %s: %s", self._path, exc)
            raise StorageError(f"Unable to create schema in {self._path}") from exc

    def fetch_all(self, sql: str, params: Sequence[Any] = ()) -> List[sqlite3.Row]:
        try:
            return self._conn.execute(sql, params).fetchall()
        except sqlite3.Error as exc:
            logger.error("Query failed: %s (%s)", sql, exc)
            raise StorageError(f"Unable to read from {self._path}") from exc

    def fetch_one(self, sql: str, params: Sequence[Any] = ()) -> Optional[sqlite3.Row]:
        try:
            return self._conn.execute(sql, params).fetchone()
        except sqlite3.Error as exc:
            logger.error("Query failed: %s (%s)", sql, exc)
            raise StorageError(f"Unable to read from {self._path}") from exc

    def execute(self, sql: str, params: Sequence[Any] = ()) -> int:
        """Run one statement in its own transaction.

        Returns the new row id for inserts and the affected row count otherwise.
        """
        logger.debug("Executing %s with %r", sql.strip(), tuple(params))
        try:
            # The connection context manager commits on success and rolls back on error.
            with self._conn:
                cursor = self._conn.execute(sql, params)
        except sqlite3.Error as exc:
            logger.error("Statement failed: %s (%s)", sql, exc)
            raise StorageError(f"Unable to write to {self._path}") from exc
        if sql.lstrip().upper().startswith("INSERT"):
            return int(cursor.lastrowid)
        return cursor.rowcount

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> "SQLiteStorage":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def base_path(self) -> Path:
        return self._base_path

    @property
    def path(self) -> Path:
        return self._path
