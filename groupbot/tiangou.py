"""A store of diary lines, one of which is picked at random on request."""

from __future__ import annotations

import random
import sqlite3
import threading
from pathlib import Path

__all__ = ["DiaryDB"]


class DiaryDB:
    """Diary entries kept in the ``tiangou`` table of a SQLite file."""

    def __init__(self, path: str | Path):
        self._conn = sqlite3.connect(str(path), check_same_thread=False)
        self._lock = threading.Lock()
        with self._conn:
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS tiangou ("
                "id INTEGER PRIMARY KEY NOT NULL, text TEXT NOT NULL)"
            )

    def __enter__(self) -> "DiaryDB":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Close the database."""
        with self._lock:
            self._conn.close()

    def add(self, text: str) -> int:
        """Store an entry and return its id."""
        with self._lock, self._conn:
            cursor = self._conn.execute("INSERT INTO tiangou (text) VALUES (?)", (text,))
            return cursor.lastrowid

    def count(self) -> int:
        """Number of stored entries."""
        with self._lock:
            return self._conn.execute("SELECT COUNT(*) FROM tiangou").fetchone()[0]

    def pick(self, rng=None) -> str:
        """A random entry; raises LookupError when there are none."""
        rng = rng or random
        with self._lock:
            total = self._conn.execute("SELECT COUNT(*) FROM tiangou").fetchone()[0]
            if total == 0:
                raise LookupError("no diary entries")
            row = self._conn.execute(
                "SELECT text FROM tiangou ORDER BY id LIMIT 1 OFFSET ?",
                (rng.randrange(total),),
            ).fetchone()
        return row[0]