"""Daily sign-in with a capped score and levels, kept in SQLite."""

from __future__ import annotations

import sqlite3
import threading
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

__all__ = [
    "ScoreDB",
    "SignIn",
    "SignInResult",
    "hour_word",
    "get_level",
    "next_level_score",
    "SCORE_MAX",
    "SIGN_IN_MAX",
    "LEVELS",
]

SCORE_MAX = 120
SIGN_IN_MAX = 1
SIGN_IN_BONUS = 1
LEVELS = (0, 1, 2, 5, 10, 20, 35, 55, 75, 100, 120)
_DAY_FORMAT = "%Y%m%d"


@dataclass(frozen=True)
class SignIn:
    """A user's sign-in counter and when it last changed."""

    uid: int
    count: int
    updated_at: datetime


@dataclass(frozen=True)
class SignInResult:
    """Outcome of one sign-in attempt."""

    already_signed_in: bool
    count: int
    score: int
    level: int
    next_level_score: int
    capped: bool = False


def hour_word(moment: datetime) -> str:
    """Greeting that fits the hour of ``moment``."""
    hour = moment.hour
    if 6 <= hour < 12:
        return "早上好"
    if 12 <= hour < 14:
        return "中午好"
    if 14 <= hour < 19:
        return "下午好"
    if 19 <= hour < 24:
        return "晚上好"
    if 0 <= hour < 6:
        return "凌晨好"
    return ""


def get_level(count: int) -> int:
    """Level reached with ``count`` points; -1 past the last level."""
    for level, threshold in enumerate(LEVELS):
        if count == threshold:
            return level
        if count < threshold:
            return level - 1
    return -1


def next_level_score(level: int) -> int:
    """Points needed for the level after ``level``."""
    if level < len(LEVELS) - 1:
        return LEVELS[level + 1]
    return SCORE_MAX


class ScoreDB:
    """Scores and sign-in counters per user."""

    def __init__(self, path: str | Path):
        self._conn = sqlite3.connect(str(path), check_same_thread=False)
        self._lock = threading.RLock()
        with self._conn:
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS score ("
                "uid INTEGER PRIMARY KEY NOT NULL, score INTEGER NOT NULL DEFAULT 0)"
            )
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS sign_in ("
                "uid INTEGER PRIMARY KEY NOT NULL, count INTEGER NOT NULL DEFAULT 0, "
                "updated_at TEXT NOT NULL)"
            )

    def __enter__(self) -> "ScoreDB":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Close the database."""
        with self._lock:
            self._conn.close()

    def get_score(self, uid: int) -> int:
        """The user's score, creating a zero entry if the user is new."""
        with self._lock, self._conn:
            self._conn.execute(
                "INSERT OR IGNORE INTO score (uid, score) VALUES (?, 0)", (uid,)
            )
            return self._conn.execute(
                "SELECT score FROM score WHERE uid = ?", (uid,)
            ).fetchone()[0]

    def set_score(self, uid: int, score: int) -> None:
        """Insert or update the user's score."""
        with self._lock, self._conn:
            self._conn.execute(
                "INSERT INTO score (uid, score) VALUES (?, ?) "
                "ON CONFLICT(uid) DO UPDATE SET score = excluded.score",
                (uid, score),
            )

    def _sign_in_row(self, uid: int, now: datetime) -> SignIn:
        with self._lock, self._conn:
            self._conn.execute(
                "INSERT OR IGNORE INTO sign_in (uid, count, updated_at) VALUES (?, 0, ?)",
                (uid, now.isoformat()),
            )
            count, updated = self._conn.execute(
                "SELECT count, updated_at FROM sign_in WHERE uid = ?", (uid,)
            ).fetchone()
        return SignIn(uid, count, datetime.fromisoformat(updated))

    def get_sign_in(self, uid: int) -> SignIn:
        """The user's sign-in record, creating one if the user is new."""
        return self._sign_in_row(uid, datetime.now())

    def set_sign_in_count(self, uid: int, count: int, now: datetime) -> None:
        """Insert or update the user's sign-in count, stamped with ``now``."""
        with self._lock, self._conn:
            self._conn.execute(
                "INSERT INTO sign_in (uid, count, updated_at) VALUES (?, ?, ?) "
                "ON CONFLICT(uid) DO UPDATE SET count = excluded.count, "
                "updated_at = excluded.updated_at",
                (uid, count, now.isoformat()),
            )

    def top_scores(self, n: int) -> list[tuple[int, int]]:
        """The ``n`` highest ``(uid, score)`` pairs, best first."""
        with self._lock:
            rows = self._conn.execute(
                "SELECT uid, score FROM score ORDER BY score DESC, uid ASC LIMIT ?",
                (n,),
            ).fetchall()
        return [(uid, score) for uid, score in rows]

    def sign_in(self, uid: int, now: datetime) -> SignInResult:
        """Sign the user in for the day of ``now`` and award the bonus."""
        with self._lock:
            record = self._sign_in_row(uid, now)
            today = now.strftime(_DAY_FORMAT)
            same_day = record.updated_at.strftime(_DAY_FORMAT) == today
            if record.count >= SIGN_IN_MAX and same_day:
                score = self.get_score(uid)
                level = get_level(score)
                return SignInResult(
                    True, record.count, score, level, next_level_score(level)
                )
            if not same_day:
                self.set_sign_in_count(uid, 0, now)
            count = record.count + 1
            self.set_sign_in_count(uid, count, now)
            score = self.get_score(uid) + SIGN_IN_BONUS
            capped = score > SCORE_MAX
            if capped:
                score = SCORE_MAX
            self.set_score(uid, score)
            level = get_level(score)
            return SignInResult(
                False, count, score, level, next_level_score(level), capped
            )