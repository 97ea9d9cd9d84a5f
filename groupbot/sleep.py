"""Good-night and good-morning tracking per group, kept in SQLite."""

from __future__ import annotations

import sqlite3
import threading
from datetime import datetime, timedelta
from pathlib import Path

__all__ = [
    "SleepDB",
    "time_duration",
    "is_morning",
    "is_evening",
    "good_morning_reply",
    "good_night_reply",
]

_EARLIEST = datetime.min


def _stamp(moment: datetime) -> str:
    return moment.isoformat(sep=" ", timespec="microseconds")


def _parse(text: str) -> datetime:
    return datetime.fromisoformat(text)


def _trunc_div(value: int, divisor: int) -> int:
    quotient = abs(value) // divisor
    return quotient if value >= 0 else -quotient


class SleepDB:
    """Last sleep or wake-up time of every user in every group."""

    def __init__(self, path: str | Path):
        self._conn = sqlite3.connect(str(path), check_same_thread=False)
        self._lock = threading.RLock()
        with self._conn:
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS sleep_manage ("
                "id INTEGER PRIMARY KEY AUTOINCREMENT, "
                "group_id INTEGER NOT NULL, "
                "user_id INTEGER NOT NULL, "
                "sleep_time TEXT NOT NULL)"
            )

    def __enter__(self) -> "SleepDB":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Close the database."""
        with self._lock:
            self._conn.close()

    def _record(
        self, gid: int, uid: int, now: datetime, since: datetime
    ) -> tuple[int, timedelta]:
        elapsed = timedelta(0)
        with self._lock, self._conn:
            row = self._conn.execute(
                "SELECT sleep_time FROM sleep_manage "
                "WHERE group_id = ? AND user_id = ? ORDER BY id LIMIT 1",
                (gid, uid),
            ).fetchone()
            if row is None:
                self._conn.execute(
                    "INSERT INTO sleep_manage (group_id, user_id, sleep_time) "
                    "VALUES (?, ?, ?)",
                    (gid, uid, _stamp(now)),
                )
            else:
                elapsed = now - _parse(row[0])
                self._conn.execute(
                    "UPDATE sleep_manage SET sleep_time = ? "
                    "WHERE group_id = ? AND user_id = ?",
                    (_stamp(now), gid, uid),
                )
            position = self._conn.execute(
                "SELECT COUNT(*) FROM sleep_manage "
                "WHERE group_id = ? AND sleep_time <= ? AND sleep_time >= ?",
                (gid, _stamp(now), _stamp(since)),
            ).fetchone()[0]
        return position, elapsed

    def sleep(
        self, gid: int, uid: int, now: datetime | None = None
    ) -> tuple[int, timedelta]:
        """Record a good night; return the place among tonight's sleepers and time awake."""
        now = now or datetime.now()
        top_of_hour = now.replace(minute=0, second=0)
        if now.hour >= 21:
            since = top_of_hour - timedelta(hours=now.hour - 21)
        elif now.hour <= 3:
            since = top_of_hour - timedelta(hours=now.hour + 3)
        else:
            since = _EARLIEST
        return self._record(gid, uid, now, since)

    def get_up(
        self, gid: int, uid: int, now: datetime | None = None
    ) -> tuple[int, timedelta]:
        """Record a good morning; return the place among today's risers and time asleep."""
        now = now or datetime.now()
        since = now.replace(minute=0, second=0) - timedelta(hours=now.hour - 6)
        return self._record(gid, uid, now, since)


def time_duration(delta: timedelta) -> tuple[int, int, int]:
    """Split a duration into whole hours, minutes and seconds."""
    micros = delta // timedelta(microseconds=1)
    hour = _trunc_div(micros, 3600 * 10**6)
    minute = _trunc_div(micros - hour * 3600 * 10**6, 60 * 10**6)
    second = _trunc_div(micros - hour * 3600 * 10**6 - minute * 60 * 10**6, 10**6)
    return hour, minute, second


def is_morning(hour: int) -> bool:
    """Good mornings count from 6 to 12 o'clock."""
    return 6 <= hour <= 12


def is_evening(hour: int) -> bool:
    """Good nights count from 21 o'clock to 3 at night."""
    return hour >= 21 or hour <= 3


def _no_duration(hour: int, minute: int, second: int) -> bool:
    return (hour == 0 and minute == 0 and second == 0) or hour >= 24


def good_morning_reply(position: int, duration: timedelta) -> str:
    """Reply text for a good morning."""
    hour, minute, second = time_duration(duration)
    if _no_duration(hour, minute, second):
        return f"早安成功！你是今天第{position}个起床的"
    return (
        f"早安成功！你的睡眠时长为{hour}时{minute}分{second}秒,"
        f"你是今天第{position}个起床的"
    )


def good_night_reply(position: int, duration: timedelta) -> str:
    """Reply text for a good night."""
    hour, minute, second = time_duration(duration)
    if _no_duration(hour, minute, second):
        return f"晚安成功！你是今天第{position}个睡觉的"
    return (
        f"晚安成功！你的清醒时长为{hour}时{minute}分{second}秒,"
        f"你是今天第{position}个睡觉的"
    )