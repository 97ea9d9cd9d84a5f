"""Today's news picture, fetched from a service and cached for the day."""

from __future__ import annotations

import json
import threading
import urllib.request
from datetime import datetime, timedelta
from typing import Callable

__all__ = ["DailyNews", "API_URL", "REFERER", "USER_AGENT", "MAX_AGE"]

API_URL = "http://api.soyiji.com/news_jpg"
REFERER = "safe.soyiji.com"
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/87.0.4280.88 Safari/537.36 Edg/87.0.664.66"
)
MAX_AGE = timedelta(hours=8)


def _http_fetch(url: str, referer: str) -> bytes:
    headers = {"User-Agent": USER_AGENT}
    if referer:
        headers["Referer"] = referer
    request = urllib.request.Request(url, headers=headers, method="GET")
    with urllib.request.urlopen(request) as response:
        return response.read()


class DailyNews:
    """Caches the news picture for up to eight hours within the same day."""

    def __init__(
        self,
        fetch: Callable[[str, str], bytes] | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self._fetch = fetch or _http_fetch
        self._clock = clock or datetime.now
        self._lock = threading.Lock()
        self._data: bytes | None = None
        self._time: datetime | None = None

    def is_fresh(self, now: datetime) -> bool:
        """True when a cached picture exists and still counts for ``now``."""
        if self._data is None or self._time is None:
            return False
        return now - self._time <= MAX_AGE and now.day == self._time.day

    def get(self) -> bytes:
        """The picture, fetching a new one when the cache is stale."""
        with self._lock:
            if self.is_fresh(self._clock()):
                return self._data
            reply = json.loads(self._fetch(API_URL, ""))
            url = reply.get("url") if isinstance(reply, dict) else None
            if not isinstance(url, str) or not url:
                raise ValueError("news service returned no picture url")
            data = self._fetch(url, REFERER)
            self._data = data
            self._time = self._clock()
            return data