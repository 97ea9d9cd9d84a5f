import json
from datetime import datetime, timedelta

import pytest

from groupbot.zaobao import API_URL, REFERER, DailyNews


class FakeService:
    def __init__(self, reply=None):
        self.calls = []
        self.reply = reply if reply is not None else {"url": "http://img.example.com/a.jpg"}
        self.counter = 0

    def __call__(self, url, referer):
        self.calls.append((url, referer))
        if url == API_URL:
            return json.dumps(self.reply).encode()
        self.counter += 1
        return b"picture-%d" % self.counter


class Clock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


def test_fetches_api_then_picture():
    service = FakeService()
    news = DailyNews(service, Clock(datetime(2022, 6, 1, 9, 0)))
    assert news.get() == b"picture-1"
    assert service.calls == [(API_URL, ""), ("http://img.example.com/a.jpg", REFERER)]


def test_cached_within_same_day():
    service = FakeService()
    clock = Clock(datetime(2022, 6, 1, 9, 0))
    news = DailyNews(service, clock)
    first = news.get()
    clock.now += timedelta(hours=3)
    assert news.get() == first
    assert len(service.calls) == 2


def test_refetch_after_max_age():
    service = FakeService()
    clock = Clock(datetime(2022, 6, 1, 9, 0))
    news = DailyNews(service, clock)
    news.get()
    clock.now += timedelta(hours=9)
    assert news.get() == b"picture-2"


def test_refetch_on_new_day():
    service = FakeService()
    clock = Clock(datetime(2022, 6, 1, 23, 0))
    news = DailyNews(service, clock)
    news.get()
    clock.now += timedelta(hours=2)
    assert not news.is_fresh(clock.now)
    assert news.get() == b"picture-2"


def test_is_fresh_false_before_first_fetch():
    news = DailyNews(FakeService(), Clock(datetime(2022, 6, 1, 9, 0)))
    assert news.is_fresh(datetime(2022, 6, 1, 9, 0)) is False


def test_missing_url_raises_and_caches_nothing():
    service = FakeService(reply={"nothing": 1})
    clock = Clock(datetime(2022, 6, 1, 9, 0))
    news = DailyNews(service, clock)
    with pytest.raises(ValueError):
        news.get()
    assert news.is_fresh(clock.now) is False


def test_fetch_error_propagates():
    def failing(url, referer):
        raise OSError("down")

    news = DailyNews(failing, Clock(datetime(2022, 6, 1, 9, 0)))
    with pytest.raises(OSError):
        news.get()