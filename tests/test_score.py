from datetime import datetime, timedelta

import pytest

from groupbot.score import (
    LEVELS,
    SCORE_MAX,
    ScoreDB,
    get_level,
    hour_word,
    next_level_score,
)


@pytest.fixture
def db(tmp_path):
    with ScoreDB(tmp_path / "score.db") as database:
        yield database


@pytest.mark.parametrize(
    "hour, word",
    [(6, "早上好"), (12, "中午好"), (14, "下午好"), (19, "晚上好"), (0, "凌晨好"), (5, "凌晨好")],
)
def test_hour_word(hour, word):
    assert hour_word(datetime(2022, 6, 1, hour)) == word


def test_levels_at_thresholds():
    for level, threshold in enumerate(LEVELS):
        assert get_level(threshold) == level


def test_level_between_thresholds_rounds_down():
    assert get_level(LEVELS[3] - 1) == 2


def test_level_past_max():
    assert get_level(SCORE_MAX + 1) == -1


def test_next_level_score():
    assert next_level_score(2) == LEVELS[3]
    assert next_level_score(10) == SCORE_MAX


def test_get_score_creates_zero(db):
    assert db.get_score(7) == 0
    assert db.top_scores(10) == [(7, 0)]


def test_set_score_round_trip(db):
    db.set_score(7, 42)
    db.set_score(7, 43)
    assert db.get_score(7) == 43


def test_top_scores_order_and_limit(db):
    for uid, score in [(1, 5), (2, 30), (3, 10)]:
        db.set_score(uid, score)
    assert db.top_scores(2) == [(2, 30), (3, 10)]


def test_sign_in_count_round_trip(db):
    now = datetime(2022, 6, 1, 9)
    db.set_sign_in_count(5, 3, now)
    record = db.get_sign_in(5)
    assert record.count == 3
    assert record.updated_at == now


def test_first_sign_in(db):
    result = db.sign_in(9, datetime(2022, 6, 1, 9))
    assert not result.already_signed_in
    assert result.count == 1
    assert result.score == 1
    assert result.level == get_level(1)


def test_second_sign_in_same_day_refused(db):
    now = datetime(2022, 6, 1, 9)
    db.sign_in(9, now)
    again = db.sign_in(9, now + timedelta(hours=1))
    assert again.already_signed_in
    assert again.score == db.get_score(9)


def test_sign_in_next_day_adds_score(db):
    now = datetime(2022, 6, 1, 9)
    first = db.sign_in(9, now)
    second = db.sign_in(9, now + timedelta(days=1))
    assert not second.already_signed_in
    assert second.score == first.score + 1


def test_sign_in_capped(db):
    db.set_score(9, SCORE_MAX)
    result = db.sign_in(9, datetime(2022, 6, 1, 9))
    assert result.capped
    assert result.score == SCORE_MAX
    assert db.get_score(9) == SCORE_MAX
    assert result.next_level_score == SCORE_MAX