"""Random rebirth: a weighted country of birth and a weighted gender."""

from __future__ import annotations

import json
import random
from bisect import bisect_left
from itertools import accumulate
from typing import Iterable, Mapping, Sequence, Union

__all__ = ["Reborn", "GENDERS", "FAIL_TEXT", "SUCCESS_TEXT"]

GENDERS = (("男孩子", 50707), ("女孩子", 48292), ("雌雄同体", 1001))
SUCCESS_TEXT = "投胎成功！\n您出生在 {country}, 是 {gender}。"
FAIL_TEXT = "投胎失败！\n您没能活到出生，祝您下次好运！"
_WEIGHT_SCALE = 1e9
_SUCCESS_THRESHOLD = 1 << 27

Area = Union[Mapping[str, object], Sequence[object]]


class _Chooser:
    """Picks items with probability proportional to integer weights."""

    def __init__(self, choices: Iterable[tuple[str, int]]):
        pairs = [(item, int(weight)) for item, weight in choices]
        self._items = [item for item, _ in pairs]
        self._totals = list(accumulate(max(weight, 0) for _, weight in pairs))
        if not self._totals or self._totals[-1] <= 0:
            raise ValueError("no choices with a positive weight")

    def pick(self, rng) -> str:
        draw = rng.randrange(self._totals[-1]) + 1
        return self._items[bisect_left(self._totals, draw)]


def _area_pair(area: Area) -> tuple[str, float]:
    if isinstance(area, Mapping):
        return str(area["name"]), float(area["weight"])
    name, weight = area
    return str(name), float(weight)


class Reborn:
    """Draws where and as what a user is born again."""

    def __init__(self, areas: Iterable[Area]):
        self._countries = _Chooser(
            (name, int(weight * _WEIGHT_SCALE)) for name, weight in map(_area_pair, areas)
        )
        self._genders = _Chooser(GENDERS)

    @classmethod
    def from_json(cls, data: str | bytes) -> "Reborn":
        """Build from a JSON list of ``{"name": ..., "weight": ...}`` objects."""
        parsed = json.loads(data)
        if not isinstance(parsed, list):
            raise ValueError("rate data must be a JSON list")
        return cls(parsed)

    def pick_country(self, rng=None) -> str:
        """A country or region, weighted by its rate."""
        return self._countries.pick(rng or random)

    def pick_gender(self, rng=None) -> str:
        """A gender, weighted by birth statistics."""
        return self._genders.pick(rng or random)

    def reborn(self, rng=None) -> str:
        """The reply text for one rebirth attempt."""
        rng = rng or random
        if rng.randrange(1 << 31) > _SUCCESS_THRESHOLD:
            return SUCCESS_TEXT.format(
                country=self.pick_country(rng), gender=self.pick_gender(rng)
            )
        return FAIL_TEXT