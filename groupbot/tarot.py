"""Major arcana tarot: single draws, several distinct draws, meanings and spreads."""

from __future__ import annotations

import json
import os
import random
import re
from dataclasses import dataclass, field
from typing import Mapping, Sequence

__all__ = [
    "Card",
    "Formation",
    "Draw",
    "Tarot",
    "card_image_url",
    "parse_count",
    "format_spread",
    "IMAGE_BASE",
    "MAJOR_ARCANA",
    "MAX_DRAW",
    "POSITIONS",
    "REASONS",
]

IMAGE_BASE = os.environ.get("TAROT_IMAGE_BASE", "https://tarot.example.com/raw/master/")
MAJOR_ARCANA = 22
MAX_DRAW = 20
POSITIONS = ("正位", "逆位")
REASONS = ("您抽到的是~\n", "锵锵锵，塔罗牌的预言是~\n", "诶，让我看看您抽到了~\n")
_REVERSE_DIRS = ("", "Reverse")
_COUNT_PATTERN = re.compile(r"抽(?:(\d{1,2})张)?塔罗牌")


def card_image_url(index: int, reverse: bool) -> str:
    """Image URL of a major arcana card, upright or reversed."""
    return f"{IMAGE_BASE}MajorArcana{_REVERSE_DIRS[int(bool(reverse))]}/{index}.png"


def parse_count(text: str) -> int:
    """Number of cards asked for by a draw command such as ``抽3张塔罗牌``."""
    matched = _COUNT_PATTERN.fullmatch(text)
    if matched is None:
        raise ValueError(f"not a draw command: {text!r}")
    if matched.group(1) is None:
        return 1
    count = int(matched.group(1))
    if count <= 0:
        raise ValueError("张数必须为正")
    if count > MAX_DRAW:
        raise ValueError("抽取张数过多")
    return count


@dataclass(frozen=True)
class Card:
    """A card's name and its meanings."""

    name: str
    description: str = ""
    reverse_description: str = ""
    img_url: str = ""

    @property
    def short_name(self) -> str:
        """The name without its parenthesised part."""
        return self.name.split("(")[0]


@dataclass(frozen=True)
class Formation:
    """A spread: how many cards it uses and what each position stands for."""

    cards_num: int
    is_cut: bool = False
    represent: list[list[str]] = field(default_factory=list)


@dataclass(frozen=True)
class Draw:
    """One drawn card."""

    index: int
    reversed: bool
    name: str

    @property
    def position(self) -> str:
        return POSITIONS[int(self.reversed)]

    @property
    def image_url(self) -> str:
        return card_image_url(self.index, self.reversed)

    def caption(self, reason: str = "") -> str:
        """Text announcing the card."""
        return f"{reason}{self.position} 的 {self.name}\n"


def format_spread(owner: str, entries: Sequence[tuple[str, Draw]]) -> str:
    """The spread as text, headed by the owner's name."""
    lines = "".join(
        f"{label}: {draw.position} 的 {draw.name}\n" for label, draw in entries
    )
    return f"{owner}\n{lines}"


class Tarot:
    """The deck with its spreads."""

    def __init__(self, cards: Mapping[str, Card], formations: Mapping[str, Formation]):
        self._cards = dict(cards)
        self._info = {card.short_name: card for card in self._cards.values()}
        self._formations = dict(formations)

    @classmethod
    def from_json(cls, cards_json: str | bytes, formations_json: str | bytes) -> "Tarot":
        """Build from the card and spread JSON documents."""
        raw_cards = json.loads(cards_json)
        raw_formations = json.loads(formations_json)
        if not isinstance(raw_cards, dict) or not isinstance(raw_formations, dict):
            raise ValueError("tarot data must be JSON objects")
        cards = {}
        for key, value in raw_cards.items():
            info = value.get("info") or {}
            cards[key] = Card(
                name=value.get("name", ""),
                description=info.get("description", ""),
                reverse_description=info.get("reverseDescription", ""),
                img_url=info.get("imgUrl", ""),
            )
        formations = {
            key: Formation(
                cards_num=int(value.get("cards_num", 0)),
                is_cut=bool(value.get("is_cut", False)),
                represent=[list(row) for row in value.get("represent") or []],
            )
            for key, value in raw_formations.items()
        }
        return cls(cards, formations)

    def _draw_indices(self, n: int, rng) -> list[Draw]:
        if n <= 0:
            raise ValueError("张数必须为正")
        if n > MAJOR_ARCANA:
            raise ValueError("抽取张数过多")
        draws = []
        for index in rng.sample(range(MAJOR_ARCANA), n):
            reverse = rng.randrange(2) == 1
            card = self._cards.get(str(index))
            draws.append(Draw(index, reverse, card.name if card else ""))
        return draws

    def draw(self, n: int = 1, rng=None) -> list[Draw]:
        """Draw ``n`` distinct cards, each upright or reversed."""
        return self._draw_indices(n, rng or random)

    def explain(self, name: str) -> Card | None:
        """The card named ``name`` (without its parenthesised part), if any."""
        return self._info.get(name)

    def spread(self, name: str, rng=None) -> list[tuple[str, Draw]]:
        """Lay out the spread ``name``: each position label with its card."""
        formation = self._formations.get(name)
        if formation is None:
            raise KeyError(f"没有找到{name}噢~")
        draws = self._draw_indices(formation.cards_num, rng or random)
        labels = formation.represent[0] if formation.represent else []
        if len(labels) < len(draws):
            raise ValueError(f"spread {name!r} lacks position labels")
        return list(zip(labels, draws))