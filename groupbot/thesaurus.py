"""Canned replies looked up by the exact text of a message."""

from __future__ import annotations

import json
import random
from typing import Mapping, Sequence

__all__ = ["Thesaurus"]


class Thesaurus:
    """A dictionary of message texts and the replies they may get."""

    def __init__(self, replies: Mapping[str, Sequence[str]]):
        self._replies = {key: list(values) for key, values in replies.items() if values}

    @classmethod
    def from_json(cls, data: str | bytes) -> "Thesaurus":
        """Build from a JSON object mapping texts to lists of replies."""
        parsed = json.loads(data)
        if not isinstance(parsed, dict):
            raise ValueError("thesaurus data must be a JSON object")
        return cls({key: value or [] for key, value in parsed.items()})

    def keys(self) -> list[str]:
        """All message texts that have replies."""
        return list(self._replies)

    def reply(self, message: str, rng=None) -> str | None:
        """A random reply to ``message``, or None when it is not in the dictionary."""
        choices = self._replies.get(message)
        if not choices:
            return None
        return (rng or random).choice(choices)