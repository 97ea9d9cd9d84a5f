"""Hot words of a group chat: filtering, counting and ranking word slices."""

from __future__ import annotations

import re
from bisect import bisect_left
from collections import Counter
from typing import Iterable, Mapping, Sequence

__all__ = [
    "load_stopwords",
    "is_counted",
    "count_words",
    "rank_by_word_count",
    "clamp_message_count",
    "MAX_MESSAGES",
    "DEFAULT_MESSAGES",
    "TOP_N",
]

MAX_MESSAGES = 10000
DEFAULT_MESSAGES = 1000
TOP_N = 20
_CHINESE = re.compile("[\u4e00-\u9fa5]+")


def load_stopwords(text: str) -> list[str]:
    """Stop words, one per line, sorted for lookup."""
    return sorted(text.replace("\r", "").split("\n"))


def _contains(sorted_words: Sequence[str], word: str) -> bool:
    index = bisect_left(sorted_words, word)
    return index < len(sorted_words) and sorted_words[index] == word


def is_counted(word: str, stopwords: Sequence[str]) -> bool:
    """True for a word of Chinese characters only that is not a stop word."""
    return _CHINESE.fullmatch(word) is not None and not _contains(stopwords, word)


def count_words(slices: Iterable[str], stopwords: Sequence[str]) -> Counter:
    """How often each counted word appears among the slices."""
    counts: Counter = Counter()
    for piece in slices:
        word = piece.strip()
        if is_counted(word, stopwords):
            counts[word] += 1
    return counts


def rank_by_word_count(frequencies: Mapping[str, int]) -> list[tuple[str, int]]:
    """Words with their counts, most frequent first."""
    return sorted(frequencies.items(), key=lambda item: (-item[1], item[0]))


def clamp_message_count(count: int) -> int:
    """Number of messages to scan: 0 means the default, capped at the maximum."""
    if count > MAX_MESSAGES:
        return MAX_MESSAGES
    if count == 0:
        return DEFAULT_MESSAGES
    return count