import json
import random

import pytest

from groupbot.thesaurus import Thesaurus


DATA = json.dumps({"hello": ["hi", "hey"], "bye": ["see you"]}, ensure_ascii=False)


def test_keys():
    thesaurus = Thesaurus.from_json(DATA)
    assert sorted(thesaurus.keys()) == ["bye", "hello"]


def test_reply_is_one_of_choices():
    thesaurus = Thesaurus.from_json(DATA)
    rng = random.Random(1)
    for _ in range(20):
        assert thesaurus.reply("hello", rng) in {"hi", "hey"}


def test_single_reply():
    thesaurus = Thesaurus.from_json(DATA.encode())
    assert thesaurus.reply("bye") == "see you"


def test_unknown_message():
    thesaurus = Thesaurus.from_json(DATA)
    assert thesaurus.reply("what") is None


def test_empty_replies_are_dropped():
    thesaurus = Thesaurus.from_json('{"a": [], "b": null, "c": ["x"]}')
    assert thesaurus.keys() == ["c"]
    assert thesaurus.reply("a") is None


def test_invalid_json():
    with pytest.raises(ValueError):
        Thesaurus.from_json("[1, 2]")
    with pytest.raises(ValueError):
        Thesaurus.from_json("{not json")