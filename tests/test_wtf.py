import json
import urllib.error
from unittest import mock

import pytest

from groupbot.wtf import API_PREFIX, TABLE, Wtf, WtfError, list_text, new_wtf


def _fake_response(status, body):
    response = mock.MagicMock()
    response.__enter__.return_value = response
    response.status = status
    response.read.return_value = body
    return response


def test_new_wtf_first_entry():
    quiz = new_wtf(0)
    assert quiz == Wtf("你的意义是什么?", "mRIFuS")


def test_new_wtf_out_of_range():
    assert new_wtf(-1) is None
    assert new_wtf(len(TABLE)) is None
    assert new_wtf(len(TABLE) - 1) == TABLE[-1]


def test_list_text_lines():
    lines = list_text().splitlines()
    assert len(lines) == len(TABLE)
    assert lines[0] == "00. 你的意义是什么?"
    assert lines[-1].startswith(f"{len(TABLE) - 1:02d}. ")


def test_url_escapes_names():
    quiz = Wtf("demo", "abc")
    assert quiz.url() == API_PREFIX + "abc"
    assert quiz.url("a b", "c/d") == API_PREFIX + "abc/a+b/c%2Fd"


def test_parse_response_ok():
    quiz = Wtf("demo", "abc")
    payload = json.dumps({"ok": True, "text": "result", "msg": ""})
    assert quiz.parse_response(payload) == "> demo\nresult"


def test_parse_response_error():
    quiz = Wtf("demo", "abc")
    payload = json.dumps({"ok": False, "text": "", "msg": "bad name"})
    with pytest.raises(WtfError, match="bad name"):
        quiz.parse_response(payload)


def test_parse_response_invalid_json():
    with pytest.raises(WtfError):
        Wtf("demo", "abc").parse_response("not json")


def test_predict_requests_url():
    quiz = Wtf("demo", "abc")
    body = json.dumps({"ok": True, "text": "yes"}).encode()
    with mock.patch("urllib.request.urlopen", return_value=_fake_response(200, body)) as op:
        assert quiz.predict("alice") == "> demo\nyes"
    assert op.call_args[0][0] == API_PREFIX + "abc/alice"


def test_predict_network_error():
    quiz = Wtf("demo", "abc")
    with mock.patch("urllib.request.urlopen", side_effect=urllib.error.URLError("down")):
        with pytest.raises(WtfError):
            quiz.predict("alice")