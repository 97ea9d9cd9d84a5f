import json
import urllib.error
import urllib.parse
from unittest import mock

import pytest

from groupbot.runcode import (
    TRUNCATION_MARK,
    RunCodeError,
    clear_newline_suffix,
    cut_too_long,
    lookup_language,
    parse_result,
    run_code,
    template_for,
)


def _fake_response(status, body):
    response = mock.MagicMock()
    response.__enter__.return_value = response
    response.status = status
    response.read.return_value = body
    return response


def test_clear_newline_suffix_strips_all_trailing():
    assert clear_newline_suffix("abc\n\n\n") == "abc"
    assert clear_newline_suffix("a\nb") == "a\nb"


def test_cut_too_long_keeps_short_text():
    assert cut_too_long("hello\nworld") == "hello\nworld"


def test_cut_too_long_by_lines():
    result = cut_too_long("a\n" * 40)
    assert result.endswith(TRUNCATION_MARK)
    assert result == "a\n" * 30 + TRUNCATION_MARK


def test_cut_too_long_by_chars():
    result = cut_too_long("x" * 2000)
    assert result == "x" * 1000 + TRUNCATION_MARK


def test_cut_too_long_crlf_counts_once():
    result = cut_too_long("a\r\n" * 40)
    assert result.startswith("a\r\n" * 30)
    assert result.endswith(TRUNCATION_MARK)
    assert cut_too_long("a\r\n" * 30) == "a\r\n" * 30


def test_cut_too_long_is_repeatable():
    first = cut_too_long("a\n" * 40)
    second = cut_too_long("a\n" * 40)
    assert first == second


def test_lookup_language_is_case_insensitive():
    assert lookup_language("Python") == ("15", "py3")
    assert lookup_language("C++") == lookup_language("cpp")


def test_lookup_language_unknown():
    with pytest.raises(KeyError):
        lookup_language("cobol")


def test_template_for_language():
    assert template_for("PY") == 'print("Hello, World!")'
    with pytest.raises(KeyError):
        template_for("cobol")


def test_parse_result_output():
    payload = json.dumps({"errors": "\n\n", "output": "hi\n\n"})
    assert parse_result(payload) == "hi"


def test_parse_result_errors_raise():
    payload = json.dumps({"errors": "boom\n", "output": ""})
    with pytest.raises(RunCodeError, match="boom"):
        parse_result(payload)


def test_run_code_posts_form():
    body = json.dumps({"errors": "\n\n", "output": "42\n"}).encode()
    with mock.patch("urllib.request.urlopen", return_value=_fake_response(200, body)) as op:
        assert run_code("print(42)", ("15", "py3")) == "42"
    request = op.call_args[0][0]
    form = urllib.parse.parse_qs(request.data.decode())
    assert form["language"] == ["15"]
    assert form["fileext"] == ["py3"]
    assert form["code"] == ["print(42)"]
    assert request.get_method() == "POST"


def test_run_code_non_200():
    with mock.patch("urllib.request.urlopen", return_value=_fake_response(500, b"")):
        with pytest.raises(RunCodeError, match="code not 200"):
            run_code("x", ("15", "py3"))


def test_run_code_network_error():
    with mock.patch("urllib.request.urlopen", side_effect=urllib.error.URLError("down")):
        with pytest.raises(RunCodeError):
            run_code("x", ("15", "py3"))