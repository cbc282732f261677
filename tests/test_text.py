import pytest

from textdirectory.base import (
    ContentLine,
    LocaledText,
    decode_text_value,
    encode_text_value,
    get_param_names_by_value,
    get_param_value,
    is_base64_encoded,
    remove_params,
    set_param_value,
    split_text_values,
)
from textdirectory.exceptions import DirectoryError, UnexpectedDataError


@pytest.mark.parametrize(
    "text",
    ["", "plain", "a,b;c", "back\\slash", "two\nlines", "trailing\\", "Isso é só um exemplo.\n--\nfim"],
)
def test_decode_reverses_encode(text):
    assert decode_text_value(encode_text_value(text)) == text


def test_encode_line_breaks():
    assert encode_text_value("a\r\nb\rc\nd") == "a\\nb\\nc\\nd"


def test_decode_escapes():
    assert decode_text_value("a\\nb\\Nc\\\\d\\,e\\;f") == "a\nb\nc\\d,e;f"


@pytest.mark.parametrize("text", ["a\\qb", "a\\:b", "trailing\\"])
def test_decode_unknown_escape(text):
    with pytest.raises(UnexpectedDataError):
        decode_text_value(text, 7)


def test_split_text_values_keeps_escapes():
    assert split_text_values("a,b\\,c,,d") == ["a", "b\\,c", "", "d"]
    assert split_text_values("x;y\\;z", ";") == ["x", "y\\;z"]


def test_localed_text():
    text = LocaledText("hello", "en")
    assert text == "hello"
    assert text.text == "hello"
    assert type(text.text) is str
    assert text.locale == "en"
    assert hash(text) == hash("hello")
    assert repr(text) == "<LocaledText 'hello' (en)>"
    assert repr(LocaledText("x")) == "'x'"


def test_params_are_case_insensitive():
    params = [("type", "home"), ("TYPE", "work"), ("PREF", None)]
    assert get_param_value(params, "Type") == "home"
    assert get_param_names_by_value(params, None) == ["PREF"]
    set_param_value(params, "TYPE", "cell")
    assert params == [("PREF", None), ("TYPE", "cell")]
    remove_params(params, "pref")
    assert params == [("TYPE", "cell")]


@pytest.mark.parametrize(
    "params, expected",
    [
        ([("ENCODING", "b")], True),
        ([("encoding", "BASE64")], True),
        ([("BASE64", None)], True),
        ([("ENCODING", "8bit")], False),
        ([], False),
    ],
)
def test_is_base64_encoded(params, expected):
    assert is_base64_encoded(params) is expected


def test_content_line():
    line = ContentLine("note", "x", [("LANGUAGE", "en")], group="g")
    assert line == ContentLine("NOTE", "x", [("LANGUAGE", "en")], group="g")
    assert line != ContentLine("NOTE", "y", [("LANGUAGE", "en")], group="g")
    assert line.copy(value="y").value == "y"
    assert line.get_param_value("language") == "en"
    assert str(line) == "<g.note[('LANGUAGE', 'en')]'x'>"
    with pytest.raises(DirectoryError):
        ContentLine("", "x")
