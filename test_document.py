"""
Tests for the document loader (raw markup → element tree).
"""

import pytest

from mf2_parser.document import DocumentLoader
from mf2_parser.exceptions import DocumentLoadError


@pytest.mark.parametrize("head,expected", [
    (b'<meta charset="utf-8">', "utf-8"),
    (b"<meta charset='ISO-8859-1'>", "windows-1252"),
    (b'<meta http-equiv="Content-Type" content="text/html; charset=Shift_JIS">', "shift_jis"),
    (b'<title>no declaration</title>', "utf-8"),
])
def test_detect_charset_from_bytes(head, expected):
    raw = b"<html><head>" + head + b"</head><body></body></html>"
    assert DocumentLoader.detect_charset_from_bytes(raw) == expected


def test_decode_with_unknown_charset_falls_back_to_utf8():
    raw = '<meta charset="x-not-a-charset"><p>café</p>'.encode("utf-8")
    assert "café" in DocumentLoader().decode(raw)


def test_load_strips_null_bytes():
    soup = DocumentLoader().load("<p>a\x00b</p>")
    assert soup.find("p").get_text() == "ab"


def test_load_accepts_bytes():
    soup = DocumentLoader().load(b'<meta charset="latin1"><p>Ren\xe9e</p>')
    assert soup.find("p").get_text() == "Renée"


def test_load_falls_back_to_next_parser():
    loader = DocumentLoader(parsers=["no-such-parser", "html.parser"])
    soup = loader.load('<div class="h-card">x</div>')
    assert soup.find("div")["class"] == ["h-card"]


def test_load_fails_when_no_parser_works():
    loader = DocumentLoader(parsers=["no-such-parser"])
    with pytest.raises(DocumentLoadError) as excinfo:
        loader.load("<p>x</p>")
    assert "no-such-parser" in excinfo.value.details
