from __future__ import annotations
import io
from pathlib import Path

import pytest

from sheet_locales.ingest.reader import MalformedRecordError, iter_rows


def _rows(text: str, **kwargs):
    return list(iter_rows(io.StringIO(text, newline=""), **kwargs))


def test_no_header_row_positions_are_zero_based():
    rows = _rows("greeting,Hello,Bonjour\nfarewell,Bye,Salut\n")
    assert [r.cells for r in rows] == [
        ("greeting", "Hello", "Bonjour"),
        ("farewell", "Bye", "Salut"),
    ]
    assert [r.number for r in rows] == [1, 2]


def test_skip_rows_discards_lines_regardless_of_content():
    # 捨てる行に未閉じの引用符があっても解析しない
    text = 'Instructions "do not edit\nsecond, line, of, notes\nkey,Value\n'
    rows = _rows(text, skip_rows=2)
    assert [r.cells for r in rows] == [("key", "Value")]


def test_skip_more_rows_than_available_yields_nothing():
    assert _rows("a,b\n", skip_rows=5) == []


def test_quoted_fields_with_delimiter_and_newline():
    text = 'k1,"Hello, world","line one\nline two"\nk2,x,y\n'
    rows = _rows(text)
    assert rows[0].cells == ("k1", "Hello, world", "line one\nline two")
    assert rows[1].cells == ("k2", "x", "y")
    assert rows[1].number == 2


def test_escaped_quotes():
    rows = _rows('k,"She said ""hi"""\n')
    assert rows[0].cells == ("k", 'She said "hi"')


def test_custom_delimiter():
    rows = _rows("k;Hallo;Bonjour\n", delimiter=";")
    assert rows[0].cells == ("k", "Hallo", "Bonjour")


def test_blank_lines_produce_empty_rows():
    rows = _rows("k,v\n\nk2,v2\n")
    assert [r.cells for r in rows] == [("k", "v"), (), ("k2", "v2")]


def test_crlf_line_endings():
    rows = _rows("skip me\r\nk,v\r\nk2,v2\r\n", skip_rows=1)
    assert [r.cells for r in rows] == [("k", "v"), ("k2", "v2")]


def test_unterminated_quote_raises_malformed_record():
    with pytest.raises(MalformedRecordError) as e:
        _rows('k1,ok\nk2,"never closed\n')
    assert e.value.record_number == 2


def test_rows_are_lazy():
    it = iter_rows(io.StringIO('k1,a\nk2,"broken\n', newline=""))
    first = next(it)
    assert first.cells == ("k1", "a")
    with pytest.raises(MalformedRecordError):
        next(it)


def test_decode_failure_raises_malformed_record(tmp_path: Path):
    src = tmp_path / "bad.csv"
    src.write_bytes(b"header\nk1,ok\nk2,\xff\xfe\xfa\n")
    with src.open("r", encoding="utf-8", newline="") as f:
        with pytest.raises(MalformedRecordError):
            list(iter_rows(f, skip_rows=1))


def test_bom_is_stripped_with_utf8_sig(tmp_path: Path):
    src = tmp_path / "bom.csv"
    src.write_bytes("\ufeffk,v\n".encode("utf-8"))
    with src.open("r", encoding="utf-8-sig", newline="") as f:
        rows = list(iter_rows(f))
    assert rows[0].cells == ("k", "v")
