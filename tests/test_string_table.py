#!/usr/bin/env python3
"""
Tests for the STRS record decoder.

Covers record padding, the menu shortcut marker and Latin-1 conversion.
"""

import pytest

from amicat.errors import TruncatedRecordError
from amicat.string_table import (
    StringTableDecoder,
    convert_to_utf8,
    decode_raw_text,
    stored_length,
    strip_menu_marker,
)

from conftest import make_record


@pytest.fixture
def decoder():
    return StringTableDecoder()


@pytest.mark.parametrize("declared,stored", [
    (0, 0), (1, 4), (3, 4), (4, 4), (5, 8), (8, 8), (9, 12), (1023, 1024),
])
def test_stored_length(declared, stored):
    """Test 1: Record lengths round up to a multiple of 4."""
    assert stored_length(declared) == stored


@pytest.mark.parametrize("declared", [0, 1, 2, 3, 4, 5, 11, 12, 13])
def test_record_consumes_header_plus_stored_length(decoder, declared):
    """Test 2: Each record takes 8 + round4(D) bytes of the chunk."""
    payload = make_record(7, b"x" * declared) + make_record(8, b"next")

    records = list(decoder.iter_records(payload))

    assert [r.id for r in records] == [7, 8]
    assert records[0].consumed == 8 + stored_length(declared)
    assert records[0].declared_len == declared
    assert records[1].text == "next"


def test_hello_record(decoder, sink):
    """Test 3: 'hello' padded to 8 bytes decodes to 'hello'."""
    payload = make_record(1, b"hello")
    assert len(payload) == 16

    assert decoder.decode(payload, sink) == 1
    assert sink.as_dict() == {1: "hello"}


def test_negative_ids(decoder, sink):
    """Test 4: Ids are signed 32-bit."""
    decoder.decode(make_record(-1, b"minus one") + make_record(0x7FFFFFFF, b"max"), sink)
    assert sink.get_string(-1) == "minus one"
    assert sink.get_string(0x7FFFFFFF) == "max"


def test_menu_marker_stripped():
    """Test 5: Second raw byte NUL -> first two bytes dropped before conversion."""
    raw = b"Q\0Quit\0\0"
    assert strip_menu_marker(raw) == b"Quit\0\0"


def test_no_menu_marker():
    """Test 6: Without a NUL second byte the raw bytes are kept."""
    assert strip_menu_marker(b"Quit") == b"Quit"
    assert strip_menu_marker(b"\0Qui") == b"\0Qui"


def test_menu_marker_on_record(decoder, sink):
    """Test 7: A menu string is stored without its shortcut."""
    decoder.decode(make_record(4, b"O\0Open..."), sink)
    assert sink.get_string(4) == "Open..."


def test_menu_marker_fires_on_any_second_nul(decoder, sink):
    """Test 8: The marker check is purely on bytes, even for one-character strings."""
    decoder.decode(make_record(5, b"A"), sink)
    # "A\0\0\0" -> "\0\0" -> ""
    assert sink.get_string(5) == ""


def test_empty_record(decoder, sink):
    """Test 9: Zero-length records give empty text."""
    decoder.decode(make_record(6, b""), sink)
    assert sink.get_string(6) == ""


def test_latin1_converted():
    """Test 10: High-bit Latin-1 bytes expand when converted and the conversion is kept."""
    raw = "Größe".encode("latin-1")
    text = convert_to_utf8(raw)

    assert text == "Größe"
    assert len(text.encode("utf-8")) > len(raw)


def test_ascii_kept_as_is():
    """Test 11: 7-bit text is stored exactly as its bytes."""
    assert convert_to_utf8(b"Plain ASCII text") == "Plain ASCII text"


def test_utf8_input_is_treated_as_latin1():
    """Test 12: UTF-8 bytes still expand under Latin-1 conversion, so they are converted."""
    raw = "é".encode("utf-8")
    assert convert_to_utf8(raw) == raw.decode("latin-1")


def test_conversion_never_raises():
    """Test 13: Every byte value is accepted."""
    assert len(convert_to_utf8(bytes(range(1, 256)))) == 255


def test_text_ends_at_nul():
    """Test 14: Padding NULs are not part of the text."""
    assert convert_to_utf8(b"abc\0") == "abc"
    assert convert_to_utf8("ü\0\0\0".encode("latin-1")) == "ü"


def test_latin1_record(decoder, sink):
    """Test 15: Latin-1 record text is stored converted."""
    decoder.decode(make_record(3, "Öffnen".encode("latin-1")), sink)
    assert sink.get_string(3) == "Öffnen"


def test_duplicate_ids_last_wins(decoder, sink):
    """Test 16: A later record with the same id replaces the earlier one."""
    decoder.decode(make_record(1, b"first") + make_record(1, b"second"), sink)
    assert sink.as_dict() == {1: "second"}


def test_record_longer_than_chunk(decoder, sink):
    """Test 17: Declared length past the chunk end is a truncated record."""
    payload = make_record(1, b"ok") + make_record(2, b"abcd", declared_len=40)

    with pytest.raises(TruncatedRecordError):
        decoder.decode(payload, sink)
    # Earlier records are kept
    assert sink.get_string(1) == "ok"


def test_partial_record_header(decoder, sink):
    """Test 18: Fewer than 8 bytes left for a record header."""
    payload = make_record(1, b"ok") + b"\0\0\0\2"

    with pytest.raises(TruncatedRecordError):
        decoder.decode(payload, sink)


def test_decode_raw_text():
    """Test 19: FVER/LANG payloads are C strings without conversion."""
    assert decode_raw_text(b"deutsch\0") == "deutsch"
    assert decode_raw_text(b"$VER: app 1.0") == "$VER: app 1.0"
    assert decode_raw_text(b"") == ""


def test_record_properties(decoder):
    """Test 20: StringRecord exposes raw data and marker detection."""
    (record,) = decoder.iter_records(make_record(9, b"S\0Save"))
    assert record.raw == b"S\0Save\0\0"
    assert record.stored_len == 8
    assert record.has_menu_marker
    assert record.text == "Save"


def test_decode_raw_text_latin1():
    """Test 21: Non-ASCII FVER/LANG bytes are not replaced."""
    assert decode_raw_text("français\0\0".encode("latin-1")) == "français"
    assert decode_raw_text(b"\xff\xfe") == "\xff\xfe"


def test_decoder_accepts_any_sink(decoder):
    """Test 22: Decoding only needs set_string() on the sink."""
    class ListSink:
        def __init__(self):
            self.pairs = []

        def set_string(self, string_id, text):
            self.pairs.append((string_id, text))

    sink = ListSink()
    decoder.decode(make_record(1, b"abcd") + make_record(1, b"efgh"), sink)
    assert sink.pairs == [(1, "abcd"), (1, "efgh")]
