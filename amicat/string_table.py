#!/usr/bin/env python3
"""
STRS chunk decoder.

A STRS payload is a flat run of records:

    <id:i32be> <length:u32be> <bytes, padded to a multiple of 4>

Text is ISO-8859-1 on the Amiga and NUL-terminated inside its padding.
Menu strings carry a one-character shortcut and a NUL in front of the label
("Q\\0Quit"); that two-byte marker is dropped.
"""

import logging
import struct
from dataclasses import dataclass
from typing import Iterator, Optional, Protocol

from .errors import TruncatedRecordError

logger = logging.getLogger(__name__)

RECORD_HEADER_SIZE = 8
SOURCE_ENCODING = "latin-1"

_RECORD_HEADER = struct.Struct(">iI")


class CatalogSink(Protocol):
    """
    Storage decoded strings are pushed into.

    Decoding only needs set_string() and compute_fingerprint(); the lookup
    helpers on AmigaCatalog also use get_string(), items() and len().
    """

    def set_string(self, string_id: int, text: str) -> None:
        ...

    def compute_fingerprint(self) -> int:
        ...

    def get_string(self, string_id: int, default: Optional[str] = None) -> Optional[str]:
        ...


def stored_length(declared_len: int) -> int:
    """Round a record length up to the next multiple of 4."""
    if declared_len % 4 == 0:
        return declared_len
    return (declared_len - declared_len % 4) + 4


def strip_menu_marker(raw: bytes) -> bytes:
    """Drop the leading shortcut marker when the second byte is NUL."""
    if len(raw) >= 2 and raw[1] == 0:
        return raw[2:]
    return raw


def _until_nul(data: bytes) -> bytes:
    end = data.find(b"\0")
    return data if end == -1 else data[:end]


def convert_to_utf8(value: bytes) -> str:
    """
    Convert Latin-1 bytes to text.

    The conversion is only kept when it grew the byte count, i.e. when the
    value held high-bit characters. Otherwise the bytes are used as they are.
    Never raises.
    """
    converted = value.decode(SOURCE_ENCODING).encode("utf-8")
    if len(converted) > len(value):
        text = converted.decode("utf-8")
    else:
        text = value.decode("utf-8", errors="replace")
    return text.split("\0", 1)[0]


def decode_raw_text(payload: bytes) -> str:
    """
    Decode a FVER/LANG payload: plain C string, no charset conversion.

    Each byte maps to one character, so Latin-1 names such as "français"
    come through intact.
    """
    return _until_nul(payload).decode(SOURCE_ENCODING)


@dataclass
class StringRecord:
    """Single record from a STRS chunk."""
    id: int
    declared_len: int
    raw: bytes

    @property
    def stored_len(self) -> int:
        return len(self.raw)

    @property
    def consumed(self) -> int:
        return RECORD_HEADER_SIZE + self.stored_len

    @property
    def has_menu_marker(self) -> bool:
        return len(self.raw) >= 2 and self.raw[1] == 0

    @property
    def text(self) -> str:
        """Text after marker stripping and charset conversion."""
        return convert_to_utf8(strip_menu_marker(self.raw))


class StringTableDecoder:
    """Decode STRS chunk payloads into (id, text) pairs."""

    def iter_records(self, payload: bytes) -> Iterator[StringRecord]:
        """
        Walk the records of one STRS payload.

        Args:
            payload: Chunk payload at its padded length

        Raises:
            TruncatedRecordError: If a record runs past the end of the payload
        """
        length = len(payload)
        cursor = 0
        while cursor < length:
            if length - cursor < RECORD_HEADER_SIZE:
                raise TruncatedRecordError(
                    f"Record header at offset {cursor} needs {RECORD_HEADER_SIZE} bytes, "
                    f"{length - cursor} left in chunk"
                )
            string_id, declared_len = _RECORD_HEADER.unpack_from(payload, cursor)
            cursor += RECORD_HEADER_SIZE

            size = stored_length(declared_len)
            if size > length - cursor:
                raise TruncatedRecordError(
                    f"String {string_id} declares {declared_len} bytes ({size} stored) "
                    f"but only {length - cursor} are left in chunk"
                )
            raw = payload[cursor:cursor + size]
            cursor += size
            yield StringRecord(id=string_id, declared_len=declared_len, raw=raw)

    def decode(self, payload: bytes, sink: CatalogSink) -> int:
        """
        Decode a STRS payload into sink.

        Records are pushed as they are read, so a truncated record leaves the
        earlier ones in the sink.

        Returns:
            Number of records decoded
        """
        count = 0
        for record in self.iter_records(payload):
            sink.set_string(record.id, record.text)
            count += 1
        logger.debug("STRS chunk: %d strings from %d bytes", count, len(payload))
        return count
