"""Helpers for building synthetic catalog files."""

import struct

import pytest

from amicat.catalog import StringTable


def make_record(string_id: int, data: bytes, declared_len: int = None) -> bytes:
    """One STRS record, padded with NULs to a multiple of 4."""
    if declared_len is None:
        declared_len = len(data)
    padded = data + b"\0" * (-len(data) % 4)
    return struct.pack(">iI", string_id, declared_len) + padded


def make_chunk(tag: bytes, payload: bytes, declared_size: int = None) -> bytes:
    """One IFF chunk, padded with a NUL to an even length."""
    if declared_size is None:
        declared_size = len(payload)
    padded = payload + b"\0" * (len(payload) % 2)
    return tag + struct.pack(">I", declared_size) + padded


def make_catalog(*chunks: bytes, size: int = None, magic: bytes = b"FORM", form_type: bytes = b"CTLG") -> bytes:
    """FORM CTLG container around the given chunks."""
    body = b"".join(chunks)
    if size is None:
        size = len(body) + 4
    return magic + struct.pack(">I", size) + form_type + body


@pytest.fixture
def sink():
    """Fresh StringTable."""
    return StringTable()


@pytest.fixture
def sample_catalog_bytes():
    """A small German catalog with a menu string and a Latin-1 string."""
    strs = b"".join([
        make_record(1, b"hello"),
        make_record(2, b"Q\0Beenden"),
        make_record(3, "Öffnen".encode("latin-1")),
    ])
    return make_catalog(
        make_chunk(b"FVER", b"$VER: MyApp.catalog 1.2 (01.02.2003)\0"),
        make_chunk(b"LANG", b"deutsch\0"),
        make_chunk(b"CSET", b"\0" * 32),
        make_chunk(b"STRS", strs),
    )


@pytest.fixture
def sample_catalog_file(tmp_path, sample_catalog_bytes):
    """sample_catalog_bytes written to disk."""
    path = tmp_path / "MyApp.catalog"
    path.write_bytes(sample_catalog_bytes)
    return path
