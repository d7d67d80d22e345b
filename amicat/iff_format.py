#!/usr/bin/env python3
"""
IFF (Interchange File Format) container reader for Amiga catalogs.

Only the outer envelope is interpreted here. Chunk payloads are handed back
raw and the caller decides what they mean.

Format:
    FORM <size:u32be> CTLG
    <tag:4> <size:u32be> <payload, padded to an even length>
    <tag:4> <size:u32be> <payload, padded to an even length>
    ...

The FORM size counts everything after the size field, including the CTLG tag.
"""

import logging
import struct
from dataclasses import dataclass
from typing import BinaryIO, Iterator, Optional

from .errors import BadMagicError, CatalogIOError, TruncatedOrCorruptError

logger = logging.getLogger(__name__)

FORM_MAGIC = b"FORM"
CATALOG_TYPE = b"CTLG"

HEADER_SIZE = 12
CHUNK_HEADER_SIZE = 8

_U32 = struct.Struct(">I")
_CHUNK_HEADER = struct.Struct(">4sI")


def padded_chunk_size(declared_size: int) -> int:
    """Round a chunk size up to the next even number."""
    return declared_size + (declared_size % 2)


def read_exact(stream: BinaryIO, size: int) -> bytes:
    """
    Read exactly size bytes from a forward-only stream.

    Raises:
        CatalogIOError: If the stream fails or ends early
    """
    try:
        data = stream.read(size)
    except OSError as e:
        raise CatalogIOError(f"Read of {size} bytes failed: {e}") from e
    if data is None or len(data) < size:
        got = 0 if data is None else len(data)
        raise CatalogIOError(f"Unexpected end of data: wanted {size} bytes, got {got}")
    return data


@dataclass
class IFFChunk:
    """One tagged chunk. payload always has the padded (even) length."""
    tag: bytes
    declared_size: int
    payload: bytes

    @property
    def padded_size(self) -> int:
        return len(self.payload)

    @property
    def consumed(self) -> int:
        """Bytes this chunk took up in the container, header included."""
        return self.padded_size + CHUNK_HEADER_SIZE

    @property
    def name(self) -> str:
        return self.tag.decode("latin-1")


class IFFReader:
    """Sequential chunk reader over a FORM CTLG container."""

    def __init__(self, stream: BinaryIO):
        """
        Initialize reader.

        Args:
            stream: Binary file-like object positioned at the FORM magic.
                Only read() is used; the stream is never seeked.
        """
        self.stream = stream
        self.form_size: Optional[int] = None
        self.remaining = 0

    def read_header(self) -> int:
        """
        Consume and validate the 12-byte container header.

        Returns:
            Number of chunk bytes that follow (FORM size minus the type tag)

        Raises:
            BadMagicError: If the magic is not FORM or the type is not CTLG
            CatalogIOError: If fewer than 12 bytes are available
        """
        magic = read_exact(self.stream, 4)
        if magic != FORM_MAGIC:
            raise BadMagicError(f"Not an IFF file: expected {FORM_MAGIC!r}, got {magic!r}")

        (size,) = _U32.unpack(read_exact(self.stream, 4))
        form_type = read_exact(self.stream, 4)
        if form_type != CATALOG_TYPE:
            raise BadMagicError(f"Not a catalog: expected form type {CATALOG_TYPE!r}, got {form_type!r}")

        self.form_size = size
        # The type tag is included in the FORM size
        self.remaining = size - 4
        logger.debug("FORM CTLG header: size=%d, chunk bytes=%d", size, self.remaining)
        return self.remaining

    def next_chunk(self) -> Optional[IFFChunk]:
        """
        Read the next chunk.

        Returns:
            The chunk, or None once the FORM size is used up

        Raises:
            CatalogIOError: If the stream ends before the chunk does
            TruncatedOrCorruptError: If the chunk is larger than what the FORM has left
        """
        if self.form_size is None:
            raise RuntimeError("read_header() must be called before next_chunk()")
        if self.remaining <= 0:
            return None

        tag, declared_size = _CHUNK_HEADER.unpack(read_exact(self.stream, CHUNK_HEADER_SIZE))
        padded_size = padded_chunk_size(declared_size)
        consumed = padded_size + CHUNK_HEADER_SIZE

        # The final chunk may run past the FORM size by its pad byte only
        overshoot = consumed - self.remaining
        if overshoot > padded_size - declared_size:
            raise TruncatedOrCorruptError(
                f"Chunk {tag!r} needs {consumed} bytes but only {self.remaining} "
                f"are left in the FORM"
            )

        payload = read_exact(self.stream, padded_size)
        self.remaining -= consumed
        logger.debug("Chunk %r: declared=%d padded=%d remaining=%d",
                     tag, declared_size, padded_size, self.remaining)
        return IFFChunk(tag=tag, declared_size=declared_size, payload=payload)

    def __iter__(self) -> Iterator[IFFChunk]:
        """Iterate over the remaining chunks (read_header() must have run)."""
        while True:
            chunk = self.next_chunk()
            if chunk is None:
                return
            yield chunk
