#!/usr/bin/env python3
"""
Amiga catalog loading.

Ties the IFF reader and the STRS decoder together: every chunk of a FORM CTLG
file is routed by tag, strings go into a StringTable, and once the whole file
has been read the table's fingerprint is stored on the catalog.

Example:
    catalog = AmigaCatalog.load("Catalogs/deutsch/MyApp.catalog")
    catalog.get_string(12)
"""

import logging
from enum import Enum
from pathlib import Path
from typing import BinaryIO, Iterator, Optional, Union

from .errors import CatalogError, CatalogIOError, NotSupportedError
from .iff_format import IFFChunk, IFFReader
from .string_table import CatalogSink, StringTableDecoder, decode_raw_text

logger = logging.getLogger(__name__)

MIME_TYPE = "locale/x-vnd.Be.locale-catalog.amiga"
CATALOG_FOLDER = "Catalogs"
CATALOG_EXTENSION = ".catalog"

PathLike = Union[str, Path]


class StringTable:
    """
    In-memory id -> text table.

    Ids are signed 32-bit integers; setting an id twice keeps the last text.
    """

    def __init__(self):
        self._strings: dict[int, str] = {}

    def set_string(self, string_id: int, text: str) -> None:
        self._strings[string_id] = text

    def get_string(self, string_id: int, default: Optional[str] = None) -> Optional[str]:
        return self._strings.get(string_id, default)

    def compute_fingerprint(self) -> int:
        """
        Sum of all ids as unsigned 32-bit values, wrapped to 32 bits.

        An id key hashes to the id itself, so this matches the checksum the
        hash-map catalogs of the host locale kit compute.
        """
        checksum = 0
        for string_id in self._strings:
            checksum = (checksum + (string_id & 0xFFFFFFFF)) & 0xFFFFFFFF
        return checksum

    def clear(self) -> None:
        self._strings.clear()

    def items(self):
        return self._strings.items()

    def as_dict(self) -> dict[int, str]:
        return dict(self._strings)

    def __len__(self) -> int:
        return len(self._strings)

    def __contains__(self, string_id: object) -> bool:
        return string_id in self._strings

    def __iter__(self) -> Iterator[int]:
        return iter(self._strings)


class ChunkKind(Enum):
    """Chunk tags a catalog can contain."""
    FVER = b"FVER"   # version string, used as the signature
    LANG = b"LANG"   # language name
    CSET = b"CSET"   # character set, unused
    STRS = b"STRS"   # string table
    UNKNOWN = None

    @classmethod
    def from_tag(cls, tag: bytes) -> "ChunkKind":
        try:
            return cls(tag)
        except ValueError:
            return cls.UNKNOWN


class ChunkDispatcher:
    """Route chunks to metadata fields or the string decoder."""

    def __init__(self, catalog: "AmigaCatalog", decoder: Optional[StringTableDecoder] = None):
        self.catalog = catalog
        self.decoder = decoder or StringTableDecoder()

    def dispatch(self, chunk: IFFChunk) -> ChunkKind:
        kind = ChunkKind.from_tag(chunk.tag)

        if kind is ChunkKind.FVER:
            self.catalog.signature = decode_raw_text(chunk.payload)
        elif kind is ChunkKind.LANG:
            self.catalog.language = decode_raw_text(chunk.payload)
        elif kind is ChunkKind.STRS:
            self.decoder.decode(chunk.payload, self.catalog.strings)
        elif kind is ChunkKind.CSET:
            pass
        else:
            logger.debug("Skipping unknown chunk %r (%d bytes)", chunk.tag, chunk.declared_size)

        return kind


class AmigaCatalog:
    """
    A decoded Amiga catalog.

    Attributes:
        signature: Contents of the FVER chunk
        language: Contents of the LANG chunk
        fingerprint: Checksum of the string table, set after a successful read
        path: File the catalog was read from
        strings: Sink holding the decoded strings
    """

    def __init__(
        self,
        signature: str = "",
        language: str = "",
        fingerprint: int = 0,
        path: Optional[PathLike] = None,
        strings: Optional[CatalogSink] = None,
    ):
        self.signature = signature
        self.language = language
        self.fingerprint = fingerprint
        self.path = str(path) if path is not None else None
        self.strings = strings if strings is not None else StringTable()

    @classmethod
    def load(cls, path: PathLike, strings: Optional[CatalogSink] = None) -> "AmigaCatalog":
        """Read a catalog file, raising CatalogError on failure."""
        catalog = cls(strings=strings)
        catalog.read_from_file(path)
        return catalog

    def read_from_file(self, path: Optional[PathLike] = None) -> None:
        """
        Decode a catalog file into this object.

        Args:
            path: File to read (defaults to the path given at construction)

        Strings from an earlier read stay in the sink, see read_from_stream().

        Raises:
            CatalogIOError: If the file cannot be opened or is cut short
            FormatError: If the file is not a well-formed catalog
        """
        if path is None:
            path = self.path
        if path is None:
            raise CatalogIOError("No catalog path given")

        try:
            source = open(path, "rb")
        except OSError as e:
            raise CatalogIOError(f"Cannot open catalog {path}: {e}") from e

        with source:
            self.read_from_stream(source, origin=str(path))

    def read_from_stream(self, stream: BinaryIO, origin: Optional[str] = None) -> None:
        """
        Decode a catalog from an open binary stream.

        The sink is not cleared first: decoding a second file into the same
        catalog merges its strings over the first, and the fingerprint then
        covers both. Use a fresh AmigaCatalog per file to keep them apart.

        Strings already pushed to the sink stay there if decoding fails
        halfway; the fingerprint and path are only updated on success.
        """
        reader = IFFReader(stream)
        reader.read_header()

        dispatcher = ChunkDispatcher(self)
        for chunk in reader:
            dispatcher.dispatch(chunk)

        self.path = origin
        self.fingerprint = self.strings.compute_fingerprint()
        logger.debug("Catalog %s loaded: language=%r fingerprint=%d",
                     origin or "<stream>", self.language, self.fingerprint)

    def write_to_file(self, path: Optional[PathLike] = None) -> None:
        """Writing Amiga catalogs is not supported."""
        raise NotSupportedError("Amiga catalogs are read-only")

    def get_string(self, string_id: int, default: Optional[str] = None) -> Optional[str]:
        return self.strings.get_string(string_id, default)

    def items(self):
        return self.strings.items()

    def __len__(self) -> int:
        return len(self.strings)

    def __contains__(self, string_id: object) -> bool:
        return string_id in self.strings

    def to_dict(self) -> dict:
        """Metadata summary for reporting."""
        return {
            "path": self.path,
            "signature": self.signature,
            "language": self.language,
            "fingerprint": self.fingerprint,
            "entries": len(self),
            "mime_type": MIME_TYPE,
        }


def catalog_file_name(signature: str, language: str) -> str:
    """Relative location of a catalog: Catalogs/<language>/<signature>.catalog"""
    return f"{CATALOG_FOLDER}/{language}/{signature}{CATALOG_EXTENSION}"


def instantiate(
    path: PathLike,
    signature: str = "",
    language: str = "",
    fingerprint: int = 0,
) -> Optional[AmigaCatalog]:
    """
    Load a catalog, returning None instead of raising if it cannot be read.

    Callers that probe several locations use this to move on to the next one.
    """
    catalog = AmigaCatalog(signature, language, fingerprint, path=path)
    try:
        catalog.read_from_file()
    except CatalogError as e:
        logger.debug("Catalog %s not usable: %s", path, e)
        return None
    return catalog


def create_catalog(signature: str, language: str) -> AmigaCatalog:
    """Empty catalog for editing tools."""
    return AmigaCatalog(signature, language, 0, path="emptycat")
