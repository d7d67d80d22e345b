"""
amicat - Amiga catalog (IFF CTLG) reader

Decodes the .catalog files Amiga applications use for translations into an
id -> text table plus the catalog's version string and language.

Quick start:
    from amicat import AmigaCatalog
    catalog = AmigaCatalog.load("Catalogs/deutsch/MyApp.catalog")
    catalog.get_string(12)

Command line:
    amicat info --input MyApp.catalog
    amicat dump --input MyApp.catalog --output strings.yaml
"""

__version__ = "1.0.0"

from .catalog import (
    MIME_TYPE,
    AmigaCatalog,
    ChunkKind,
    StringTable,
    create_catalog,
    instantiate,
)
from .errors import (
    BadMagicError,
    CatalogError,
    CatalogIOError,
    FormatError,
    NotSupportedError,
    TruncatedOrCorruptError,
    TruncatedRecordError,
)
from .iff_format import IFFChunk, IFFReader
from .string_table import StringRecord, StringTableDecoder

__all__ = [
    "MIME_TYPE",
    "AmigaCatalog",
    "ChunkKind",
    "StringTable",
    "create_catalog",
    "instantiate",
    "BadMagicError",
    "CatalogError",
    "CatalogIOError",
    "FormatError",
    "NotSupportedError",
    "TruncatedOrCorruptError",
    "TruncatedRecordError",
    "IFFChunk",
    "IFFReader",
    "StringRecord",
    "StringTableDecoder",
]
