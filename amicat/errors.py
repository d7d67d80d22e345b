#!/usr/bin/env python3
"""
Error taxonomy for catalog decoding.

Every failure aborts the current decode. Errors carry a short machine-readable
type plus a suggested fix so the CLI can report them as structured JSON.
"""

from typing import Optional


class CatalogError(Exception):
    """Base class for all catalog decoding errors."""

    error_type = "CATALOG_ERROR"
    suggestion = "Check that the file is a valid Amiga catalog"

    def __init__(self, message: str, suggestion: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if suggestion is not None:
            self.suggestion = suggestion

    def to_dict(self) -> dict:
        return {
            "type": self.error_type,
            "message": self.message,
            "fix": self.suggestion,
        }


class CatalogIOError(CatalogError, OSError):
    """The byte source could not be opened or returned fewer bytes than requested."""

    error_type = "IO_ERROR"
    suggestion = "Ensure the file exists, is readable and is not truncated"


class FormatError(CatalogError, ValueError):
    """The bytes were read but do not form a valid catalog."""

    error_type = "FORMAT_ERROR"


class BadMagicError(FormatError):
    """Header magic is not FORM or the form type is not CTLG."""

    error_type = "BAD_MAGIC"
    suggestion = "File must start with 'FORM', a size field and the 'CTLG' type tag"


class TruncatedOrCorruptError(FormatError):
    """A chunk claims more bytes than the container has left."""

    error_type = "TRUNCATED_OR_CORRUPT"
    suggestion = "The FORM size or a chunk size is wrong; the file may be cut short"


class TruncatedRecordError(FormatError):
    """A string record runs past the end of its STRS chunk."""

    error_type = "TRUNCATED_RECORD"
    suggestion = "A string length inside the STRS chunk exceeds the chunk size"


class NotSupportedError(CatalogError, NotImplementedError):
    """Writing catalogs is not supported."""

    error_type = "NOT_SUPPORTED"
    suggestion = "Amiga catalogs can only be read; export with 'amicat dump' instead"
