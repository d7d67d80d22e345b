#!/usr/bin/env python3
"""
Base classes for export handlers.

ExportHandler is the abstract base class every output format implements.
Handlers turn a decoded AmigaCatalog into text; they never write IFF.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any


class ExportHandler(ABC):
    """
    Abstract base class for catalog exporters.

    Each handler renders the catalog metadata and its id -> text table in one
    text format (JSON, YAML, ...).
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name."""
        pass

    @property
    @abstractmethod
    def file_extensions(self) -> list[str]:
        """List of file extensions this handler writes (without dot)."""
        pass

    @abstractmethod
    def render(self, document: dict[str, Any]) -> str:
        """
        Render a catalog document.

        Args:
            document: Output of build_document()

        Returns:
            Formatted text
        """
        pass

    def build_document(self, catalog) -> dict[str, Any]:
        """
        Structure shared by all exporters.

        String ids are emitted in ascending order.
        """
        return {
            "signature": catalog.signature,
            "language": catalog.language,
            "fingerprint": catalog.fingerprint,
            "strings": {string_id: text for string_id, text in sorted(catalog.items())},
        }

    def export(self, catalog) -> str:
        """Render a decoded catalog."""
        return self.render(self.build_document(catalog))


# handler name -> class
EXPORT_HANDLERS: dict[str, type[ExportHandler]] = {}


def register_handler(handler_class: type[ExportHandler]) -> None:
    """Add an export handler, keyed by its lower-case name."""
    EXPORT_HANDLERS[handler_class().name.lower()] = handler_class


def get_handler(name: str) -> ExportHandler:
    """Get handler instance by name."""
    handler_class = EXPORT_HANDLERS.get(name.lower())
    if handler_class is None:
        raise ValueError(f"Unknown format: {name}. Available: {', '.join(EXPORT_HANDLERS)}")
    return handler_class()


def handler_for_path(filepath: str) -> ExportHandler:
    """Pick a handler from an output file's extension."""
    ext = Path(filepath).suffix.lower().lstrip('.')
    for handler_class in EXPORT_HANDLERS.values():
        handler = handler_class()
        if ext in handler.file_extensions:
            return handler
    raise ValueError(f"Unknown extension: .{ext} ({filepath})")


def list_formats() -> list[dict[str, Any]]:
    """Registered formats with their extensions."""
    return [
        {'name': handler.name, 'extensions': handler.file_extensions}
        for handler in (cls() for cls in EXPORT_HANDLERS.values())
    ]
