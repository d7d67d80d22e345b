#!/usr/bin/env python3
"""
Export handlers for decoded catalogs.

Supported formats:
- JSON
- YAML (requires PyYAML)
"""

from .base import (
    EXPORT_HANDLERS,
    ExportHandler,
    get_handler,
    handler_for_path,
    list_formats,
    register_handler,
)
from .json_handler import JsonHandler

register_handler(JsonHandler)

try:
    from .yaml_handler import YamlHandler
    register_handler(YamlHandler)
except ImportError:
    pass

__all__ = [
    'EXPORT_HANDLERS',
    'ExportHandler',
    'JsonHandler',
    'get_handler',
    'handler_for_path',
    'list_formats',
    'register_handler',
]
