#!/usr/bin/env python3
"""
YAML exporter.

Ids stay integers in YAML, so the output can be loaded back into a
{int: str} mapping directly.
"""

from typing import Any

try:
    import yaml
    YAML_AVAILABLE = True
except ImportError:
    YAML_AVAILABLE = False

from .base import ExportHandler


class YamlHandler(ExportHandler):
    """
    Export a catalog as YAML:
    ```yaml
    signature: '$VER: MyApp.catalog 1.2'
    language: deutsch
    fingerprint: 3
    strings:
      1: Öffnen
      2: Beenden
    ```
    """

    @property
    def name(self) -> str:
        return "yaml"

    @property
    def file_extensions(self) -> list[str]:
        return ["yml", "yaml"]

    def __init__(self):
        if not YAML_AVAILABLE:
            raise ImportError("PyYAML is required for YAML export. Install with: pip install pyyaml")

    def render(self, document: dict[str, Any]) -> str:
        return yaml.safe_dump(
            document,
            allow_unicode=True,
            sort_keys=False,
            default_flow_style=False,
        )
