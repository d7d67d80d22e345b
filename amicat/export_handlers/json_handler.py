#!/usr/bin/env python3
"""
JSON exporter.

JSON object keys are strings, so numeric ids are written as their decimal
form ("12", "-3").
"""

import json
from typing import Any

from .base import ExportHandler


class JsonHandler(ExportHandler):
    """
    Export a catalog as JSON:
    ```json
    {
      "signature": "$VER: MyApp.catalog 1.2",
      "language": "deutsch",
      "fingerprint": 3,
      "strings": {"1": "Öffnen", "2": "Beenden"}
    }
    ```
    """

    def __init__(self, indent: int = 2):
        self.indent = indent

    @property
    def name(self) -> str:
        return "json"

    @property
    def file_extensions(self) -> list[str]:
        return ["json"]

    def render(self, document: dict[str, Any]) -> str:
        data = dict(document)
        data["strings"] = {str(k): v for k, v in document["strings"].items()}
        return json.dumps(data, ensure_ascii=False, indent=self.indent) + "\n"
