"""
Console exporter for quick inspection.

Prints one sample per line; records (dicts) are printed as JSON.
"""

import json
import sys
from collections.abc import Iterable
from typing import Any, TextIO

from .file_exporter import ExportResult


class ConsoleSampleExporter:
    """Write samples to a text stream (stdout by default)."""

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream or sys.stdout

    def export(self, rows: Iterable[Any]) -> ExportResult:
        for row in rows:
            if isinstance(row, dict):
                self.stream.write(json.dumps(row) + "\n")
            else:
                self.stream.write(f"{row!r}\n")
        self.stream.flush()
        return ExportResult.SUCCESS
