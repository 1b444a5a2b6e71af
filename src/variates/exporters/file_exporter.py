"""
File-based exporters for generated samples.

Writes one JSON document per line so output can be streamed into load-test
fixtures or inspected offline.
"""

import json
import logging
from collections.abc import Iterable
from enum import Enum
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class ExportResult(Enum):
    """Outcome of an export; samples are plain values, not SDK spans or metrics."""

    SUCCESS = 0
    FAILURE = 1


class FileSampleExporter:
    """Export samples or records to a JSON lines file."""

    def __init__(self, output_path: str | Path, append: bool = True):
        """Initialize file exporter."""
        self.output_path = Path(output_path)
        self.append = append
        self.output_path.parent.mkdir(parents=True, exist_ok=True)

        if not append and self.output_path.exists():
            self.output_path.unlink()

    def export(self, rows: Iterable[Any]) -> ExportResult:
        """Append rows (floats or dicts) to the file."""
        try:
            with open(self.output_path, "a", encoding="utf-8") as f:
                for row in rows:
                    f.write(json.dumps(row) + "\n")
            return ExportResult.SUCCESS
        except (OSError, TypeError, ValueError) as e:
            logger.error("Failed to export samples to %s: %s", self.output_path, e)
            return ExportResult.FAILURE
