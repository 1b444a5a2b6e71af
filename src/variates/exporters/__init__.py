"""Sample exporters for the console and for files."""

from .console_exporter import ConsoleSampleExporter
from .file_exporter import ExportResult, FileSampleExporter

__all__ = [
    "ConsoleSampleExporter",
    "FileSampleExporter",
    "ExportResult",
]
