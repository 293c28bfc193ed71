"""Inkdrop backup to Markdown tree converter."""

__version__ = "0.1.0"

from inkdrop_export.core.importer.loader import load_backup
from inkdrop_export.exporter import ExportStats, TreeExporter, run_export
from inkdrop_export.protocols import WriterProtocol
from inkdrop_export.writer import FileWriter

__all__ = [
    "ExportStats",
    "FileWriter",
    "TreeExporter",
    "WriterProtocol",
    "__version__",
    "load_backup",
    "run_export",
]
