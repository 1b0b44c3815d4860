"""Exporter SPI and implementations."""

from .base import BaseExporter
from .file_exporter import EXPORT_FORMATS, FileExporter

__all__ = ["BaseExporter", "EXPORT_FORMATS", "FileExporter"]
