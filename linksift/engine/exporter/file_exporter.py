"""File based exporter supporting JSON lines, CSV and plain text."""

from __future__ import annotations

import csv
import json
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from ..models import VerifiedLink
from .base import BaseExporter

EXPORT_FORMATS = ("json", "csv", "txt")
CSV_FIELDS = ("title", "url", "description")


class FileExporter(BaseExporter):
    """Write verified links to a local file."""

    def __init__(self, output_dir: Path, name: str, fmt: str, run_tag: str | None = None) -> None:
        if fmt not in EXPORT_FORMATS:
            raise ValueError(f"Unsupported export format: {fmt}")
        self.output_dir = output_dir
        self.format = fmt
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.run_tag = run_tag or datetime.now(timezone.utc).strftime("%Y%m%d-%H%M%S")
        slug = re.sub(r"[^0-9A-Za-z_-]+", "_", name.strip()) or "links"
        self.path = self.output_dir / f"{slug}-{self.run_tag}.{self._extension}"
        self._file = self.path.open("a", encoding="utf-8", newline="")
        self._csv_writer: Optional[csv.DictWriter] = None
        self._counter = 0

    @property
    def _extension(self) -> str:
        if self.format == "json":
            return "jsonl"
        return self.format

    def export(self, link: VerifiedLink) -> None:
        record = link.to_dict()
        if self.format == "json":
            json.dump(record, self._file, ensure_ascii=False)
            self._file.write("\n")
        elif self.format == "csv":
            if not self._csv_writer:
                self._csv_writer = csv.DictWriter(self._file, fieldnames=CSV_FIELDS)
                self._csv_writer.writeheader()
            self._csv_writer.writerow(record)
        else:
            self._counter += 1
            self._file.write(self._format_txt(record, index=self._counter))

    def flush(self) -> None:
        self._file.flush()

    def close(self) -> None:
        self._file.close()

    @staticmethod
    def _format_txt(record: dict, index: int) -> str:
        lines = [f"{index}. {record['title']}"]
        if record.get("description"):
            lines.append(record["description"])
        lines.append(record["url"])
        # blank line between records
        return "\n".join(lines) + "\n\n"


__all__ = ["CSV_FIELDS", "EXPORT_FORMATS", "FileExporter"]
