"""Exporter Service Provider Interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable

from ..models import VerifiedLink


class BaseExporter(ABC):
    """Uniform exporter contract for handing final links to an output."""

    @abstractmethod
    def export(self, link: VerifiedLink) -> None:
        """Persist a single link."""

    def export_many(self, links: Iterable[VerifiedLink]) -> None:
        for link in links:
            self.export(link)

    @abstractmethod
    def flush(self) -> None:
        """Flush buffered data to destination."""

    @abstractmethod
    def close(self) -> None:
        """Release underlying resources."""

    def __enter__(self) -> "BaseExporter":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.flush()
        self.close()


__all__ = ["BaseExporter"]
