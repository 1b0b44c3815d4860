"""Deduplication of verified links by (hostname, pathname) identity."""

from __future__ import annotations

from typing import Iterable

from .models import VerifiedLink
from .urls import dedup_key


class Deduplicator:
    """Keep the first link seen for every dedup key."""

    def __init__(self) -> None:
        self._seen: set[tuple[str, str]] = set()

    def seen(self, link: VerifiedLink) -> bool:
        """Record *link* and report whether its key was already present.

        Links without a computable key are never reported as duplicates.
        """

        key = dedup_key(link.url)
        if key is None:
            return False
        if key in self._seen:
            return True
        self._seen.add(key)
        return False

    def deduplicate(self, links: Iterable[VerifiedLink]) -> list[VerifiedLink]:
        return [link for link in links if not self.seen(link)]

    def reset(self) -> None:
        self._seen.clear()


def deduplicate(links: Iterable[VerifiedLink]) -> list[VerifiedLink]:
    return Deduplicator().deduplicate(links)


__all__ = ["Deduplicator", "deduplicate"]
