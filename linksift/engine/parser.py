"""Extract link candidates from loosely structured generated text."""

from __future__ import annotations

import re

import structlog

from ..config import ParserConfig
from .models import LinkCandidate

TRIPLE_SEPARATOR = "|||"

_ORDINAL_PREFIX = re.compile(r"^\d+\.\s*")
_MARKDOWN_LINK = re.compile(r"\[([^\]]+)\]\(([^)]+)\)\s*-?\s*(.*)")


def _has_http_scheme(url: str) -> bool:
    return url.startswith(("http://", "https://"))


def _strip_ordinal(title: str) -> str:
    return _ORDINAL_PREFIX.sub("", title.strip())


class CandidateParser:
    """Parse ``TITLE|||URL|||DESCRIPTION`` and ``[title](url) - description`` lines.

    Each line is tried independently; lines matching neither shape are
    dropped, so a parse call never fails, it only yields fewer candidates.
    """

    def __init__(
        self,
        config: ParserConfig | None = None,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.config = config or ParserConfig()
        self.logger = logger or structlog.get_logger("linksift.parser")

    def parse(self, text: str) -> list[LinkCandidate]:
        candidates: list[LinkCandidate] = []
        lines = [line for line in text.splitlines() if line.strip()]
        for line in lines:
            candidate = self.parse_line(line)
            if candidate is None:
                self.logger.debug("line_skipped", line=line[:200])
                continue
            candidates.append(candidate)
        self.logger.info("candidates_parsed", lines=len(lines), candidates=len(candidates))
        return candidates

    def parse_line(self, line: str) -> LinkCandidate | None:
        if self.is_noise(line):
            return None
        parts = line.split(TRIPLE_SEPARATOR)
        if len(parts) >= 3:
            return self._parse_triple(parts)
        return self._parse_markdown(line)

    def is_noise(self, line: str) -> bool:
        lowered = line.lower()
        return any(marker in lowered for marker in self.config.noise_markers)

    @staticmethod
    def _parse_triple(parts: list[str]) -> LinkCandidate | None:
        title = _strip_ordinal(parts[0])
        url = parts[1].strip()
        description = parts[2].strip()
        if not title or not url or not _has_http_scheme(url):
            return None
        return LinkCandidate(title=title, url=url, description=description)

    def _parse_markdown(self, line: str) -> LinkCandidate | None:
        match = _MARKDOWN_LINK.search(line)
        if not match:
            return None
        title = _strip_ordinal(match.group(1))
        url = match.group(2).strip()
        description = match.group(3).strip() or self.config.placeholder_description
        if not title or not _has_http_scheme(url):
            return None
        return LinkCandidate(title=title, url=url, description=description)


__all__ = ["CandidateParser", "TRIPLE_SEPARATOR"]
