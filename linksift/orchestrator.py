"""Pipeline wiring parsing, verification and deduplication together."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Callable

import httpx
import structlog

from .config import GlobalConfig
from .engine import (
    CandidateParser,
    Deduplicator,
    ReachabilityVerifier,
    VerificationScheduler,
    VerifiedLink,
)
from .engine.worker_pool import ResultCallback
from .errors import NoUsableLinksError


@dataclass(slots=True)
class PipelineResult:
    """Final ordered links plus counters for reporting."""

    links: list[VerifiedLink] = field(default_factory=list)
    attempted: int = 0
    verified: int = 0

    @property
    def duplicates(self) -> int:
        return self.verified - len(self.links)


class LinkPipeline:
    """Turn generated text into verified, deduplicated links.

    Raises :class:`NoUsableLinksError` when the text is empty, when no
    candidate could be parsed, or when every candidate failed verification.
    """

    def __init__(
        self,
        config: GlobalConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.config = config or GlobalConfig()
        self.transport = transport
        self.logger = logger or structlog.get_logger("linksift.pipeline")
        self.parser = CandidateParser(self.config.parser)

    async def run(
        self,
        text: str,
        on_result: ResultCallback | None = None,
        on_start: Callable[[int], None] | None = None,
    ) -> PipelineResult:
        if not text or not text.strip():
            raise NoUsableLinksError("input")
        candidates = self.parser.parse(text)
        if not candidates:
            self.logger.warning("no_candidates_parsed")
            raise NoUsableLinksError("parse")
        if on_start is not None:
            on_start(len(candidates))

        async with ReachabilityVerifier(
            self.config.verifier,
            tracking_params=self.config.normalizer.tracking_params,
            transport=self.transport,
        ) as verifier:
            scheduler = VerificationScheduler(verifier, self.config.scheduler)
            survivors = await scheduler.run(candidates, on_result=on_result)

        links = Deduplicator().deduplicate(survivors)
        result = PipelineResult(links=links, attempted=len(candidates), verified=len(survivors))
        self.logger.info(
            "pipeline_finished",
            attempted=result.attempted,
            verified=result.verified,
            kept=len(links),
        )
        if not links:
            raise NoUsableLinksError("verify", attempted=len(candidates))
        return result

    def run_sync(
        self,
        text: str,
        on_result: ResultCallback | None = None,
        on_start: Callable[[int], None] | None = None,
    ) -> PipelineResult:
        return asyncio.run(self.run(text, on_result=on_result, on_start=on_start))


__all__ = ["LinkPipeline", "PipelineResult"]
