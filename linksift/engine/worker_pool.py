"""Bounded-concurrency worker pool driving link verification."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Protocol, Sequence

import structlog

from ..config import SchedulerConfig
from .models import LinkCandidate, VerifiedLink

ResultCallback = Callable[[LinkCandidate, VerifiedLink | None], None]


class Verifier(Protocol):
    def verify(self, raw_url: str) -> Awaitable[str | None]: ...


class VerificationScheduler:
    """Run a verifier over all candidates with at most ``max_concurrency`` in flight.

    Workers claim indices from a queue pre-loaded with every candidate
    position, so each candidate is processed exactly once. Survivors are
    collected in completion order.
    """

    def __init__(
        self,
        verifier: Verifier,
        config: SchedulerConfig | None = None,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.verifier = verifier
        self.config = config or SchedulerConfig()
        self.logger = logger or structlog.get_logger("linksift.scheduler")
        self.max_in_flight = 0
        self._in_flight = 0

    async def run(
        self,
        candidates: Sequence[LinkCandidate],
        on_result: ResultCallback | None = None,
    ) -> list[VerifiedLink]:
        self.max_in_flight = 0
        if not candidates:
            return []
        cursor: asyncio.Queue[int] = asyncio.Queue()
        for index in range(len(candidates)):
            cursor.put_nowait(index)
        results: list[VerifiedLink] = []
        worker_count = min(self.config.max_concurrency, len(candidates))
        self.logger.info("verification_started", candidates=len(candidates), workers=worker_count)
        await asyncio.gather(
            *(
                self._worker(f"verify-{n}", candidates, cursor, results, on_result)
                for n in range(worker_count)
            )
        )
        self.logger.info(
            "verification_finished",
            candidates=len(candidates),
            verified=len(results),
            max_in_flight=self.max_in_flight,
        )
        return results

    async def _worker(
        self,
        worker_id: str,
        candidates: Sequence[LinkCandidate],
        cursor: asyncio.Queue[int],
        results: list[VerifiedLink],
        on_result: ResultCallback | None,
    ) -> None:
        while True:
            try:
                index = cursor.get_nowait()
            except asyncio.QueueEmpty:
                return
            candidate = candidates[index]
            verified = await self._verify_one(worker_id, candidate)
            if verified is not None:
                results.append(verified)
            if on_result is not None:
                try:
                    on_result(candidate, verified)
                except Exception as exc:  # noqa: BLE001
                    self.logger.warning(
                        "result_callback_error",
                        worker=worker_id,
                        url=candidate.url,
                        error=str(exc),
                    )
            cursor.task_done()

    async def _verify_one(self, worker_id: str, candidate: LinkCandidate) -> VerifiedLink | None:
        self._in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self._in_flight)
        try:
            url = await self.verifier.verify(candidate.url)
        except Exception as exc:  # noqa: BLE001
            self.logger.warning(
                "verify_error",
                worker=worker_id,
                url=candidate.url,
                error=str(exc),
            )
            return None
        finally:
            self._in_flight -= 1
        if url is None:
            return None
        return VerifiedLink.from_candidate(candidate, url)


__all__ = ["ResultCallback", "VerificationScheduler", "Verifier"]
