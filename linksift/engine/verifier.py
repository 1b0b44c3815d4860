"""Reachability probing with soft-404 detection and trailing-slash retries."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from http.cookiejar import CookieJar, DefaultCookiePolicy
from typing import Iterable

import httpx
import structlog

from ..config import VerifierConfig
from .urls import TRACKING_PARAMS, canonicalize, normalize_url, slash_variant


@dataclass(slots=True)
class ProbeResult:
    """Outcome of a single GET attempt."""

    url: str
    ok: bool
    reason: str
    status_code: int | None = None
    final_url: str | None = None


def _refusing_cookie_jar() -> CookieJar:
    # an empty allow-list rejects every Set-Cookie, so nothing is replayed
    return CookieJar(policy=DefaultCookiePolicy(allowed_domains=[]))


class ReachabilityVerifier:
    """Confirm that a candidate URL resolves to real content.

    Each attempt is one streamed GET bounded by ``config.timeout``; only the
    first ``config.sniff_chars`` characters of the body are inspected for
    error-page phrases. Network failures never escape :meth:`verify`, which
    returns ``None`` for unreachable links.
    """

    def __init__(
        self,
        config: VerifierConfig | None = None,
        tracking_params: Iterable[str] = TRACKING_PARAMS,
        transport: httpx.AsyncBaseTransport | None = None,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.config = config or VerifierConfig()
        self.tracking_params = frozenset(tracking_params)
        self.logger = logger or structlog.get_logger("linksift.verifier")
        self._client = httpx.AsyncClient(
            follow_redirects=True,
            timeout=self.config.timeout,
            headers={
                "User-Agent": self.config.user_agent,
                "Cache-Control": "no-cache",
                "Pragma": "no-cache",
            },
            cookies=_refusing_cookie_jar(),
            # netrc credentials and proxy auth come from the environment
            trust_env=False,
            transport=transport,
        )

    async def __aenter__(self) -> "ReachabilityVerifier":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ------------------------------------------------------------------
    def variants(self, url: str) -> list[str]:
        candidates = [url]
        sibling = slash_variant(url)
        if sibling is not None and sibling != url:
            candidates.append(sibling)
        return candidates

    async def verify(self, raw_url: str) -> str | None:
        initial = canonicalize(raw_url, self.tracking_params)
        for candidate in self.variants(initial):
            try:
                result = await self.probe(candidate)
            except Exception as exc:  # noqa: BLE001
                self.logger.warning(
                    "probe_crashed",
                    url=candidate,
                    error=str(exc),
                    error_type=type(exc).__name__,
                )
                continue
            if result.ok:
                verified = normalize_url(result.final_url or candidate, self.tracking_params)
                self.logger.info("link_verified", url=raw_url, verified=verified)
                return verified
            self.logger.debug(
                "probe_failed",
                url=candidate,
                reason=result.reason,
                status=result.status_code,
            )
        self.logger.info("link_unreachable", url=raw_url)
        return None

    async def probe(self, url: str) -> ProbeResult:
        try:
            return await asyncio.wait_for(self._fetch(url), timeout=self.config.timeout)
        except asyncio.TimeoutError:
            return ProbeResult(url=url, ok=False, reason="timeout")
        except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError) as exc:
            self.logger.debug("probe_error", url=url, error=str(exc), error_type=type(exc).__name__)
            return ProbeResult(url=url, ok=False, reason="network_error")

    def is_soft_404(self, sample: str) -> bool:
        lowered = sample.lower()
        return any(phrase in lowered for phrase in self.config.error_phrases)

    # ------------------------------------------------------------------
    async def _fetch(self, url: str) -> ProbeResult:
        async with self._client.stream("GET", url) as response:
            final_url = str(response.url)
            if response.status_code >= 400:
                return ProbeResult(
                    url=url,
                    ok=False,
                    reason="http_status",
                    status_code=response.status_code,
                    final_url=final_url,
                )
            sample = await self._read_sample(response)
        if self.is_soft_404(sample):
            return ProbeResult(
                url=url,
                ok=False,
                reason="soft_404",
                status_code=response.status_code,
                final_url=final_url,
            )
        return ProbeResult(
            url=url,
            ok=True,
            reason="ok",
            status_code=response.status_code,
            final_url=final_url,
        )

    async def _read_sample(self, response: httpx.Response) -> str:
        limit = self.config.sniff_chars
        chunks: list[str] = []
        size = 0

        async def _collect() -> None:
            nonlocal size
            async for chunk in response.aiter_text():
                chunks.append(chunk)
                size += len(chunk)
                if size >= limit:
                    break

        try:
            await asyncio.wait_for(_collect(), timeout=self.config.sniff_window)
        except asyncio.TimeoutError:
            self.logger.debug("sniff_window_elapsed", url=str(response.url), chars=size)
        return "".join(chunks)[:limit]


__all__ = ["ProbeResult", "ReachabilityVerifier"]
