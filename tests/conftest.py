"""Shared fixtures: configuration builders and an in-memory HTTP site."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Iterable

import httpx
import pytest

from linksift.config import ConfigLocator, ConfigRepository, GlobalConfig, VerifierConfig

Route = Any  # (status, body) tuple, httpx.Response, or callable(request) -> response


class FakeSite:
    """Serve canned responses keyed by ``(host, path)`` and record every request."""

    def __init__(self, routes: dict[tuple[str, str], Route] | None = None) -> None:
        self.routes: dict[tuple[str, str], Route] = dict(routes or {})
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request):
        self.requests.append(request)
        route = self.routes.get((request.url.host, request.url.path))
        if route is None:
            return httpx.Response(404, text="nothing here")
        if callable(route):
            return route(request)
        if isinstance(route, httpx.Response):
            return route
        status, body = route
        return httpx.Response(status, text=body, headers={"Content-Type": "text/html"})

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def paths(self) -> list[str]:
        return [request.url.path for request in self.requests]


@pytest.fixture
def redirect_to() -> Callable[..., httpx.Response]:
    def _redirect(location: str, status: int = 301, **headers: str) -> httpx.Response:
        return httpx.Response(status, headers={"Location": location, **headers})

    return _redirect


@pytest.fixture
def fake_site() -> Callable[..., FakeSite]:
    def _builder(routes: dict[tuple[str, str], Route] | None = None) -> FakeSite:
        return FakeSite(routes)

    return _builder


@pytest.fixture
def fast_verifier_config() -> Callable[..., VerifierConfig]:
    def _builder(**overrides: Any) -> VerifierConfig:
        base: dict[str, Any] = {"timeout": 2.0, "sniff_window": 1.0}
        base.update(overrides)
        return VerifierConfig(**base)

    return _builder


@pytest.fixture
def sample_global_config(fast_verifier_config) -> GlobalConfig:
    return GlobalConfig(verifier=fast_verifier_config())


@pytest.fixture
def temp_config_repository(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterable[ConfigRepository]:
    monkeypatch.setenv("LINKSIFT_HOME", str(tmp_path))
    locator = ConfigLocator(project_root=tmp_path)
    yield ConfigRepository(locator)
