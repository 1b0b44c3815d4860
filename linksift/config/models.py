"""Pydantic models describing linksift runtime configuration."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

DEFAULT_TRACKING_PARAMS: frozenset[str] = frozenset(
    {
        "utm_source",
        "utm_medium",
        "utm_campaign",
        "utm_term",
        "utm_content",
        "utm_id",
        "gclid",
        "fbclid",
        "igshid",
    }
)

DEFAULT_ERROR_PHRASES: tuple[str, ...] = (
    "404",
    "page not found",
    "we can't find your page",
    "not found",
    "does not exist",
    "cannot be found",
    "page you are looking for can't be found",
)

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; linksift/0.1; link verification)"


class ParserConfig(BaseModel):
    """Options for extracting candidates from generated text."""

    noise_markers: list[str] = Field(default_factory=lambda: ["demo mode"])
    placeholder_description: str = "No description available"

    @field_validator("noise_markers", mode="before")
    @classmethod
    def _lower_markers(cls, value: Any) -> list[str]:
        if value is None:
            return []
        return [str(item).strip().lower() for item in value if str(item).strip()]


class VerifierConfig(BaseModel):
    """Network probing parameters.

    ``timeout`` bounds one fetch attempt, ``sniff_window`` bounds reading the
    body sample and ``sniff_chars`` caps how much of the body is inspected.
    """

    timeout: float = 8.0
    sniff_window: float = 5.0
    sniff_chars: int = 5000
    error_phrases: list[str] = Field(default_factory=lambda: list(DEFAULT_ERROR_PHRASES))
    user_agent: str = DEFAULT_USER_AGENT

    @field_validator("timeout", "sniff_window")
    @classmethod
    def _positive_seconds(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("durations must be > 0")
        return value

    @field_validator("sniff_chars")
    @classmethod
    def _positive_chars(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("sniff_chars must be > 0")
        return value

    @field_validator("error_phrases", mode="before")
    @classmethod
    def _lower_phrases(cls, value: Any) -> list[str]:
        if value is None:
            return []
        return [str(item).lower() for item in value if str(item).strip()]


class SchedulerConfig(BaseModel):
    """Concurrency limits for verification."""

    max_concurrency: int = Field(default=5, ge=1, le=32)


class NormalizerConfig(BaseModel):
    """Query parameters stripped during canonicalisation."""

    tracking_params: list[str] = Field(default_factory=lambda: sorted(DEFAULT_TRACKING_PARAMS))


class GlobalConfig(BaseModel):
    """Top-level configuration file contents."""

    parser: ParserConfig = Field(default_factory=ParserConfig)
    verifier: VerifierConfig = Field(default_factory=VerifierConfig)
    scheduler: SchedulerConfig = Field(default_factory=SchedulerConfig)
    normalizer: NormalizerConfig = Field(default_factory=NormalizerConfig)


__all__ = [
    "DEFAULT_ERROR_PHRASES",
    "DEFAULT_TRACKING_PARAMS",
    "DEFAULT_USER_AGENT",
    "GlobalConfig",
    "NormalizerConfig",
    "ParserConfig",
    "SchedulerConfig",
    "VerifierConfig",
]
