from __future__ import annotations

import pytest

from linksift.config import (
    GlobalConfig,
    NormalizerConfig,
    ParserConfig,
    SchedulerConfig,
    VerifierConfig,
)


def test_defaults_match_runtime_limits() -> None:
    cfg = GlobalConfig()
    assert cfg.verifier.timeout == 8.0
    assert cfg.verifier.sniff_window == 5.0
    assert cfg.verifier.sniff_chars == 5000
    assert cfg.scheduler.max_concurrency == 5
    assert cfg.parser.placeholder_description == "No description available"
    assert "utm_source" in cfg.normalizer.tracking_params


@pytest.mark.parametrize("field", ["timeout", "sniff_window", "sniff_chars"])
def test_verifier_rejects_non_positive_values(field: str) -> None:
    with pytest.raises(ValueError):
        VerifierConfig(**{field: 0})


@pytest.mark.parametrize("value", [0, 33])
def test_scheduler_concurrency_bounds(value: int) -> None:
    with pytest.raises(ValueError):
        SchedulerConfig(max_concurrency=value)


def test_phrases_and_markers_are_lowercased() -> None:
    verifier = VerifierConfig(error_phrases=["Page Not Found", "  ", "GONE"])
    assert verifier.error_phrases == ["page not found", "gone"]
    parser = ParserConfig(noise_markers=[" Demo Mode ", ""])
    assert parser.noise_markers == ["demo mode"]


def test_normalizer_tracking_params_are_sorted() -> None:
    params = NormalizerConfig().tracking_params
    assert params == sorted(params)


def test_global_config_roundtrips_through_dump() -> None:
    cfg = GlobalConfig(scheduler=SchedulerConfig(max_concurrency=3))
    assert GlobalConfig.model_validate(cfg.model_dump(mode="json")) == cfg
