"""Configuration package exports."""

from .loader import ConfigLocator, ConfigRepository
from .models import (
    GlobalConfig,
    NormalizerConfig,
    ParserConfig,
    SchedulerConfig,
    VerifierConfig,
)

__all__ = [
    "ConfigLocator",
    "ConfigRepository",
    "GlobalConfig",
    "NormalizerConfig",
    "ParserConfig",
    "SchedulerConfig",
    "VerifierConfig",
]
