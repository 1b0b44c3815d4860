"""Structured logging: structlog events rendered as JSON by stdlib handlers."""

from __future__ import annotations

import logging.config
import os
from pathlib import Path
from typing import Any

import structlog

APP_LOG_NAME = "linksift.log"
ERROR_LOG_NAME = "error.log"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_LOGGING_INITIALISED = False


def default_log_dir() -> Path:
    env_root = os.environ.get("LINKSIFT_HOME")
    root = Path(env_root).expanduser() if env_root else Path.cwd()
    return root / "logs"


def _file_handler(path: Path, level: str) -> dict[str, Any]:
    return {
        "class": "logging.FileHandler",
        "level": level,
        "filename": str(path),
        "formatter": "json",
        "encoding": "utf-8",
    }


def build_logging_config(log_dir: Path, level: str, console_level: str) -> dict[str, Any]:
    """Return the ``dictConfig`` payload for the ``linksift`` logger tree.

    Console output goes to stderr at ``console_level``; every record at
    ``level`` or above lands in ``linksift.log`` and errors are duplicated
    into ``error.log``.
    """

    for name in (level, console_level):
        if name not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {name}")
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": "pythonjsonlogger.jsonlogger.JsonFormatter",
                "fmt": "%(asctime)s %(levelname)s %(name)s %(message)s",
            }
        },
        "handlers": {
            "console": {"class": "logging.StreamHandler", "level": console_level, "formatter": "json"},
            "app_file": _file_handler(log_dir / APP_LOG_NAME, level),
            "error_file": _file_handler(log_dir / ERROR_LOG_NAME, "ERROR"),
        },
        "loggers": {
            "linksift": {
                "handlers": ["console", "app_file", "error_file"],
                "level": level,
                "propagate": False,
            },
        },
    }


def configure_logging(
    verbose: bool = False,
    log_dir: Path | None = None,
    console_level: str | None = None,
) -> structlog.BoundLogger:
    """Configure logging once per process and return the application logger.

    ``verbose`` lowers both the file and console thresholds to DEBUG; an
    explicit ``console_level`` wins for the console handler.
    """

    global _LOGGING_INITIALISED
    if not _LOGGING_INITIALISED:
        log_dir = log_dir or default_log_dir()
        log_dir.mkdir(parents=True, exist_ok=True)
        level = "DEBUG" if verbose else "INFO"
        console = (console_level or ("DEBUG" if verbose else "WARNING")).upper()
        logging.config.dictConfig(build_logging_config(log_dir, level, console))
        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.stdlib.add_log_level,
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )
        _LOGGING_INITIALISED = True
    return structlog.get_logger("linksift")


def tail_log(path: Path, line_count: int = 100) -> list[str]:
    """Return the last N lines from a log file."""

    if not path.exists():
        return []
    with path.open("r", encoding="utf-8", errors="ignore") as stream:
        lines = stream.readlines()
    return lines[-line_count:]


__all__ = [
    "APP_LOG_NAME",
    "ERROR_LOG_NAME",
    "LOG_LEVELS",
    "build_logging_config",
    "configure_logging",
    "default_log_dir",
    "tail_log",
]
