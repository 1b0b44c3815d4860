"""Exception hierarchy surfaced to callers of the link pipeline."""

from __future__ import annotations


class LinksiftError(Exception):
    """Base error for linksift."""


class ConfigError(LinksiftError):
    """Raised when a configuration file cannot be read or validated."""


class NoUsableLinksError(LinksiftError):
    """No link survived a pipeline stage.

    ``stage`` is one of ``input``, ``parse`` or ``verify``; ``attempted`` is the
    number of candidates that entered the failing stage.
    """

    _MESSAGES = {
        "input": "No text was provided to extract links from.",
        "parse": "Could not parse any links from the text.",
        "verify": "All {attempted} candidate links failed verification.",
    }

    def __init__(self, stage: str, attempted: int = 0) -> None:
        self.stage = stage
        self.attempted = attempted
        template = self._MESSAGES.get(stage, "No usable links were found.")
        super().__init__(template.format(attempted=attempted))

    @property
    def user_message(self) -> str:
        return f"{self} Please try again or refine your topic."


__all__ = ["ConfigError", "LinksiftError", "NoUsableLinksError"]
