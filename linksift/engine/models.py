"""Records flowing through the parse → verify → dedup pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True, slots=True)
class LinkCandidate:
    """Unverified title/URL/description triple taken from generated text."""

    title: str
    url: str
    description: str


@dataclass(frozen=True, slots=True)
class VerifiedLink:
    """Candidate whose URL resolved to real content, in canonical form."""

    title: str
    url: str
    description: str

    @classmethod
    def from_candidate(cls, candidate: LinkCandidate, url: str) -> "VerifiedLink":
        return cls(title=candidate.title, url=url, description=candidate.description)

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


__all__ = ["LinkCandidate", "VerifiedLink"]
