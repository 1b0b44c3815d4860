"""Engine components orchestrating parse → verify → dedup."""

from .dedup import Deduplicator, deduplicate
from .models import LinkCandidate, VerifiedLink
from .parser import CandidateParser
from .urls import canonicalize, dedup_key, normalize_url, repair_url
from .verifier import ProbeResult, ReachabilityVerifier
from .worker_pool import VerificationScheduler

__all__ = [
    "CandidateParser",
    "Deduplicator",
    "LinkCandidate",
    "ProbeResult",
    "ReachabilityVerifier",
    "VerificationScheduler",
    "VerifiedLink",
    "canonicalize",
    "dedup_key",
    "deduplicate",
    "normalize_url",
    "repair_url",
]
