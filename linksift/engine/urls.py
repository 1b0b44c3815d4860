"""URL repair and canonicalisation helpers.

Every function here is pure: malformed input is returned unchanged (or
yields ``None``) rather than raising, so a single bad candidate never aborts
a batch.
"""

from __future__ import annotations

import re
from typing import Iterable
from urllib.parse import unquote_plus, urlsplit, urlunsplit

from ..config.models import DEFAULT_TRACKING_PARAMS as TRACKING_PARAMS

_TRAILING_PUNCTUATION = re.compile(r"[)\].,'\";]+$")
_SCHEME_PATTERN = re.compile(r"^https?://", re.IGNORECASE)
_TRAILING_SLASHES = re.compile(r"/+$")
_DEFAULT_PORTS = {"http": 80, "https": 443}


def repair_url(raw: str) -> str:
    """Strip punctuation generative text tends to glue onto URLs and add a scheme."""

    cleaned = _TRAILING_PUNCTUATION.sub("", raw.strip())
    if _SCHEME_PATTERN.match(cleaned):
        return cleaned
    return "https://" + cleaned.lstrip("/")


def normalize_url(url: str, tracking_params: Iterable[str] = TRACKING_PARAMS) -> str:
    """Return the canonical form of *url*.

    Forces https, lower-cases scheme and host, drops default ports and
    tracking parameters, clears the fragment and collapses trailing slashes.
    Input without a scheme or host is returned unchanged.
    """

    try:
        parts = urlsplit(url.strip())
        port = parts.port  # raises ValueError for out-of-range ports
    except ValueError:
        return url
    if not parts.scheme or not parts.netloc:
        return url

    original_scheme = parts.scheme.lower()
    scheme = "https" if original_scheme == "http" else original_scheme
    netloc = parts.netloc
    if port is not None and port in (_DEFAULT_PORTS.get(original_scheme), _DEFAULT_PORTS.get(scheme)):
        netloc = _drop_port(netloc)
    path = _TRAILING_SLASHES.sub("/", parts.path) or "/"
    query = _strip_params(parts.query, frozenset(tracking_params))
    return urlunsplit((scheme, _lower_host(netloc), path, query, ""))


def canonicalize(raw: str, tracking_params: Iterable[str] = TRACKING_PARAMS) -> str:
    return normalize_url(repair_url(raw), tracking_params)


def slash_variant(url: str) -> str | None:
    """Return the trailing-slash sibling of *url*, or ``None`` when there is none."""

    try:
        parts = urlsplit(url)
    except ValueError:
        return None
    if not parts.netloc:
        return None
    if parts.path.endswith("/"):
        stripped = parts.path.rstrip("/")
        if not stripped:
            # the bare root and the root without a slash are the same resource
            return None
        return urlunsplit(parts._replace(path=stripped))
    return urlunsplit(parts._replace(path=parts.path + "/"))


def dedup_key(url: str) -> tuple[str, str] | None:
    """Return the ``(hostname, pathname)`` identity of *url*."""

    try:
        parts = urlsplit(url)
    except ValueError:
        return None
    if not parts.hostname:
        return None
    return parts.hostname, parts.path or "/"


def _lower_host(netloc: str) -> str:
    userinfo, sep, hostport = netloc.rpartition("@")
    return f"{userinfo}{sep}{hostport.lower()}"


def _drop_port(netloc: str) -> str:
    userinfo, sep, hostport = netloc.rpartition("@")
    return f"{userinfo}{sep}{hostport.rsplit(':', 1)[0]}"


def _strip_params(query: str, tracking_params: frozenset[str]) -> str:
    if not query:
        return ""
    kept = [
        pair
        for pair in query.split("&")
        if pair and unquote_plus(pair.split("=", 1)[0]) not in tracking_params
    ]
    return "&".join(kept)


__all__ = [
    "TRACKING_PARAMS",
    "canonicalize",
    "dedup_key",
    "normalize_url",
    "repair_url",
    "slash_variant",
]
