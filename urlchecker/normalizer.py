"""Input normalisation: turns pasted or uploaded text into probe-ready URLs.

Pieces are split on newlines and commas, trimmed, given an ``https://``
prefix when they carry no scheme, and kept only if they parse as absolute
http(s) URLs.  Order is preserved and duplicates are kept.
"""

from __future__ import annotations

import ipaddress
import logging
import re
from dataclasses import dataclass
from typing import List

import httpx

logger = logging.getLogger(__name__)

_SPLIT_RE = re.compile(r"[\n,]")
_SCHEME_PREFIXES = ("http://", "https://")
_LABEL_RE = re.compile(r"^(?!-)[a-z0-9_-]{1,63}(?<!-)$")


@dataclass(frozen=True)
class UrlCandidate:
    """One piece of user input on its way to becoming a work item."""

    raw: str
    normalized: str
    valid: bool


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def _valid_host(raw_host: str) -> bool:
    if not raw_host:
        return False
    try:
        ipaddress.ip_address(raw_host)
        return True
    except ValueError:
        pass
    host = raw_host[:-1] if raw_host.endswith(".") else raw_host
    return all(_LABEL_RE.match(label) for label in host.split("."))


def is_valid_url(url: str) -> bool:
    """Return ``True`` if *url* parses as an absolute http(s) URL with a usable host."""
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError, ValueError):
        return False
    if parsed.scheme not in ("http", "https"):
        return False
    return _valid_host(parsed.raw_host.decode("ascii", errors="replace"))


def _with_scheme(piece: str) -> str:
    # Scheme match is case-insensitive so "HTTP://x" is not prefixed twice.
    if piece.lower().startswith(_SCHEME_PREFIXES):
        return piece
    return f"https://{piece}"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_candidates(text: str) -> List[UrlCandidate]:
    """Split *text* into trimmed, scheme-qualified candidates with a validity flag."""
    candidates: List[UrlCandidate] = []
    for piece in _SPLIT_RE.split(text):
        piece = piece.strip()
        if not piece:
            continue
        normalized = _with_scheme(piece)
        candidates.append(
            UrlCandidate(raw=piece, normalized=normalized, valid=is_valid_url(normalized))
        )
    return candidates


def normalize(text: str) -> List[str]:
    """Return the valid URLs found in *text*, in input order.

    Invalid pieces are dropped silently; an empty result is the caller's
    cue to report a validation failure.
    """
    urls: List[str] = []
    for candidate in parse_candidates(text):
        if candidate.valid:
            urls.append(candidate.normalized)
        else:
            logger.debug("Invalid URL skipped: %s", candidate.normalized)
    return urls
