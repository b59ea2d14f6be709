"""Derived views over a result set: status buckets, counts and host groups.

Nothing here is stored; every view is recomputed from the result list.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Iterable, List, Optional

import httpx

from urlchecker.probe.models import ProbeResult

UNKNOWN_HOST = "Unknown"

_STATUS_DESCRIPTIONS = {
    200: "OK",
    201: "Created",
    204: "No Content",
    301: "Moved Permanently",
    302: "Found (Temporary Redirect)",
    304: "Not Modified",
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    429: "Too Many Requests",
    500: "Internal Server Error",
    502: "Bad Gateway",
    503: "Service Unavailable",
    504: "Gateway Timeout",
}


class Bucket(str, Enum):
    SUCCESS = "success"
    REDIRECT = "redirect"
    CLIENT_ERROR = "client_error"
    SERVER_ERROR = "server_error"
    FAILED = "failed"


def bucket_for_status(status: Optional[int]) -> Optional[Bucket]:
    """Map a status code to its bucket; informational (1xx) codes have none."""
    if status is None:
        return Bucket.FAILED
    if 200 <= status < 300:
        return Bucket.SUCCESS
    if 300 <= status < 400:
        return Bucket.REDIRECT
    if 400 <= status < 500:
        return Bucket.CLIENT_ERROR
    if status >= 500:
        return Bucket.SERVER_ERROR
    return None


def bucket_for(result: ProbeResult) -> Optional[Bucket]:
    return bucket_for_status(result.status)


def partition(results: Iterable[ProbeResult]) -> Dict[Bucket, List[ProbeResult]]:
    """Split *results* into every bucket (empty buckets included), order kept."""
    buckets: Dict[Bucket, List[ProbeResult]] = {bucket: [] for bucket in Bucket}
    for result in results:
        bucket = bucket_for(result)
        if bucket is not None:
            buckets[bucket].append(result)
    return buckets


def filter_bucket(results: Iterable[ProbeResult], bucket: Optional[Bucket]) -> List[ProbeResult]:
    """Results in *bucket*; ``None`` means all of them."""
    if bucket is None:
        return list(results)
    return [r for r in results if bucket_for(r) is bucket]


def status_counts(results: Iterable[ProbeResult]) -> Dict[str, int]:
    """Counts keyed by ``"all"`` and each bucket value."""
    results = list(results)
    counts = {"all": len(results)}
    for bucket, members in partition(results).items():
        counts[bucket.value] = len(members)
    return counts


def valid_results(results: Iterable[ProbeResult]) -> List[ProbeResult]:
    """Results that answered with a 2xx or 3xx status."""
    return [r for r in results if r.status is not None and 200 <= r.status < 400]


def _hostname(url: str) -> Optional[str]:
    try:
        host = httpx.URL(url).host
    except (httpx.InvalidURL, TypeError, ValueError):
        return None
    return host or None


def group_by_host(results: Iterable[ProbeResult]) -> Dict[str, List[ProbeResult]]:
    """Group *results* by hostname in first-seen order.

    URLs without a parsable host go under ``"Unknown"``.
    """
    groups: Dict[str, List[ProbeResult]] = {}
    for result in results:
        host = _hostname(result.url) or UNKNOWN_HOST
        groups.setdefault(host, []).append(result)
    return groups


def describe_status(status: Optional[int]) -> str:
    """Friendly description for the common status codes."""
    if status is None:
        return "Failed to connect"
    return _STATUS_DESCRIPTIONS.get(status, "Unknown Status")
