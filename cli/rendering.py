"""Utilities for rendering probe results in the terminal."""

from __future__ import annotations

from typing import Dict, List

from urlchecker.batch.classify import Bucket, bucket_for, describe_status
from urlchecker.probe.models import ProbeResult

_ICONS = {
    Bucket.SUCCESS: "✅",
    Bucket.REDIRECT: "🔗",
    Bucket.CLIENT_ERROR: "⚠️",
    Bucket.SERVER_ERROR: "❌",
    Bucket.FAILED: "💥",
}

_LABELS = {
    "all": "All",
    Bucket.SUCCESS.value: "Success",
    Bucket.REDIRECT.value: "Redirects",
    Bucket.CLIENT_ERROR.value: "Client errors",
    Bucket.SERVER_ERROR.value: "Server errors",
    Bucket.FAILED.value: "Failed",
}


def _icon(result: ProbeResult) -> str:
    return _ICONS.get(bucket_for(result), "•")


def render_result(result: ProbeResult, indent: str = "") -> str:
    """Render one result as a headline plus optional detail lines."""
    status = "---" if result.status is None else str(result.status)
    lines = [
        f"{indent}{_icon(result)} {status}  {result.url}  "
        f"({describe_status(result.status)}, {result.response_time_ms} ms)"
    ]
    detail = indent + "      "
    if result.redirected and result.redirect_url:
        lines.append(f"{detail}→ {result.redirect_url}")
    if result.page_title:
        lines.append(f"{detail}Title      : {result.page_title}")
    if result.meta_description:
        lines.append(f"{detail}Description: {result.meta_description}")
    if result.canonical:
        lines.append(f"{detail}Canonical  : {result.canonical}")
    if result.error:
        lines.append(f"{detail}Error      : {result.error}")
    return "\n".join(lines)


def render_results(results: List[ProbeResult]) -> str:
    return "\n".join(render_result(r) for r in results)


def render_grouped(groups: Dict[str, List[ProbeResult]]) -> str:
    """Render results under one heading per host."""
    blocks = []
    for host, members in groups.items():
        body = "\n".join(render_result(r, indent="  ") for r in members)
        blocks.append(f"{host} ({len(members)})\n{body}")
    return "\n\n".join(blocks)


def render_summary(counts: Dict[str, int]) -> str:
    """One line per bucket count, ``All`` first."""
    return "\n".join(f"  {_LABELS.get(key, key):<14}{value}" for key, value in counts.items())
