"""CSV and plain-text exports of a result set."""

from __future__ import annotations

import csv
import io
from datetime import date
from typing import Iterable, List, Optional

from urlchecker.batch.classify import valid_results
from urlchecker.probe.models import ProbeResult

CSV_HEADERS = [
    "URL",
    "Status",
    "Status Text",
    "Response Time (ms)",
    "Redirected",
    "Redirect URL",
    "Page Title",
    "Meta Description",
    "Canonical URL",
    "Error",
]


def _row(result: ProbeResult) -> List[str]:
    return [
        result.url,
        "" if result.status is None else str(result.status),
        result.status_text or "",
        str(result.response_time_ms),
        "Yes" if result.redirected else "No",
        result.redirect_url or "",
        result.page_title or "",
        result.meta_description or "",
        result.canonical or "",
        result.error or "",
    ]


def to_csv(results: Iterable[ProbeResult]) -> str:
    """Render *results* as CSV.

    The header row is bare; every data field is double-quoted with embedded
    quotes doubled.  Rows are separated by ``\\n`` with no trailing newline.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for result in results:
        writer.writerow(_row(result))
    body = buffer.getvalue().rstrip("\n")
    header = ",".join(CSV_HEADERS)
    return f"{header}\n{body}" if body else header


def to_text(results: Iterable[ProbeResult]) -> str:
    """One URL per line for every 2xx/3xx result, preferring the redirect target."""
    return "\n".join(r.effective_url for r in valid_results(results))


def default_filename(kind: str, today: Optional[date] = None) -> str:
    """Dated export file name: ``kind`` is ``"csv"`` or ``"text"``."""
    stamp = (today or date.today()).isoformat()
    if kind == "csv":
        return f"url-check-results-{stamp}.csv"
    if kind == "text":
        return f"valid-urls-{stamp}.txt"
    raise ValueError(f"Unknown export kind {kind!r}. Use: csv | text")
