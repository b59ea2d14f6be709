"""HEAD-first URL probe with an opportunistic GET for page metadata."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Optional

import httpx

from urlchecker.config import settings
from urlchecker.probe.extractor import extract_page_meta
from urlchecker.probe.models import PageMeta, ProbeResult

logger = logging.getLogger(__name__)

_HTML_CONTENT_TYPES = ("text/html", "application/xhtml+xml")
_TIMEOUT_MESSAGE = "Request timeout"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _elapsed_ms(start: float) -> int:
    return max(0, round((time.perf_counter() - start) * 1000))


def _describe_error(exc: Exception) -> str:
    """Return a short, human-readable description of a network failure."""
    if isinstance(exc, httpx.TimeoutException):
        return _TIMEOUT_MESSAGE
    return str(exc) or exc.__class__.__name__


def _is_html(response: httpx.Response) -> bool:
    content_type = response.headers.get("content-type", "").lower()
    return any(kind in content_type for kind in _HTML_CONTENT_TYPES)


def _make_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(
        headers=settings.request_headers,
        timeout=settings.request_timeout,
        follow_redirects=True,
    )


async def _read_html(client: httpx.AsyncClient, url: str) -> str:
    """GET *url* and return at most ``settings.max_html_bytes`` of its body as text."""
    limit = settings.max_html_bytes
    async with client.stream("GET", url, follow_redirects=True) as response:
        chunks: list[bytes] = []
        size = 0
        async for chunk in response.aiter_bytes():
            chunks.append(chunk)
            size += len(chunk)
            if size >= limit:
                break
        body = b"".join(chunks)[:limit]
        return body.decode(response.encoding or "utf-8", errors="replace")


async def _fetch_page_meta(client: httpx.AsyncClient, url: str) -> Optional[PageMeta]:
    """Scrape SEO fields from *url*; ``None`` if the follow-up fails for any reason.

    Runs under its own deadline so a slow HEAD can never eat into it.
    """
    try:
        html = await asyncio.wait_for(
            _read_html(client, url), timeout=settings.request_timeout
        )
    except asyncio.TimeoutError:
        logger.warning("Error fetching HTML content for %s: %s", url, _TIMEOUT_MESSAGE)
        return None
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.warning("Error fetching HTML content for %s: %s", url, _describe_error(exc))
        return None
    return extract_page_meta(html)


async def _probe(client: httpx.AsyncClient, url: str) -> ProbeResult:
    start = time.perf_counter()
    try:
        response = await asyncio.wait_for(
            client.head(url, follow_redirects=True), timeout=settings.request_timeout
        )
    except asyncio.TimeoutError:
        logger.info("Probe failed for %s: %s", url, _TIMEOUT_MESSAGE)
        return ProbeResult.failed(url, _TIMEOUT_MESSAGE, _elapsed_ms(start))
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        message = _describe_error(exc)
        logger.info("Probe failed for %s: %s", url, message)
        return ProbeResult.failed(url, message, _elapsed_ms(start))

    response_time_ms = _elapsed_ms(start)
    status = response.status_code
    redirected = bool(response.history)

    result = ProbeResult(
        url=url,
        status=status,
        status_text=response.reason_phrase or httpx.codes.get_reason_phrase(status),
        response_time_ms=response_time_ms,
        redirected=redirected,
        redirect_url=str(response.url) if redirected else None,
        headers=dict(response.headers),
    )

    if 200 <= status < 300 and _is_html(response):
        meta = await _fetch_page_meta(client, url)
        if meta is not None:
            result.page_title = meta.title
            result.meta_description = meta.description
            result.canonical = meta.canonical

    return result


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

async def probe_url(url: str, *, client: Optional[httpx.AsyncClient] = None) -> ProbeResult:
    """Check *url* and return a :class:`ProbeResult`.

    Sends a HEAD request (redirects followed, bounded by
    ``settings.request_timeout``).  When the answer is a 2xx HTML document a
    second GET to the original URL scrapes the page title, meta description
    and canonical link.

    Never raises: network failures come back as a result with ``status``
    set to ``None`` and ``error`` describing the failure, and a failed GET
    follow-up only leaves the page fields unset.

    Args:
        url: Absolute http(s) URL to check.
        client: Optional shared client.  A private one is created (and
            closed) per call when omitted.
    """
    if client is not None:
        return await _probe(client, url)
    async with _make_client() as own_client:
        return await _probe(own_client, url)
