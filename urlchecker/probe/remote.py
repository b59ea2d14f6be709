"""Probe through a running ``/api/check-url`` endpoint instead of in-process."""

from __future__ import annotations

import logging

import httpx

from urlchecker.config import settings
from urlchecker.probe.models import ProbeFunc, ProbeResult

logger = logging.getLogger(__name__)


def make_remote_probe(endpoint: str) -> ProbeFunc:
    """Return a probe callable that POSTs each URL to *endpoint*.

    The endpoint answers 200 even for unreachable targets, so only malformed
    requests or a broken server show up as non-2xx; both are folded into a
    failed result rather than raised.
    """
    # The server may spend one full timeout on HEAD and another on GET.
    timeout = settings.request_timeout * 2 + 5

    async def remote_probe(url: str) -> ProbeResult:
        try:
            async with httpx.AsyncClient(timeout=timeout) as client:
                response = await client.post(endpoint, json={"url": url})
                data = response.json() if response.content else None
                if response.is_error or not isinstance(data, dict):
                    message = data.get("error") if isinstance(data, dict) else None
                    return ProbeResult.failed(url, str(message or "API request failed"))
                return ProbeResult.from_dict(data)
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            logger.info("Remote probe via %s failed for %s: %s", endpoint, url, exc)
            return ProbeResult.failed(url, str(exc) or exc.__class__.__name__)

    return remote_probe
