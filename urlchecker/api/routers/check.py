"""Single-URL probe endpoint.

Routes
------
POST /api/check-url    Body: {"url": "https://..."}    → probe_url

One URL per call; batching is the client's job.  An unreachable target is
a normal outcome and comes back as 200 with the failed-probe shape; only a
malformed request body is answered with 400.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from urlchecker.probe.fetcher import probe_url

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _bad_request(message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=400)


# ---------------------------------------------------------------------------
# Endpoint
# ---------------------------------------------------------------------------

@router.post("/check-url")
async def check_url(request: Request) -> Any:
    """Probe one URL and return its status, timing and page metadata."""
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return _bad_request("Invalid request")

    url = body.get("url") if isinstance(body, dict) else None
    if not url or not isinstance(url, str):
        return _bad_request("Invalid URL provided")

    logger.debug("check-url %s", url)
    result = await probe_url(url)
    return JSONResponse(result.to_dict())
