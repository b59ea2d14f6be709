"""Data models for the probe pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional

FAILED_STATUS_TEXT = "Failed"


@dataclass
class PageMeta:
    """SEO fields scraped from an HTML document."""

    title: Optional[str] = None
    description: Optional[str] = None
    canonical: Optional[str] = None


@dataclass
class ProbeResult:
    """The outcome of checking a single URL.

    Either ``status`` is set (a response arrived) or ``error`` is set (the
    probe failed before any response), never both.
    """

    url: str
    status: Optional[int]
    status_text: str
    response_time_ms: int
    redirected: bool = False
    redirect_url: Optional[str] = None
    headers: Optional[Dict[str, str]] = None
    page_title: Optional[str] = None
    meta_description: Optional[str] = None
    canonical: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def failed(cls, url: str, error: str, response_time_ms: int = 0) -> ProbeResult:
        return cls(
            url=url,
            status=None,
            status_text=FAILED_STATUS_TEXT,
            response_time_ms=max(0, response_time_ms),
            error=error,
        )

    @property
    def is_failed(self) -> bool:
        return self.status is None

    @property
    def effective_url(self) -> str:
        """The redirect target when there is one, otherwise the probed URL."""
        if self.redirected and self.redirect_url:
            return self.redirect_url
        return self.url

    # ------------------------------------------------------------------
    # Wire format
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        """Serialise to the camelCase JSON shape served by the probe endpoint."""
        if self.is_failed:
            return {
                "url": self.url,
                "status": None,
                "statusText": self.status_text,
                "responseTimeMs": self.response_time_ms,
                "error": self.error,
            }

        payload: Dict[str, Any] = {
            "url": self.url,
            "status": self.status,
            "statusText": self.status_text,
            "responseTimeMs": self.response_time_ms,
            "redirected": self.redirected,
        }
        if self.redirected:
            payload["redirectUrl"] = self.redirect_url
        payload["headers"] = dict(self.headers or {})
        payload["pageTitle"] = self.page_title
        payload["metaDescription"] = self.meta_description
        payload["canonical"] = self.canonical
        return payload

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ProbeResult:
        """Rebuild a result from :meth:`to_dict` output."""
        url = str(data.get("url", ""))
        status = data.get("status")
        if status is None:
            return cls.failed(
                url,
                str(data.get("error") or "Unknown error"),
                int(data.get("responseTimeMs") or 0),
            )
        redirected = bool(data.get("redirected", False))
        return cls(
            url=url,
            status=int(status),
            status_text=str(data.get("statusText") or ""),
            response_time_ms=int(data.get("responseTimeMs") or 0),
            redirected=redirected,
            redirect_url=data.get("redirectUrl") if redirected else None,
            headers=dict(data.get("headers") or {}),
            page_title=data.get("pageTitle"),
            meta_description=data.get("metaDescription"),
            canonical=data.get("canonical"),
        )


ProbeFunc = Callable[[str], Awaitable[ProbeResult]]

