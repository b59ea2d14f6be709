"""SEO field extraction: title, meta description and canonical link."""

from __future__ import annotations

import html as html_lib
import re
from typing import Optional

from urlchecker.probe.models import PageMeta

_TITLE_RE = re.compile(r"<title[^>]*>([^<]+)</title>", re.IGNORECASE)
_DESCRIPTION_RES = (
    re.compile(
        r"<meta[^>]*name=[\"']description[\"'][^>]*content=[\"']([^\"']+)[\"'][^>]*>",
        re.IGNORECASE,
    ),
    re.compile(
        r"<meta[^>]*content=[\"']([^\"']+)[\"'][^>]*name=[\"']description[\"'][^>]*>",
        re.IGNORECASE,
    ),
)
_CANONICAL_RE = re.compile(
    r"<link[^>]*rel=[\"']canonical[\"'][^>]*href=[\"']([^\"']+)[\"'][^>]*>",
    re.IGNORECASE,
)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = html_lib.unescape(value).strip()
    return value or None


def _first_group(html: str, *patterns: re.Pattern[str]) -> Optional[str]:
    for pattern in patterns:
        match = pattern.search(html)
        if match:
            cleaned = _clean(match.group(1))
            if cleaned:
                return cleaned
    return None


def _soup_fallback(html: str, meta: PageMeta) -> PageMeta:
    """Fill whatever the regexes missed using BeautifulSoup's lenient parser.

    Catches unquoted attributes, ``href`` before ``rel`` and multi-token
    ``rel`` values.  Imported lazily since most pages never need it.
    """
    from bs4 import BeautifulSoup  # noqa: PLC0415

    soup = BeautifulSoup(html, "html.parser")

    if meta.title is None and soup.title is not None:
        meta.title = _clean(soup.title.get_text())

    if meta.description is None:
        for tag in soup.find_all("meta"):
            name = tag.get("name")
            if isinstance(name, str) and name.strip().lower() == "description":
                content = tag.get("content")
                meta.description = _clean(content) if isinstance(content, str) else None
                break

    if meta.canonical is None:
        for tag in soup.find_all("link"):
            rel = tag.get("rel") or []
            if isinstance(rel, str):
                rel = rel.split()
            if "canonical" in (token.lower() for token in rel):
                href = tag.get("href")
                meta.canonical = _clean(href) if isinstance(href, str) else None
                break

    return meta


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_page_meta(html: str) -> PageMeta:
    """Extract title, meta description and canonical URL from raw *html*.

    Regex matching is tried first; any field it cannot find is retried with
    an HTML parser.  Fields that are absent stay ``None``.
    """
    meta = PageMeta(
        title=_first_group(html, _TITLE_RE),
        description=_first_group(html, *_DESCRIPTION_RES),
        canonical=_first_group(html, _CANONICAL_RE),
    )
    if meta.title is None or meta.description is None or meta.canonical is None:
        meta = _soup_fallback(html, meta)
    return meta
