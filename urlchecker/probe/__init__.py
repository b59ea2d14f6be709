"""Probe package: single-URL status check & SEO field extraction."""

from urlchecker.probe.extractor import extract_page_meta
from urlchecker.probe.fetcher import probe_url
from urlchecker.probe.models import PageMeta, ProbeResult
from urlchecker.probe.remote import make_remote_probe

__all__ = ["probe_url", "make_remote_probe", "extract_page_meta", "PageMeta", "ProbeResult"]
