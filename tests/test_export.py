"""Tests for CSV and plain-text exports."""

from __future__ import annotations

import csv
import io
from datetime import date

import pytest

from urlchecker.batch.export import CSV_HEADERS, default_filename, to_csv, to_text
from urlchecker.probe.models import ProbeResult


_OK = ProbeResult(
    url="https://example.com/",
    status=200,
    status_text="OK",
    response_time_ms=120,
    headers={"content-type": "text/html"},
    page_title='Say "hello", world',
    meta_description="Line with, comma",
    canonical="https://example.com/",
)
_MOVED = ProbeResult(
    url="http://example.com/old",
    status=301,
    status_text="Moved Permanently",
    response_time_ms=80,
    redirected=True,
    redirect_url="https://example.com/new",
    headers={},
)
_MISSING = ProbeResult(
    url="https://example.com/missing",
    status=404,
    status_text="Not Found",
    response_time_ms=30,
    headers={},
)
_DOWN = ProbeResult.failed("https://down.example.com/", "Request timeout", 10000)


class TestToCsv:
    def test_header_row_is_bare(self) -> None:
        first_line = to_csv([_OK]).split("\n")[0]
        assert first_line == (
            "URL,Status,Status Text,Response Time (ms),Redirected,Redirect URL,"
            "Page Title,Meta Description,Canonical URL,Error"
        )

    def test_fields_are_quoted_and_quotes_doubled(self) -> None:
        row = to_csv([_OK]).split("\n")[1]
        assert row.startswith('"https://example.com/","200","OK","120","No",""')
        assert '"Say ""hello"", world"' in row

    def test_parsing_recovers_field_values(self) -> None:
        rows = list(csv.reader(io.StringIO(to_csv([_OK, _MOVED, _DOWN]))))

        assert rows[0] == CSV_HEADERS
        assert rows[1] == [
            "https://example.com/",
            "200",
            "OK",
            "120",
            "No",
            "",
            'Say "hello", world',
            "Line with, comma",
            "https://example.com/",
            "",
        ]
        assert rows[2][4:6] == ["Yes", "https://example.com/new"]
        assert rows[3] == [
            "https://down.example.com/",
            "",
            "Failed",
            "10000",
            "No",
            "",
            "",
            "",
            "",
            "Request timeout",
        ]

    def test_no_results_is_header_only(self) -> None:
        assert to_csv([]) == ",".join(CSV_HEADERS)


class TestToText:
    def test_only_2xx_and_3xx_with_redirect_targets(self) -> None:
        assert to_text([_OK, _MOVED, _MISSING, _DOWN]) == (
            "https://example.com/\nhttps://example.com/new"
        )

    def test_nothing_valid_is_empty(self) -> None:
        assert to_text([_MISSING, _DOWN]) == ""


class TestDefaultFilename:
    def test_dated_names(self) -> None:
        day = date(2024, 5, 1)
        assert default_filename("csv", day) == "url-check-results-2024-05-01.csv"
        assert default_filename("text", day) == "valid-urls-2024-05-01.txt"

    def test_unknown_kind(self) -> None:
        with pytest.raises(ValueError):
            default_filename("pdf")
