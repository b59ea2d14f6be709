"""Tests for result classification: buckets, counts, host groups."""

from __future__ import annotations

from typing import Optional

from urlchecker.batch.classify import (
    UNKNOWN_HOST,
    Bucket,
    bucket_for_status,
    describe_status,
    filter_bucket,
    group_by_host,
    partition,
    status_counts,
    valid_results,
)
from urlchecker.probe.models import ProbeResult


def _result(url: str, status: Optional[int]) -> ProbeResult:
    if status is None:
        return ProbeResult.failed(url, "connection refused", 5)
    return ProbeResult(url=url, status=status, status_text="", response_time_ms=5)


_RESULTS = [
    _result("https://a.com/1", 200),
    _result("https://a.com/2", 301),
    _result("https://b.com/", 404),
    _result("https://c.com/", 503),
    _result("https://d.com/", None),
    _result("https://a.com/3", 204),
]


class TestBuckets:
    def test_status_ranges(self) -> None:
        assert bucket_for_status(200) is Bucket.SUCCESS
        assert bucket_for_status(299) is Bucket.SUCCESS
        assert bucket_for_status(302) is Bucket.REDIRECT
        assert bucket_for_status(404) is Bucket.CLIENT_ERROR
        assert bucket_for_status(500) is Bucket.SERVER_ERROR
        assert bucket_for_status(None) is Bucket.FAILED

    def test_informational_has_no_bucket(self) -> None:
        assert bucket_for_status(101) is None

    def test_partition_keeps_every_bucket_and_order(self) -> None:
        buckets = partition(_RESULTS)
        assert set(buckets) == set(Bucket)
        assert [r.url for r in buckets[Bucket.SUCCESS]] == ["https://a.com/1", "https://a.com/3"]
        assert [r.url for r in buckets[Bucket.FAILED]] == ["https://d.com/"]

    def test_partition_of_empty_list(self) -> None:
        assert all(members == [] for members in partition([]).values())

    def test_filter_bucket(self) -> None:
        assert [r.url for r in filter_bucket(_RESULTS, Bucket.SERVER_ERROR)] == ["https://c.com/"]
        assert filter_bucket(_RESULTS, None) == _RESULTS

    def test_status_counts(self) -> None:
        assert status_counts(_RESULTS) == {
            "all": 6,
            "success": 2,
            "redirect": 1,
            "client_error": 1,
            "server_error": 1,
            "failed": 1,
        }


class TestValidResults:
    def test_keeps_2xx_and_3xx(self) -> None:
        assert [r.status for r in valid_results(_RESULTS)] == [200, 301, 204]


class TestGroupByHost:
    def test_groups_in_first_seen_order(self) -> None:
        groups = group_by_host(_RESULTS)
        assert list(groups) == ["a.com", "b.com", "c.com", "d.com"]
        assert len(groups["a.com"]) == 3

    def test_unparsable_url_goes_to_unknown(self) -> None:
        groups = group_by_host([_result("not a url", None), _result("https://a.com/", 200)])
        assert [r.url for r in groups[UNKNOWN_HOST]] == ["not a url"]
        assert "a.com" in groups


class TestDescribeStatus:
    def test_known_codes(self) -> None:
        assert describe_status(200) == "OK"
        assert describe_status(302) == "Found (Temporary Redirect)"
        assert describe_status(429) == "Too Many Requests"

    def test_failed_and_unknown(self) -> None:
        assert describe_status(None) == "Failed to connect"
        assert describe_status(418) == "Unknown Status"
