"""Tests for input normalisation (text → probe-ready URL list)."""

from __future__ import annotations

from urlchecker.normalizer import UrlCandidate, is_valid_url, normalize, parse_candidates


class TestNormalize:
    def test_mixed_input_scenario(self) -> None:
        assert normalize("example.com, https://bad..url, ") == ["https://example.com"]

    def test_splits_on_newlines_and_commas(self) -> None:
        text = "a.com\nb.com,c.com\r\nhttp://d.com"
        assert normalize(text) == [
            "https://a.com",
            "https://b.com",
            "https://c.com",
            "http://d.com",
        ]

    def test_keeps_existing_scheme(self) -> None:
        assert normalize("http://example.com/path?q=1") == ["http://example.com/path?q=1"]

    def test_scheme_prefix_is_case_insensitive(self) -> None:
        assert normalize("HTTPS://Example.com") == ["HTTPS://Example.com"]

    def test_trims_whitespace(self) -> None:
        assert normalize("   example.com/page   ") == ["https://example.com/page"]

    def test_duplicates_are_kept_in_order(self) -> None:
        assert normalize("a.com, b.com, a.com") == [
            "https://a.com",
            "https://b.com",
            "https://a.com",
        ]

    def test_all_invalid_returns_empty(self) -> None:
        assert normalize("bad..url, , has space.com\n\n") == []

    def test_empty_text_returns_empty(self) -> None:
        assert normalize("") == []

    def test_ip_and_port_are_accepted(self) -> None:
        assert normalize("127.0.0.1:8080/health, http://[::1]/") == [
            "https://127.0.0.1:8080/health",
            "http://[::1]/",
        ]


class TestIsValidUrl:
    def test_plain_domain(self) -> None:
        assert is_valid_url("https://example.com") is True

    def test_trailing_dot_domain(self) -> None:
        assert is_valid_url("https://example.com.") is True

    def test_localhost(self) -> None:
        assert is_valid_url("http://localhost:3000") is True

    def test_empty_label_rejected(self) -> None:
        assert is_valid_url("https://bad..url") is False

    def test_missing_host_rejected(self) -> None:
        assert is_valid_url("https://") is False

    def test_space_in_host_rejected(self) -> None:
        assert is_valid_url("https://exa mple.com") is False

    def test_hyphen_edges_rejected(self) -> None:
        assert is_valid_url("https://-example.com") is False
        assert is_valid_url("https://example-.com") is False

    def test_non_http_scheme_rejected(self) -> None:
        assert is_valid_url("ftp://example.com") is False

    def test_bad_port_rejected(self) -> None:
        assert is_valid_url("https://example.com:notaport") is False


class TestParseCandidates:
    def test_reports_validity_per_piece(self) -> None:
        candidates = parse_candidates("example.com\nbad..url")
        assert candidates == [
            UrlCandidate(raw="example.com", normalized="https://example.com", valid=True),
            UrlCandidate(raw="bad..url", normalized="https://bad..url", valid=False),
        ]

    def test_empty_pieces_are_not_candidates(self) -> None:
        assert parse_candidates(" , ,\n") == []
