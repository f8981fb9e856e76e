"""Tests for size, latency and rating formatting."""

from __future__ import annotations

import pytest

from scc_perf.report import format_bytes, format_latency, page_load_rating, response_rating


class TestFormatBytes:
    """Test cases for format_bytes()."""

    @pytest.mark.parametrize(
        ("num_bytes", "expected"),
        [
            (0, "0 B"),
            (999, "999 B"),
            (1_000, "1.00 KB"),
            (1_500, "1.50 KB"),
            (999_999, "1000.00 KB"),
            (1_000_000, "1.00 MB"),
            (2_500_000, "2.50 MB"),
            (1_000_000_000, "1.00 GB"),
            (3_250_000_000, "3.25 GB"),
        ],
    )
    def test_thresholds(self, num_bytes: int, expected: str) -> None:
        """Units switch at exactly 1e3, 1e6 and 1e9 bytes."""
        assert format_bytes(num_bytes) == expected


class TestFormatLatency:
    """Test cases for format_latency()."""

    @pytest.mark.parametrize(
        ("latency_us", "expected"),
        [
            (0, "0μs"),
            (999, "999μs"),
            (1_000, "1.00ms"),
            (1_500, "1.50ms"),
            (1_000_000, "1.00s"),
            (1_500_000, "1.50s"),
        ],
    )
    def test_thresholds(self, latency_us: int, expected: str) -> None:
        """Units switch at exactly 1e3 and 1e6 microseconds."""
        assert format_latency(latency_us) == expected


class TestRatings:
    """Test cases for the rating bands."""

    @pytest.mark.parametrize(
        ("duration_ms", "label"),
        [
            (50.0, "EXCELLENT"),
            (100.0, "VERY GOOD"),
            (750.0, "GOOD"),
            (2_000.0, "ACCEPTABLE"),
            (2_500.0, "NEEDS IMPROVEMENT"),
        ],
    )
    def test_page_load_bands(self, duration_ms: float, label: str) -> None:
        """Each page load band applies strictly below its upper bound."""
        assert page_load_rating(duration_ms)[1] == label

    def test_page_load_stars(self) -> None:
        """An excellent page load gets five stars."""
        stars, _, note = page_load_rating(10.0)
        assert stars == "★★★★★"
        assert note == "<100ms full page"

    @pytest.mark.parametrize(
        ("total_ms", "label"),
        [
            (99.9, "EXCELLENT"),
            (250.0, "VERY GOOD"),
            (300.0, "GOOD"),
            (999.0, "FAIR"),
            (1_000.0, "SLOW"),
        ],
    )
    def test_response_bands(self, total_ms: float, label: str) -> None:
        """Each response band applies strictly below its upper bound."""
        assert response_rating(total_ms)[1] == label
