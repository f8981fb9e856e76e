"""Tests for the load generator domain models.

These tests verify BenchmarkConfig validation, the BenchmarkResults
aggregate under concurrent writers and the derived ResultsSnapshot values.
"""

from __future__ import annotations

import random
import threading
from dataclasses import FrozenInstanceError

import pytest

from scc_perf.engine import U64_MAX, BenchmarkConfig, BenchmarkResults, ResultsSnapshot


class TestBenchmarkConfig:
    """Test cases for the BenchmarkConfig dataclass."""

    def test_defaults(self) -> None:
        """BenchmarkConfig should default to the documented run parameters."""
        config = BenchmarkConfig()
        assert config.host == "127.0.0.1:9000"
        assert config.requests == 100
        assert config.concurrency == 10
        assert config.warmup is True
        assert config.verbose is False
        assert config.deadline is None

    def test_is_frozen(self) -> None:
        """BenchmarkConfig should be immutable."""
        config = BenchmarkConfig()
        with pytest.raises(FrozenInstanceError):
            config.requests = 5  # type: ignore[misc]

    def test_has_slots(self) -> None:
        """BenchmarkConfig should use __slots__."""
        assert hasattr(BenchmarkConfig, "__slots__")

    @pytest.mark.parametrize(
        ("requests", "concurrency", "expected"),
        [(100, 10, 10), (101, 10, 10), (9, 10, 0), (50, 1, 50)],
    )
    def test_requests_per_worker_drops_remainder(
        self, requests: int, concurrency: int, expected: int
    ) -> None:
        """requests_per_worker should use integer division."""
        config = BenchmarkConfig(requests=requests, concurrency=concurrency)
        assert config.requests_per_worker == expected

    def test_rejects_zero_concurrency(self) -> None:
        """Concurrency below one should be rejected."""
        with pytest.raises(ValueError, match="concurrency"):
            BenchmarkConfig(concurrency=0)

    def test_rejects_negative_requests(self) -> None:
        """A negative request count should be rejected."""
        with pytest.raises(ValueError, match="requests"):
            BenchmarkConfig(requests=-1)

    def test_rejects_non_positive_deadline(self) -> None:
        """A zero deadline should be rejected."""
        with pytest.raises(ValueError, match="deadline"):
            BenchmarkConfig(deadline=0)


class TestBenchmarkResults:
    """Test cases for single-threaded BenchmarkResults behaviour."""

    def test_starts_empty_with_min_sentinel(self) -> None:
        """A new aggregate should have zero counters and min at U64_MAX."""
        snapshot = BenchmarkResults().snapshot()
        assert snapshot.total_requests == 0
        assert snapshot.successful_requests == 0
        assert snapshot.failed_requests == 0
        assert snapshot.min_latency_us == U64_MAX
        assert snapshot.max_latency_us == 0

    def test_first_success_replaces_min_and_max(self) -> None:
        """The first recorded latency should become both min and max."""
        results = BenchmarkResults()
        results.record_success(2_500, 300)
        snapshot = results.snapshot()
        assert snapshot.min_latency_us == 2_500
        assert snapshot.max_latency_us == 2_500
        assert snapshot.total_bytes == 300
        assert snapshot.total_latency_us == 2_500

    def test_record_failure_touches_only_total_and_failed(self) -> None:
        """record_failure should not change bytes, latency or extremes."""
        results = BenchmarkResults()
        results.record_failure()
        snapshot = results.snapshot()
        assert snapshot.total_requests == 1
        assert snapshot.failed_requests == 1
        assert snapshot.successful_requests == 0
        assert snapshot.total_bytes == 0
        assert snapshot.total_latency_us == 0
        assert snapshot.min_latency_us == U64_MAX
        assert snapshot.max_latency_us == 0

    def test_min_and_max_track_extremes(self) -> None:
        """min/max should follow the smallest and largest latencies."""
        results = BenchmarkResults()
        for latency in (500, 120, 9_000, 3_000):
            results.record_success(latency, 1)
        snapshot = results.snapshot()
        assert snapshot.min_latency_us == 120
        assert snapshot.max_latency_us == 9_000


class TestBenchmarkResultsConcurrency:
    """Concurrent writers must never lose updates."""

    THREADS = 8
    CALLS = 1_000

    def _run_threads(self, target, count: int) -> None:
        barrier = threading.Barrier(count)

        def wrapped(index: int) -> None:
            barrier.wait()
            target(index)

        threads = [threading.Thread(target=wrapped, args=(i,)) for i in range(count)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

    def test_totals_are_exact_under_concurrency(self) -> None:
        """Counters should equal the exact sums of what every thread recorded."""
        results = BenchmarkResults()

        def work(index: int) -> None:
            for call in range(self.CALLS):
                if call % 4 == 0:
                    results.record_failure()
                else:
                    results.record_success(latency_us=10, num_bytes=3)

        self._run_threads(work, self.THREADS)
        snapshot = results.snapshot()

        failures_per_thread = len(range(0, self.CALLS, 4))
        successes_per_thread = self.CALLS - failures_per_thread
        assert snapshot.total_requests == self.THREADS * self.CALLS
        assert snapshot.failed_requests == self.THREADS * failures_per_thread
        assert snapshot.successful_requests == self.THREADS * successes_per_thread
        assert snapshot.total_requests == snapshot.successful_requests + snapshot.failed_requests
        assert snapshot.total_bytes == self.THREADS * successes_per_thread * 3
        assert snapshot.total_latency_us == self.THREADS * successes_per_thread * 10

    @pytest.mark.parametrize("seed", [1, 7, 42, 2024])
    def test_min_and_max_are_true_extremes_under_concurrency(self, seed: int) -> None:
        """Concurrent random latencies should yield the exact global min and max."""
        rng = random.Random(seed)
        latencies = [
            [rng.randint(1, 5_000_000) for _ in range(self.CALLS)] for _ in range(self.THREADS)
        ]
        results = BenchmarkResults()

        def work(index: int) -> None:
            for latency in latencies[index]:
                results.record_success(latency, 1)

        self._run_threads(work, self.THREADS)
        snapshot = results.snapshot()

        flat = [latency for per_thread in latencies for latency in per_thread]
        assert snapshot.min_latency_us == min(flat)
        assert snapshot.max_latency_us == max(flat)
        assert snapshot.total_latency_us == sum(flat)
        assert snapshot.min_latency_us <= snapshot.avg_latency_us <= snapshot.max_latency_us


class TestResultsSnapshot:
    """Test cases for derived snapshot values."""

    def _snapshot(self, **overrides: int) -> ResultsSnapshot:
        values = {
            "total_requests": 4,
            "successful_requests": 4,
            "failed_requests": 0,
            "total_bytes": 400,
            "total_latency_us": 10_000,
            "min_latency_us": 1_000,
            "max_latency_us": 4_000,
        }
        values.update(overrides)
        return ResultsSnapshot(**values)

    def test_avg_latency_uses_integer_division(self) -> None:
        """avg_latency_us should divide total latency by successful requests."""
        assert self._snapshot(total_latency_us=10_001).avg_latency_us == 2_500

    def test_avg_latency_is_zero_without_successes(self) -> None:
        """avg_latency_us should be 0 when nothing succeeded."""
        assert self._snapshot(successful_requests=0).avg_latency_us == 0

    def test_reported_min_hides_sentinel(self) -> None:
        """reported_min_latency_us should be 0 instead of U64_MAX when nothing succeeded."""
        snapshot = self._snapshot(successful_requests=0, min_latency_us=U64_MAX)
        assert snapshot.reported_min_latency_us == 0

    def test_throughput(self) -> None:
        """throughput should be successful requests per second."""
        assert self._snapshot().throughput(2.0) == 2.0

    def test_throughput_zero_duration(self) -> None:
        """throughput should be 0.0 for a zero duration."""
        assert self._snapshot().throughput(0.0) == 0.0
