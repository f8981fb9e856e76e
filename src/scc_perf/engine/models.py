"""Domain models for the load generator.

This module defines the run configuration shared by all workers and the
aggregate that workers update concurrently.
"""

from __future__ import annotations

from dataclasses import dataclass

from scc_perf import config
from scc_perf.engine.atomic import AtomicCounter

U64_MAX: int = 2**64 - 1


@dataclass(frozen=True, slots=True)
class BenchmarkConfig:
    """Immutable parameters of a benchmark run.

    Created once from command-line arguments and shared by reference across
    every worker thread.

    Attributes:
        host: Target as "host:port" (default: 127.0.0.1:9000).
        requests: Total requests per benchmarked endpoint (default: 100).
        concurrency: Number of worker threads (default: 10).
        warmup: Issue discarded warmup requests first (default: True).
        verbose: Print progress lines (default: False).
        deadline: Seconds after which workers stop issuing requests (default: None).
    """

    host: str = config.DEFAULT_HOST
    requests: int = config.DEFAULT_REQUESTS
    concurrency: int = config.DEFAULT_CONCURRENCY
    warmup: bool = True
    verbose: bool = False
    deadline: float | None = None

    def __post_init__(self) -> None:
        if self.requests < 0:
            raise ValueError("requests must be non-negative")
        if self.concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        if self.deadline is not None and self.deadline <= 0:
            raise ValueError("deadline must be positive")

    @property
    def requests_per_worker(self) -> int:
        """Requests issued by each worker; the remainder is dropped."""
        return self.requests // self.concurrency


@dataclass(frozen=True, slots=True)
class ResultsSnapshot:
    """Plain values read from BenchmarkResults after all workers joined.

    Attributes:
        total_requests: Requests attempted.
        successful_requests: Requests that returned a literal 200.
        failed_requests: Requests that failed for any reason.
        total_bytes: Response bytes received by successful requests.
        total_latency_us: Sum of successful request latencies.
        min_latency_us: Smallest latency, U64_MAX if nothing succeeded.
        max_latency_us: Largest latency, 0 if nothing succeeded.
    """

    total_requests: int
    successful_requests: int
    failed_requests: int
    total_bytes: int
    total_latency_us: int
    min_latency_us: int
    max_latency_us: int

    @property
    def avg_latency_us(self) -> int:
        if self.successful_requests == 0:
            return 0
        return self.total_latency_us // self.successful_requests

    @property
    def reported_min_latency_us(self) -> int:
        """Minimum latency for display, 0 instead of the U64_MAX sentinel."""
        if self.successful_requests == 0:
            return 0
        return self.min_latency_us

    def throughput(self, duration_s: float) -> float:
        """Successful requests per second over ``duration_s``."""
        if duration_s <= 0:
            return 0.0
        return self.successful_requests / duration_s


class BenchmarkResults:
    """Aggregate statistics updated concurrently by worker threads.

    Every field is an independent AtomicCounter; no lock spans more than one
    counter. The running minimum starts at U64_MAX so the first recorded
    latency always replaces it.

    Example:
        >>> results = BenchmarkResults()
        >>> results.record_success(1500, 512)
        >>> results.record_failure()
        >>> results.snapshot().total_requests
        2
    """

    def __init__(self) -> None:
        self.total_requests = AtomicCounter()
        self.successful_requests = AtomicCounter()
        self.failed_requests = AtomicCounter()
        self.total_bytes = AtomicCounter()
        self.total_latency_us = AtomicCounter()
        self.min_latency_us = AtomicCounter(U64_MAX)
        self.max_latency_us = AtomicCounter(0)

    def record_success(self, latency_us: int, num_bytes: int) -> None:
        """Record one successful request.

        Args:
            latency_us: Request latency in microseconds.
            num_bytes: Size of the full response in bytes.
        """
        self.total_requests.fetch_add(1)
        self.successful_requests.fetch_add(1)
        self.total_bytes.fetch_add(num_bytes)
        self.total_latency_us.fetch_add(latency_us)

        current_min = self.min_latency_us.load()
        while latency_us < current_min:
            swapped, current_min = self.min_latency_us.compare_exchange(current_min, latency_us)
            if swapped:
                break

        current_max = self.max_latency_us.load()
        while latency_us > current_max:
            swapped, current_max = self.max_latency_us.compare_exchange(current_max, latency_us)
            if swapped:
                break

    def record_failure(self) -> None:
        """Record one failed request."""
        self.total_requests.fetch_add(1)
        self.failed_requests.fetch_add(1)

    def snapshot(self) -> ResultsSnapshot:
        """Read every counter.

        Only consistent once all writers have finished; the dispatcher's join
        provides that point.
        """
        return ResultsSnapshot(
            total_requests=self.total_requests.load(),
            successful_requests=self.successful_requests.load(),
            failed_requests=self.failed_requests.load(),
            total_bytes=self.total_bytes.load(),
            total_latency_us=self.total_latency_us.load(),
            min_latency_us=self.min_latency_us.load(),
            max_latency_us=self.max_latency_us.load(),
        )
