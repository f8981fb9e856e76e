"""Benchmark suite orchestration.

Combines warmup, the threaded dispatcher and the page load simulation into
the operations exposed by the ``scc-benchmark`` command line.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from scc_perf import config as settings
from scc_perf.engine.dispatcher import CancellationToken, ThreadedDispatcher
from scc_perf.engine.executor import RawHttpExecutor
from scc_perf.engine.models import BenchmarkConfig, BenchmarkResults, ResultsSnapshot
from scc_perf.errors import RequestError
from scc_perf.observability import log_event

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str], None]


@dataclass(frozen=True, slots=True)
class EndpointRun:
    """Outcome of benchmarking one endpoint.

    Attributes:
        name: Display name.
        path: Request path.
        snapshot: Aggregate statistics read after all workers joined.
        duration_s: Wall-clock duration of the measured phase in seconds.
    """

    name: str
    path: str
    snapshot: ResultsSnapshot
    duration_s: float


@dataclass(frozen=True, slots=True)
class PageLoadResult:
    """Outcome of fetching the above-the-fold assets sequentially.

    Attributes:
        assets: Paths requested, in order.
        total_bytes: Bytes received across successful fetches.
        duration_us: Wall-clock time for the whole sequence.
        failures: (path, error message) for each asset that failed.
    """

    assets: tuple[str, ...]
    total_bytes: int
    duration_us: int
    failures: tuple[tuple[str, str], ...]

    @property
    def all_success(self) -> bool:
        return not self.failures

    @property
    def duration_ms(self) -> float:
        return self.duration_us / 1000


class BenchmarkSuite:
    """Runs endpoint benchmarks, the page load simulation and quick checks.

    Args:
        config: Run parameters shared by every operation.
        executor: Request executor; a RawHttpExecutor if omitted.
        cancel: Cancellation token shared with the workers.
    """

    def __init__(
        self,
        config: BenchmarkConfig,
        executor: RawHttpExecutor | None = None,
        cancel: CancellationToken | None = None,
    ) -> None:
        self._config = config
        self._executor = executor or RawHttpExecutor()
        self._dispatcher = ThreadedDispatcher(self._executor)
        self._cancel = cancel or CancellationToken()

    @property
    def config(self) -> BenchmarkConfig:
        return self._config

    @property
    def cancel_token(self) -> CancellationToken:
        return self._cancel

    def warmup(self, path: str, count: int = settings.WARMUP_REQUESTS) -> None:
        """Issue ``count`` sequential requests whose outcome is discarded."""
        for _ in range(count):
            if not self._cancel.is_running():
                return
            try:
                self._executor.execute(self._config.host, path)
            except (RequestError, OSError, ValueError):
                continue

    def benchmark_endpoint(
        self, name: str, path: str, progress: ProgressCallback | None = None
    ) -> EndpointRun:
        """Warm up (if enabled) and benchmark a single path.

        Args:
            name: Display name for the report.
            path: Request path.
            progress: Receives human-readable progress lines in verbose mode.

        Returns:
            The endpoint's aggregate statistics and measured duration.
        """
        config = self._config
        if config.warmup:
            if config.verbose and progress:
                progress(f"  Warming up {name} ({settings.WARMUP_REQUESTS} requests)...")
            self.warmup(path)

        if config.verbose and progress:
            progress(
                f"  Benchmarking {name} ({config.requests} requests, "
                f"{config.concurrency} concurrent)..."
            )

        log_event(
            logger,
            "benchmark_started",
            endpoint=path,
            requests=config.requests,
            concurrency=config.concurrency,
        )
        results = BenchmarkResults()
        start_time = time.perf_counter()
        self._dispatcher.run(config, path, results, self._cancel)
        duration_s = time.perf_counter() - start_time

        snapshot = results.snapshot()
        log_event(
            logger,
            "benchmark_finished",
            endpoint=path,
            total=snapshot.total_requests,
            failed=snapshot.failed_requests,
            duration_s=round(duration_s, 3),
        )
        return EndpointRun(name=name, path=path, snapshot=snapshot, duration_s=duration_s)

    def run_endpoints(
        self,
        endpoints: Iterable[tuple[str, str]] = settings.BENCHMARK_ENDPOINTS,
        progress: ProgressCallback | None = None,
    ) -> list[EndpointRun]:
        """Benchmark each (name, path) pair in order, stopping once cancelled."""
        runs: list[EndpointRun] = []
        for name, path in endpoints:
            if not self._cancel.is_running():
                break
            runs.append(self.benchmark_endpoint(name, path, progress))
        return runs

    def simulate_page_load(
        self, assets: Iterable[str] = settings.PAGE_LOAD_ASSETS
    ) -> PageLoadResult:
        """Fetch every asset once, sequentially, as a browser's first paint would."""
        paths = tuple(assets)
        total_bytes = 0
        failures: list[tuple[str, str]] = []

        start_time = time.perf_counter()
        for path in paths:
            try:
                _, body = self._executor.fetch(self._config.host, path)
            except (RequestError, OSError, ValueError) as e:
                failures.append((path, str(e)))
            else:
                total_bytes += len(body)
        duration_us = int((time.perf_counter() - start_time) * 1_000_000)

        return PageLoadResult(
            assets=paths,
            total_bytes=total_bytes,
            duration_us=duration_us,
            failures=tuple(failures),
        )

    def quick_check(self, path: str = settings.HEALTH_PATH) -> int:
        """Probe ``path`` once.

        Returns:
            Latency in microseconds.

        Raises:
            RequestError: If the server did not answer with a 200.
        """
        latency_us, _ = self._executor.execute(self._config.host, path)
        return latency_us
