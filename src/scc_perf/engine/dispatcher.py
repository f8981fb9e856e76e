"""Threaded request dispatcher.

This module spreads a benchmark run over a fixed number of worker threads
using ThreadPoolExecutor. Workers share the read-only BenchmarkConfig and the
BenchmarkResults aggregate; nothing else is shared.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor

from scc_perf.engine.base import RequestExecutor
from scc_perf.engine.executor import RawHttpExecutor
from scc_perf.engine.models import BenchmarkConfig, BenchmarkResults
from scc_perf.errors import RequestError
from scc_perf.observability import log_event

logger = logging.getLogger(__name__)


class CancellationToken:
    """Shared run flag checked by every worker before each request.

    The underlying event is set while the run may continue. Cancelling clears
    it; workers notice at their next check, never mid-request.
    """

    def __init__(self) -> None:
        self._running = threading.Event()
        self._running.set()

    def is_running(self) -> bool:
        return self._running.is_set()

    def cancel(self) -> None:
        self._running.clear()


class ThreadedDispatcher:
    """Runs a benchmark across ``config.concurrency`` worker threads.

    The total request count is divided evenly across workers using integer
    division; any remainder is dropped. Request errors are absorbed into the
    failure counter. Any other error ends its worker and is re-raised from
    ``run()`` after the pool has shut down.

    Attributes:
        executor: The RequestExecutor each worker calls.

    Example:
        >>> dispatcher = ThreadedDispatcher()
        >>> results = BenchmarkResults()
        >>> dispatcher.run(BenchmarkConfig(requests=100, concurrency=10), "/", results)
        >>> results.snapshot().total_requests
        100
    """

    def __init__(self, executor: RequestExecutor | None = None) -> None:
        self._executor = executor or RawHttpExecutor()

    @property
    def executor(self) -> RequestExecutor:
        return self._executor

    def run(
        self,
        config: BenchmarkConfig,
        path: str,
        results: BenchmarkResults,
        cancel: CancellationToken | None = None,
    ) -> None:
        """Issue the configured requests and block until every worker exits.

        Returning from this method is the point after which ``results`` may be
        read without further synchronization.

        Args:
            config: Run parameters.
            path: Request path to benchmark.
            results: Aggregate updated by the workers.
            cancel: Shared cancellation token; a fresh running one if omitted.

        Raises:
            Exception: The first unexpected error raised inside a worker, once
                all workers have exited.
        """
        token = cancel or CancellationToken()
        per_worker = config.requests_per_worker

        deadline_timer: threading.Timer | None = None
        if config.deadline is not None:
            deadline_timer = threading.Timer(config.deadline, self._expire, args=(token, config.deadline))
            deadline_timer.daemon = True
            deadline_timer.start()

        try:
            with ThreadPoolExecutor(
                max_workers=config.concurrency, thread_name_prefix="bench-worker"
            ) as pool:
                futures = [
                    pool.submit(self._worker, config.host, path, per_worker, results, token)
                    for _ in range(config.concurrency)
                ]
            # Re-raise anything a worker did not absorb as a request failure.
            for future in futures:
                future.result()
        finally:
            if deadline_timer is not None:
                deadline_timer.cancel()

    def _worker(
        self,
        host: str,
        path: str,
        count: int,
        results: BenchmarkResults,
        token: CancellationToken,
    ) -> None:
        for _ in range(count):
            if not token.is_running():
                break
            try:
                latency_us, num_bytes = self._executor.execute(host, path)
            except (RequestError, OSError, ValueError):
                results.record_failure()
            else:
                results.record_success(latency_us, num_bytes)

    @staticmethod
    def _expire(token: CancellationToken, deadline: float) -> None:
        log_event(logger, "benchmark_deadline_reached", level=logging.WARNING, deadline_s=deadline)
        token.cancel()
