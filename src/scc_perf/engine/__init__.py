"""Load generator: concurrent raw HTTP benchmarking engine."""

from scc_perf.engine.atomic import AtomicCounter
from scc_perf.engine.base import RequestExecutor
from scc_perf.engine.dispatcher import CancellationToken, ThreadedDispatcher
from scc_perf.engine.executor import RawHttpExecutor
from scc_perf.engine.models import (
    U64_MAX,
    BenchmarkConfig,
    BenchmarkResults,
    ResultsSnapshot,
)
from scc_perf.engine.suite import BenchmarkSuite, EndpointRun, PageLoadResult

__all__ = [
    "U64_MAX",
    "AtomicCounter",
    "BenchmarkConfig",
    "BenchmarkResults",
    "BenchmarkSuite",
    "CancellationToken",
    "EndpointRun",
    "PageLoadResult",
    "RawHttpExecutor",
    "RequestExecutor",
    "ResultsSnapshot",
    "ThreadedDispatcher",
]
