"""South City Computer performance toolkit.

A concurrent raw-HTTP load generator and a network diagnostics client for
measuring the business website's server and the path to it.
"""

from scc_perf.diagnostics import (
    NetworkDiagnostics,
    PerformanceMetrics,
    PhaseTimer,
    TraceHop,
    TracerouteInvoker,
)
from scc_perf.engine import (
    BenchmarkConfig,
    BenchmarkResults,
    BenchmarkSuite,
    CancellationToken,
    RawHttpExecutor,
    ThreadedDispatcher,
)
from scc_perf.errors import PerfError, PhaseError, RequestError

__version__ = "0.1.0"

__all__ = [
    "BenchmarkConfig",
    "BenchmarkResults",
    "BenchmarkSuite",
    "CancellationToken",
    "NetworkDiagnostics",
    "PerfError",
    "PerformanceMetrics",
    "PhaseError",
    "PhaseTimer",
    "RawHttpExecutor",
    "RequestError",
    "ThreadedDispatcher",
    "TraceHop",
    "TracerouteInvoker",
]
