"""Network diagnostics: request phase timing and route tracing."""

from scc_perf.diagnostics.models import (
    NetworkDiagnostics,
    PerformanceMetrics,
    TraceHop,
    packet_loss,
)
from scc_perf.diagnostics.timer import PhaseTimer, split_url
from scc_perf.diagnostics.traceroute import (
    Tracer,
    TracerouteInvoker,
    parse_hop_line,
    parse_traceroute_output,
)

__all__ = [
    "NetworkDiagnostics",
    "PerformanceMetrics",
    "PhaseTimer",
    "TraceHop",
    "Tracer",
    "TracerouteInvoker",
    "packet_loss",
    "parse_hop_line",
    "parse_traceroute_output",
    "split_url",
]
