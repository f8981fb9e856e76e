"""Fixed-width ASCII box reports and route visualization.

Every function here is pure: it takes result data and returns the text to
print. Nothing in this module touches the network or shared state.
"""

from __future__ import annotations

from collections.abc import Mapping

from scc_perf import config
from scc_perf.diagnostics.models import NetworkDiagnostics, PerformanceMetrics, TraceHop
from scc_perf.engine.models import BenchmarkConfig, ResultsSnapshot
from scc_perf.engine.suite import PageLoadResult
from scc_perf.report.formatting import (
    format_bytes,
    format_latency,
    page_load_rating,
    response_rating,
)

REPORT_WIDTH = 61
BANNER_WIDTH = 63
ROUTE_WIDTH = 75
WATERFALL_WIDTH = 40

MARKER_TARGET = "◉"
MARKER_RESPONDING = "●"
MARKER_SILENT = "○"


def _light_box(rows: list[str | None], width: int = REPORT_WIDTH) -> str:
    """Single-line box; a None row becomes a separator."""
    lines = ["┌" + "─" * width + "┐"]
    for row in rows:
        if row is None:
            lines.append("├" + "─" * width + "┤")
        else:
            lines.append("│" + row.ljust(width)[:width] + "│")
    lines.append("└" + "─" * width + "┘")
    return "\n".join(lines)


def _heavy_box(rows: list[str | None], width: int = BANNER_WIDTH) -> str:
    """Double-line box; a None row becomes a separator."""
    lines = ["╔" + "═" * width + "╗"]
    for row in rows:
        if row is None:
            lines.append("╠" + "═" * width + "╣")
        else:
            lines.append("║" + row.ljust(width)[:width] + "║")
    lines.append("╚" + "═" * width + "╝")
    return "\n".join(lines)


def render_suite_banner(bench_config: BenchmarkConfig) -> str:
    return _heavy_box(
        [
            "     SOUTH CITY COMPUTER - Performance Benchmark Suite",
            None,
            f"  Target: {bench_config.host}",
            f"  Requests per test: {bench_config.requests:>6}",
            f"  Concurrency: {bench_config.concurrency:>6}",
        ]
    )


def render_benchmark_report(name: str, snapshot: ResultsSnapshot, duration_s: float) -> str:
    """Aggregate statistics of one endpoint benchmark.

    Args:
        name: Endpoint display name.
        snapshot: Counters read after all workers joined.
        duration_s: Measured wall-clock duration.

    Returns:
        The boxed report, without a trailing newline.
    """
    throughput = snapshot.throughput(duration_s)
    return _light_box(
        [
            f"  {name}",
            None,
            f"  Requests:     {snapshot.total_requests:>10} total, "
            f"{snapshot.successful_requests:>10} ok, {snapshot.failed_requests:>6} fail",
            f"  Throughput:   {throughput:>10.2f} req/s",
            f"  Data:         {format_bytes(snapshot.total_bytes):>10}",
            None,
            "  Latency:",
            f"    Min:        {format_latency(snapshot.reported_min_latency_us):>10}",
            f"    Avg:        {format_latency(snapshot.avg_latency_us):>10}",
            f"    Max:        {format_latency(snapshot.max_latency_us):>10}",
        ]
    )


def render_page_load_header() -> str:
    return _heavy_box(["  Full Page Load Simulation (Above-the-fold assets)"])


def render_page_load(result: PageLoadResult) -> str:
    status = "SUCCESS" if result.all_success else "FAILED"
    return _light_box(
        [
            "  Full Page Load Results",
            None,
            f"  Assets loaded:   {len(result.assets):>5}",
            f"  Total size:      {format_bytes(result.total_bytes):>10}",
            f"  Load time:       {format_latency(result.duration_us):>10}",
            f"  Status:          {status:>10}",
        ]
    )


def render_page_load_rating(duration_ms: float) -> str:
    stars, label, note = page_load_rating(duration_ms)
    return _heavy_box(
        [
            "  BENCHMARK COMPLETE",
            None,
            f"  Rating: {stars} {label} ({note})",
        ]
    )


def route_markers(hops: tuple[TraceHop, ...]) -> str:
    """Horizontal hop sequence, e.g. "●───○───◉──→".

    At most 15 hops are drawn; spacing shrinks as the hop count grows.
    """
    shown = hops[: config.MAX_ROUTE_MARKERS]
    spacing = 70 // max(len(shown), 1)
    parts: list[str] = []
    for index, hop in enumerate(shown):
        if hop.is_target:
            parts.append(MARKER_TARGET)
        elif hop.responded:
            parts.append(MARKER_RESPONDING)
        else:
            parts.append(MARKER_SILENT)
        if index < len(shown) - 1:
            parts.append("─" * max(spacing - 1, 0))
    return "".join(parts) + "──→"


def hop_status(hop: TraceHop) -> str:
    if hop.is_target:
        return f"{MARKER_TARGET} TARGET"
    if not hop.responded:
        return f"{MARKER_SILENT} No response"
    if hop.is_slow:
        return f"{MARKER_RESPONDING} Slow"
    return f"{MARKER_RESPONDING} OK"


def hop_row(hop: TraceHop) -> str:
    ip = hop.ip_address or "* * *"
    avg = hop.avg_rtt_ms
    rtt = "timeout" if avg is None else f"{avg:.2f}"
    return f"  {hop.hop_number:>3} │ {ip:^18} │ {rtt:^17} │ {hop_status(hop):^24}"


def render_route(diag: NetworkDiagnostics) -> str:
    """Two-part route visualization: marker line then per-hop table."""
    rows: list[str | None] = [f"  NETWORK ROUTE TO: {diag.target:^53}", None]
    if diag.resolved_ip:
        rows.append(f"  Resolved IP: {diag.resolved_ip:^58}")
    rows.append(f"  Total Hops: {diag.total_hops:^3}    Packet Loss: {diag.packet_loss:>5.1f}%")
    rows.extend(
        [
            None,
            "",
            "  YOUR PC" + " " * 55 + "TARGET",
            "      │" + " " * 59 + "│",
            "      " + route_markers(diag.hops),
            "",
            None,
            "  HOP │ IP ADDRESS         │ RTT (ms)          │ STATUS",
            None,
        ]
    )
    rows.extend(hop_row(hop) for hop in diag.hops)

    legend = (
        f"Legend: {MARKER_RESPONDING} Responding hop   "
        f"{MARKER_SILENT} No response/timeout   {MARKER_TARGET} Target reached"
    )
    return _heavy_box(rows, ROUTE_WIDTH) + "\n\n" + legend


def _bar(phase_ms: float, total_ms: float, fill: str) -> str:
    width = int(phase_ms / total_ms * WATERFALL_WIDTH) if total_ms > 0 else 0
    return (fill * max(width, 1)).ljust(WATERFALL_WIDTH)


def render_performance_metrics(metrics: PerformanceMetrics, url: str) -> str:
    """Status, size, a proportional timing waterfall and a rating."""
    total = metrics.total_ms
    rule = "  " + "─" * 57
    stars, label, note = response_rating(total)
    return _heavy_box(
        [
            f"  PERFORMANCE METRICS: {url:^40}",
            None,
            f"  HTTP Status: {metrics.status_code:>3}",
            f"  Response Size: {metrics.response_size:>10} bytes",
            None,
            "",
            "  TIMING BREAKDOWN",
            rule,
            f"  DNS Lookup    │{_bar(metrics.dns_lookup_ms, total, '░')}│ {metrics.dns_lookup_ms:>8.2f}ms",
            f"  TCP Connect   │{_bar(metrics.tcp_connect_ms, total, '▒')}│ {metrics.tcp_connect_ms:>8.2f}ms",
            f"  TTFB          │{_bar(metrics.ttfb_ms, total, '▓')}│ {metrics.ttfb_ms:>8.2f}ms",
            f"  Download      │{_bar(metrics.download_ms, total, '█')}│ {metrics.download_ms:>8.2f}ms",
            rule,
            f"  TOTAL         │{'█' * WATERFALL_WIDTH}│ {total:>8.2f}ms",
            "",
            None,
            f"  Rating: {stars} {label} - {note}",
        ],
        width=ROUTE_WIDTH,
    )


def render_test_banner(host: str) -> str:
    return _heavy_box(
        [
            "     SOUTH CITY COMPUTER - Client Performance & Network Diagnostics",
            None,
            f"  Target: {host:^65}",
        ],
        width=ROUTE_WIDTH,
    )


def render_test_summary(tested: int, results: Mapping[str, PerformanceMetrics]) -> str:
    """Summary of a multi-endpoint performance test.

    Args:
        tested: Number of endpoints attempted.
        results: Metrics of the endpoints that completed, keyed by name.
    """
    total_size = sum(m.response_size for m in results.values())
    avg_time = sum(m.total_ms for m in results.values()) / max(len(results), 1)
    successful = sum(1 for m in results.values() if m.status_code == 200)
    return _heavy_box(
        [
            "  SUMMARY",
            None,
            f"  Endpoints tested: {tested:>5}",
            f"  Successful:       {successful:>5}",
            f"  Total data:       {total_size:>10} bytes",
            f"  Average time:     {avg_time:>10.2f} ms",
        ]
    )
