"""Text formatting and ASCII rendering of benchmark and diagnostics results."""

from scc_perf.report.formatting import (
    format_bytes,
    format_latency,
    page_load_rating,
    response_rating,
)
from scc_perf.report.render import (
    render_benchmark_report,
    render_page_load,
    render_page_load_header,
    render_page_load_rating,
    render_performance_metrics,
    render_route,
    render_suite_banner,
    render_test_banner,
    render_test_summary,
    route_markers,
)

__all__ = [
    "format_bytes",
    "format_latency",
    "page_load_rating",
    "render_benchmark_report",
    "render_page_load",
    "render_page_load_header",
    "render_page_load_rating",
    "render_performance_metrics",
    "render_route",
    "render_suite_banner",
    "render_test_banner",
    "render_test_summary",
    "response_rating",
    "route_markers",
]
