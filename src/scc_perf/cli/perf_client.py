#!/usr/bin/env python3
"""Client performance and network diagnostics tool.

Measures load times phase by phase, runs traceroute and visualizes the
network path to the target.

Usage:
    scc-perf-client [COMMAND] [TARGET]

Commands:
    test <host>      Run full performance test (default)
    trace <host>     Run traceroute and visualize network path
    measure <url>    Measure single URL performance
    help             Show this help message
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from scc_perf import config
from scc_perf.diagnostics import PerformanceMetrics, PhaseTimer, TracerouteInvoker, split_url
from scc_perf.errors import PerfError
from scc_perf.observability import configure_logging, log_event
from scc_perf.report import (
    render_performance_metrics,
    render_route,
    render_test_banner,
    render_test_summary,
)

logger = logging.getLogger(__name__)

EXAMPLES = """\
examples:
  scc-perf-client test southcitycomputer.com
  scc-perf-client trace google.com
  scc-perf-client measure http://localhost:9000/
  scc-perf-client example.org      same as "test example.org"; a mistyped
                                   command is also tested as a host
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scc-perf-client",
        description="South City Computer - Client Performance & Network Diagnostics",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "command",
        nargs="?",
        help="test, trace, measure or help; any other value is a host to test",
    )
    parser.add_argument("target", nargs="?", help="Host for test/trace, URL for measure")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log diagnostics to stderr")
    return parser


def run_full_performance_test(host: str, timer: PhaseTimer | None = None) -> int:
    """Measure every endpoint in the performance suite against ``host``."""
    timer = timer or PhaseTimer()

    print()
    print(render_test_banner(host))
    print()
    print(f"Testing {len(config.PERF_TEST_ENDPOINTS)} endpoints...")

    results: dict[str, PerformanceMetrics] = {}
    for path, name in config.PERF_TEST_ENDPOINTS:
        print(f"  {name} {path}... ", end="", flush=True)
        try:
            metrics = timer.measure(host, path)
        except (PerfError, OSError, ValueError) as e:
            print(f"FAILED: {e}")
            continue
        print(f"{metrics.total_ms:.2f}ms ✓")
        results[name] = metrics

    homepage = results.get("Homepage")
    if homepage is not None:
        print()
        print(render_performance_metrics(homepage, f"http://{host}/"))

    print()
    print(render_test_summary(len(config.PERF_TEST_ENDPOINTS), results))
    return 0


def run_trace(target: str, tracer: TracerouteInvoker | None = None) -> int:
    tracer = tracer or TracerouteInvoker()
    print(f"Running traceroute to {target}...")
    print()
    try:
        diag = tracer.trace(target)
    except PerfError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print()
    print(render_route(diag))
    print()
    return 0


def run_measure(url: str, timer: PhaseTimer | None = None) -> int:
    timer = timer or PhaseTimer()
    host, path = split_url(url)
    try:
        metrics = timer.measure(host, path)
    except (PerfError, OSError, ValueError) as e:
        phase = getattr(e, "phase", None)
        log_event(logger, "measure_failed", level=logging.WARNING, url=url, phase=phase)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(render_performance_metrics(metrics, url))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the diagnostics client.

    Returns:
        Exit code (0 for success, 1 for error).
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    command = args.command
    if command is None or command == "help":
        parser.print_help()
        return 0

    if command == "test":
        return run_full_performance_test(args.target or config.DEFAULT_TARGET)
    if command == "trace":
        return run_trace(args.target or config.DEFAULT_TARGET)
    if command == "measure":
        if not args.target:
            print("Usage: scc-perf-client measure <url>", file=sys.stderr)
            return 1
        return run_measure(args.target)

    # Anything else is a host to test.
    return run_full_performance_test(command)


if __name__ == "__main__":
    sys.exit(main())
