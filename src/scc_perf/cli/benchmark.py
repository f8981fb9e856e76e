#!/usr/bin/env python3
"""Server performance benchmark for the South City Computer website.

Measures response times and throughput of the site's endpoints by driving
concurrent raw HTTP GET requests against a running server.

Usage:
    scc-benchmark [OPTIONS] [COMMAND]

Commands:
    full            Run the full benchmark suite (default)
    quick           Quick connectivity test
    endpoint PATH   Benchmark a single endpoint
    help            Show this help message
"""

from __future__ import annotations

import argparse
import logging
import signal
import sys
import threading
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from types import FrameType

from scc_perf import config
from scc_perf.engine import BenchmarkConfig, BenchmarkSuite, CancellationToken
from scc_perf.errors import RequestError
from scc_perf.observability import configure_logging, log_event
from scc_perf.report import (
    format_latency,
    render_benchmark_report,
    render_page_load,
    render_page_load_header,
    render_page_load_rating,
    render_suite_banner,
)

logger = logging.getLogger(__name__)

COMMANDS = ("full", "quick", "endpoint", "help")

EXAMPLES = """\
examples:
  scc-benchmark                             # Full suite on localhost:9000
  scc-benchmark -h 192.168.1.100:9000       # Test remote server
  scc-benchmark -n 1000 -c 50               # Heavy load test
  scc-benchmark quick                       # Quick connectivity check
  scc-benchmark endpoint /images/logo.webp  # Single endpoint
"""


def build_parser() -> argparse.ArgumentParser:
    # -h is the target host, so argparse's own -h is disabled.
    parser = argparse.ArgumentParser(
        prog="scc-benchmark",
        description="South City Computer - Performance Benchmark Tool",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    parser.add_argument(
        "command",
        nargs="?",
        default="full",
        help="full (default), quick, endpoint, help; a bare /path implies endpoint",
    )
    parser.add_argument("path", nargs="?", help="Path for the endpoint command")
    parser.add_argument(
        "-h",
        "--host",
        default=config.DEFAULT_HOST,
        help=f"Target host (default: {config.DEFAULT_HOST})",
    )
    parser.add_argument(
        "-n",
        "--requests",
        type=int,
        default=config.DEFAULT_REQUESTS,
        help=f"Number of requests per test (default: {config.DEFAULT_REQUESTS})",
    )
    parser.add_argument(
        "-c",
        "--concurrency",
        type=int,
        default=config.DEFAULT_CONCURRENCY,
        help=f"Concurrent connections (default: {config.DEFAULT_CONCURRENCY})",
    )
    parser.add_argument(
        "-w",
        "--no-warmup",
        dest="warmup",
        action="store_false",
        help="Skip warmup requests",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument(
        "-d",
        "--deadline",
        type=float,
        default=None,
        help="Stop issuing requests after this many seconds",
    )
    parser.add_argument("--help", action="help", help="Show this help message")
    return parser


def resolve_command(command: str, path: str | None) -> tuple[str, str | None]:
    """Map the positional arguments onto (command, endpoint path).

    A bare token starting with "/" is an implicit endpoint path.

    Raises:
        ValueError: For an unrecognized command.
    """
    if command.startswith("/"):
        return "endpoint", command
    if command not in COMMANDS:
        raise ValueError(f"unknown command: {command}")
    if command != "endpoint" and path is not None and path.startswith("/"):
        return "endpoint", path
    return command, path


@contextmanager
def cancel_on_interrupt(token: CancellationToken) -> Iterator[None]:
    """Route the first Ctrl-C to ``token``; a second one interrupts for real."""

    def handler(signum: int, frame: FrameType | None) -> None:
        if not token.is_running():
            raise KeyboardInterrupt
        log_event(logger, "benchmark_cancelled", level=logging.WARNING, signal=signum)
        print("\nCancelling... waiting for in-flight requests", file=sys.stderr)
        token.cancel()

    if threading.current_thread() is not threading.main_thread():
        yield
        return

    previous = signal.signal(signal.SIGINT, handler)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


def run_full_suite(suite: BenchmarkSuite) -> None:
    print()
    print(render_suite_banner(suite.config))

    for run in suite.run_endpoints(progress=print):
        print()
        print(render_benchmark_report(run.name, run.snapshot, run.duration_s))

    print()
    print(render_page_load_header())

    page_load = suite.simulate_page_load()
    for path, error in page_load.failures:
        print(f"  Failed to load {path}: {error}", file=sys.stderr)

    print()
    print(render_page_load(page_load))
    print()
    print(render_page_load_rating(page_load.duration_ms))
    print()


def run_quick_test(suite: BenchmarkSuite) -> int:
    print()
    print(f"Quick connectivity test to {suite.config.host}...")
    try:
        latency_us = suite.quick_check()
    except (RequestError, OSError, ValueError) as e:
        print(f"✗ Server not responding: {e}")
        return 1
    print(f"✓ Server responding - latency: {format_latency(latency_us)}")
    return 0


def run_endpoint(suite: BenchmarkSuite, path: str) -> None:
    run = suite.benchmark_endpoint(path, path, progress=print)
    print()
    print(render_benchmark_report(run.name, run.snapshot, run.duration_s))


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the benchmark tool.

    Returns:
        Exit code (0 for success, 1 for error).
    """
    parser = build_parser()
    args = parser.parse_intermixed_args(argv)

    try:
        command, path = resolve_command(args.command, args.path)
        bench_config = BenchmarkConfig(
            host=args.host,
            requests=args.requests,
            concurrency=args.concurrency,
            warmup=args.warmup,
            verbose=args.verbose,
            deadline=args.deadline,
        )
    except ValueError as e:
        parser.error(str(e))

    configure_logging(args.verbose)

    if command == "help":
        parser.print_help()
        return 0

    if command == "endpoint" and not path:
        print("Error: endpoint command requires a path", file=sys.stderr)
        print("Usage: scc-benchmark endpoint /path/to/resource", file=sys.stderr)
        return 1

    token = CancellationToken()
    suite = BenchmarkSuite(bench_config, cancel=token)

    with cancel_on_interrupt(token):
        if command == "quick":
            return run_quick_test(suite)
        if command == "endpoint":
            run_endpoint(suite, path)
        else:
            run_full_suite(suite)
    return 0


if __name__ == "__main__":
    sys.exit(main())
