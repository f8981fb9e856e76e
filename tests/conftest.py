"""Pytest configuration and fixtures for scc-perf tests."""

from __future__ import annotations

import threading
from collections.abc import AsyncIterator, Callable

import pytest
import pytest_asyncio

from benchmarks.mock_server import MockServer, MockServerConfig, MockServerFixture
from scc_perf.errors import ConnectError


class StubExecutor:
    """Thread-safe RequestExecutor returning canned results.

    Every ``fail_every``-th call raises ConnectError; all others succeed with
    the configured latency and size.
    """

    def __init__(self, latency_us: int = 1_000, num_bytes: int = 100, fail_every: int = 0) -> None:
        self.latency_us = latency_us
        self.num_bytes = num_bytes
        self.fail_every = fail_every
        self.calls = 0
        self.paths: list[str] = []
        self._lock = threading.Lock()

    def execute(self, host: str, path: str) -> tuple[int, int]:
        with self._lock:
            self.calls += 1
            call_number = self.calls
            self.paths.append(path)
        if self.fail_every and call_number % self.fail_every == 0:
            raise ConnectError("Connection failed: refused")
        return self.latency_us, self.num_bytes

    def fetch(self, host: str, path: str) -> tuple[int, bytes]:
        latency_us, num_bytes = self.execute(host, path)
        return latency_us, b"x" * num_bytes


@pytest.fixture()
def make_executor() -> Callable[..., StubExecutor]:
    """Factory for StubExecutor instances."""
    return StubExecutor


@pytest.fixture()
def traceroute_output() -> str:
    """Numeric traceroute output with one silent hop and the target last."""
    return (
        "traceroute to example.com (93.184.216.34), 30 hops max, 60 byte packets\n"
        " 1  192.168.1.1  1.123 ms  0.982 ms  1.045 ms\n"
        " 2  10.0.0.1  8.201 ms  7.950 ms  8.333 ms\n"
        " 3  * * *\n"
        " 4  72.14.215.85  120.411 ms  98.002 ms  101.750 ms\n"
        " 5  93.184.216.34  25.310 ms  24.987 ms  25.002 ms\n"
    )


@pytest.fixture()
def tracert_output() -> str:
    """Windows tracert output for a clean two hop route to the target."""
    return (
        "\r\n"
        "Tracing route to example.com [93.184.216.34]\r\n"
        "over a maximum of 30 hops:\r\n"
        "\r\n"
        "  1    <1 ms    <1 ms    <1 ms  192.168.1.1\r\n"
        "  2     9 ms     8 ms     9 ms  93.184.216.34\r\n"
        "\r\n"
        "Trace complete.\r\n"
    )


@pytest_asyncio.fixture()
async def mock_server() -> AsyncIterator[MockServerFixture]:
    """Run the mock website on a free port for the duration of a test."""
    config = MockServerConfig(port=0, base_latency_ms=1.0, jitter_seed=42)
    async with MockServer(config) as server:
        yield MockServerFixture(host_port=server.host_port, config=config, server=server)
