"""Integration tests for the diagnostics client against the mock website."""

from __future__ import annotations

import asyncio

import pytest

from benchmarks.mock_server import MockServerFixture
from scc_perf.cli.perf_client import main
from scc_perf.diagnostics import PhaseTimer

pytestmark = pytest.mark.integration


class TestPhaseTimerAgainstServer:
    """Phase timing over real sockets."""

    @pytest.mark.asyncio
    async def test_measure_health(self, mock_server: MockServerFixture) -> None:
        """Every phase should be measured and the total should be their sum."""
        metrics = await asyncio.to_thread(PhaseTimer().measure, mock_server.host_port, "/health")

        assert metrics.status_code == 200
        assert metrics.response_size > 0
        assert metrics.ttfb_ms > 0
        assert metrics.tls_handshake_ms == 0.0
        assert metrics.total_ms == pytest.approx(
            metrics.dns_lookup_ms + metrics.tcp_connect_ms + metrics.ttfb_ms + metrics.download_ms
        )

    @pytest.mark.asyncio
    async def test_measure_reports_non_200_status(self, mock_server: MockServerFixture) -> None:
        """The status code is reported rather than treated as an error."""
        metrics = await asyncio.to_thread(
            PhaseTimer().measure, mock_server.host_port, "/status/404"
        )
        assert metrics.status_code == 404


class TestPerfClientAgainstServer:
    """The scc-perf-client entry point end to end."""

    @pytest.mark.asyncio
    async def test_measure_command(
        self, mock_server: MockServerFixture, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """measure should print the metrics box for the URL."""
        exit_code = await asyncio.to_thread(main, ["measure", mock_server.url("/")])

        assert exit_code == 0
        assert "HTTP Status: 200" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_test_command(
        self, mock_server: MockServerFixture, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """test should measure every endpoint and print a summary."""
        exit_code = await asyncio.to_thread(main, ["test", mock_server.host_port])

        assert exit_code == 0
        out = capsys.readouterr().out
        assert "Successful:           5" in out
