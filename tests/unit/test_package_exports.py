"""Tests for package-level exports."""

from __future__ import annotations


class TestPackageExports:
    """Test cases for top-level package imports."""

    def test_import_benchmark_suite(self) -> None:
        """BenchmarkSuite should be importable from scc_perf."""
        from scc_perf import BenchmarkSuite

        assert BenchmarkSuite is not None

    def test_import_threaded_dispatcher(self) -> None:
        """ThreadedDispatcher should be importable from scc_perf."""
        from scc_perf import ThreadedDispatcher

        assert ThreadedDispatcher is not None

    def test_import_phase_timer(self) -> None:
        """PhaseTimer should be importable from scc_perf."""
        from scc_perf import PhaseTimer

        assert PhaseTimer is not None

    def test_import_traceroute_invoker(self) -> None:
        """TracerouteInvoker should be importable from scc_perf."""
        from scc_perf import TracerouteInvoker

        assert TracerouteInvoker is not None

    def test_errors_share_a_base(self) -> None:
        """Request and phase errors should derive from PerfError."""
        from scc_perf import PerfError, PhaseError, RequestError

        assert issubclass(RequestError, PerfError)
        assert issubclass(PhaseError, PerfError)

    def test_version(self) -> None:
        """The package should expose a version string."""
        import scc_perf

        assert scc_perf.__version__ == "0.1.0"

    def test_all_exports_match_declared(self) -> None:
        """All items in __all__ should be importable."""
        import scc_perf
        import scc_perf.diagnostics
        import scc_perf.engine
        import scc_perf.report

        for module in (scc_perf, scc_perf.engine, scc_perf.diagnostics, scc_perf.report):
            for name in module.__all__:
                assert hasattr(module, name), f"{name} not found in {module.__name__}"
