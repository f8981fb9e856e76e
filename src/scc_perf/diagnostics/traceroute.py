"""Traceroute invocation and hop parsing.

The platform's path-tracing utility is run as a subprocess and its text
output scraped line by line. Everything above this module only sees the
``Tracer`` protocol, so a native probe implementation can replace it without
touching rendering.
"""

from __future__ import annotations

import ipaddress
import logging
import math
import subprocess
from collections.abc import Callable, Sequence
from typing import Protocol, runtime_checkable

from scc_perf import config
from scc_perf.diagnostics.models import NetworkDiagnostics, TraceHop
from scc_perf.diagnostics.timer import PhaseTimer
from scc_perf.errors import DnsResolutionError, TracerouteUnavailableError
from scc_perf.observability import log_event

logger = logging.getLogger(__name__)

CommandRunner = Callable[[Sequence[str]], str]


@runtime_checkable
class Tracer(Protocol):
    """Anything that can trace the route to a target."""

    def trace(self, target: str) -> NetworkDiagnostics:
        ...


def primary_command(target: str) -> list[str]:
    """Unix traceroute: numeric output, 3 probes, 2s wait."""
    return [
        "traceroute",
        "-n",
        "-q",
        str(config.TRACEROUTE_PROBES),
        "-w",
        str(config.TRACEROUTE_WAIT_S),
        target,
    ]


def fallback_command(target: str) -> list[str]:
    """Windows tracert: no name lookups, wait given in milliseconds."""
    return ["tracert", "-d", "-w", str(config.TRACEROUTE_WAIT_S * 1000), target]


def run_command(argv: Sequence[str]) -> str:
    """Run ``argv`` and return its standard output as text.

    Raises:
        OSError: If the program could not be started.
    """
    completed = subprocess.run(list(argv), capture_output=True, text=True, check=False)
    return completed.stdout


def _parse_ip(token: str) -> str | None:
    try:
        return str(ipaddress.ip_address(token))
    except ValueError:
        return None


def _parse_rtt(token: str) -> float | None:
    value = token.removesuffix("ms").lstrip("<")
    if not value:
        return None
    try:
        rtt = float(value)
    except ValueError:
        return None
    return rtt if math.isfinite(rtt) else None


def _hop_index(token: str) -> int | None:
    return int(token) if token.isdecimal() and int(token) > 0 else None


def parse_hop_line(line: str, resolved_ip: str | None = None) -> TraceHop | None:
    """Parse one line of traceroute output.

    Hop lines start with the index printed by the tool, which becomes the hop
    number. Any later token that is an IP address (optionally in parentheses)
    becomes the hop address; any token that is a number, optionally suffixed
    with "ms", is one RTT sample. A hop line whose probes all printed "*" is a
    hop that never answered.

    Args:
        line: Raw output line.
        resolved_ip: Target address; a matching hop is marked as the target.

    Returns:
        The parsed hop, or None for header, trailer and blank lines, and for
        hop lines carrying neither an address nor a timing sample.
    """
    tokens = line.split()
    hop_number = _hop_index(tokens[0]) if tokens else None
    if hop_number is None:
        return None
    tokens = tokens[1:]

    ip_address: str | None = None
    hostname: str | None = None
    rtt_ms: list[float] = []
    is_target = False

    for index, token in enumerate(tokens):
        bracketed = token.startswith("(") and token.endswith(")")
        ip = _parse_ip(token.strip("()") if bracketed else token)
        if ip is not None:
            ip_address = ip
            if resolved_ip is not None and ip == resolved_ip:
                is_target = True
            if bracketed and index > 0 and _parse_rtt(tokens[index - 1]) is None:
                hostname = tokens[index - 1]
            continue
        rtt = _parse_rtt(token)
        if rtt is not None:
            rtt_ms.append(rtt)

    if ip_address is None and not rtt_ms and "*" not in tokens:
        return None

    return TraceHop(
        hop_number=hop_number,
        ip_address=ip_address,
        hostname=hostname,
        rtt_ms=tuple(rtt_ms),
        is_target=is_target,
    )


def parse_traceroute_output(output: str, resolved_ip: str | None = None) -> tuple[TraceHop, ...]:
    """Parse full traceroute or tracert output into hops.

    Only lines that start with a hop index are hops, so the tools' header and
    trailer text is ignored. Parsing stops at the first hop numbered past the
    30 hop cap.
    """
    hops: list[TraceHop] = []

    for line in output.splitlines():
        hop = parse_hop_line(line, resolved_ip)
        if hop is None:
            continue
        if hop.hop_number > config.MAX_HOPS:
            break
        hops.append(hop)

    return tuple(hops)


class TracerouteInvoker(Tracer):
    """Runs the platform traceroute and parses its output.

    The primary ``traceroute`` command is tried first; if it cannot be
    started, ``tracert`` is tried exactly once.

    Args:
        runner: Executes a command and returns stdout (default: subprocess).
        timer: Used to pre-resolve the target for target-hop detection.

    Example:
        >>> diag = TracerouteInvoker().trace("example.com")
        >>> print(diag.total_hops, diag.packet_loss)
    """

    def __init__(
        self,
        runner: CommandRunner | None = None,
        timer: PhaseTimer | None = None,
    ) -> None:
        self._runner = runner or run_command
        self._timer = timer or PhaseTimer()

    def resolve_target(self, target: str) -> str | None:
        try:
            ip, _ = self._timer.resolve(target)
        except DnsResolutionError:
            return None
        return ip

    def run_trace(self, target: str) -> str:
        """Return raw output from the first traceroute utility that starts.

        Raises:
            TracerouteUnavailableError: If neither utility could be started.
        """
        try:
            return self._runner(primary_command(target))
        except OSError as primary_error:
            log_event(
                logger,
                "traceroute_fallback",
                level=logging.WARNING,
                target=target,
                error=str(primary_error),
            )

        try:
            return self._runner(fallback_command(target))
        except OSError as e:
            log_event(logger, "traceroute_failed", level=logging.ERROR, target=target, error=str(e))
            raise TracerouteUnavailableError(f"Traceroute failed: {e}") from e

    def trace(self, target: str) -> NetworkDiagnostics:
        resolved_ip = self.resolve_target(target)
        output = self.run_trace(target)
        return NetworkDiagnostics(
            target=target,
            resolved_ip=resolved_ip,
            hops=parse_traceroute_output(output, resolved_ip),
        )
