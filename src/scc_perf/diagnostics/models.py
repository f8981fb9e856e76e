"""Domain models for the network diagnostics client."""

from __future__ import annotations

from dataclasses import dataclass

from scc_perf import config


@dataclass(frozen=True, slots=True)
class PerformanceMetrics:
    """Phase-by-phase timing of a single HTTP request.

    Attributes:
        dns_lookup_ms: Hostname resolution time.
        tcp_connect_ms: TCP handshake time.
        tls_handshake_ms: Always 0.0; TLS is not measured.
        ttfb_ms: Time from sending the request to the first response byte.
        download_ms: Time from the first byte to end of stream.
        total_ms: Sum of the DNS, connect, TTFB and download phases.
        response_size: Response size in bytes, headers included.
        status_code: HTTP status code, 0 if the status line was unparsable.
    """

    dns_lookup_ms: float
    tcp_connect_ms: float
    tls_handshake_ms: float
    ttfb_ms: float
    download_ms: float
    total_ms: float
    response_size: int
    status_code: int


@dataclass(frozen=True, slots=True)
class TraceHop:
    """One hop reported by a path-tracing probe.

    A hop without an IP address is a probe that timed out or got no reply.

    Attributes:
        hop_number: Position along the route, starting at 1.
        ip_address: Address that answered, None when nothing did.
        hostname: Reverse-resolved name when the tool printed one.
        rtt_ms: Round-trip samples, usually one per probe.
        is_target: Whether ip_address matches the resolved target.
    """

    hop_number: int
    ip_address: str | None = None
    hostname: str | None = None
    rtt_ms: tuple[float, ...] = ()
    is_target: bool = False

    @property
    def responded(self) -> bool:
        return self.ip_address is not None

    @property
    def avg_rtt_ms(self) -> float | None:
        if not self.rtt_ms:
            return None
        return sum(self.rtt_ms) / len(self.rtt_ms)

    @property
    def is_slow(self) -> bool:
        """Any sample above the slow-hop threshold."""
        return any(rtt > config.SLOW_HOP_MS for rtt in self.rtt_ms)


def packet_loss(hops: tuple[TraceHop, ...] | list[TraceHop]) -> float:
    """Percentage of hops that returned no address.

    Returns 0.0 for an empty route instead of dividing by zero.
    """
    silent = sum(1 for hop in hops if hop.ip_address is None)
    return silent / max(len(hops), 1) * 100.0


@dataclass(frozen=True, slots=True)
class NetworkDiagnostics:
    """A traced route to a target.

    Attributes:
        target: Hostname or address that was traced.
        resolved_ip: Address the target resolved to, if resolution worked.
        hops: Parsed hops in route order.
    """

    target: str
    resolved_ip: str | None
    hops: tuple[TraceHop, ...]

    @property
    def total_hops(self) -> int:
        return len(self.hops)

    @property
    def packet_loss(self) -> float:
        return packet_loss(self.hops)

    @property
    def reached_target(self) -> bool:
        return any(hop.is_target for hop in self.hops)
