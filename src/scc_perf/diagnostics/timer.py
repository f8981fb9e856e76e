"""Sequential phase timing for a single HTTP request.

Measures, strictly one after the other: hostname resolution, TCP connect,
time to first byte and download. A failure in any phase aborts the
measurement with a PhaseError naming that phase.
"""

from __future__ import annotations

import socket
import time

from scc_perf import config
from scc_perf.diagnostics.models import PerformanceMetrics
from scc_perf.engine.executor import RECV_CHUNK_SIZE, build_request, split_host_port, status_line
from scc_perf.errors import DnsResolutionError, PhaseError


def split_url(url: str) -> tuple[str, str]:
    """Split a URL into (authority, path).

    The scheme is stripped and the path defaults to "/".

    Example:
        >>> split_url("http://localhost:9000/health")
        ('localhost:9000', '/health')
    """
    for scheme in ("http://", "https://"):
        if url.startswith(scheme):
            url = url[len(scheme):]
            break
    authority, sep, rest = url.partition("/")
    return authority, sep + rest if sep else "/"


def parse_status_code(response: bytes) -> int:
    parts = status_line(response).split()
    if len(parts) < 2:
        return 0
    try:
        return int(parts[1])
    except ValueError:
        return 0


def _elapsed_ms(start_time: float) -> float:
    return (time.perf_counter() - start_time) * 1000


class PhaseTimer:
    """Measures DNS, connect, TTFB and download for one request.

    Attributes:
        connect_timeout: TCP connect timeout in seconds (default: 10.0).
        read_timeout: Read timeout in seconds (default: 30.0).

    Example:
        >>> metrics = PhaseTimer().measure("example.com", "/")
        >>> print(f"{metrics.total_ms:.2f}ms")
    """

    def __init__(
        self,
        connect_timeout: float = config.CONNECT_TIMEOUT_S,
        read_timeout: float = config.READ_TIMEOUT_S,
    ) -> None:
        self.connect_timeout = connect_timeout
        self.read_timeout = read_timeout

    def resolve(self, hostname: str) -> tuple[str, float]:
        """Resolve ``hostname`` through the system resolver.

        Returns:
            Tuple of (first resolved IP, elapsed milliseconds).

        Raises:
            DnsResolutionError: If resolution failed or returned nothing.
        """
        start_time = time.perf_counter()
        try:
            infos = socket.getaddrinfo(hostname, config.DEFAULT_HTTP_PORT, type=socket.SOCK_STREAM)
        except OSError as e:
            raise DnsResolutionError(f"DNS resolution failed: {e}") from e
        if not infos:
            raise DnsResolutionError("No addresses found")
        return str(infos[0][4][0]), _elapsed_ms(start_time)

    def connect(self, ip: str, port: int) -> tuple[socket.socket, float]:
        """Open a TCP connection to ``ip``.

        Raises:
            PhaseError: With phase "connect" on failure or timeout.
        """
        start_time = time.perf_counter()
        try:
            sock = socket.create_connection((ip, port), timeout=self.connect_timeout)
        except OSError as e:
            raise PhaseError("connect", f"TCP connect failed: {e}") from e
        return sock, _elapsed_ms(start_time)

    def request(self, sock: socket.socket, host: str, path: str) -> tuple[float, float, int, int]:
        """Send the GET and read the full response.

        Returns:
            Tuple of (ttfb ms, download ms, response size, status code).

        Raises:
            PhaseError: With phase "request" on write or read failure.
        """
        sock.settimeout(self.read_timeout)
        payload = build_request(host, path, {"User-Agent": config.USER_AGENT})

        send_start = time.perf_counter()
        try:
            sock.sendall(payload)
        except OSError as e:
            raise PhaseError("request", f"Write failed: {e}") from e

        try:
            first = sock.recv(1)
            if not first:
                raise PhaseError("request", "Read failed: connection closed before first byte")
            ttfb_ms = _elapsed_ms(send_start)

            chunks = [first]
            while True:
                chunk = sock.recv(RECV_CHUNK_SIZE)
                if not chunk:
                    break
                chunks.append(chunk)
        except OSError as e:
            raise PhaseError("request", f"Read failed: {e}") from e
        download_ms = _elapsed_ms(send_start) - ttfb_ms

        response = b"".join(chunks)
        return ttfb_ms, download_ms, len(response), parse_status_code(response)

    def measure(self, host: str, path: str, port: int = config.DEFAULT_HTTP_PORT) -> PerformanceMetrics:
        """Run all phases in order against ``host``.

        Args:
            host: Hostname, optionally with ":port" which overrides ``port``.
            path: Request path.
            port: TCP port when ``host`` carries none (default: 80).

        Returns:
            The per-phase timings.

        Raises:
            PhaseError: If any phase failed; later phases are not attempted.
        """
        hostname, port = split_host_port(host, port)
        ip, dns_ms = self.resolve(hostname)
        sock, tcp_ms = self.connect(ip, port)
        with sock:
            ttfb_ms, download_ms, size, status = self.request(sock, host, path)

        return PerformanceMetrics(
            dns_lookup_ms=dns_ms,
            tcp_connect_ms=tcp_ms,
            tls_handshake_ms=0.0,
            ttfb_ms=ttfb_ms,
            download_ms=download_ms,
            total_ms=dns_ms + tcp_ms + ttfb_ms + download_ms,
            response_size=size,
            status_code=status,
        )
