"""Raw socket HTTP request executor.

Each request opens a fresh TCP connection, writes a minimal HTTP/1.1 GET with
``Connection: close`` and reads until the server closes the stream. No
connection reuse is attempted so every measurement is a cold request.
"""

from __future__ import annotations

import socket
import time

from scc_perf import config
from scc_perf.engine.base import RequestExecutor
from scc_perf.errors import (
    BadStatusError,
    ConnectError,
    ReadError,
    RequestTimeoutError,
    WriteError,
)

SUCCESS_PREFIXES: tuple[bytes, ...] = (b"HTTP/1.1 200", b"HTTP/1.0 200")
RECV_CHUNK_SIZE = 65536


def split_host_port(host: str, default_port: int = config.DEFAULT_HTTP_PORT) -> tuple[str, int]:
    """Split "host:port" into its parts.

    Bracketed IPv6 literals ("[::1]:9000") are supported. A missing port
    falls back to ``default_port``.

    Raises:
        ValueError: If the port is not an integer.
    """
    if host.startswith("["):
        address, _, rest = host[1:].partition("]")
        port = rest.lstrip(":")
        return address, int(port) if port else default_port
    name, sep, port = host.rpartition(":")
    if not sep or ":" in name:
        return host, default_port
    return name, int(port)


def build_request(host: str, path: str, extra_headers: dict[str, str] | None = None) -> bytes:
    """Build the request bytes for a GET with ``Connection: close``."""
    lines = [f"GET {path} HTTP/1.1", f"Host: {host}", "Connection: close"]
    for name, value in (extra_headers or {}).items():
        lines.append(f"{name}: {value}")
    return ("\r\n".join(lines) + "\r\n\r\n").encode("ascii")


def status_line(response: bytes) -> str:
    """First line of a raw response, decoded leniently."""
    return response.split(b"\r\n", 1)[0].split(b"\n", 1)[0].decode("utf-8", errors="replace")


def is_success(response: bytes) -> bool:
    """Only a literal 200 status line counts as success."""
    return response.startswith(SUCCESS_PREFIXES)


class RawHttpExecutor(RequestExecutor):
    """HTTP/1.x GET executor built directly on sockets.

    Attributes:
        timeout: Read timeout in seconds (default: 30.0).

    Example:
        >>> executor = RawHttpExecutor()
        >>> latency_us, size = executor.execute("127.0.0.1:9000", "/health")
    """

    def __init__(self, timeout: float = config.READ_TIMEOUT_S) -> None:
        self._timeout = timeout

    @property
    def timeout(self) -> float:
        return self._timeout

    def execute(self, host: str, path: str) -> tuple[int, int]:
        latency_us, response = self.fetch(host, path)
        return latency_us, len(response)

    def fetch(self, host: str, path: str) -> tuple[int, bytes]:
        """Perform one request and return the raw response.

        Args:
            host: Target as "host:port".
            path: Request path.

        Returns:
            Tuple of (latency in microseconds, full response bytes).

        Raises:
            ConnectError: The connection could not be opened.
            WriteError: Sending the request failed.
            RequestTimeoutError: No data arrived within the read timeout.
            ReadError: The response stream broke off.
            BadStatusError: The status line was not a literal 200.
        """
        address = split_host_port(host)
        start_time = time.perf_counter()

        try:
            sock = socket.create_connection(address, timeout=self._timeout)
        except OSError as e:
            raise ConnectError(f"Connection failed: {e}") from e

        with sock:
            try:
                sock.sendall(build_request(host, path))
            except OSError as e:
                raise WriteError(f"Write failed: {e}") from e

            chunks: list[bytes] = []
            try:
                while True:
                    chunk = sock.recv(RECV_CHUNK_SIZE)
                    if not chunk:
                        break
                    chunks.append(chunk)
            except TimeoutError as e:
                raise RequestTimeoutError(f"Read timed out after {self._timeout}s") from e
            except OSError as e:
                raise ReadError(f"Read failed: {e}") from e

        latency_us = int((time.perf_counter() - start_time) * 1_000_000)
        response = b"".join(chunks)

        if not is_success(response):
            raise BadStatusError(status_line(response))

        return latency_us, response
