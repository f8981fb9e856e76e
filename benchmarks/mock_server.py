#!/usr/bin/env python3
"""Mock business website for deterministic benchmarking.

This module serves the same paths as the real South City Computer site so
the load generator and diagnostics client can be exercised without the
production server. It supports:
- The site's health endpoint and static-looking pages and assets
- Configurable fixed latency with optional seeded jitter
- Arbitrary status codes, delays and byte payloads for failure testing

Usage:
    python -m benchmarks.mock_server --port 9000

    # Programmatic
    config = MockServerConfig(port=0, base_latency_ms=1.0, jitter_seed=42)
    async with MockServer(config) as server:
        print(server.host_port)
"""

from __future__ import annotations

import argparse
import asyncio
import random
from dataclasses import dataclass, field
from typing import Any

from aiohttp import web

HOMEPAGE_HTML = (
    "<!DOCTYPE html><html><head><title>South City Computer</title>"
    '<link rel="stylesheet" href="/css/style.min.css"></head>'
    "<body><h1>South City Computer</h1><p>Computer repair and IT services.</p>"
    '<img src="/images/logo.webp"><script src="/js/main.min.js"></script></body></html>'
)
SERVICE_PAGE_HTML = (
    "<!DOCTYPE html><html><head><title>Computer Repair</title></head>"
    "<body><h1>Computer Repair</h1></body></html>"
)
STYLESHEET = "body{margin:0;font-family:sans-serif}h1{color:#123456}" * 40
SCRIPT = "document.addEventListener('DOMContentLoaded',function(){});" * 40


@dataclass(frozen=True, slots=True)
class MockServerConfig:
    """Configuration for the mock website.

    Attributes:
        host: Host address to bind to (default: 127.0.0.1)
        port: Port number to listen on; 0 picks a free port (default: 9000)
        base_latency_ms: Fixed latency in milliseconds added to page responses
        jitter_seed: Optional seed for reproducible random jitter
        logo_bytes: Size of the small image payload
        storefront_bytes: Size of the medium image payload
    """

    host: str = "127.0.0.1"
    port: int = 9000
    base_latency_ms: float = 0.0
    jitter_seed: int | None = None
    logo_bytes: int = 4_096
    storefront_bytes: int = 65_536


@dataclass
class MockServer:
    """Async HTTP server imitating the business website.

    Example:
        ```python
        async def main():
            server = MockServer(MockServerConfig(port=0))
            await server.start()
            print(f"Benchmark with: scc-benchmark -h {server.host_port}")
            await server.stop()
        ```
    """

    config: MockServerConfig = field(default_factory=MockServerConfig)
    _request_count: int = field(default=0, init=False)
    _random: random.Random = field(default_factory=random.Random, init=False)
    _runner: web.AppRunner | None = field(default=None, init=False)
    _site: web.TCPSite | None = field(default=None, init=False)
    _bound_port: int | None = field(default=None, init=False)
    _logo: bytes = field(default=b"", init=False)
    _storefront: bytes = field(default=b"", init=False)

    def __post_init__(self) -> None:
        """Seed the jitter source and pre-generate image payloads."""
        self._random = random.Random(self.config.jitter_seed)
        self._logo = random.Random(1).randbytes(self.config.logo_bytes)
        self._storefront = random.Random(2).randbytes(self.config.storefront_bytes)

    @property
    def port(self) -> int:
        return self._bound_port or self.config.port

    @property
    def host_port(self) -> str:
        """Address in the "host:port" form the load generator expects."""
        return f"{self.config.host}:{self.port}"

    @property
    def base_url(self) -> str:
        return f"http://{self.host_port}"

    @property
    def request_count(self) -> int:
        """Number of requests handled so far."""
        return self._request_count

    def _calculate_delay(self) -> float:
        """Response delay in seconds, with up to 20% jitter when seeded."""
        base_delay = self.config.base_latency_ms / 1000.0
        if self.config.jitter_seed is not None:
            return base_delay + self._random.uniform(0, 0.2) * base_delay
        return base_delay

    @web.middleware
    async def _count_and_delay(self, request: web.Request, handler: Any) -> web.StreamResponse:
        self._request_count += 1
        delay = self._calculate_delay()
        if delay > 0:
            await asyncio.sleep(delay)
        return await handler(request)

    async def handle_health(self, request: web.Request) -> web.Response:
        return web.json_response({"success": True, "message": "Server is running"})

    async def handle_index(self, request: web.Request) -> web.Response:
        return web.Response(text=HOMEPAGE_HTML, content_type="text/html")

    async def handle_service_page(self, request: web.Request) -> web.Response:
        return web.Response(text=SERVICE_PAGE_HTML, content_type="text/html")

    async def handle_stylesheet(self, request: web.Request) -> web.Response:
        return web.Response(text=STYLESHEET, content_type="text/css")

    async def handle_script(self, request: web.Request) -> web.Response:
        return web.Response(text=SCRIPT, content_type="application/javascript")

    async def handle_logo(self, request: web.Request) -> web.Response:
        return web.Response(body=self._logo, content_type="image/webp")

    async def handle_storefront(self, request: web.Request) -> web.Response:
        return web.Response(body=self._storefront, content_type="image/webp")

    async def handle_status(self, request: web.Request) -> web.Response:
        """Path: /status/{code}. Responds with the given status code."""
        try:
            code = int(request.match_info.get("code", 200))
        except ValueError:
            return web.json_response({"error": "Invalid status code"}, status=400)
        return web.Response(status=code)

    async def handle_delay(self, request: web.Request) -> web.Response:
        """Path: /delay/{seconds}. Responds after the given delay, capped at 60s."""
        try:
            seconds = float(request.match_info.get("seconds", 0))
        except ValueError:
            return web.Response(text="Invalid delay value", status=400)
        seconds = min(seconds, 60.0)
        await asyncio.sleep(seconds)
        return web.json_response({"delay": seconds})

    async def handle_bytes(self, request: web.Request) -> web.Response:
        """Path: /bytes/{n}. Responds with n random bytes (1 byte to 1 MB)."""
        try:
            n = int(request.match_info.get("n", 1024))
        except ValueError:
            return web.json_response({"error": "Invalid byte count"}, status=400)
        n = min(max(1, n), 1_048_576)
        return web.Response(body=self._random.randbytes(n), content_type="application/octet-stream")

    def _create_app(self) -> web.Application:
        app = web.Application(middlewares=[self._count_and_delay])

        app.router.add_get("/", self.handle_index)
        app.router.add_get("/health", self.handle_health)
        app.router.add_get("/css/style.min.css", self.handle_stylesheet)
        app.router.add_get("/js/main.min.js", self.handle_script)
        app.router.add_get("/images/logo.webp", self.handle_logo)
        app.router.add_get("/images/storefront.webp", self.handle_storefront)
        app.router.add_get("/services/computer-repair.html", self.handle_service_page)

        # Failure injection
        app.router.add_get("/status/{code}", self.handle_status)
        app.router.add_get("/delay/{seconds}", self.handle_delay)
        app.router.add_get("/bytes/{n}", self.handle_bytes)

        return app

    async def start(self) -> None:
        """Start the server.

        Raises:
            RuntimeError: If the server is already running.
        """
        if self._runner is not None:
            raise RuntimeError("Server is already running")

        self._runner = web.AppRunner(self._create_app(), access_log=None)
        await self._runner.setup()
        self._site = web.TCPSite(self._runner, self.config.host, self.config.port)
        await self._site.start()

        self._bound_port = self.config.port
        if self._runner.addresses:
            address = self._runner.addresses[0]
            if isinstance(address, tuple) and len(address) >= 2:
                self._bound_port = address[1]

        self._request_count = 0

    async def stop(self) -> None:
        """Stop the server.

        Raises:
            RuntimeError: If the server is not running.
        """
        if self._runner is None:
            raise RuntimeError("Server is not running")

        await self._runner.cleanup()
        self._runner = None
        self._site = None
        self._bound_port = None

    async def __aenter__(self) -> MockServer:
        await self.start()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.stop()


@dataclass
class MockServerFixture:
    """Handle given to tests by the ``mock_server`` fixture.

    Attributes:
        host_port: Server address as "host:port".
        config: Configuration used to create the server.
        server: The running server, for request counts.
    """

    host_port: str
    config: MockServerConfig
    server: MockServer

    @property
    def base_url(self) -> str:
        return f"http://{self.host_port}"

    def url(self, path: str) -> str:
        if not path.startswith("/"):
            path = "/" + path
        return f"{self.base_url}{path}"

    @property
    def request_count(self) -> int:
        return self.server.request_count


async def _serve(config: MockServerConfig) -> None:
    async with MockServer(config) as server:
        print(f"Mock site listening on {server.base_url} (Ctrl-C to stop)")
        await asyncio.Event().wait()


def main() -> None:
    parser = argparse.ArgumentParser(description="Mock South City Computer website")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=9000)
    parser.add_argument("--latency-ms", type=float, default=0.0, help="Added latency per request")
    parser.add_argument("--jitter-seed", type=int, default=None)
    args = parser.parse_args()

    config = MockServerConfig(
        host=args.host,
        port=args.port,
        base_latency_ms=args.latency_ms,
        jitter_seed=args.jitter_seed,
    )
    try:
        asyncio.run(_serve(config))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
