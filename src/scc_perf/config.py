"""Central configuration constants for the scc-perf tools.

Thresholds, timeouts and endpoint suites live here rather than as literals in
the engine and report modules. Values that operators commonly change can be
overridden through environment variables.
"""

from __future__ import annotations

import os

# Load generator
DEFAULT_HOST: str = os.getenv("SCC_BENCH_HOST", "127.0.0.1:9000")
DEFAULT_REQUESTS: int = 100
DEFAULT_CONCURRENCY: int = 10
WARMUP_REQUESTS: int = 10
READ_TIMEOUT_S: float = 30.0
DEFAULT_HTTP_PORT: int = 80
HEALTH_PATH: str = "/health"

# Network diagnostics
DEFAULT_TARGET: str = os.getenv("SCC_PERF_TARGET", "southcitycomputer.com")
CONNECT_TIMEOUT_S: float = 10.0
USER_AGENT: str = "SCC-PerfClient/1.0"
MAX_HOPS: int = 30
MAX_ROUTE_MARKERS: int = 15
SLOW_HOP_MS: float = 100.0
TRACEROUTE_PROBES: int = 3
TRACEROUTE_WAIT_S: int = 2

LOG_LEVEL: str | None = os.getenv("SCC_PERF_LOG_LEVEL")

# Full page load rating bands: (upper bound in ms, stars, label, note)
PAGE_LOAD_RATINGS: tuple[tuple[float, str, str, str], ...] = (
    (100.0, "★★★★★", "EXCELLENT", "<100ms full page"),
    (500.0, "★★★★☆", "VERY GOOD", "<500ms full page"),
    (1000.0, "★★★☆☆", "GOOD", "<1s full page"),
    (2500.0, "★★☆☆☆", "ACCEPTABLE", "<2.5s Core Web Vitals"),
)
PAGE_LOAD_FALLBACK_RATING: tuple[str, str, str] = ("★☆☆☆☆", "NEEDS IMPROVEMENT", ">2.5s")

# Single-request rating bands used by the diagnostics client
RESPONSE_RATINGS: tuple[tuple[float, str, str, str], ...] = (
    (100.0, "★★★★★", "EXCELLENT", "Sub-100ms response!"),
    (300.0, "★★★★☆", "VERY GOOD", "Fast response time"),
    (500.0, "★★★☆☆", "GOOD", "Acceptable performance"),
    (1000.0, "★★☆☆☆", "FAIR", "Could be improved"),
)
RESPONSE_FALLBACK_RATING: tuple[str, str, str] = ("★☆☆☆☆", "SLOW", "Needs optimization")

# (display name, path) probed by `scc-benchmark full`
BENCHMARK_ENDPOINTS: tuple[tuple[str, str], ...] = (
    ("Homepage (HTML)", "/"),
    ("Health Check (JSON)", "/health"),
    ("CSS Stylesheet", "/css/style.min.css"),
    ("JavaScript", "/js/main.min.js"),
    ("Logo (small image)", "/images/logo.webp"),
    ("Storefront (medium image)", "/images/storefront.webp"),
    ("Service Page", "/services/computer-repair.html"),
)

# Above-the-fold assets fetched in order for the page load simulation
PAGE_LOAD_ASSETS: tuple[str, ...] = (
    "/",
    "/css/style.min.css",
    "/js/main.min.js",
    "/images/logo.webp",
    "/images/storefront.webp",
)

# (path, display name) measured by `scc-perf-client test`
PERF_TEST_ENDPOINTS: tuple[tuple[str, str], ...] = (
    ("/", "Homepage"),
    ("/css/style.min.css", "Stylesheet"),
    ("/js/main.min.js", "JavaScript"),
    ("/images/logo.webp", "Logo Image"),
    ("/health", "Health Check"),
)
