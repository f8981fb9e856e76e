"""Human-readable formatting of sizes, latencies and ratings."""

from __future__ import annotations

from scc_perf import config


def format_bytes(num_bytes: int) -> str:
    """Format a byte count with decimal units.

    Example:
        >>> format_bytes(999)
        '999 B'
        >>> format_bytes(1500)
        '1.50 KB'
    """
    if num_bytes >= 1_000_000_000:
        return f"{num_bytes / 1_000_000_000:.2f} GB"
    if num_bytes >= 1_000_000:
        return f"{num_bytes / 1_000_000:.2f} MB"
    if num_bytes >= 1_000:
        return f"{num_bytes / 1_000:.2f} KB"
    return f"{num_bytes} B"


def format_latency(latency_us: int) -> str:
    """Format a latency given in microseconds.

    Example:
        >>> format_latency(1500)
        '1.50ms'
    """
    if latency_us >= 1_000_000:
        return f"{latency_us / 1_000_000:.2f}s"
    if latency_us >= 1_000:
        return f"{latency_us / 1_000:.2f}ms"
    return f"{latency_us}μs"


def _rate(
    value_ms: float,
    bands: tuple[tuple[float, str, str, str], ...],
    fallback: tuple[str, str, str],
) -> tuple[str, str, str]:
    for upper_ms, stars, label, note in bands:
        if value_ms < upper_ms:
            return stars, label, note
    return fallback


def page_load_rating(duration_ms: float) -> tuple[str, str, str]:
    """(stars, label, note) for a full page load duration."""
    return _rate(duration_ms, config.PAGE_LOAD_RATINGS, config.PAGE_LOAD_FALLBACK_RATING)


def response_rating(total_ms: float) -> tuple[str, str, str]:
    """(stars, label, note) for a single request's total time."""
    return _rate(total_ms, config.RESPONSE_RATINGS, config.RESPONSE_FALLBACK_RATING)
