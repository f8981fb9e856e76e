"""Base Protocol for request executors.

This module defines the RequestExecutor protocol the dispatcher drives. Tests
substitute in-memory implementations; production uses RawHttpExecutor.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class RequestExecutor(Protocol):
    """Protocol for something that performs one timed GET request.

    Example:
        >>> from scc_perf.engine import RawHttpExecutor, RequestExecutor
        >>> isinstance(RawHttpExecutor(), RequestExecutor)
        True
    """

    def execute(self, host: str, path: str) -> tuple[int, int]:
        """Perform one request.

        Args:
            host: Target as "host:port".
            path: Request path, starting with "/".

        Returns:
            Tuple of (latency in microseconds, response size in bytes).

        Raises:
            RequestError: If the request failed for any reason.
        """
        ...
