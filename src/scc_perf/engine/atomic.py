"""Atomic integer counter for lock-free style aggregation.

CPython exposes no hardware compare-and-swap, so each counter guards its value
with a private lock held only for a single primitive operation. Callers build
retry loops on top of ``compare_exchange`` exactly as they would with native
atomics; no caller ever holds a lock across more than one counter.
"""

from __future__ import annotations

import threading


class AtomicCounter:
    """An unsigned integer supporting load, store, fetch-and-add and CAS.

    Example:
        >>> counter = AtomicCounter(5)
        >>> counter.fetch_add(2)
        5
        >>> counter.compare_exchange(7, 1)
        (True, 7)
        >>> counter.load()
        1
    """

    __slots__ = ("_value", "_lock")

    def __init__(self, initial: int = 0) -> None:
        self._value = initial
        self._lock = threading.Lock()

    def load(self) -> int:
        with self._lock:
            return self._value

    def store(self, value: int) -> None:
        with self._lock:
            self._value = value

    def fetch_add(self, delta: int) -> int:
        """Add ``delta`` and return the previous value."""
        with self._lock:
            previous = self._value
            self._value = previous + delta
            return previous

    def compare_exchange(self, expected: int, desired: int) -> tuple[bool, int]:
        """Replace the value with ``desired`` if it currently equals ``expected``.

        Args:
            expected: Value the caller last observed.
            desired: Value to install on success.

        Returns:
            Tuple of (swapped, observed) where observed is the value found
            before the operation. On failure callers retry with observed.
        """
        with self._lock:
            observed = self._value
            if observed == expected:
                self._value = desired
                return True, observed
            return False, observed

    def __repr__(self) -> str:
        return f"AtomicCounter({self.load()})"
