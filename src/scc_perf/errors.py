"""Exception hierarchy for the load generator and diagnostics client."""

from __future__ import annotations


class PerfError(Exception):
    """Base class for all scc-perf errors."""

    pass


class RequestError(PerfError):
    """A single load generator request did not complete successfully."""

    pass


class ConnectError(RequestError):
    """The TCP connection to the target could not be established."""

    pass


class RequestTimeoutError(RequestError):
    """The target did not answer within the read timeout."""

    pass


class WriteError(RequestError):
    """Sending the request bytes failed."""

    pass


class ReadError(RequestError):
    """Reading the response failed before end of stream."""

    pass


class BadStatusError(RequestError):
    """The response status line was not a literal 200.

    Attributes:
        status_line: First line of the response, possibly empty.
    """

    def __init__(self, status_line: str) -> None:
        super().__init__(f"Non-200 response: {status_line}")
        self.status_line = status_line


class PhaseError(PerfError):
    """A diagnostics measurement phase failed.

    Attributes:
        phase: Name of the phase that failed ("dns", "connect" or "request").
    """

    def __init__(self, phase: str, message: str) -> None:
        super().__init__(message)
        self.phase = phase


class DnsResolutionError(PhaseError):
    """Hostname resolution failed or returned no addresses."""

    def __init__(self, message: str) -> None:
        super().__init__("dns", message)


class TracerouteUnavailableError(PerfError):
    """Neither the primary nor the fallback traceroute utility could be run."""

    pass
