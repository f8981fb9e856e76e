"""Logging setup and structured event helper.

Lifecycle events are emitted as JSON payloads so they can be grepped or piped
into a log processor. Report output goes to stdout and never through logging.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any

from scc_perf import config

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(verbose: bool = False) -> None:
    """Install a stderr handler on the root logger.

    Args:
        verbose: Log at DEBUG instead of WARNING. SCC_PERF_LOG_LEVEL wins
            over both when set.
    """
    level: int | str = logging.DEBUG if verbose else logging.WARNING
    if config.LOG_LEVEL:
        level = config.LOG_LEVEL.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr, force=True)


def log_event(logger: logging.Logger, event: str, level: int = logging.INFO, **fields: Any) -> None:
    """Log a structured JSON entry with an "event" key."""
    if not logger.isEnabledFor(level):
        return
    log_entry = {"event": event, **fields}
    logger.log(level, json.dumps(log_entry, default=str))
