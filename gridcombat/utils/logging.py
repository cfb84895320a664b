"""Logging setup shared by the CLI and the API server."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from gridcombat.config import LOG_LEVELS

# Name of the handler installed below, so reconfiguring replaces only ours
HANDLER_NAME = "gridcombat"


def setup_logging(level: str = "INFO", stream: TextIO | None = None) -> logging.Handler:
    """Route combat logs to *stream* (stdout by default) at *level*.

    The thread name column tells boost trials on worker threads apart from
    the main loop. Handlers installed by others (pytest, uvicorn) are kept.
    """
    level = level.upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"log level must be one of {LOG_LEVELS}, got {level!r}")
    numeric_level = getattr(logging, level)

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.set_name(HANDLER_NAME)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s [%(levelname)-5s] %(threadName)-13s %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    ))

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == HANDLER_NAME:
            root.removeHandler(existing)
    root.setLevel(numeric_level)
    root.addHandler(handler)
    return handler
