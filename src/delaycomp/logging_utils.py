# src/delaycomp/logging_utils.py
"""
Logging utilities for delaycomp.

Pipeline stages log one plain line each at INFO; anything the run tolerates but
a reader should notice (empty derived tables, unlabelled operators, repeated
rows) goes out at WARNING and is prefixed so it stands out in a batch log:

    Workbook loaded: annual=12x27, periodic=40x26
    WARNING: Derived table 'periodic claims' is empty
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO, Union


class _RunLogFormatter(logging.Formatter):
    """Bare message at INFO and below; 'LEVEL: message' above."""

    def format(self, record: logging.LogRecord) -> str:
        msg = super().format(record)
        if record.levelno > logging.INFO:
            return f"{record.levelname}: {msg}"
        return msg


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def get_logger(
    name: str = "delaycomp",
    level: Union[int, str] = logging.INFO,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Return the run logger, attaching a stream handler on first use.

    Repeated calls for the same stream reuse its handler and only update the
    level, so the CLI and library callers can both call this safely. Records do
    not propagate to the root logger.

    Parameters
    ----------
    name:
        Logger name. Defaults to "delaycomp".
    level:
        Level as int or name ("debug", "WARNING"); unknown names mean INFO.
    stream:
        Destination stream. Defaults to sys.stdout.
    """
    logger = logging.getLogger(name)
    level = _resolve_level(level)
    stream = sys.stdout if stream is None else stream

    logger.setLevel(level)
    logger.propagate = False

    handler = next(
        (h for h in logger.handlers
         if isinstance(h, logging.StreamHandler) and getattr(h, "stream", None) is stream),
        None,
    )
    if handler is None:
        handler = logging.StreamHandler(stream)
        handler.setFormatter(_RunLogFormatter("%(message)s"))
        logger.addHandler(handler)
    handler.setLevel(level)

    return logger
