"""
infrastructure/logging_config.py — Process-wide logging setup.

Log records go to stderr so the CLI can stream frequency tables on stdout
without interleaving diagnostics.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

_LOG_FORMAT = "%(asctime)s.%(msecs)03d [%(name)s] %(levelname)s %(message)s"
_LOG_DATE_FORMAT = "%H:%M:%S"

# Libraries that log request-level INFO lines when the API runs under uvicorn
_QUIET_LOGGERS: tuple[str, ...] = ("uvicorn", "uvicorn.access", "httpx", "multipart")


def configure_logging(level: int | str = logging.INFO, stream: TextIO | None = None) -> logging.Handler:
    """
    Route all log records to a single stream handler on the root logger.

    Calling it again replaces the previous handler rather than stacking a
    second one.

    Args:
        level:  Level number or name, e.g. logging.DEBUG or "DEBUG"
        stream: Destination (default: sys.stderr at call time)

    Returns:
        The installed handler
    """
    if isinstance(level, str):
        number = logging.getLevelName(level.upper())
        if not isinstance(number, int):
            raise ValueError(f"Unknown log level: {level}")
        level = number

    handler = logging.StreamHandler(sys.stderr if stream is None else stream)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, _LOG_DATE_FORMAT))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
    return handler
