"""
Package logger for HubFetch.
"""

import logging
import sys


LOGGER_NAME = "HubFetch"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _build_logger() -> logging.Logger:
    log = logging.getLogger(LOGGER_NAME)
    if not log.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        log.addHandler(handler)
    log.setLevel(logging.INFO)
    return log


def format_bytes(size: int) -> str:
    """Human readable binary size for log lines, e.g. ``1.5 MB``."""

    value = float(size)
    for unit in ("bytes", "KB", "MB", "GB"):
        if abs(value) < 1024 or unit == "GB":
            break
        value /= 1024
    if unit == "bytes":
        return f"{int(value)} bytes"
    return f"{value:.1f} {unit}"


logger = _build_logger()


__all__ = [
    "LOGGER_NAME",
    "format_bytes",
    "logger",
]
