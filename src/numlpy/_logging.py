"""Opt-in logging for numlpy.

The package logs through ``loguru`` but stays silent until the application
enables it, either with ``logger.enable("numlpy")`` and its own sinks or with
:func:`enable_logging`.
"""
from __future__ import annotations

import sys

from loguru import logger

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}"

_sink_id: int | None = None


def enable_logging(level: str = "INFO", sink=sys.stderr) -> int:
    """Enable numlpy log records and route them to ``sink``.

    Calling it again replaces the sink added by the previous call.  Returns
    the loguru handler id.
    """
    global _sink_id
    if _sink_id is not None:
        logger.remove(_sink_id)
    _sink_id = logger.add(
        sink,
        level=level,
        format=LOG_FORMAT,
        filter="numlpy",
        backtrace=True,
        diagnose=False,
    )
    logger.enable("numlpy")
    return _sink_id


def disable_logging() -> None:
    global _sink_id
    if _sink_id is not None:
        logger.remove(_sink_id)
        _sink_id = None
    logger.disable("numlpy")
