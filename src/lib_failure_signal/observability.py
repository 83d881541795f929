"""Logging helpers for failure reports and protocol diagnostics.

Purpose
    Produce the human-facing ``INFO``/``FAIL`` records test authors read, and
    keep the protocol's own lifecycle events available to applications that
    attach handlers to the package logger.

Contents
    - ``now_stamp``: wall-clock stamp with millisecond precision.
    - ``emit``: write one leveled, timestamped record to a sink.
    - ``get_logger``: returns the shared package logger (quiet by default).
    - ``log_debug``: emit structured lifecycle entries via a private emitter.

System Integration
    :mod:`lib_failure_signal.core` calls :func:`emit` with the configured sink.
    Structured events go through :mod:`logging` and never reach the sink.
"""

from __future__ import annotations

import datetime
import logging
import sys
from typing import Any, Final, Mapping

from .application.ports import LogSink

_LOGGER: Final[logging.Logger] = logging.getLogger("lib_failure_signal")
_LOGGER.addHandler(logging.NullHandler())


def now_stamp() -> str:
    """Return the local time as ``'Mon DD HH:MM:SS.mmm'``.

    Examples
    --------
    >>> import re
    >>> bool(re.fullmatch(r"\\w{3} \\d{2} \\d{2}:\\d{2}:\\d{2}\\.\\d{3}", now_stamp()))
    True
    """

    now = datetime.datetime.now()
    return f"{now:%b %d %H:%M:%S}.{now.microsecond // 1000:03d}"


def emit(level: str, format: str, *args: Any, sink: LogSink | None = None) -> None:
    """Write ``'<stamp>: <level>: <message>'`` as a single line to *sink*.

    Why
        Records must stay intact when several threads share one sink, so the
        whole record is handed over in one ``write`` call.
    What
        Formats *format* with *args* the way :mod:`logging` does (``%`` only
        when arguments are given) and writes it to *sink*, or to
        :data:`sys.stderr` when *sink* is ``None``.
    Side Effects
        Writes to the sink. Write failures propagate unchanged.

    Examples
    --------
    >>> import io
    >>> buffer = io.StringIO()
    >>> emit("INFO", "n=%d", 5, sink=buffer)
    >>> buffer.getvalue().endswith(": INFO: n=5\\n")
    True
    """

    message = format % args if args else format
    target = sys.stderr if sink is None else sink
    target.write(f"{now_stamp()}: {level}: {message}\n")


def get_logger() -> logging.Logger:
    """Expose the package logger so applications may attach handlers.

    Why
        Leaves the library silent by default while giving host applications full
        control over handler and formatter configuration.
    """

    return _LOGGER


def log_debug(message: str, **fields: Any) -> None:
    """Emit a structured debug log entry with *fields* as context."""

    _emit(logging.DEBUG, message, fields)


def _emit(level: int, message: str, fields: Mapping[str, Any]) -> None:
    """Send a log entry through the shared logger with contextual metadata."""

    _LOGGER.log(level, message, extra={"context": dict(fields)})
