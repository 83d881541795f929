"""Composition root for ``lib_failure_signal``.

Purpose
-------
Provide the entry points test code calls once a failure has been decided:
log it with a pruned stack trace, then abort the current test through the
hosting runner while making sure whoever recovers the abort receives a
:class:`FailurePanic` with the exact source location.

Contents
--------
* :func:`log_info` – timestamped ``INFO`` record.
* :func:`failf` – format, log and abort; never returns.
* :func:`fail` – log and abort with a pre-formatted message and extra skip.
* :func:`_trigger_abort` – the interception protocol around the native
  failure primitive.

System Role
-----------
Connects the stack adapter, the logger and the configured runner primitive.
Every collaborator is read from :func:`lib_failure_signal.config.get_settings`
at call time.
"""

from __future__ import annotations

from typing import Any, NoReturn

from .adapters.runtime.stack import caller_location, pruned_stack
from .config import get_settings
from .domain.errors import FailurePanic, UnreachableError
from .observability import emit, log_debug, now_stamp


def log_info(format: str, *args: Any) -> None:
    """Write an ``INFO`` record to the configured sink.

    Examples
    --------
    >>> import io
    >>> from lib_failure_signal.config import override_settings
    >>> with override_settings(sink=io.StringIO()) as settings:
    ...     log_info("n=%d", 5)
    ...     settings.sink.getvalue().endswith("INFO: n=5\\n")
    True
    """

    emit("INFO", format, *args, sink=get_settings().sink)


def failf(format: str, *args: Any) -> NoReturn:
    """Log the failure with a stack trace starting at the direct caller, then abort.

    For the call chain ``f -> g -> failf("foo")`` the failure is attributed to
    ``g``. The abort surfaces as :class:`FailurePanic`.

    Raises
    ------
    FailurePanic
        Always, under a well-behaved native failure primitive.
    UnreachableError
        When the native failure primitive returned instead of aborting.
    """

    __tracebackhide__ = True
    msg = format % args if args else format
    skip = 1
    _log_failure(msg, pruned_stack(skip))
    _trigger_abort(f"{now_stamp()}: {msg}", skip)
    raise UnreachableError("unreachable")


def fail(message: str, caller_skip: int = 0) -> None:
    """Log *message* with a stack trace and abort the current test.

    Why
    ----
    Assertion helpers call this instead of the runner's own failure function so
    the problem is logged as it occurs and the abort carries diagnostics.

    Parameters
    ----------
    message:
        Pre-formatted failure description.
    caller_skip:
        Extra frames to skip so helper layers can attribute the failure to
        their own caller. ``0`` attributes it to the direct caller.

    Raises
    ------
    FailurePanic
        Under a well-behaved native failure primitive. If the primitive
        returns, so does this function.
    """

    __tracebackhide__ = True
    skip = 1 + caller_skip
    _log_failure(message, pruned_stack(skip))
    _trigger_abort(f"{now_stamp()}: {message}", skip)


def _trigger_abort(message: str, caller_skip: int = 0) -> None:
    """Call the native failure primitive and replace whatever it raises.

    What
    ----
    Builds the :class:`FailurePanic` first (location and trace at
    ``1 + caller_skip`` frames above this function), then invokes the native
    primitive. Any exception escaping the primitive is discarded and the
    failure is raised in its place.
    """

    __tracebackhide__ = True
    skip = 1 + caller_skip
    settings = get_settings()
    filename, line, _ = caller_location(skip)
    failure = FailurePanic(
        message,
        filename,
        line,
        pruned_stack(skip, frame_filter=settings.frame_filter),
    )

    try:
        settings.native_fail(message, skip)
    except BaseException as exc:  # noqa: BLE001 - every native abort becomes a FailurePanic
        log_debug(
            "native_failure_intercepted",
            payload_type=type(exc).__name__,
            filename=filename,
            line=line,
        )
        raise failure from None
    log_debug("native_failure_returned", filename=filename, line=line)


def _log_failure(message: str, stack: str) -> None:
    emit("FAIL", "%s\n\nFull Stack Trace\n%s", message, stack, sink=get_settings().sink)


__all__ = [
    "FailurePanic",
    "UnreachableError",
    "log_info",
    "failf",
    "fail",
]
