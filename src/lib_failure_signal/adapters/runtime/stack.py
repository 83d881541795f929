"""Runtime stack introspection adapter.

Purpose
-------
Read the calling thread's own frames and expose them in the textual form the
pruning policy expects. This is the only module that touches interpreter
frames, so the skip arithmetic tied to them lives here too.

Key behaviours
--------------
* :func:`capture_raw_stack` renders a ``thread <ident> [running]:`` header and
  one ``module.qualname(...)`` / ``\\t<file>:<line>`` pair per frame, innermost
  first.
* :func:`pruned_stack` combines the capture with
  :func:`lib_failure_signal.application.prune.prune_stack`.
* :func:`caller_location` resolves the file and line of a caller frame.
"""

from __future__ import annotations

import sys
import threading
from types import FrameType
from typing import Final

from ...application.ports import FrameFilter
from ...application.prune import THREAD_HEADER_PREFIX, prune_stack
from ...config import get_settings

CAPTURE_FRAMES: Final[int] = 2
"""Frames contributed by :func:`capture_raw_stack` and :func:`pruned_stack` themselves.

With ``skip=0`` this makes the first frame of :func:`pruned_stack` output the
direct caller. Changing either function's call structure requires updating it.
"""


def capture_raw_stack() -> str:
    """Return the current thread's stack, innermost frame first, as text.

    The capture starts with this function's own frame and ends with a newline.
    """

    frame: FrameType | None = sys._getframe(0)
    lines = [f"{THREAD_HEADER_PREFIX}{threading.get_ident()} [running]:"]
    while frame is not None:
        lines.append(_frame_name(frame))
        lines.append(f"\t{frame.f_code.co_filename}:{frame.f_lineno}")
        frame = frame.f_back
    return "\n".join(lines) + "\n"


def pruned_stack(skip: int = 0, *, frame_filter: FrameFilter | None = None) -> str:
    """Return the current stack without capture plumbing and runner frames.

    Why
    ----
    Failure logs need a trace that starts at the code the caller cares about.

    Parameters
    ----------
    skip:
        Additional frames to omit. With ``skip=0`` the trace starts with the
        direct caller of this function.
    frame_filter:
        Predicate on location lines; defaults to the configured runner filter.

    Examples
    --------
    >>> def probe():
    ...     return pruned_stack()
    >>> probe().split("\\n")[0].endswith("probe(...)")
    True
    """

    if frame_filter is None:
        frame_filter = get_settings().frame_filter
    return prune_stack(capture_raw_stack(), skip + CAPTURE_FRAMES, frame_filter=frame_filter)


def caller_location(skip: int = 0) -> tuple[str, int, bool]:
    """Return ``(filename, line, ok)`` of the frame *skip* levels above the caller.

    ``skip=0`` identifies the function that called :func:`caller_location`.
    When the stack is not deep enough ``("", 0, False)`` is returned.
    """

    try:
        frame = sys._getframe(skip + 1)
    except ValueError:
        return "", 0, False
    return frame.f_code.co_filename, frame.f_lineno, True


def _frame_name(frame: FrameType) -> str:
    code = frame.f_code
    module = frame.f_globals.get("__name__", "?")
    qualname = getattr(code, "co_qualname", code.co_name)
    return f"{module}.{qualname}(...)"
