"""Application-layer stack pruning policy.

Purpose
-------
Turn a raw, textual stack capture into a clean trace: strip the thread header,
skip leading plumbing frames and drop frames owned by the hosting runner. The
module is free of I/O and introspection so it can be exercised with synthetic
stacks.

Contents
    - ``THREAD_HEADER_PREFIX``: marker identifying the header line of a capture.
    - ``prune_stack``: public entry point.
    - ``_split_lines`` / ``_skip_frames`` / ``_filter_pairs``: the three stages.

System Role
-----------
Called by :func:`lib_failure_signal.adapters.runtime.stack.pruned_stack` with a
live capture; the frame filter comes from :mod:`lib_failure_signal.config`.
"""

from __future__ import annotations

from typing import Final

from .ports import FrameFilter

THREAD_HEADER_PREFIX: Final[str] = "thread "


def prune_stack(raw: str, skip: int, *, frame_filter: FrameFilter | None = None) -> str:
    """Return *raw* without its header, the first *skip* frames and runner frames.

    Why
    ----
    Failure reports should start at the code that failed, not at the capture
    machinery, and should not drown user frames in runner internals.

    What
    ----
    Even lines of the remaining capture are function identifiers and odd lines
    their source locations. Whole ``(name, location)`` pairs are dropped when
    ``frame_filter(location)`` is truthy; survivors keep their relative order.

    Parameters
    ----------
    raw:
        Capture text: an optional ``thread ...`` header followed by alternating
        name and location lines.
    skip:
        Number of leading frames to drop. When the capture holds no more than
        ``skip`` frames the result is empty.
    frame_filter:
        Predicate applied to each location line. ``None`` keeps every frame.

    Returns
    -------
    str
        Surviving lines joined with ``"\\n"``.

    Examples
    --------
    >>> raw = "thread 1 [running]:\\nmain.a()\\n\\ta.py:1\\nrunner.b()\\n\\t/_pytest/b.py:2\\nmain.c()\\n\\tc.py:3\\n"
    >>> prune_stack(raw, 0, frame_filter=lambda loc: "/_pytest/" in loc).split("\\n")[::2]
    ['main.a()', 'main.c()']
    >>> prune_stack(raw, 5)
    ''
    """

    lines = _skip_frames(_split_lines(raw), skip)
    return "\n".join(_filter_pairs(lines, frame_filter))


def _split_lines(raw: str) -> list[str]:
    """Split the capture, dropping the thread header and the empty line after a final newline."""

    lines = raw.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    if lines and lines[0].startswith(THREAD_HEADER_PREFIX):
        lines = lines[1:]
    return lines


def _skip_frames(lines: list[str], skip: int) -> list[str]:
    """Drop ``2 * skip`` leading lines, or everything when the stack is too short."""

    cut = 2 * max(skip, 0)
    if len(lines) <= cut:
        return []
    return lines[cut:]


def _filter_pairs(lines: list[str], frame_filter: FrameFilter | None) -> list[str]:
    """Filter ``(name, location)`` pairs in place; a trailing odd line is ignored."""

    n = 0
    for i in range(len(lines) // 2):
        name, location = lines[i * 2], lines[i * 2 + 1]
        if frame_filter is not None and frame_filter(location):
            continue
        lines[n] = name
        lines[n + 1] = location
        n += 2
    del lines[n:]
    return lines
