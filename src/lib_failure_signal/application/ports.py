"""Application-layer ports describing collaborator responsibilities.

Purpose
-------
Define the structural contracts the failure protocol relies on so the
composition root can be wired to pytest, to a fake runner in tests, or to any
other hosting framework without changing the protocol itself.

Contents
--------
* :class:`LogSink` – text stream receiving formatted log records.
* :class:`NativeFail` – the hosting runner's own failure primitive.
* :class:`FrameFilter` – predicate deciding which stack frames are runner noise.

System Role
-----------
These protocols enforce Dependency Inversion (DIP). Adapters in
``lib_failure_signal.adapters`` implement them and :mod:`lib_failure_signal.config`
selects the concrete implementations.
"""

from __future__ import annotations

from typing import NoReturn, Protocol


class LogSink(Protocol):
    """Process-wide writable text stream supplied by the hosting runner.

    Why
    ----
    The logger performs formatted writes only; durability and line atomicity
    belong to the sink.
    """

    def write(self, text: str, /) -> object:
        """Write *text* to the underlying stream."""


class NativeFail(Protocol):
    """Failure primitive of the hosting test runner.

    Why
    ----
    The protocol substitutes its own payload for whatever this primitive
    raises, so the only contract is that calling it never returns normally.
    """

    def __call__(self, message: str, skip: int, /) -> NoReturn:
        """Abort the current test with *message*; *skip* counts caller frames to hide."""


class FrameFilter(Protocol):
    """Decide whether a stack frame belongs to the runner's internal machinery."""

    def __call__(self, location: str, /) -> object:
        """Return a truthy value when the frame at *location* should be dropped."""
