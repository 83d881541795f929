"""Domain-level failure taxonomy.

Purpose
-------
Expose the stable types raised by ``lib_failure_signal``. The module lives in
the domain layer and contains no I/O, so adapters, the composition root and
consuming test suites can all depend on it.

Contents
--------
* :data:`FAILURE_PANIC_WARNING` – operator guidance rendered by ``str()`` of a
  :class:`FailurePanic`.
* :class:`FailurePanic` – the abort signal carrying message, source location
  and pruned stack trace.
* :class:`FailureSignalError` – umbrella base class for ordinary library errors.
* :class:`InvalidSetting` – raised when configuration values cannot be used.
* :class:`UnreachableError` – raised when the hosting runner's failure primitive
  returns instead of aborting.

System Role
-----------
:class:`FailurePanic` intentionally sits outside the :class:`Exception` tree,
mirroring pytest's own outcome exceptions. Callers catch
:class:`FailureSignalError` for everything else.
"""

from __future__ import annotations

from typing import Final

FAILURE_PANIC_WARNING: Final[str] = """
Your test failed.
The harness raises FailurePanic to prevent subsequent assertions from running.
Normally the test runner rescues this exception so you shouldn't see it.
But, if you make an assertion in a thread, the runner can't capture the exception.
To circumvent this, create one WorkerRecovery in the test, run the thread target under
	recovery.wrap(target)  or  with recovery.guard(): ...
and call
	recovery.raise_if_failed()
on the test thread after joining the thread that caused this exception.
"""
"""Text shown whenever a :class:`FailurePanic` is printed.

Why
    A failure that escapes a worker thread surfaces as an unhandled exception;
    the text tells the operator how to route it back to the test instead.
"""


class FailurePanic(BaseException):
    """Abort signal raised by :func:`lib_failure_signal.core.fail` and friends.

    Why
    ----
    The hosting runner's own failure exception carries only a message. Tests
    that recover an abort (for example from a worker thread) need the exact
    source location and the stack as it looked when the failure happened.

    What
    ----
    Holds four read-only attributes. Instances are built once per failure and
    never mutated; assigning to an attribute raises :class:`AttributeError`.

    Attributes
    ----------
    message:
        The failure message passed to ``fail``.
    filename:
        The file that is the source of the failure.
    line:
        The line number in *filename* that is the source of the failure.
    full_stack_trace:
        A pruned stack trace starting at the source of the failure.

    Examples
    --------
    >>> failure = FailurePanic("boom", "test_x.py", 12, "")
    >>> failure.line
    12
    >>> str(failure) == FAILURE_PANIC_WARNING
    True
    """

    __slots__ = ("_message", "_filename", "_line", "_full_stack_trace")

    def __init__(self, message: str, filename: str, line: int, full_stack_trace: str) -> None:
        super().__init__(message, filename, line, full_stack_trace)
        object.__setattr__(self, "_message", message)
        object.__setattr__(self, "_filename", filename)
        object.__setattr__(self, "_line", line)
        object.__setattr__(self, "_full_stack_trace", full_stack_trace)

    @property
    def message(self) -> str:
        return self._message

    @property
    def filename(self) -> str:
        return self._filename

    @property
    def line(self) -> int:
        return self._line

    @property
    def full_stack_trace(self) -> str:
        return self._full_stack_trace

    def __setattr__(self, name: str, value: object) -> None:
        if name in self.__slots__:
            raise AttributeError(f"FailurePanic.{name.lstrip('_')} is read-only")
        super().__setattr__(name, value)

    def __str__(self) -> str:
        return FAILURE_PANIC_WARNING

    def __repr__(self) -> str:
        return (
            f"FailurePanic(message={self._message!r}, filename={self._filename!r}, "
            f"line={self._line!r})"
        )

    def as_dict(self) -> dict[str, object]:
        """Return the failure fields as a plain dictionary for serialisation."""

        return {
            "message": self._message,
            "filename": self._filename,
            "line": self._line,
            "full_stack_trace": self._full_stack_trace,
        }


class FailureSignalError(Exception):
    """Base type for ordinary exceptions emitted by ``lib_failure_signal``.

    Why
    ----
    Provide a single catch-all type for consumers that do not need fine-grained
    handling. :class:`FailurePanic` is deliberately not part of this family.
    """


class InvalidSetting(FailureSignalError):
    """Raised when a configuration value cannot be turned into a setting.

    Typical Sources
    ---------------
    Malformed ``LIB_FAILURE_SIGNAL_FRAME_FILTER`` patterns or an unknown
    ``LIB_FAILURE_SIGNAL_SINK`` name.
    """


class UnreachableError(FailureSignalError, RuntimeError):
    """Raised by ``failf`` when the native failure primitive returned normally.

    The hosting runner promises to abort; reaching this error means that
    promise was broken and the test cannot continue.
    """
