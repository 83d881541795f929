"""Recovery guard for failures raised outside the test's own thread.

Purpose
    The runner rescues a :class:`FailurePanic` only on the thread running the
    test. A failure raised in a worker thread would otherwise end that thread
    with an unhandled exception and leave the test passing. :class:`WorkerRecovery`
    records such failures so the test thread can re-raise them.

Contents
    - ``WorkerRecovery``: guard, decorator and re-raise helper.
"""

from __future__ import annotations

import functools
import threading
from contextlib import contextmanager
from typing import Any, Callable, Iterator, TypeVar

from .domain.errors import FailurePanic
from .observability import log_debug

F = TypeVar("F", bound=Callable[..., Any])


class WorkerRecovery:
    """Collect :class:`FailurePanic` instances raised inside guarded blocks.

    Examples
    --------
    >>> import threading
    >>> recovery = WorkerRecovery()
    >>> @recovery.wrap
    ... def worker():
    ...     raise FailurePanic("boom", "w.py", 1, "")
    >>> thread = threading.Thread(target=worker)
    >>> thread.start(); thread.join()
    >>> [failure.message for failure in recovery.failures]
    ['boom']
    """

    def __init__(self) -> None:
        self._failures: list[FailurePanic] = []
        self._lock = threading.Lock()

    @property
    def failures(self) -> tuple[FailurePanic, ...]:
        with self._lock:
            return tuple(self._failures)

    @contextmanager
    def guard(self) -> Iterator[None]:
        """Record a :class:`FailurePanic` escaping the block instead of propagating it.

        Other exceptions pass through untouched. The recorded failure only
        fails the test once :meth:`raise_if_failed` runs on the test thread.
        """

        try:
            yield
        except FailurePanic as failure:
            with self._lock:
                self._failures.append(failure)
            log_debug(
                "worker_failure_recovered",
                thread=threading.current_thread().name,
                filename=failure.filename,
                line=failure.line,
            )

    def wrap(self, func: F) -> F:
        """Return *func* running inside :meth:`guard`, for use as a thread target."""

        @functools.wraps(func)
        def guarded(*args: Any, **kwargs: Any) -> Any:
            with self.guard():
                return func(*args, **kwargs)
            return None

        return guarded  # type: ignore[return-value]

    def raise_if_failed(self) -> None:
        """Re-raise the first recorded failure on the calling thread, if any."""

        failures = self.failures
        if failures:
            raise failures[0]
