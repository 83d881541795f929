"""Testing diagnostics that keep failure scenarios observable and predictable.

Purpose
    Provide an intentionally failing helper that exercises the full failure
    protocol (log record, native abort, interception) for the CLI and the
    end-to-end suite.

Contents
    - ``FAILURE_MESSAGE``: stable message used when forcing a failure.
    - ``i_should_fail``: calls :func:`lib_failure_signal.core.failf` with it.
"""

from __future__ import annotations

from typing import Final, NoReturn

from .core import failf

FAILURE_MESSAGE: Final[str] = "i should fail"
"""Stable message emitted when ``i_should_fail`` triggers a failure sequence."""


def i_should_fail() -> NoReturn:
    """Abort through :func:`failf` with :data:`FAILURE_MESSAGE`.

    The resulting :class:`~lib_failure_signal.domain.errors.FailurePanic` is
    attributed to the caller of this function.
    """

    __tracebackhide__ = True
    failf(FAILURE_MESSAGE)
