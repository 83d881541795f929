"""Settings for the failure protocol.

Purpose
-------
Hold the three collaborators the protocol is wired to (log sink, native
failure primitive, runner frame filter) in one immutable value object and let
operators adjust them through environment variables.

Contents
--------
* :data:`ENV_PREFIX` – namespace for environment overrides.
* :class:`FailureSettings` – frozen settings value object.
* :func:`load_settings` – build settings from an ``environ`` mapping.
* :func:`get_settings` / :func:`configure` / :func:`override_settings` – access
  and replace the process-wide settings.

System Role
-----------
Settings are process-wide: configured once at harness start-up and read at
call time by :mod:`lib_failure_signal.core` and the stack adapter. Test suites
use :func:`override_settings` to inject fakes.
"""

from __future__ import annotations

import os
import re
import sys
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from typing import Any, Final, Iterator, Mapping

from .adapters.runner.pytest_runner import PYTEST_FRAME_PATTERN, pytest_native_fail
from .application.ports import FrameFilter, LogSink, NativeFail
from .domain.errors import InvalidSetting
from .observability import log_debug

ENV_PREFIX: Final[str] = "LIB_FAILURE_SIGNAL"


class _StandardStream:
    """Write to a :mod:`sys` stream looked up at write time."""

    def __init__(self, name: str) -> None:
        self.name = name

    def write(self, text: str) -> object:
        return getattr(sys, self.name).write(text)


_SINKS: Final[dict[str, LogSink]] = {"stderr": _StandardStream("stderr"), "stdout": _StandardStream("stdout")}


@dataclass(frozen=True, slots=True)
class FailureSettings:
    """Collaborators used by the failure protocol.

    Attributes
    ----------
    sink:
        Stream receiving ``INFO``/``FAIL`` records. ``None`` means
        :data:`sys.stderr` looked up at write time, which keeps pytest's output
        capturing effective.
    native_fail:
        The hosting runner's failure primitive.
    frame_filter:
        Predicate on stack location lines selecting runner-internal frames.
    """

    sink: LogSink | None = None
    native_fail: NativeFail = pytest_native_fail
    frame_filter: FrameFilter = field(default=PYTEST_FRAME_PATTERN.search)


_settings: FailureSettings | None = None


def load_settings(environ: Mapping[str, str] | None = None) -> FailureSettings:
    """Return settings built from *environ* (defaults to :data:`os.environ`).

    Recognised variables
    --------------------
    ``LIB_FAILURE_SIGNAL_FRAME_FILTER``
        Regular expression matched against stack location lines.
    ``LIB_FAILURE_SIGNAL_SINK``
        ``stderr`` or ``stdout``.

    Raises
    ------
    InvalidSetting
        When a variable holds a value that cannot be used.

    Examples
    --------
    >>> settings = load_settings({"LIB_FAILURE_SIGNAL_FRAME_FILTER": "/vendor/"})
    >>> bool(settings.frame_filter("\\t/opt/vendor/x.py:3"))
    True
    >>> load_settings({}).sink is None
    True
    """

    env = os.environ if environ is None else environ
    changes: dict[str, Any] = {}

    pattern = env.get(f"{ENV_PREFIX}_FRAME_FILTER")
    if pattern:
        try:
            changes["frame_filter"] = re.compile(pattern).search
        except re.error as exc:
            raise InvalidSetting(f"{ENV_PREFIX}_FRAME_FILTER: invalid pattern {pattern!r}: {exc}") from exc

    sink_name = env.get(f"{ENV_PREFIX}_SINK")
    if sink_name:
        try:
            changes["sink"] = _SINKS[sink_name.strip().lower()]
        except KeyError as exc:
            raise InvalidSetting(f"{ENV_PREFIX}_SINK: expected one of {sorted(_SINKS)}, got {sink_name!r}") from exc

    log_debug("settings_loaded", overrides=sorted(changes))
    return FailureSettings(**changes)


def get_settings() -> FailureSettings:
    """Return the process-wide settings, loading them from the environment once."""

    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def configure(**changes: Any) -> FailureSettings:
    """Replace fields of the process-wide settings and return the previous value."""

    global _settings
    previous = get_settings()
    _settings = replace(previous, **changes)
    return previous


@contextmanager
def override_settings(**changes: Any) -> Iterator[FailureSettings]:
    """Apply *changes* for the duration of the block and restore afterwards.

    Examples
    --------
    >>> import io
    >>> with override_settings(sink=io.StringIO()) as active:
    ...     active.sink is get_settings().sink
    True
    """

    global _settings
    previous = configure(**changes)
    try:
        yield get_settings()
    finally:
        _settings = previous
