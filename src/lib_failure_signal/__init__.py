"""Public package surface for the failure-signaling core.

Test helpers import :func:`failf`, :func:`fail` and :func:`log_info` from here;
code that recovers aborts catches :class:`FailurePanic`.
"""

from __future__ import annotations

from .adapters.runtime.stack import CAPTURE_FRAMES, caller_location, capture_raw_stack, pruned_stack
from .application.prune import prune_stack
from .config import FailureSettings, configure, get_settings, load_settings, override_settings
from .core import fail, failf, log_info
from .domain.errors import (
    FAILURE_PANIC_WARNING,
    FailurePanic,
    FailureSignalError,
    InvalidSetting,
    UnreachableError,
)
from .observability import emit, get_logger, now_stamp
from .recovery import WorkerRecovery
from .testing import i_should_fail

__all__ = [
    "CAPTURE_FRAMES",
    "FAILURE_PANIC_WARNING",
    "FailurePanic",
    "FailureSettings",
    "FailureSignalError",
    "InvalidSetting",
    "UnreachableError",
    "WorkerRecovery",
    "caller_location",
    "capture_raw_stack",
    "configure",
    "emit",
    "fail",
    "failf",
    "get_logger",
    "get_settings",
    "i_should_fail",
    "load_settings",
    "log_info",
    "now_stamp",
    "override_settings",
    "prune_stack",
    "pruned_stack",
]
