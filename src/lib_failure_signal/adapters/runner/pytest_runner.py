"""pytest adapter for the hosting-runner ports.

Purpose
-------
Bind the failure protocol to pytest: the native failure primitive is
:func:`pytest.fail` and runner frames are those living under ``_pytest`` or
``pluggy`` package directories.
"""

from __future__ import annotations

import re
from typing import Final, NoReturn

import pytest

PYTEST_FRAME_PATTERN: Final[re.Pattern[str]] = re.compile(r"[\\/](?:_pytest|pluggy)[\\/]")
"""Matches location lines of frames that belong to pytest's own machinery."""


def pytest_native_fail(message: str, skip: int) -> NoReturn:
    """Abort the current test through :func:`pytest.fail`.

    pytest has no notion of caller skipping, so *skip* is accepted for the
    port's sake only. ``pytrace`` is disabled because the pruned trace is
    already logged by the caller.
    """

    __tracebackhide__ = True
    pytest.fail(message, pytrace=False)
