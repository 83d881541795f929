from __future__ import annotations

import io
from typing import Iterator

import pytest

from lib_failure_signal.config import override_settings


@pytest.fixture(autouse=True)
def sink() -> Iterator[io.StringIO]:
    """Route every record of a test into an in-memory sink and restore settings afterwards."""

    buffer = io.StringIO()
    with override_settings(sink=buffer):
        yield buffer
