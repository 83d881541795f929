from __future__ import annotations

import pytest

from lib_failure_signal.adapters.runner.pytest_runner import PYTEST_FRAME_PATTERN, pytest_native_fail


def test_native_fail_raises_pytest_failure() -> None:
    with pytest.raises(pytest.fail.Exception, match="^broken$"):
        pytest_native_fail("broken", 3)


@pytest.mark.parametrize(
    ("location", "matches"),
    [
        ("\t/usr/lib/python3/site-packages/_pytest/runner.py:341", True),
        ("\t/usr/lib/python3/site-packages/pluggy/_callers.py:103", True),
        ("\tC:\\Python\\Lib\\site-packages\\_pytest\\python.py:194", True),
        ("\t/home/dev/project/tests/test_pytest_helpers.py:12", False),
        ("\t/home/dev/pluggy_clone.py:4", False),
    ],
)
def test_frame_pattern(location: str, matches: bool) -> None:
    assert bool(PYTEST_FRAME_PATTERN.search(location)) is matches
