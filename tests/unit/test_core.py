"""Unit tests for the abort protocol in ``core``.

Covers payload substitution, source attribution through helper chains, the
FAIL record layout and the behaviour when the native primitive misbehaves.
"""

from __future__ import annotations

import io
import logging
import re
import sys
from pathlib import Path

import pytest

from lib_failure_signal.config import override_settings
from lib_failure_signal.core import _trigger_abort, fail, failf
from lib_failure_signal.domain.errors import FailurePanic, UnreachableError

STAMP = r"[A-Za-z]{3} \d{2} \d{2}:\d{2}:\d{2}\.\d{3}"


class NativeMarker(BaseException):
    """Stand-in for a runner's own abort payload."""


def _raise_runtime_error(message: str, skip: int) -> None:
    raise RuntimeError(message)


def _raise_marker(message: str, skip: int) -> None:
    raise NativeMarker(message)


def _raise_pytest_failure(message: str, skip: int) -> None:
    pytest.fail(message)


def _return_normally(message: str, skip: int) -> None:
    return None


def _scenario_c(record: list[int]) -> None:
    record.append(sys._getframe().f_lineno + 1)
    failf("boom %d", 42)


def _scenario_b(record: list[int]) -> None:
    _scenario_c(record)


def _scenario_a(record: list[int]) -> None:
    _scenario_b(record)


def _inner_helper() -> None:
    fail("X", 2)


def _middle_helper() -> None:
    _inner_helper()


def _outer_helper(record: list[int]) -> None:
    record.append(sys._getframe().f_lineno + 1)
    _middle_helper()


@pytest.mark.parametrize("native", [_raise_runtime_error, _raise_marker, _raise_pytest_failure])
def test_trigger_abort_always_raises_failure_panic(native) -> None:
    """Recovering the abort must yield a FailurePanic for any native payload."""

    with override_settings(native_fail=native):
        for index in range(100):
            message = f"failure #{index}: {'x' * (index % 7)}"
            try:
                _trigger_abort(message)
            except BaseException as exc:  # noqa: BLE001 - the payload type is under test
                recovered = exc
            else:
                pytest.fail("_trigger_abort returned")
            assert type(recovered) is FailurePanic
            assert recovered.message == message


def test_trigger_abort_discards_native_payload() -> None:
    with override_settings(native_fail=_raise_runtime_error):
        with pytest.raises(FailurePanic) as excinfo:
            _trigger_abort("boom")
    assert excinfo.value.__cause__ is None
    assert excinfo.value.__suppress_context__ is True


def test_trigger_abort_attributes_its_direct_caller() -> None:
    with pytest.raises(FailurePanic) as excinfo:
        expected = sys._getframe().f_lineno + 1
        _trigger_abort("boom")
    assert excinfo.value.line == expected
    assert Path(excinfo.value.filename).name == "test_core.py"


def test_trigger_abort_returns_when_native_does_not_raise(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="lib_failure_signal")
    with override_settings(native_fail=_return_normally):
        assert _trigger_abort("quiet") is None
    assert caplog.records[-1].getMessage() == "native_failure_returned"


def test_trigger_abort_logs_interception(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="lib_failure_signal")
    with pytest.raises(FailurePanic):
        _trigger_abort("boom")
    events = [record for record in caplog.records if record.getMessage() == "native_failure_intercepted"]
    assert events
    assert getattr(events[-1], "context")["payload_type"] == "Failed"


def test_failf_scenario_attributes_direct_caller() -> None:
    """A -> B -> C -> failf: location is C's call, trace holds C, B, A and no plumbing."""

    record: list[int] = []
    with pytest.raises(FailurePanic) as excinfo:
        _scenario_a(record)
    failure = excinfo.value

    assert failure.message.endswith("boom 42")
    assert re.match(rf"^{STAMP}: boom 42$", failure.message)
    assert Path(failure.filename).name == "test_core.py"
    assert failure.line == record[0]

    names = failure.full_stack_trace.split("\n")[::2]
    assert names[0].endswith("._scenario_c(...)")
    assert names[1].endswith("._scenario_b(...)")
    assert names[2].endswith("._scenario_a(...)")
    for plumbing in ("failf(", "_trigger_abort(", "pruned_stack(", "capture_raw_stack("):
        assert plumbing not in failure.full_stack_trace


def test_failf_writes_fail_record_with_trace(sink: io.StringIO) -> None:
    with pytest.raises(FailurePanic):
        _scenario_a([])
    output = sink.getvalue()
    assert re.match(rf"^{STAMP}: FAIL: boom 42\n\nFull Stack Trace\n", output)
    trace = output.split("Full Stack Trace\n", 1)[1]
    assert trace.split("\n")[0].endswith("._scenario_c(...)")


def test_fail_extra_skip_attributes_outermost_helper() -> None:
    record: list[int] = []
    with pytest.raises(FailurePanic) as excinfo:
        _outer_helper(record)
    failure = excinfo.value
    assert failure.line == record[0]
    assert Path(failure.filename).name == "test_core.py"
    assert failure.full_stack_trace.split("\n")[0].endswith("._outer_helper(...)")


def test_fail_logged_trace_skips_helpers(sink: io.StringIO) -> None:
    with pytest.raises(FailurePanic):
        _outer_helper([])
    trace = sink.getvalue().split("Full Stack Trace\n", 1)[1]
    assert trace.split("\n")[0].endswith("._outer_helper(...)")
    assert "_inner_helper(" not in trace
    assert "_middle_helper(" not in trace


def test_fail_returns_when_native_does_not_raise(sink: io.StringIO) -> None:
    with override_settings(native_fail=_return_normally):
        assert fail("soft") is None
    assert ": FAIL: soft\n\nFull Stack Trace\n" in sink.getvalue()


def test_failf_guards_against_returning_native(sink: io.StringIO) -> None:
    with override_settings(native_fail=_return_normally):
        with pytest.raises(UnreachableError, match="^unreachable$"):
            failf("value was %s", "wrong")
    assert ": FAIL: value was wrong\n" in sink.getvalue()


def test_failf_escapes_broad_exception_handlers() -> None:
    with pytest.raises(FailurePanic):
        try:
            failf("no swallowing")
        except Exception:  # noqa: BLE001 - code under test catching too much
            pytest.fail("FailurePanic was caught as Exception")
