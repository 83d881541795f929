from __future__ import annotations

import threading

import pytest

from lib_failure_signal import WorkerRecovery, failf
from lib_failure_signal.domain.errors import FailurePanic


def _run_in_thread(target) -> None:
    thread = threading.Thread(target=target)
    thread.start()
    thread.join()


def test_worker_failure_reaches_the_test_thread() -> None:
    recovery = WorkerRecovery()

    @recovery.wrap
    def worker() -> None:
        failf("worker saw %d errors", 3)

    _run_in_thread(worker)
    assert len(recovery.failures) == 1
    failure = recovery.failures[0]
    assert failure.message.endswith("worker saw 3 errors")
    assert "worker(...)" in failure.full_stack_trace.split("\n")[0]

    with pytest.raises(FailurePanic) as excinfo:
        recovery.raise_if_failed()
    assert excinfo.value is failure


def test_guard_records_each_failure() -> None:
    recovery = WorkerRecovery()

    def worker(index: int) -> None:
        with recovery.guard():
            failf("worker %d", index)

    threads = [threading.Thread(target=worker, args=(index,)) for index in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert sorted(failure.message[-8:] for failure in recovery.failures) == [f"worker {i}" for i in range(4)]


def test_guard_lets_other_exceptions_through() -> None:
    recovery = WorkerRecovery()
    with pytest.raises(KeyError):
        with recovery.guard():
            raise KeyError("unrelated")
    assert recovery.failures == ()


def test_raise_if_failed_is_silent_without_failures() -> None:
    WorkerRecovery().raise_if_failed()


def test_wrap_preserves_return_value_and_metadata() -> None:
    recovery = WorkerRecovery()

    @recovery.wrap
    def compute(value: int) -> int:
        """Double the value."""
        return value * 2

    assert compute(21) == 42
    assert compute.__name__ == "compute"
    assert compute.__doc__ == "Double the value."
