"""Test case model: status lifecycle, log accumulation and async completion."""
from __future__ import annotations

import enum
import logging
import threading
import weakref
from typing import Any, Callable, List, Optional, Tuple

from .callbacks import TestObserver

logger = logging.getLogger(__name__)


class TestStatus(enum.Enum):
    """Closed set of states a test moves through."""

    __test__ = False

    NOT_RUN = "not_run"
    RUNNING = "running"
    FAILED = "failed"
    PASSED = "passed"

    @property
    def terminal(self) -> bool:
        return self in (TestStatus.FAILED, TestStatus.PASSED)


class TestCompletion:
    """Single-use completion handle handed to an execution unit.

    Calling the handle with the boolean outcome finishes the run it was
    created for. Calls after the first one, or after the owning test was reset
    or restarted, are discarded.
    """

    __test__ = False

    def __init__(self, test: "TestCase", epoch: int) -> None:
        self._test = test
        self._epoch = epoch
        self._lock = threading.Lock()
        self._fired = False
        self._notify_error: Optional[BaseException] = None

    @property
    def test(self) -> "TestCase":
        return self._test

    @property
    def fired(self) -> bool:
        return self._fired

    @property
    def is_current(self) -> bool:
        return self._test._is_current(self._epoch)

    def log(self, text: str) -> bool:
        """Append ``text`` to the test log while this run is still current."""

        return self._test._append_log_for(self._epoch, text)

    def __call__(self, passed: bool) -> bool:
        with self._lock:
            if self._fired:
                logger.warning(
                    "Test '%s' completed more than once; ignoring outcome %s", self._test.name, passed
                )
                return False
            self._fired = True
        try:
            return self._test._complete(self._epoch, bool(passed))
        except BaseException as exc:
            # Raised by the observer, not by the execution unit.
            self._notify_error = exc
            raise


ExecutionUnit = Callable[[Any, TestCompletion], None]


class TestCase:
    """Named, re-runnable test driving an asynchronous execution unit.

    The execution unit receives the context given to :meth:`start` and a
    :class:`TestCompletion`. It must call the completion exactly once on every
    path; a unit that never does leaves the test in ``RUNNING`` until the next
    :meth:`reset`.
    """

    __test__ = False

    def __init__(self, name: str, execution: ExecutionUnit) -> None:
        if not isinstance(name, str) or not name.strip():
            raise ValueError("Test name must be a non-empty string")
        if not callable(execution):
            raise TypeError(f"Execution for test '{name}' is not callable")
        self._name = name
        self._execution = execution
        self._status = TestStatus.NOT_RUN
        self._logs: List[str] = []
        self._epoch = 0
        self._lock = threading.Lock()
        # Serializes observer delivery so a stale terminal event cannot trail a newer run.
        self._notify_lock = threading.RLock()
        self._observer_ref: Optional[Callable[[], Optional[TestObserver]]] = None

    @classmethod
    def create(cls, name: str, execution: ExecutionUnit) -> "TestCase":
        return cls(name, execution)

    @property
    def name(self) -> str:
        return self._name

    @property
    def execution(self) -> ExecutionUnit:
        return self._execution

    @property
    def status(self) -> TestStatus:
        return self._status

    @property
    def observer(self) -> Optional[TestObserver]:
        if self._observer_ref is None:
            return None
        return self._observer_ref()

    @observer.setter
    def observer(self, value: Optional[TestObserver]) -> None:
        if value is None:
            self._observer_ref = None
            return
        if not hasattr(value, "on_status_changed"):
            raise TypeError("Observer must implement on_status_changed(test, status)")
        # Non-owning: the observer may be collected while the test lives on.
        self._observer_ref = weakref.ref(value)

    def reset(self) -> None:
        with self._lock:
            self._epoch += 1
            self._status = TestStatus.NOT_RUN
            self._logs.clear()

    def start(self, context: Any = None) -> bool:
        """Dispatch the execution unit; returns ``False`` if already running."""

        with self._lock:
            if self._status is TestStatus.RUNNING:
                logger.warning("Test '%s' is already running; start rejected", self._name)
                return False
            self._epoch += 1
            epoch = self._epoch
            self._status = TestStatus.RUNNING
        logger.debug("Starting test '%s' (run %d)", self._name, epoch)
        try:
            self._notify(epoch, TestStatus.RUNNING)
        except BaseException:
            with self._lock:
                if self._epoch == epoch:
                    self._epoch += 1
                    self._status = TestStatus.NOT_RUN
            raise
        completion = TestCompletion(self, epoch)
        try:
            self._execution(context, completion)
        except Exception as exc:
            if exc is completion._notify_error:
                raise
            if completion.fired:
                logger.warning("Test '%s' raised after completing: %s", self._name, exc)
                return True
            completion.log(f"Test execution raised {type(exc).__name__}: {exc}")
            logger.debug("Execution of test '%s' raised", self._name, exc_info=True)
            completion(False)
        return True

    def add_log(self, text: str) -> None:
        with self._lock:
            self._logs.append(text)

    def get_logs(self) -> Tuple[str, ...]:
        with self._lock:
            return tuple(self._logs)

    def _is_current(self, epoch: int) -> bool:
        return epoch == self._epoch and self._status is TestStatus.RUNNING

    def _append_log_for(self, epoch: int, text: str) -> bool:
        with self._lock:
            if not self._is_current(epoch):
                logger.debug("Dropping log line for stale run of test '%s'", self._name)
                return False
            self._logs.append(text)
            return True

    def _complete(self, epoch: int, passed: bool) -> bool:
        with self._lock:
            if not self._is_current(epoch):
                logger.debug("Discarding stale completion of test '%s' (run %d)", self._name, epoch)
                return False
            status = TestStatus.PASSED if passed else TestStatus.FAILED
            self._status = status
        logger.debug("Test '%s' finished: %s", self._name, status.value)
        self._notify(epoch, status)
        return True

    def _notify(self, epoch: int, status: TestStatus) -> None:
        with self._notify_lock:
            with self._lock:
                if epoch != self._epoch or self._status is not status:
                    logger.debug("Dropping %s notification for stale run of test '%s'", status.value, self._name)
                    return
            observer = self.observer
            if observer is not None:
                observer.on_status_changed(self, status)

    def __repr__(self) -> str:
        return f"TestCase(name={self._name!r}, status={self._status.value})"
