"""Test runner sequencing the tests of a group."""
from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Dict, List, Optional, Tuple

from .callbacks import TestObserver
from .context import RunContext
from .group import TestGroup
from .models import TestCase, TestStatus
from .results import TIMEOUT, CaseResult

logger = logging.getLogger(__name__)


class TestRunner(TestObserver):
    """Executes the tests of a group sequentially.

    Each test is reset, started, and awaited until its execution unit reports
    back. With a ``timeout`` the runner stops waiting after that many seconds
    and records a ``timeout`` result; the test itself stays running until it is
    reset again.
    """

    __test__ = False

    def __init__(self, *, timeout: Optional[float] = None, fail_fast: bool = False) -> None:
        if timeout is not None and timeout <= 0:
            raise ValueError("timeout must be positive")
        self._timeout = timeout
        self._fail_fast = fail_fast
        self._pending: Dict[int, Tuple[threading.Event, Optional[TestObserver]]] = {}
        self._lock = threading.Lock()

    def run(
        self,
        group: TestGroup,
        context: Optional[RunContext] = None,
        *,
        on_result: Optional[Callable[[CaseResult, int, int], None]] = None,
    ) -> List[CaseResult]:
        base_context = context if context is not None else RunContext()
        results: List[CaseResult] = []
        total = len(group)
        for index, test in enumerate(group, start=1):
            test_context = base_context.for_test(group.name, test.name, group.params_for(test.name))
            result = self._execute_test(group, test, test_context)
            results.append(result)
            if on_result:
                on_result(result, index, total)
            if self._fail_fast and not result.passed:
                logger.info("Stopping group '%s' after failure of '%s'", group.name, test.name)
                break
        return results

    def on_status_changed(self, test: TestCase, status: TestStatus) -> None:
        with self._lock:
            pending = self._pending.get(id(test))
        if pending is None:
            return
        event, previous = pending
        try:
            if previous is not None:
                previous.on_status_changed(test, status)
        finally:
            if status.terminal:
                event.set()

    def _execute_test(self, group: TestGroup, test: TestCase, context: RunContext) -> CaseResult:
        done = threading.Event()
        previous = test.observer
        test.reset()
        test.observer = self
        with self._lock:
            self._pending[id(test)] = (done, previous)
        start = time.perf_counter()
        try:
            test.start(context)
            finished = done.wait(self._timeout)
        finally:
            with self._lock:
                self._pending.pop(id(test), None)
            test.observer = previous
        duration = time.perf_counter() - start
        if finished:
            status = test.status.value
        else:
            test.add_log(f"Timed out after {self._timeout}s waiting for the test to complete")
            logger.warning("Test '%s/%s' did not complete within %ss", group.name, test.name, self._timeout)
            status = TIMEOUT
        return CaseResult(
            test_name=test.name,
            group=group.name,
            status=status,
            duration_s=duration,
            logs=test.get_logs(),
        )
