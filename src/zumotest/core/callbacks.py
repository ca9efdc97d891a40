"""Observer interface notified of test status transitions."""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from .models import TestCase, TestStatus


class TestObserver:
    """Receives status changes from the tests it is attached to.

    Notifications are delivered synchronously from the thread that caused the
    transition, so implementations should return quickly.
    """

    __test__ = False

    def on_status_changed(self, test: "TestCase", status: "TestStatus") -> None:  # pragma: no cover - interface
        raise NotImplementedError
