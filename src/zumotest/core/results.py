"""Result data structures produced by the test runner."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

PASSED = "passed"
FAILED = "failed"
TIMEOUT = "timeout"


@dataclass(frozen=True)
class CaseResult:
    """Outcome of executing a single test."""

    test_name: str
    group: str
    status: str
    duration_s: float
    logs: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def passed(self) -> bool:
        return self.status == PASSED

    def identifier(self) -> str:
        return f"{self.group}/{self.test_name}"
