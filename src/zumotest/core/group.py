"""Named, ordered collections of tests."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from .models import TestCase, TestStatus


@dataclass
class TestGroup:
    """Tests that are reported together and run one after another."""

    __test__ = False

    name: str
    tests: List[TestCase] = field(default_factory=list)
    description: str = ""
    tags: Tuple[str, ...] = tuple()
    test_params: Dict[str, Mapping[str, Any]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Test group name cannot be empty")
        self.tests = list(self.tests)
        seen: set[str] = set()
        for test in self.tests:
            if test.name in seen:
                raise ValueError(f"Duplicate test '{test.name}' in group '{self.name}'")
            seen.add(test.name)

    def add(self, test: TestCase, params: Optional[Mapping[str, Any]] = None) -> TestCase:
        if any(existing.name == test.name for existing in self.tests):
            raise ValueError(f"Duplicate test '{test.name}' in group '{self.name}'")
        self.tests.append(test)
        if params:
            self.test_params[test.name] = dict(params)
        return test

    def get(self, name: str) -> TestCase:
        for test in self.tests:
            if test.name == name:
                return test
        raise KeyError(f"Test '{name}' is not part of group '{self.name}'")

    def params_for(self, name: str) -> Mapping[str, Any]:
        return self.test_params.get(name, {})

    def reset(self) -> None:
        for test in self.tests:
            test.reset()

    @property
    def passed_count(self) -> int:
        return self._count(TestStatus.PASSED)

    @property
    def failed_count(self) -> int:
        return self._count(TestStatus.FAILED)

    def names(self) -> Sequence[str]:
        return tuple(test.name for test in self.tests)

    def _count(self, status: TestStatus) -> int:
        return sum(1 for test in self.tests if test.status is status)

    def __iter__(self) -> Iterator[TestCase]:
        return iter(self.tests)

    def __len__(self) -> int:
        return len(self.tests)
