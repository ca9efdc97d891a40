"""Data models for plan files."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence


@dataclass(frozen=True)
class TestConfig:
    __test__ = False

    name: str
    execution: str
    source: Optional[Path] = None
    params: Mapping[str, Any] = field(default_factory=dict)
    tags: Sequence[str] = field(default_factory=tuple)


@dataclass(frozen=True)
class GroupConfig:
    name: str
    tests: Sequence[TestConfig]
    description: str = ""
    tags: Sequence[str] = field(default_factory=tuple)


@dataclass(frozen=True)
class TestPlan:
    __test__ = False

    name: str
    description: str
    groups: Sequence[GroupConfig]
    params: Mapping[str, Any]
    timeout: Optional[float]
    fail_fast: bool
    plan_dir: Path

    def test_count(self) -> int:
        return sum(len(group.tests) for group in self.groups)


@dataclass(frozen=True)
class PlanOptions:
    groups: Sequence[str] = field(default_factory=tuple)
    tests: Sequence[str] = field(default_factory=tuple)
    tags: Sequence[str] = field(default_factory=tuple)
    skip_tags: Sequence[str] = field(default_factory=tuple)
    timeout: Optional[float] = None
    fail_fast: Optional[bool] = None
    list_only: bool = False
