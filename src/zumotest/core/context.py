"""Execution context handed to execution units by the runner."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class RunContext:
    """Where and how a test runs; opaque to :class:`TestCase` itself."""

    params: Mapping[str, Any] = field(default_factory=dict)
    base_dir: Path = field(default_factory=Path.cwd)
    group: Optional[str] = None
    test: Optional[str] = None

    def for_test(self, group: str, test: str, params: Optional[Mapping[str, Any]] = None) -> "RunContext":
        merged = dict(self.params)
        merged.update(params or {})
        return replace(self, params=merged, group=group, test=test)

    def param(self, key: str, default: Any = None) -> Any:
        return self.params.get(key, default)
