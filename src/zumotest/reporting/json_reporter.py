"""JSON reporter emitting structured execution results."""
from __future__ import annotations

import datetime as dt
import json
import pathlib
import time
from typing import TYPE_CHECKING, Any, Dict, Sequence

import click
from jsonschema import validate

from zumotest.core.results import FAILED, PASSED, TIMEOUT, CaseResult

from .base import Reporter
from .schema import JSON_SCHEMA_V1, SCHEMA_VERSION

if TYPE_CHECKING:  # pragma: no cover
    from zumotest.plan.models import TestPlan


class JsonReporter(Reporter):
    """Writes results to a JSON file validated against the schema."""

    def __init__(self, path: str) -> None:
        self._path = pathlib.Path(path)
        self._records: list[Dict[str, Any]] = []
        self._plan: TestPlan | None = None
        self._start_time = 0.0

    def on_start(self, plan: TestPlan) -> None:
        self._plan = plan
        self._records.clear()
        self._start_time = time.perf_counter()

    def on_case_result(self, result: CaseResult, index: int, total: int) -> None:
        self._records.append(_case_to_dict(result))

    def on_complete(self, results: Sequence[CaseResult]) -> None:
        if self._plan is None:
            return
        total_duration = time.perf_counter() - self._start_time
        payload = {
            "schema_version": SCHEMA_VERSION,
            "generated_at": dt.datetime.now(dt.timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
            "summary": _build_summary(self._plan, results, total_duration),
            "cases": self._records,
        }
        validate(instance=payload, schema=JSON_SCHEMA_V1)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError as exc:  # pragma: no cover - filesystem protection
            raise RuntimeError(f"Failed to write JSON report to {self._path}: {exc}") from exc
        click.echo(f"JSON report written to {self._path}")


def _build_summary(plan: TestPlan, results: Sequence[CaseResult], duration: float) -> Dict[str, Any]:
    return {
        "plan": plan.name,
        "total": len(results),
        "passed": sum(1 for result in results if result.status == PASSED),
        "failed": sum(1 for result in results if result.status == FAILED),
        "timeouts": sum(1 for result in results if result.status == TIMEOUT),
        "duration_s": duration,
    }


def _case_to_dict(result: CaseResult) -> Dict[str, Any]:
    return {
        "id": result.identifier(),
        "group": result.group,
        "test": result.test_name,
        "status": result.status,
        "duration_ms": result.duration_s * 1000,
        "logs": list(result.logs),
    }
