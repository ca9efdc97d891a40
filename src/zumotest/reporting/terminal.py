"""Terminal reporter rendering progress and summaries."""
from __future__ import annotations

import time
from typing import TYPE_CHECKING, Sequence

import click
from colorama import Fore, Style, init as colorama_init

from zumotest.core.results import FAILED, PASSED, TIMEOUT, CaseResult

from .base import Reporter

if TYPE_CHECKING:  # pragma: no cover
    from zumotest.plan.models import TestPlan


STATUS_COLORS = {
    PASSED: Fore.GREEN,
    FAILED: Fore.RED,
    TIMEOUT: Fore.YELLOW,
}

STATUS_LABELS = {
    PASSED: "PASS",
    FAILED: "FAIL",
    TIMEOUT: "TIMEOUT",
}


class TerminalReporter(Reporter):
    """Human-readable reporter that streams to stdout."""

    def __init__(self, *, use_color: bool = True) -> None:
        self._use_color = use_color
        self._start_time = 0.0
        self._failures: list[tuple[int, CaseResult]] = []
        if use_color:
            colorama_init()

    def on_start(self, plan: TestPlan) -> None:
        self._start_time = time.perf_counter()
        self._failures.clear()
        timeout = f"{plan.timeout}s" if plan.timeout else "none"
        click.echo(
            self._styled(
                f"Starting plan '{plan.name}': {plan.test_count()} test(s) in "
                f"{len(plan.groups)} group(s) timeout={timeout} fail_fast={plan.fail_fast}",
                color="cyan",
            )
        )

    def on_case_result(self, result: CaseResult, index: int, total: int) -> None:
        ms = result.duration_s * 1000
        click.echo(f"[{index}/{total}] {self._status_block(result.status)} {result.identifier()} ({ms:.2f} ms)")
        if not result.passed:
            self._failures.append((index, result))
            self._print_logs(result)

    def on_complete(self, results: Sequence[CaseResult]) -> None:
        duration = time.perf_counter() - self._start_time
        total = len(results)
        passed = sum(1 for result in results if result.status == PASSED)
        failed = sum(1 for result in results if result.status == FAILED)
        timeouts = sum(1 for result in results if result.status == TIMEOUT)
        click.echo(
            self._styled(
                f"Summary: total={total} passed={passed} failed={failed} timeouts={timeouts} "
                f"duration={duration:.2f}s",
                color="green" if passed == total else "red",
            )
        )
        if self._failures:
            click.echo(self._styled("Failure details:", color="red"))
            for index, result in self._failures:
                click.echo(f"  [{index}] {result.identifier()} -> {result.status}")
                self._print_logs(result, indent="    ")

    def _status_block(self, status: str) -> str:
        label = STATUS_LABELS.get(status, status.upper())
        if not self._use_color:
            return f"{label:<7}"
        color = STATUS_COLORS.get(status, "")
        return f"{color}{label:<7}{Style.RESET_ALL}"

    def _styled(self, text: str, *, color: str) -> str:
        if not self._use_color:
            return text
        return click.style(text, fg=color)

    def _print_logs(self, result: CaseResult, *, indent: str = "    ") -> None:
        if not result.logs:
            click.echo(f"{indent}(no log output)")
            return
        for line in result.logs:
            click.echo(f"{indent}log: {line}")
