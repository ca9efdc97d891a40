"""Executor turning a loaded plan into groups and running them."""
from __future__ import annotations

import fnmatch
import logging
from typing import List, Sequence

import click

from zumotest import bootstrap
from zumotest.core import CaseResult, ExecutionUnit, RunContext, TestCase, TestGroup, TestRunner
from zumotest.registry import registry
from zumotest.reporting import JsonReporter, ReportManager, Reporter, TerminalReporter
from zumotest.utils.importing import import_execution, load_from_source

from .models import GroupConfig, PlanOptions, TestConfig, TestPlan

logger = logging.getLogger(__name__)


def build_groups(plan: TestPlan, options: PlanOptions) -> List[TestGroup]:
    """Resolve execution units and apply CLI filters; empty groups are dropped."""

    bootstrap()
    groups: List[TestGroup] = []
    for group_cfg in plan.groups:
        if options.groups and not any(fnmatch.fnmatchcase(group_cfg.name, p) for p in options.groups):
            continue
        group = TestGroup(name=group_cfg.name, description=group_cfg.description, tags=tuple(group_cfg.tags))
        for test_cfg in group_cfg.tests:
            if not _selected(group_cfg, test_cfg, options):
                continue
            test = TestCase.create(test_cfg.name, resolve_execution(test_cfg))
            group.add(test, test_cfg.params)
        if len(group):
            groups.append(group)
    return groups


def resolve_execution(config: TestConfig) -> ExecutionUnit:
    """Find the callable for a test: source file, registry name, then import path."""

    if config.source is not None:
        return load_from_source(config.source, config.execution)
    if config.execution in registry:
        return registry.get(config.execution)
    try:
        return import_execution(config.execution)
    except (ImportError, AttributeError, ValueError) as exc:
        raise ValueError(
            f"Cannot resolve execution '{config.execution}' for test '{config.name}'. "
            f"Registered units: {', '.join(sorted(registry.names())) or 'none'}. "
            "Use a registered name, a 'module:attr' path, or set 'source'."
        ) from exc


def _selected(group: GroupConfig, test: TestConfig, options: PlanOptions) -> bool:
    identifier = f"{group.name}/{test.name}"
    if options.tests and not any(
        fnmatch.fnmatchcase(test.name, pattern) or fnmatch.fnmatchcase(identifier, pattern)
        for pattern in options.tests
    ):
        return False
    tags = set(group.tags) | set(test.tags)
    if options.tags and not set(options.tags) & tags:
        return False
    if options.skip_tags and set(options.skip_tags) & tags:
        return False
    return True


def run_plan(
    plan: TestPlan,
    options: PlanOptions,
    *,
    report_format: str = "terminal",
    report_path: str | None = None,
    use_color: bool = True,
) -> int:
    """Execute the plan; returns process exit code (0 success, 1 failures)."""

    groups = build_groups(plan, options)
    if options.list_only:
        for group in groups:
            for name in group.names():
                click.echo(f"{group.name}/{name}")
        return 0
    total = sum(len(group) for group in groups)
    if not total:
        click.echo("No tests matched the provided filters.")
        return 1
    manager = ReportManager(_build_reporters(report_format, report_path, use_color))
    fail_fast = options.fail_fast if options.fail_fast is not None else plan.fail_fast
    runner = TestRunner(timeout=options.timeout or plan.timeout, fail_fast=fail_fast)
    context = RunContext(params=plan.params, base_dir=plan.plan_dir)
    results: list[CaseResult] = []

    def handle(result: CaseResult, _index: int, _total: int) -> None:
        results.append(result)
        manager.handle_result(result, len(results), total)

    manager.start(plan)
    for group in groups:
        logger.debug("Running group '%s' (%d test(s))", group.name, len(group))
        runner.run(group, context, on_result=handle)
        if fail_fast and not all(result.passed for result in results):
            break
    manager.complete(results)
    return 0 if results and all(result.passed for result in results) else 1


def _build_reporters(report_format: str, report_path: str | None, use_color: bool) -> Sequence[Reporter]:
    if report_format == "terminal":
        return [TerminalReporter(use_color=use_color)]
    if report_format == "json":
        if not report_path:
            raise ValueError("--report-path is required when --report json is used")
        return [JsonReporter(path=report_path)]
    raise ValueError(f"Unsupported report format '{report_format}'")
