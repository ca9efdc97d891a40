from __future__ import annotations

import json
import textwrap
from pathlib import Path

from zumotest.plan import PlanOptions, load_plan, run_plan

EXAMPLE_PLAN = Path(__file__).resolve().parent.parent / "examples" / "todo_list" / "plan.yaml"


def _write_plan(tmp_path: Path, body: str) -> Path:
    plan = tmp_path / "plan.yaml"
    plan.write_text(textwrap.dedent(body), encoding="utf-8")
    return plan


def test_run_plan_todo_example() -> None:
    plan = load_plan(str(EXAMPLE_PLAN))
    exit_code = run_plan(plan, PlanOptions(), use_color=False)
    assert exit_code == 0


def test_run_plan_returns_failure_exit_code(tmp_path: Path, capsys) -> None:
    plan_path = _write_plan(
        tmp_path,
        """
        name: failing
        groups:
          - name: g
            tests:
              - {name: ok, execution: builtin.pass}
              - name: bad
                execution: builtin.fail
                params: {reason: "connection failed"}
        """,
    )
    exit_code = run_plan(load_plan(str(plan_path)), PlanOptions(), use_color=False)
    assert exit_code == 1
    output = capsys.readouterr().out
    assert "FAIL" in output
    assert "log: connection failed" in output
    assert "Summary: total=2 passed=1 failed=1 timeouts=0" in output


def test_run_plan_fail_fast_across_groups(tmp_path: Path, capsys) -> None:
    plan_path = _write_plan(
        tmp_path,
        """
        name: ff
        fail_fast: true
        groups:
          - name: first
            tests: [{name: bad, execution: builtin.fail}]
          - name: second
            tests: [{name: ok, execution: builtin.pass}]
        """,
    )
    exit_code = run_plan(load_plan(str(plan_path)), PlanOptions(), use_color=False)
    assert exit_code == 1
    output = capsys.readouterr().out
    assert "second/ok" not in output.split("Summary")[0]


def test_run_plan_list_only(tmp_path: Path, capsys) -> None:
    plan = load_plan(str(EXAMPLE_PLAN))
    exit_code = run_plan(plan, PlanOptions(list_only=True, groups=("todo",)))
    assert exit_code == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines == ["todo/add-item", "todo/add-empty-item", "todo/complete-item"]


def test_run_plan_no_matches(capsys) -> None:
    plan = load_plan(str(EXAMPLE_PLAN))
    exit_code = run_plan(plan, PlanOptions(tags=("nothing",)))
    assert exit_code == 1
    assert "No tests matched" in capsys.readouterr().out


def test_run_plan_json_report(tmp_path: Path) -> None:
    plan_path = _write_plan(
        tmp_path,
        """
        name: json
        timeout: 1
        groups:
          - name: g
            tests:
              - name: slow
                execution: builtin.delay
                params: {seconds: 0.01}
        """,
    )
    report = tmp_path / "out" / "report.json"
    exit_code = run_plan(load_plan(str(plan_path)), PlanOptions(), report_format="json", report_path=str(report))
    assert exit_code == 0
    payload = json.loads(report.read_text(encoding="utf-8"))
    assert payload["summary"]["plan"] == "json"
    assert payload["summary"]["passed"] == 1
    assert payload["cases"][0]["id"] == "g/slow"
    assert payload["cases"][0]["logs"] == ["Completed after 0.01s"]
