from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from zumotest.plan import PlanOptions, build_groups, load_plan, resolve_execution
from zumotest.plan.models import TestConfig
from zumotest.utils.importing import import_execution


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "plan.yaml"
    path.write_text(textwrap.dedent(content), encoding="utf-8")
    return path


def _sample_plan(tmp_path: Path) -> Path:
    units = tmp_path / "units.py"
    units.write_text(
        textwrap.dedent(
            """
            def insert(context, completion):
                completion.log("inserted " + context.param("text", "?"))
                completion(True)
            """
        ),
        encoding="utf-8",
    )
    return _write(
        tmp_path,
        """
        name: sample
        description: loader test
        timeout: 2.5
        params: {text: hello}
        groups:
          - name: todo
            tags: [smoke]
            tests:
              - name: insert
                execution: insert
                source: units.py
                params: {text: milk}
                tags: [fast]
              - name: always
                execution: builtin.pass
          - name: misc
            tests:
              - name: failing
                execution: builtin.fail
        """,
    )


def test_load_plan_parses_groups_and_tests(tmp_path: Path) -> None:
    plan = load_plan(str(_sample_plan(tmp_path)))
    assert plan.name == "sample"
    assert plan.timeout == 2.5
    assert plan.fail_fast is False
    assert plan.params == {"text": "hello"}
    assert [group.name for group in plan.groups] == ["todo", "misc"]
    insert = plan.groups[0].tests[0]
    assert insert.source == (tmp_path / "units.py").resolve()
    assert insert.params == {"text": "milk"}
    assert insert.tags == ("fast",)
    assert plan.test_count() == 3
    assert plan.plan_dir == tmp_path.resolve()


def test_build_groups_applies_filters(tmp_path: Path) -> None:
    plan = load_plan(str(_sample_plan(tmp_path)))
    groups = build_groups(plan, PlanOptions(tags=("smoke",)))
    assert [group.name for group in groups] == ["todo"]
    groups = build_groups(plan, PlanOptions(tests=("todo/ins*",)))
    assert [group.names() for group in groups] == [("insert",)]
    groups = build_groups(plan, PlanOptions(skip_tags=("fast",), groups=("todo",)))
    assert [group.names() for group in groups] == [("always",)]
    assert groups[0].params_for("always") == {}


def test_build_groups_binds_test_params(tmp_path: Path) -> None:
    plan = load_plan(str(_sample_plan(tmp_path)))
    group = build_groups(plan, PlanOptions(groups=("todo",)))[0]
    assert group.params_for("insert") == {"text": "milk"}


def test_resolve_execution_by_import_path() -> None:
    unit = resolve_execution(TestConfig(name="t", execution="zumotest.registry.builtins:pass_unit"))
    assert callable(unit)


def test_resolve_execution_reports_unknown_name() -> None:
    with pytest.raises(ValueError) as exc:
        resolve_execution(TestConfig(name="t", execution="no_such_unit"))
    assert "builtin.pass" in str(exc.value)


def test_schema_missing_required_fields(tmp_path: Path) -> None:
    plan_path = _write(
        tmp_path,
        """
        name: broken
        groups:
          - name: g
            tests:
              - name: missing-execution
        """,
    )
    with pytest.raises(ValueError) as exc:
        load_plan(str(plan_path))
    assert "execution" in str(exc.value)


def test_duplicate_group_rejected(tmp_path: Path) -> None:
    plan_path = _write(
        tmp_path,
        """
        name: dupes
        groups:
          - name: g
            tests: [{name: a, execution: builtin.pass}]
          - name: g
            tests: [{name: b, execution: builtin.pass}]
        """,
    )
    with pytest.raises(ValueError) as exc:
        load_plan(str(plan_path))
    assert "Duplicate group" in str(exc.value)


def test_duplicate_test_rejected(tmp_path: Path) -> None:
    plan_path = _write(
        tmp_path,
        """
        name: dupes
        groups:
          - name: g
            tests:
              - {name: a, execution: builtin.pass}
              - {name: a, execution: builtin.fail}
        """,
    )
    with pytest.raises(ValueError) as exc:
        load_plan(str(plan_path))
    assert "Duplicate test" in str(exc.value)


def test_non_mapping_plan_rejected(tmp_path: Path) -> None:
    plan_path = _write(tmp_path, "- just\n- a list\n")
    with pytest.raises(ValueError):
        load_plan(str(plan_path))


def test_import_execution_names_the_missing_execution() -> None:
    with pytest.raises(AttributeError) as exc:
        import_execution("zumotest.registry.builtins:no_such_unit")
    assert "zumotest.registry.builtins:no_such_unit" in str(exc.value)
    with pytest.raises(ValueError):
        import_execution("no_module_separator")
    with pytest.raises(TypeError):
        import_execution("zumotest.registry.builtins:BUILTIN_UNITS")
