"""YAML loader and validation for plan files."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from jsonschema import Draft7Validator

from .models import GroupConfig, TestConfig, TestPlan

PLAN_SCHEMA = {
    "type": "object",
    "required": ["name", "groups"],
    "properties": {
        "name": {"type": "string", "minLength": 1},
        "description": {"type": "string"},
        "timeout": {"type": ["number", "null"], "exclusiveMinimum": 0},
        "fail_fast": {"type": "boolean"},
        "params": {"type": "object"},
        "groups": {
            "type": "array",
            "minItems": 1,
            "items": {
                "type": "object",
                "required": ["name", "tests"],
                "properties": {
                    "name": {"type": "string", "minLength": 1},
                    "description": {"type": "string"},
                    "tags": {"type": "array", "items": {"type": "string"}},
                    "tests": {
                        "type": "array",
                        "minItems": 1,
                        "items": {
                            "type": "object",
                            "required": ["name", "execution"],
                            "properties": {
                                "name": {"type": "string", "minLength": 1},
                                "execution": {"type": "string", "minLength": 1},
                                "source": {"type": "string"},
                                "params": {"type": "object"},
                                "tags": {"type": "array", "items": {"type": "string"}},
                            },
                        },
                    },
                },
            },
        },
    },
}
_validator = Draft7Validator(PLAN_SCHEMA)


def load_plan(path: str) -> TestPlan:
    """Load and validate a plan file."""
    plan_path = Path(path).expanduser().resolve()
    raw = yaml.safe_load(plan_path.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, Mapping):
        raise ValueError("Plan file must contain a mapping at the top level")
    errors = sorted(_validator.iter_errors(raw), key=lambda e: [str(part) for part in e.path])
    if errors:
        messages = "; ".join(f"{'/'.join(map(str, err.path)) or 'root'}: {err.message}" for err in errors)
        raise ValueError(f"Plan schema validation failed: {messages}")
    base = plan_path.parent
    groups = tuple(_parse_group(entry, base) for entry in raw["groups"])
    _validate_unique_groups(groups)
    timeout = raw.get("timeout")
    return TestPlan(
        name=raw["name"].strip(),
        description=str(raw.get("description", "")),
        groups=groups,
        params=dict(raw.get("params") or {}),
        timeout=float(timeout) if timeout is not None else None,
        fail_fast=bool(raw.get("fail_fast", False)),
        plan_dir=base,
    )


def _parse_group(raw: Mapping[str, Any], base: Path) -> GroupConfig:
    name = raw["name"].strip()
    tests = tuple(_parse_test(entry, base) for entry in raw["tests"])
    seen: set[str] = set()
    for test in tests:
        if test.name in seen:
            raise ValueError(f"Duplicate test '{test.name}' in group '{name}'")
        seen.add(test.name)
    return GroupConfig(
        name=name,
        tests=tests,
        description=str(raw.get("description", "")),
        tags=tuple(str(tag) for tag in raw.get("tags", []) or []),
    )


def _parse_test(raw: Mapping[str, Any], base: Path) -> TestConfig:
    name = raw["name"].strip()
    if not name:
        raise ValueError("Test name cannot be empty")
    return TestConfig(
        name=name,
        execution=raw["execution"].strip(),
        source=_resolve_source(raw.get("source"), base),
        params=dict(raw.get("params") or {}),
        tags=tuple(str(tag) for tag in raw.get("tags", []) or []),
    )


def _resolve_source(source: Optional[str], base: Path) -> Optional[Path]:
    if not source:
        return None
    path = Path(source).expanduser()
    if not path.is_absolute():
        path = base / path
    return path.resolve()


def _validate_unique_groups(groups: tuple[GroupConfig, ...]) -> None:
    seen: set[str] = set()
    for group in groups:
        if group.name in seen:
            raise ValueError(f"Duplicate group entry '{group.name}'")
        seen.add(group.name)
