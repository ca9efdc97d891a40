"""Plan loader and executor."""

from .loader import load_plan
from .models import GroupConfig, PlanOptions, TestConfig, TestPlan
from .runner import build_groups, resolve_execution, run_plan

__all__ = [
    "GroupConfig",
    "PlanOptions",
    "TestConfig",
    "TestPlan",
    "build_groups",
    "load_plan",
    "resolve_execution",
    "run_plan",
]
