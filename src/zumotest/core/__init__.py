"""Core models and helpers exposed at the package level."""
from .callbacks import TestObserver
from .context import RunContext
from .group import TestGroup
from .models import ExecutionUnit, TestCase, TestCompletion, TestStatus
from .results import CaseResult
from .runner import TestRunner

__all__ = [
    "CaseResult",
    "ExecutionUnit",
    "RunContext",
    "TestCase",
    "TestCompletion",
    "TestGroup",
    "TestObserver",
    "TestRunner",
    "TestStatus",
]
