"""Execution unit registry public API."""
from .registry import (
    ExecutionRegistry,
    clear_registry,
    load_builtins,
    register_execution,
    registry,
)

__all__ = [
    "ExecutionRegistry",
    "registry",
    "register_execution",
    "load_builtins",
    "clear_registry",
]
