"""Execution unit registry implementation."""
from __future__ import annotations

from typing import Callable, Dict, Iterable, Iterator

from zumotest.core import ExecutionUnit


class ExecutionRegistry:
    """Stores named execution units and exposes lookup utilities."""

    def __init__(self) -> None:
        self._units: Dict[str, ExecutionUnit] = {}

    def register(self, name: str, unit: ExecutionUnit) -> ExecutionUnit:
        if not callable(unit):
            raise TypeError(f"Execution unit '{name}' is not callable")
        if name in self._units:
            raise ValueError(f"Execution unit '{name}' already registered")
        self._units[name] = unit
        return unit

    def update_or_register(self, name: str, unit: ExecutionUnit) -> ExecutionUnit:
        self._units[name] = unit
        return unit

    def get(self, name: str) -> ExecutionUnit:
        try:
            return self._units[name]
        except KeyError as exc:
            raise KeyError(f"Execution unit '{name}' is not registered") from exc

    def __contains__(self, name: str) -> bool:
        return name in self._units

    def __iter__(self) -> Iterator[str]:
        return iter(self._units)

    def names(self) -> Iterable[str]:
        return tuple(self._units.keys())


registry = ExecutionRegistry()


def register_execution(name: str) -> Callable[[ExecutionUnit], ExecutionUnit]:
    """Decorator registering the decorated function under ``name``."""

    def decorator(unit: ExecutionUnit) -> ExecutionUnit:
        registry.register(name, unit)
        return unit

    return decorator


def clear_registry() -> None:
    registry._units.clear()


def load_builtins() -> None:
    from . import builtins  # noqa: WPS433

    for name, unit in builtins.BUILTIN_UNITS.items():
        registry.update_or_register(name, unit)
