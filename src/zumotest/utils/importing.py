"""Helpers for resolving user-provided execution units."""
from __future__ import annotations

import importlib
import importlib.util
import sys
from pathlib import Path
from typing import Callable


def import_execution(path: str) -> Callable:
    """Return the execution unit named by ``module:attr`` or ``module.attr``."""

    module_name, sep, attr = path.partition(":")
    if not sep:
        module_name, _, attr = path.rpartition(".")
    if not module_name or not attr:
        raise ValueError(f"Execution '{path}' is not a 'module:attr' import path")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ImportError(f"Cannot import module '{module_name}' for execution '{path}': {exc}") from exc
    if not hasattr(module, attr):
        raise AttributeError(f"Execution '{path}' not found: module '{module_name}' has no attribute '{attr}'")
    unit = getattr(module, attr)
    if not callable(unit):
        raise TypeError(f"Execution '{path}' is not callable")
    return unit


def load_from_source(source: Path, func_name: str) -> Callable:
    """Load a callable named ``func_name`` from a Python file at ``source``."""

    path = source.expanduser().resolve()
    if not path.exists():
        raise FileNotFoundError(f"Execution source file not found: {path}")
    module_name = f"zumotest_units_{path.stem}_{hash(str(path)) & 0xFFFF:x}"
    module = sys.modules.get(module_name)
    if module is None:
        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            raise ImportError(f"Unable to load module from {path}")
        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except Exception:
            sys.modules.pop(module_name, None)
            raise
    if not hasattr(module, func_name):
        raise AttributeError(f"Function '{func_name}' not found in {path}")
    func = getattr(module, func_name)
    if not callable(func):
        raise TypeError(f"Attribute '{func_name}' in {path} is not callable")
    return func
