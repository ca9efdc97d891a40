"""Built-in execution units shipped with zumotest."""
from __future__ import annotations

import threading
from typing import Any, Dict

from zumotest.core import ExecutionUnit, RunContext, TestCompletion


def _params(context: Any) -> Dict[str, Any]:
    if isinstance(context, RunContext):
        return dict(context.params)
    return {}


def pass_unit(context: Any, completion: TestCompletion) -> None:
    """Completes immediately with success."""

    completion(True)


def fail_unit(context: Any, completion: TestCompletion) -> None:
    """Records ``params.reason`` and completes with failure."""

    reason = _params(context).get("reason", "Failure requested by builtin.fail")
    completion.log(str(reason))
    completion(False)


def delay_unit(context: Any, completion: TestCompletion) -> None:
    """Completes from a timer thread after ``params.seconds``."""

    params = _params(context)
    seconds = float(params.get("seconds", 0.1))
    outcome = bool(params.get("outcome", True))
    if seconds < 0:
        raise ValueError("builtin.delay seconds cannot be negative")

    def finish() -> None:
        completion.log(f"Completed after {seconds}s")
        completion(outcome)

    timer = threading.Timer(seconds, finish)
    timer.daemon = True
    timer.start()


BUILTIN_UNITS: Dict[str, ExecutionUnit] = {
    "builtin.pass": pass_unit,
    "builtin.fail": fail_unit,
    "builtin.delay": delay_unit,
}
