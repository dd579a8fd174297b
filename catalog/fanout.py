from __future__ import annotations

from concurrent.futures import Executor, as_completed
from typing import Any, Callable, Dict, Mapping, Optional


def parallel(tasks: Mapping[str, Callable[[], Any]], executor: Optional[Executor] = None) -> Dict[str, Any]:
    """Run independent zero-argument fetches and collect their results by name.

    Without an executor the tasks run inline in order. With one they are all
    submitted up front and the first failure to complete is raised; tasks
    still running are left to finish on their own.
    """
    if executor is None:
        return {name: task() for name, task in tasks.items()}

    futures = {executor.submit(task): name for name, task in tasks.items()}
    results = {}
    for future in as_completed(futures):
        results[futures[future]] = future.result()
    return {name: results[name] for name in tasks}
