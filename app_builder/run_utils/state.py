import asyncio
from typing import Dict, List, Optional

from app_builder.generate.types import Project

RUNS: Dict[str, Project] = {}
TASKS: Dict[str, asyncio.Task] = {}


def delete_run(run_id: str) -> bool:
    """Drop a run; True when it was still running and got cancelled."""
    RUNS.pop(run_id, None)
    task = TASKS.pop(run_id, None)
    if task is not None and not task.done():
        task.cancel()
        return True
    return False


def get_run(run_id: str) -> Optional[Project]:
    return RUNS.get(run_id)


def set_run(project: Project) -> None:
    RUNS[project.id] = project


def list_runs(limit: int = 50) -> List[Project]:
    return sorted(RUNS.values(), key=lambda p: p.created_at, reverse=True)[:limit]


def set_task(run_id: str, task: asyncio.Task) -> None:
    TASKS[run_id] = task

    def _forget(done: asyncio.Task) -> None:
        if TASKS.get(run_id) is done:
            del TASKS[run_id]

    task.add_done_callback(_forget)


def get_task(run_id: str) -> Optional[asyncio.Task]:
    return TASKS.get(run_id)
