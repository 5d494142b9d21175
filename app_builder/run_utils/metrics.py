import time
from typing import Any, Dict

METRICS: Dict[str, Dict[str, Any]] = {}


def get_metrics(run_id: str) -> Dict[str, Any]:
    r = METRICS.setdefault(run_id, {})
    r.setdefault("steps", {})
    r.setdefault("tokens", {})
    return r


def clear_metrics(run_id: str) -> None:
    METRICS.pop(run_id, None)


def step_start(run_id: str, name: str):
    s = get_metrics(run_id)["steps"].setdefault(name, {})
    s["t_start"] = time.time()
    s["attempts"] = s.get("attempts", 0) + 1


def step_end(
    run_id: str, name: str, ok: bool | None = None, extra: Dict[str, Any] | None = None
):
    s = get_metrics(run_id)["steps"].setdefault(name, {})
    s["t_end"] = time.time()
    if "t_start" in s:
        s["duration_ms"] = int((s["t_end"] - s["t_start"]) * 1000)
    if ok is not None:
        s["ok"] = bool(ok)
    if extra:
        s.update(extra)


def add_tokens(
    run_id: str, where: str, prompt_tokens: int = 0, completion_tokens: int = 0
):
    t = get_metrics(run_id)["tokens"]
    e = t.setdefault(where, {"prompt": 0, "completion": 0})
    e["prompt"] += int(prompt_tokens or 0)
    e["completion"] += int(completion_tokens or 0)
