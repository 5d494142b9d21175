from typing import Any, Dict, Optional

from app_builder.run_utils.metrics import get_metrics
from app_builder.run_utils.state import get_run


def build_report(run_id: str) -> Optional[Dict[str, Any]]:
    project = get_run(run_id)
    if project is None:
        return None
    metrics = get_metrics(run_id)
    steps = metrics.get("steps", {})

    agents = []
    for a in project.agents:
        duration = None
        if a.start_time is not None and a.end_time is not None:
            duration = a.end_time - a.start_time
        agents.append(
            {
                "id": a.id.value,
                "name": a.name,
                "status": a.status.value,
                "durationMs": duration,
                "attempts": steps.get(a.id.value, {}).get("attempts", 0),
                "outputKind": a.output.kind if a.output is not None else None,
            }
        )

    meta = project.metadata
    return {
        "runId": run_id,
        "name": project.name,
        "description": project.description,
        "status": project.status.value,
        "error": project.error,
        "planSource": meta.plan_source if meta else None,
        "features": meta.features if meta else [],
        "agents": agents,
        "metrics": steps,
        "tokens": metrics.get("tokens", {}),
        "hasCodebase": project.codebase is not None,
    }
