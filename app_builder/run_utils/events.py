import asyncio
import json
import time
from typing import Any, Dict, List, Tuple

from app_builder.generate.types import Project


class RunEventHub:
    """Fan-out of run events to SSE subscribers, with a replay buffer.

    Workflow snapshots come in through `publish`; the hub turns them into a
    `project` event plus one `agent` event per agent whose status or progress
    moved since the previous snapshot of the same run.
    """

    def __init__(self):
        self.queues: Dict[str, List[asyncio.Queue[str]]] = {}
        self.history: Dict[str, List[str]] = {}
        self.last_seen: Dict[str, Dict[str, Tuple[str, int]]] = {}
        self.HISTORY_LIMIT = 500

    def _ensure(self, run_id: str):
        self.queues.setdefault(run_id, [])
        self.history.setdefault(run_id, [])

    async def subscribe(self, run_id: str) -> asyncio.Queue[str]:
        self._ensure(run_id)
        q: asyncio.Queue[str] = asyncio.Queue(maxsize=2048)
        self.queues[run_id].append(q)
        for line in self.history[run_id][-100:]:
            await q.put(line)
        return q

    def unsubscribe(self, run_id: str, q: asyncio.Queue[str]):
        arr = self.queues.get(run_id, [])
        if q in arr:
            arr.remove(q)

    def forget(self, run_id: str):
        self.history.pop(run_id, None)
        self.queues.pop(run_id, None)
        self.last_seen.pop(run_id, None)

    async def emit(self, run_id: str, event: Dict[str, Any]):
        self._ensure(run_id)
        payload = {
            "t": event.get("t", "log"),
            "ts": event.get("ts", int(time.time() * 1000)),
            **event,
        }
        line = f"data: {json.dumps(payload, ensure_ascii=False)}\n\n"
        hist = self.history[run_id]
        hist.append(line)
        if len(hist) > self.HISTORY_LIMIT:
            del hist[: len(hist) - self.HISTORY_LIMIT]
        for q in list(self.queues[run_id]):
            try:
                q.put_nowait(line)
            except asyncio.QueueFull:
                self.unsubscribe(run_id, q)

    async def publish(self, run_id: str, project: Project):
        seen = self.last_seen.setdefault(run_id, {})
        for agent in project.agents:
            key = (agent.status.value, agent.progress)
            if seen.get(agent.id.value) == key:
                continue
            seen[agent.id.value] = key
            await self.emit(
                run_id,
                {
                    "t": "agent",
                    "agent": agent.model_dump(
                        mode="json", by_alias=True, exclude={"output"}
                    ),
                },
            )
        await self.emit(
            run_id,
            {
                "t": "project",
                "status": project.status.value,
                "name": project.name,
                "error": project.error,
            },
        )

    async def done(self, run_id: str, ok: bool, error: str | None = None):
        event: Dict[str, Any] = {"t": "done", "ok": ok}
        if error:
            event["error"] = error
        await self.emit(run_id, event)


hub = RunEventHub()
