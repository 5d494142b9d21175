from __future__ import annotations

import asyncio
import uuid

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import StreamingResponse

from app_builder.generate.planner import extract_app_name
from app_builder.generate.project_core import WorkflowEngine, WorkflowError
from app_builder.generate.types import GenerationRequest, Project, ProjectStatus
from app_builder.logging_config import get_logger
from app_builder.run_utils.events import hub
from app_builder.run_utils.llm import CompletionError
from app_builder.run_utils.metrics import clear_metrics
from app_builder.run_utils.report import build_report
from app_builder.run_utils.state import delete_run, get_run, list_runs, set_run, set_task
from app_builder.utils.clients import ClientFactory, get_client_factory
from app_builder.utils.dto import RunCreateBody, RunCreatedResponse

router = APIRouter(tags=["runs"])
logger = get_logger(__name__)


def _require_run(run_id: str) -> Project:
    project = get_run(run_id)
    if project is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Run not found")
    return project


async def run_workflow(run_id: str, request: GenerationRequest, engine: WorkflowEngine):
    """Background body of a run: keeps the registry and the event hub in step
    with every snapshot and finishes with a `done` event. A run cancelled by
    `remove_run` gets its `done` from there."""

    async def on_update(project: Project):
        set_run(project)
        await hub.publish(run_id, project)

    try:
        await engine.execute_workflow(request, on_update)
    except asyncio.CancelledError:
        logger.info("run_cancelled", run_id=run_id)
        raise
    except WorkflowError as e:
        set_run(e.project)
        await hub.done(run_id, ok=False, error=str(e))
        return
    except Exception as e:
        logger.exception("run_crashed", run_id=run_id)
        current = get_run(run_id)
        if current is not None:
            set_run(current.model_copy(update={"status": ProjectStatus.ERROR, "error": str(e)}))
        await hub.done(run_id, ok=False, error=str(e))
        return
    await hub.done(run_id, ok=True)


@router.post("/runs", response_model=RunCreatedResponse)
async def create_run(body: RunCreateBody, make_client: ClientFactory = Depends(get_client_factory)):
    run_id = body.projectId or str(uuid.uuid4())
    if get_run(run_id) is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Run already exists")
    try:
        client = make_client(body.apiKey, run_id=run_id)
    except CompletionError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    set_run(Project(id=run_id, name=extract_app_name(body.prompt), description=body.prompt))
    request = GenerationRequest(prompt=body.prompt, project_id=run_id)
    task = asyncio.create_task(run_workflow(run_id, request, WorkflowEngine(client)))
    set_task(run_id, task)
    logger.info("run_created", run_id=run_id)
    return RunCreatedResponse(run_id=run_id)


@router.get("/runs")
async def runs_index():
    return {
        "runs": [
            {
                "id": p.id,
                "name": p.name,
                "status": p.status.value,
                "createdAt": p.created_at,
            }
            for p in list_runs()
        ]
    }


@router.get("/runs/{run_id}")
async def get_project(run_id: str):
    return _require_run(run_id).model_dump(mode="json", by_alias=True)


@router.get("/runs/{run_id}/events")
async def stream_events(run_id: str, request: Request):
    _require_run(run_id)
    q = await hub.subscribe(run_id)

    async def heartbeats():
        while True:
            await asyncio.sleep(15)
            await q.put(": ping\n\n")

    async def gen():
        hb_task = asyncio.create_task(heartbeats())
        try:
            while True:
                if await request.is_disconnected():
                    break
                chunk: str = await q.get()
                yield chunk.encode("utf-8")
                if chunk.startswith('data: {"t": "done"'):
                    break
        finally:
            hb_task.cancel()
            hub.unsubscribe(run_id, q)

    headers = {
        "Cache-Control": "no-cache",
        "Connection": "keep-alive",
        "X-Accel-Buffering": "no",
    }
    return StreamingResponse(gen(), media_type="text/event-stream", headers=headers)


@router.get("/runs/{run_id}/codebase")
async def get_codebase(run_id: str):
    project = _require_run(run_id)
    if project.codebase is None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Codebase not ready")
    return project.codebase.model_dump(by_alias=True)


@router.get("/runs/{run_id}/report")
async def get_report(run_id: str):
    report = build_report(run_id)
    if report is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Run not found")
    return report


@router.delete("/runs/{run_id}")
async def remove_run(run_id: str):
    _require_run(run_id)
    if delete_run(run_id):
        # subscribers are dropped by forget(); end their streams first
        await hub.done(run_id, ok=False, error="cancelled")
    hub.forget(run_id)
    clear_metrics(run_id)
    logger.info("run_deleted", run_id=run_id)
    return {"ok": True, "deleted": run_id}
