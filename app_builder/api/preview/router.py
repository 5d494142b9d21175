from fastapi import APIRouter, HTTPException, status
from fastapi.responses import HTMLResponse

from app_builder.generate.types import ProjectStatus
from app_builder.preview.generator import configure, generate_preview
from app_builder.run_utils.state import get_run

router = APIRouter(prefix="/runs", tags=["preview"])


def _ready_project(run_id: str):
    project = get_run(run_id)
    if project is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Run not found")
    if project.preview is None or project.status not in (ProjectStatus.PREVIEW, ProjectStatus.DEPLOYED):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Preview not ready")
    return project


@router.get("/{run_id}/preview", response_class=HTMLResponse)
async def get_preview(run_id: str):
    return HTMLResponse(generate_preview(_ready_project(run_id)))


@router.get("/{run_id}/preview/config")
async def get_preview_config(run_id: str):
    return configure(_ready_project(run_id)).model_dump(mode="json", by_alias=True)
