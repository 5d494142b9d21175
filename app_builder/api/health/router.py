from datetime import datetime, timezone

from fastapi import APIRouter

from app_builder import config

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
async def health():
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": config.APP_VERSION,
        "environment": config.ENVIRONMENT,
    }
