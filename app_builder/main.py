from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi

from app_builder import config
from app_builder.api.agent_pipeline import event_controller
from app_builder.api.flows import router as flows_router
from app_builder.api.generate import router as generate_router
from app_builder.api.health import router as health_router
from app_builder.api.keys import router as keys_router
from app_builder.api.preview import router as preview_router
from app_builder.logging_config import setup_logging

setup_logging()

app = FastAPI()


def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema
    app.openapi_schema = get_openapi(
        title="AI App Builder API",
        version=config.APP_VERSION,
        description="Multi-agent app generation with live previews",
        routes=app.routes,
    )
    return app.openapi_schema


app.openapi = custom_openapi

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router.router)
app.include_router(generate_router.router)
app.include_router(keys_router.router)
app.include_router(flows_router.router)
app.include_router(event_controller.router)
app.include_router(preview_router.router)
