from fastapi import APIRouter, Depends, HTTPException

from app_builder.generate.flows import CodeStats, estimate_code_stats, generate_features, suggest_app_name
from app_builder.logging_config import get_logger
from app_builder.run_utils.llm import CompletionError
from app_builder.utils.clients import ClientFactory, get_client_factory
from app_builder.utils.dto import EstimateBody, FlowBody

router = APIRouter(prefix="/api/flows", tags=["flows"])
logger = get_logger(__name__)


def _client(make_client: ClientFactory, api_key):
    try:
        return make_client(api_key)
    except CompletionError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/app-name")
async def app_name(body: FlowBody, make_client: ClientFactory = Depends(get_client_factory)):
    client = _client(make_client, body.apiKey)
    try:
        name = await suggest_app_name(client, body.description)
    except CompletionError as e:
        logger.error("flow_failed", flow="app_name", error=str(e))
        raise HTTPException(status_code=502, detail=str(e))
    return {"appName": name}


@router.post("/features")
async def features(body: FlowBody, make_client: ClientFactory = Depends(get_client_factory)):
    client = _client(make_client, body.apiKey)
    try:
        items = await generate_features(client, body.description)
    except CompletionError as e:
        logger.error("flow_failed", flow="features", error=str(e))
        raise HTTPException(status_code=502, detail=str(e))
    return {"features": items}


@router.post("/estimate")
async def estimate(body: EstimateBody, make_client: ClientFactory = Depends(get_client_factory)):
    client = _client(make_client, body.apiKey)
    try:
        stats: CodeStats = await estimate_code_stats(client, body.description, body.features)
    except CompletionError as e:
        logger.error("flow_failed", flow="estimate", error=str(e))
        raise HTTPException(status_code=502, detail=str(e))
    return stats.model_dump(by_alias=True)
