from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app_builder.logging_config import get_logger
from app_builder.run_utils.llm import CompletionError
from app_builder.utils.clients import ClientFactory, get_client_factory
from app_builder.utils.dto import GenerateBody

router = APIRouter(prefix="/api", tags=["generate"])
logger = get_logger(__name__)


@router.post("/generate", summary="Run one completion against the configured provider")
async def generate(body: GenerateBody, make_client: ClientFactory = Depends(get_client_factory)):
    if not body.prompt:
        return JSONResponse(status_code=400, content={"error": "Prompt is required"})
    try:
        client = make_client()
        response = await client.complete(
            body.prompt, body.systemMessage, where=body.agentId or "generate"
        )
    except CompletionError as e:
        logger.error("generate_failed", agent_id=body.agentId, error=str(e))
        return JSONResponse(status_code=500, content={"error": str(e) or "Generation failed"})
    return {"success": True, "response": response, "agentId": body.agentId}
