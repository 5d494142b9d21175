from fastapi import APIRouter

from app_builder.run_utils.llm import verify_key
from app_builder.utils.dto import KeyVerifyBody

router = APIRouter(prefix="/api/keys", tags=["keys"])


@router.post("/verify", summary="Check an LLM provider key with a tiny completion")
async def verify(body: KeyVerifyBody):
    if not body.apiKey:
        return {"success": False, "message": "API key is required"}
    result = await verify_key(body.apiKey, body.provider)
    return {"success": result.success, "message": result.message}
