from typing import List, Optional

from pydantic import BaseModel, Field


class GenerateBody(BaseModel):
    prompt: Optional[str] = Field(None, description="User prompt sent to the model.")
    systemMessage: Optional[str] = Field(None, description="Optional system message.")
    agentId: Optional[str] = Field(None, description="Echoed back to the caller.")


class KeyVerifyBody(BaseModel):
    apiKey: Optional[str] = Field(None, description="Key to check against the provider.")
    provider: Optional[str] = Field(None, description="cerebras or gemini; defaults to LLM_PROVIDER.")


class FlowBody(BaseModel):
    description: str = Field(..., min_length=1, description="App description.")
    apiKey: Optional[str] = Field(None, description="Overrides the server-side key.")


class EstimateBody(FlowBody):
    features: List[str] = Field(default_factory=list, description="Feature names.")


class RunCreateBody(BaseModel):
    prompt: str = Field(..., min_length=1, description="Natural-language app description.")
    apiKey: Optional[str] = Field(None, description="Overrides the server-side key.")
    projectId: Optional[str] = Field(None, description="Id to give the project and run.")


class RunCreatedResponse(BaseModel):
    run_id: str
