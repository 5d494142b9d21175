from __future__ import annotations

import time
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from app_builder.generate.payloads import AgentPayload
from app_builder.generate.roles import CRITICAL_ROLES, ROLE_INFO, ROLE_ORDER, AgentRole

__all__ = [
    "CRITICAL_ROLES",
    "ROLE_ORDER",
    "Agent",
    "AgentOutput",
    "AgentRole",
    "AgentStatus",
    "Codebase",
    "DeploymentDescriptor",
    "GenerationRequest",
    "PreviewDescriptor",
    "Project",
    "ProjectMetadata",
    "ProjectStatus",
]


class AgentStatus(str, Enum):
    PENDING = "pending"
    WORKING = "working"
    COMPLETE = "complete"
    ERROR = "error"


class ProjectStatus(str, Enum):
    GENERATING = "generating"
    PREVIEW = "preview"
    DEPLOYED = "deployed"
    ERROR = "error"


def now_ms() -> int:
    return int(time.time() * 1000)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Agent(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: AgentRole = Field(..., description="Role this agent plays in the pipeline.")
    name: str = Field(..., description="Display name.")
    description: str = Field(..., description="What the agent is doing.")
    status: AgentStatus = Field(default=AgentStatus.PENDING)
    progress: int = Field(default=0, ge=0, le=100)
    output: Optional[AgentPayload] = Field(default=None)
    start_time: Optional[int] = Field(default=None, description="Epoch milliseconds.")
    end_time: Optional[int] = Field(default=None, description="Epoch milliseconds.")

    @classmethod
    def pending(cls, role: AgentRole) -> "Agent":
        name, description = ROLE_INFO[role]
        return cls(id=role, name=name, description=description)


class ProjectMetadata(CamelModel):
    stack: Dict[str, str] = Field(default_factory=dict)
    features: List[str] = Field(default_factory=list)
    architecture: str = ""
    plan_source: Literal["model", "heuristic"] = "model"


class PreviewDescriptor(CamelModel):
    url: str
    status: Literal["building", "ready", "error"] = "building"


class DeploymentDescriptor(CamelModel):
    frontend: str
    backend: str
    database: str


class Codebase(CamelModel):
    frontend: str
    backend: str
    database: str
    config: str
    tests: str
    deployment: str


class Project(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    description: str
    status: ProjectStatus = ProjectStatus.GENERATING
    created_at: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    agents: Tuple[Agent, ...] = Field(
        default_factory=lambda: tuple(Agent.pending(r) for r in ROLE_ORDER)
    )
    codebase: Optional[Codebase] = None
    preview: Optional[PreviewDescriptor] = None
    deployment: Optional[DeploymentDescriptor] = None
    metadata: Optional[ProjectMetadata] = None
    error: Optional[str] = None

    @model_validator(mode="after")
    def _one_agent_per_role(self) -> "Project":
        roles = tuple(a.id for a in self.agents)
        if roles != ROLE_ORDER:
            raise ValueError(f"agents must be one per role in pipeline order, got {[r.value for r in roles]}")
        return self

    def agent(self, role: AgentRole) -> Agent:
        for a in self.agents:
            if a.id == role:
                return a
        raise KeyError(role)

    def with_agent(self, agent: Agent) -> "Project":
        if all(a.id != agent.id for a in self.agents):
            raise KeyError(agent.id)
        agents = tuple(agent if a.id == agent.id else a for a in self.agents)
        return self.model_copy(update={"agents": agents})

    def outputs(self) -> Dict[AgentRole, AgentPayload]:
        return {a.id: a.output for a in self.agents if a.output is not None}


class AgentOutput(CamelModel):
    agent_id: AgentRole
    success: bool
    data: AgentPayload
    error: Optional[str] = None
    source: Literal["model", "fallback"] = "model"
    repaired: List[str] = Field(default_factory=list)


class GenerationRequest(CamelModel):
    prompt: str
    project_id: Optional[str] = None
