from typing import Any, Dict, List, Optional

from app_builder.generate.parsing import parse_agent_response
from app_builder.generate.types import GenerationRequest, Project, ProjectMetadata
from app_builder.logging_config import get_logger

logger = get_logger(__name__)

PLAN_SYSTEM_PROMPT = """You are an Elite Project Orchestrator AI. Analyze user requirements and create a comprehensive project plan.

RESPOND WITH VALID JSON ONLY:
{
  "name": "concise app name",
  "description": "detailed project description",
  "stack": {
    "frontend": "recommended frontend tech",
    "backend": "recommended backend tech",
    "database": "recommended database"
  },
  "features": ["key feature 1", "key feature 2"],
  "architecture": "architecture pattern"
}"""

DEFAULT_STACK = {"frontend": "Next.js", "backend": "Node.js", "database": "PostgreSQL"}
APP_TYPE_WORDS = ("app", "application", "platform", "system", "tool", "manager", "tracker")
COMMON_FEATURES = [
    "User Authentication",
    "Dashboard",
    "Data Management",
    "Responsive Design",
    "Real-time Updates",
    "Search Functionality",
]


def plan_prompt(prompt: str) -> str:
    return f"""User Request: "{prompt}"

Analyze this request and create a comprehensive project plan. Focus on:
- Modern, scalable technology choices
- Key features that deliver value
- Production-ready architecture

Respond with valid JSON only."""


def extract_app_name(prompt: str) -> str:
    words = prompt.lower().split()
    for i, w in enumerate(words):
        if i > 0 and w in APP_TYPE_WORDS:
            return " ".join(x.capitalize() for x in words[max(0, i - 2) : i + 1])
    return "AI Generated App"


def extract_features(prompt: str) -> List[str]:
    p = prompt.lower()
    features = []
    if "login" in p or "auth" in p:
        features.append("Authentication")
    if "dashboard" in p:
        features.append("Dashboard")
    if "dark mode" in p:
        features.append("Dark Mode")
    if "search" in p:
        features.append("Search")
    if "real-time" in p or "live" in p:
        features.append("Real-time Updates")
    return features or COMMON_FEATURES[:4]


def heuristic_plan(prompt: str) -> Dict[str, Any]:
    return {
        "name": extract_app_name(prompt),
        "description": prompt,
        "stack": dict(DEFAULT_STACK),
        "features": extract_features(prompt),
        "architecture": "Full-stack web application",
    }


def _as_str_list(value: Any) -> List[str]:
    if isinstance(value, list):
        return [str(v) for v in value if v not in (None, "")]
    if isinstance(value, str) and value:
        return [value]
    return []


def _as_stack(value: Any) -> Dict[str, str]:
    if not isinstance(value, dict):
        return {}
    return {str(k): v if isinstance(v, str) else str(v) for k, v in value.items()}


async def create_project(client, request: GenerationRequest) -> Project:
    """Plan a project with one completion call.

    A failed call or an answer without a JSON object falls back to keyword
    heuristics over the prompt; `metadata.plan_source` records which path
    was taken. Never raises for model trouble.
    """
    prompt = request.prompt
    plan: Optional[Dict[str, Any]] = None
    try:
        text = await client.complete(plan_prompt(prompt), PLAN_SYSTEM_PROMPT, where="plan")
        plan = parse_agent_response(text)
        if plan is None:
            logger.warning("plan_unparseable", length=len(text or ""))
    except Exception as e:
        logger.warning("plan_call_failed", error=str(e))

    source = "model"
    if plan is None:
        plan = heuristic_plan(prompt)
        source = "heuristic"

    name = plan.get("name") if isinstance(plan.get("name"), str) else None
    description = plan.get("description") if isinstance(plan.get("description"), str) else None
    architecture = plan.get("architecture")
    metadata = ProjectMetadata(
        stack=_as_stack(plan.get("stack")) or dict(DEFAULT_STACK),
        features=_as_str_list(plan.get("features")) or extract_features(prompt),
        architecture=architecture if isinstance(architecture, str) else "",
        plan_source=source,
    )

    kwargs: Dict[str, Any] = {}
    if request.project_id:
        kwargs["id"] = request.project_id
    project = Project(
        name=name or extract_app_name(prompt),
        description=description or prompt,
        metadata=metadata,
        **kwargs,
    )
    logger.info(
        "project_planned",
        project_id=project.id,
        name=project.name,
        plan_source=source,
        features=metadata.features,
    )
    return project
