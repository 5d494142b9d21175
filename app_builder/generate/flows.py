import json
import re
from typing import Any, List

from app_builder.generate.parsing import parse_agent_response
from app_builder.generate.types import CamelModel
from app_builder.logging_config import get_logger

logger = get_logger(__name__)

_BULLET = re.compile(r"^\s*(?:[-*•]|\d+[.)])\s*")


class CodeStats(CamelModel):
    components: int
    pages: int
    api_endpoints: int
    lines_of_code: int
    test_coverage: int
    performance_score: int


# field: (low, high, default when the model leaves it out)
STAT_BOUNDS = {
    "components": (5, 50, 15),
    "pages": (3, 20, 8),
    "api_endpoints": (3, 30, 12),
    "lines_of_code": (500, 10000, 2500),
    "test_coverage": (70, 100, 85),
    "performance_score": (80, 100, 92),
}


async def suggest_app_name(client, description: str) -> str:
    prompt = f"""You are an expert in naming applications. Based on the description provided, suggest a creative and relevant name for the app.

Description: {description}

Respond with only the app name, nothing else."""
    text = await client.complete(prompt, where="flow.app_name")
    return text.strip().strip('"').strip()


def _feature_lines(text: str) -> List[str]:
    lines = [ln for ln in text.splitlines() if ln.strip()]
    return [_BULLET.sub("", ln).strip() for ln in lines[:6]]


async def generate_features(client, description: str) -> List[str]:
    """3 to 6 short feature names; a JSON array if the model complied,
    otherwise the first six non-blank lines with bullets stripped."""
    prompt = f"""You are an AI assistant that generates key features for an application based on its description.

Description: {description}

Generate a list of key features that would be relevant for this application.
Each item in the list should be less than 5 words.
There should be at least 3 and no more than 6 items in the list.

Respond with a JSON array of strings, for example: ["User authentication", "Real-time notifications", "Data analytics"]"""
    text = await client.complete(prompt, where="flow.features")
    raw = text.strip()
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        m = re.search(r"\[.*\]", raw, re.DOTALL)
        try:
            value = json.loads(m.group(0)) if m else None
        except json.JSONDecodeError:
            value = None
    if isinstance(value, list):
        return [str(v).strip() for v in value if str(v).strip()]
    logger.info("features_fallback_to_lines")
    return _feature_lines(raw)


def _number(value: Any):
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, str):
        m = re.search(r"\d+(?:\.\d+)?", value.replace(",", ""))
        if m:
            return int(float(m.group(0)))
    return None


def clamp_stats(data: dict) -> CodeStats:
    values = {}
    for name, (low, high, default) in STAT_BOUNDS.items():
        camel = "".join(w.capitalize() if i else w for i, w in enumerate(name.split("_")))
        n = _number(data.get(camel, data.get(name)))
        values[name] = max(low, min(high, n or default))
    return CodeStats(**values)


def estimate_from_features(features: List[str]) -> CodeStats:
    count = len(features)
    return CodeStats(
        components=max(8, count * 2 + 2),
        pages=max(4, count + 1),
        api_endpoints=max(5, count * 2 + 2),
        lines_of_code=max(1000, count * 400 + 500),
        test_coverage=85,
        performance_score=90,
    )


async def estimate_code_stats(client, description: str, features: List[str]) -> CodeStats:
    prompt = f"""Based on this app description and features, estimate the code structure:

App: {description}
Features: {", ".join(features)}

Provide realistic estimates for a Next.js application with these features. Consider:
- Number of React components needed
- Number of pages/routes
- Number of API endpoints
- Estimated lines of code
- Expected test coverage
- Performance score (0-100)

Respond with a JSON object with these exact keys: components, pages, apiEndpoints, linesOfCode, testCoverage, performanceScore"""
    text = await client.complete(prompt, where="flow.estimate")
    data = parse_agent_response(text)
    if data is None:
        logger.info("estimate_fallback_to_features", features=len(features))
        return estimate_from_features(features)
    return clamp_stats(data)
