import html
import json
import re
from enum import Enum
from typing import Dict, List, Literal, Sequence, Tuple

from app_builder.generate.payloads import BackendPayload, DatabasePayload, UiUxPayload
from app_builder.generate.types import AgentRole, CamelModel, Project
from app_builder.preview import templates


class Archetype(str, Enum):
    CALCULATOR = "calculator"
    ECOMMERCE = "ecommerce"
    SOCIAL = "social"
    BLOG = "blog"
    PORTFOLIO = "portfolio"
    DASHBOARD = "dashboard"
    DEFAULT = "default"


# Checked in this order; the first archetype with a matching keyword wins.
ARCHETYPE_KEYWORDS: Tuple[Tuple[Archetype, Tuple[str, ...]], ...] = (
    (Archetype.CALCULATOR, ("calculator", "calc", "math", "arithmetic")),
    (Archetype.ECOMMERCE, ("shop", "store", "ecommerce", "e-commerce", "product", "cart")),
    (Archetype.SOCIAL, ("social", "media", "post", "feed", "follow", "like")),
    (Archetype.BLOG, ("blog", "article", "content", "cms", "publish")),
    (Archetype.PORTFOLIO, ("portfolio", "showcase", "gallery", "work")),
    (Archetype.DASHBOARD, ("dashboard", "admin", "analytics", "metrics")),
)

FLAG_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "has_auth": ("login", "auth", "sign", "user", "account"),
    "has_dashboard": ("dashboard", "admin", "panel", "overview"),
    "has_realtime": ("real-time", "live", "chat", "notification"),
    "has_payments": ("payment", "billing", "subscription", "checkout"),
    "has_chat": ("chat", "message", "communication"),
    "has_calendar": ("calendar", "schedule", "appointment", "booking"),
    "has_analytics": ("analytics", "metrics", "stats", "report"),
}

COLORS: Dict[str, Tuple[str, str]] = {
    "blue": ("#3b82f6", "#2563eb"),
    "green": ("#10b981", "#059669"),
    "purple": ("#8b5cf6", "#7c3aed"),
    "red": ("#ef4444", "#dc2626"),
}

APP_TEMPLATES = {
    Archetype.CALCULATOR: templates.CALCULATOR,
    Archetype.ECOMMERCE: templates.ECOMMERCE,
    Archetype.SOCIAL: templates.SOCIAL,
    Archetype.BLOG: templates.BLOG,
    Archetype.PORTFOLIO: templates.PORTFOLIO,
    Archetype.DASHBOARD: templates.DASHBOARD,
    Archetype.DEFAULT: templates.DEFAULT,
}

Complexity = Literal["simple", "moderate", "advanced", "enterprise"]


class PreviewConfig(CamelModel):
    app_type: Archetype
    features: List[str]
    has_auth: bool
    has_dashboard: bool
    has_realtime: bool
    has_payments: bool
    has_chat: bool
    has_calendar: bool
    has_analytics: bool
    color_scheme: str
    complexity: Complexity


def _has(text: str, keywords: Sequence[str]) -> bool:
    return any(k in text for k in keywords)


def classify(description: str) -> Archetype:
    text = description.lower()
    for archetype, keywords in ARCHETYPE_KEYWORDS:
        if _has(text, keywords):
            return archetype
    return Archetype.DEFAULT


def detect_color_scheme(text: str) -> str:
    for color in COLORS:
        if color in text:
            return color
    return "blue"


def extract_preview_features(text: str, project: Project) -> List[str]:
    features = []
    if _has(text, ("auth", "login")):
        features.append("Authentication")
    if _has(text, ("dark", "theme")):
        features.append("Dark Mode")
    if "responsive" in text:
        features.append("Responsive Design")
    if _has(text, ("real-time", "live")):
        features.append("Real-time Updates")

    outputs = project.outputs()
    if isinstance(outputs.get(AgentRole.UI_UX), UiUxPayload):
        features.append("Modern UI Components")
    if isinstance(outputs.get(AgentRole.BACKEND), BackendPayload):
        features.append("REST API")
    if isinstance(outputs.get(AgentRole.DATABASE), DatabasePayload):
        features.append("Database Integration")
    return features


def complexity_score(text: str, project: Project) -> int:
    score = 0
    if _has(text, ("auth", "login")):
        score += 1
    if _has(text, ("real-time", "live")):
        score += 2
    if _has(text, ("payment", "billing")):
        score += 2
    if _has(text, ("admin", "dashboard")):
        score += 1

    outputs = project.outputs()
    backend = outputs.get(AgentRole.BACKEND)
    if isinstance(backend, BackendPayload) and len(backend.endpoints) > 5:
        score += 1
    database = outputs.get(AgentRole.DATABASE)
    if isinstance(database, DatabasePayload) and len(database.db_schema.tables) > 3:
        score += 1
    return score


def complexity_label(score: int) -> Complexity:
    if score >= 6:
        return "enterprise"
    if score >= 4:
        return "advanced"
    if score >= 2:
        return "moderate"
    return "simple"


def configure(project: Project) -> PreviewConfig:
    text = project.description.lower()
    flags = {name: _has(text, keywords) for name, keywords in FLAG_KEYWORDS.items()}
    return PreviewConfig(
        app_type=classify(text),
        features=extract_preview_features(text, project),
        color_scheme=detect_color_scheme(text),
        complexity=complexity_label(complexity_score(text, project)),
        **flags,
    )


def _markup(value: str) -> str:
    # JSX treats braces as expressions
    return html.escape(value).replace("{", "&#123;").replace("}", "&#125;")


def _js_literal(value) -> str:
    return json.dumps(value, ensure_ascii=False).replace("</", "<\\/")


_PLACEHOLDER = re.compile(r"__([A-Z_]+?)__")


def fill(template: str, values: Dict[str, str]) -> str:
    # one pass, so substituted text is never scanned for placeholders again
    return _PLACEHOLDER.sub(lambda m: values.get(m.group(1), m.group(0)), template)


def render(project: Project, config: PreviewConfig) -> str:
    """Full HTML page for the project's preview.

    Name and description are escaped for markup; features go in as a JS
    array literal and are rendered as text by React.
    """
    color = config.color_scheme if config.color_scheme in COLORS else "blue"
    primary, secondary = COLORS[color]
    values = {
        "SIGN_IN": templates.SIGN_IN_BUTTON if config.has_auth else "",
        "NAME": _markup(project.name),
        "DESCRIPTION": _markup(project.description),
        "COLOR": color,
        "FEATURES": _js_literal(config.features),
        "COMPLEXITY": config.complexity,
    }
    app = fill(APP_TEMPLATES[config.app_type], values)
    hooks = fill(
        templates.HOOKS,
        {
            "INITIAL_USER": "null" if config.has_auth else '{ id: 1, name: "Demo User" }',
            "REALTIME": "true" if config.has_realtime else "false",
        },
    )
    return fill(
        templates.PAGE,
        {
            "TITLE": html.escape(project.name),
            "PRIMARY": primary,
            "SECONDARY": secondary,
            "HOOKS": hooks,
            "APP": app,
        },
    )


def generate_preview(project: Project) -> str:
    return render(project, configure(project))
