import os

from dotenv import load_dotenv

load_dotenv()

APP_VERSION = os.getenv("APP_VERSION", "2.0.0")
ENVIRONMENT = os.getenv("ENVIRONMENT", os.getenv("NODE_ENV", "development"))

LLM_PROVIDER = os.getenv("LLM_PROVIDER", "cerebras")
LLM_MODEL = os.getenv("LLM_MODEL")
LLM_TIMEOUT_SECONDS = float(os.getenv("LLM_TIMEOUT_SECONDS", "60"))

PROVIDERS = {
    "cerebras": {
        "label": "Cerebras",
        "base_url": os.getenv("CEREBRAS_BASE_URL", "https://api.cerebras.ai/v1"),
        "model": "llama3.1-8b",
        "key_env": ("CEREBRAS_API_KEY", "NEXT_PUBLIC_CEREBRAS_API_KEY"),
    },
    "gemini": {
        "label": "Gemini",
        "base_url": os.getenv(
            "GEMINI_BASE_URL",
            "https://generativelanguage.googleapis.com/v1beta/openai/",
        ),
        "model": "gemini-2.0-flash",
        "key_env": ("GEMINI_API_KEY", "GOOGLE_API_KEY"),
    },
}

MAX_COMPLETION_TOKENS = 4096
TEMPERATURE = 0.7
TOP_P = 0.9

AGENT_MAX_ATTEMPTS = int(os.getenv("AGENT_MAX_ATTEMPTS", "3"))
RETRY_DELAY_SECONDS = float(os.getenv("RETRY_DELAY_SECONDS", "1.5"))
AGENT_PAUSE_SECONDS = float(os.getenv("AGENT_PAUSE_SECONDS", "0.5"))
PROGRESS_INTERVAL_SECONDS = float(os.getenv("PROGRESS_INTERVAL_SECONDS", "0.8"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "console")
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]


def provider_settings(provider: str | None = None) -> dict:
    name = (provider or LLM_PROVIDER).lower()
    if name not in PROVIDERS:
        raise ValueError(f"Unknown LLM provider: {name}")
    return PROVIDERS[name]


def env_api_key(provider: str | None = None) -> str | None:
    for var in provider_settings(provider)["key_env"]:
        value = os.getenv(var)
        if value:
            return value
    return None
