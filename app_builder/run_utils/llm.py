import inspect
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

from openai import AsyncOpenAI, OpenAIError

from app_builder import config
from app_builder.logging_config import get_logger
from app_builder.run_utils.metrics import add_tokens

logger = get_logger(__name__)

ChunkCallback = Callable[[str], Union[None, Awaitable[None]]]


class CompletionError(Exception):
    """A completion request failed: missing key, transport error or non-2xx."""


@dataclass
class VerificationResult:
    success: bool
    message: Optional[str] = None


class CompletionClient:
    """Single-request wrapper around an OpenAI-compatible chat endpoint.

    Model, temperature, top_p and max_tokens are fixed per provider.
    Errors surface once as `CompletionError`; there is no retry here, the
    workflow owns that decision.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        provider: Optional[str] = None,
        model: Optional[str] = None,
        run_id: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        settings = config.provider_settings(provider)
        self.provider = (provider or config.LLM_PROVIDER).lower()
        self.label = settings["label"]
        key = api_key or config.env_api_key(self.provider)
        if not key:
            raise CompletionError(f"{self.label} API key is required")

        self.model = model or config.LLM_MODEL or settings["model"]
        self.run_id = run_id
        self.client = AsyncOpenAI(
            api_key=key,
            base_url=settings["base_url"],
            timeout=timeout or config.LLM_TIMEOUT_SECONDS,
            max_retries=0,
        )

    def _messages(self, prompt: str, system_message: Optional[str]) -> List[Dict[str, str]]:
        messages = []
        if system_message:
            messages.append({"role": "system", "content": system_message})
        messages.append({"role": "user", "content": prompt})
        return messages

    def _record_usage(self, where: str, resp: Any) -> None:
        if not self.run_id:
            return
        u = getattr(resp, "usage", None)
        if u:
            add_tokens(
                self.run_id,
                where,
                getattr(u, "prompt_tokens", 0),
                getattr(u, "completion_tokens", 0),
            )

    async def complete(
        self, prompt: str, system_message: Optional[str] = None, where: str = "completion"
    ) -> str:
        try:
            resp = await self.client.chat.completions.create(
                model=self.model,
                messages=self._messages(prompt, system_message),
                max_completion_tokens=config.MAX_COMPLETION_TOKENS,
                temperature=config.TEMPERATURE,
                top_p=config.TOP_P,
            )
        except OpenAIError as e:
            logger.error("completion_failed", provider=self.provider, where=where, error=str(e))
            raise CompletionError(f"{self.label} API failed: {e}") from e

        self._record_usage(where, resp)
        if not resp.choices:
            return ""
        return resp.choices[0].message.content or ""

    async def complete_streaming(
        self,
        prompt: str,
        system_message: Optional[str] = None,
        on_chunk: Optional[ChunkCallback] = None,
        where: str = "completion",
    ) -> str:
        full = []
        try:
            stream = await self.client.chat.completions.create(
                model=self.model,
                messages=self._messages(prompt, system_message),
                max_completion_tokens=config.MAX_COMPLETION_TOKENS,
                temperature=config.TEMPERATURE,
                top_p=config.TOP_P,
                stream=True,
            )
            async for chunk in stream:
                if not chunk.choices:
                    continue
                content = chunk.choices[0].delta.content or ""
                if not content:
                    continue
                full.append(content)
                if on_chunk is not None:
                    res = on_chunk(content)
                    if inspect.isawaitable(res):
                        await res
        except OpenAIError as e:
            logger.error(
                "streaming_completion_failed", provider=self.provider, where=where, error=str(e)
            )
            raise CompletionError(f"{self.label} streaming API failed: {e}") from e
        return "".join(full)

    async def verify_api_key(self) -> VerificationResult:
        try:
            resp = await self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": "Hello"}],
                max_completion_tokens=10,
                temperature=0.1,
            )
        except OpenAIError as e:
            logger.warning("api_key_verification_failed", provider=self.provider, error=str(e))
            return VerificationResult(success=False, message=str(e) or "Failed to verify API key")

        if resp.choices and resp.choices[0].message.content:
            return VerificationResult(success=True, message="API key verified successfully")
        return VerificationResult(success=False, message="Invalid response from API")


async def verify_key(api_key: Optional[str], provider: Optional[str] = None) -> VerificationResult:
    try:
        client = CompletionClient(api_key, provider=provider)
    except (CompletionError, ValueError) as e:
        return VerificationResult(success=False, message=str(e))
    return await client.verify_api_key()
