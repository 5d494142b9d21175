import copy
import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError

from app_builder.generate.parsing import parse_agent_response, parse_key_values
from app_builder.generate.payloads import UnparsedPayload, build_payload
from app_builder.generate.roles import (
    DEFAULT_SECTIONS,
    REQUIRED_SECTIONS,
    RESPONSE_SHAPES,
    ROLE_HEADERS,
    ROLE_INSTRUCTIONS,
    offline_answer,
)
from app_builder.generate.types import AgentOutput, AgentRole
from app_builder.logging_config import get_logger
from app_builder.run_utils.llm import CompletionError

logger = get_logger(__name__)

_EMPTY = (None, "", [], {})


@dataclass
class AgentContext:
    prompt: str
    previous_outputs: Dict[AgentRole, Any] = field(default_factory=dict)
    attempt: int = 1


def build_system_prompt(role: AgentRole) -> str:
    return f"{ROLE_HEADERS[role]}\n\nRESPONSE FORMAT (JSON):\n{RESPONSE_SHAPES[role]}"


def _dump_output(payload: Any) -> str:
    data = payload.model_dump(mode="json", by_alias=True, exclude={"kind"})
    return json.dumps(data, ensure_ascii=False)


def build_user_prompt(role: AgentRole, prompt: str, context: Optional[AgentContext] = None) -> str:
    parts = [f"USER REQUEST: {prompt}"]
    if context and context.previous_outputs:
        lines = [
            f"{prev.value.upper()}: {_dump_output(out)}"
            for prev, out in context.previous_outputs.items()
        ]
        parts.append("PREVIOUS AGENT OUTPUTS:\n" + "\n".join(lines))
    if context and context.attempt > 1:
        parts.append(f"RETRY ATTEMPT: {context.attempt}")
    parts.append(ROLE_INSTRUCTIONS[role])
    return (
        "\n\n".join(parts)
        + "\n\nProvide a detailed, production-ready solution in the specified JSON format."
    )


def interpret_response(role: AgentRole, text: str) -> Tuple[Any, List[str]]:
    """Turn answer text into the role's payload plus the sections that were
    filled with defaults.

    Missing or empty required sections are defaulted up front. A section the
    validators reject (say `components` given as an object) is defaulted on a
    second pass. Text without any JSON object, or one that still fails
    validation, becomes an `UnparsedPayload`.
    """
    data = parse_agent_response(text)
    if data is None:
        return UnparsedPayload(role=role, raw=text, fields=parse_key_values(text)), []

    defaults = DEFAULT_SECTIONS[role]
    repaired = [s for s in REQUIRED_SECTIONS[role] if data.get(s) in _EMPTY]
    merged = dict(data)
    for s in repaired:
        merged[s] = copy.deepcopy(defaults[s])

    try:
        return build_payload(role, merged), repaired
    except ValidationError as e:
        bad = {str(err["loc"][0]) for err in e.errors() if err["loc"]} & set(defaults)
        bad -= set(repaired)
        if not bad:
            logger.warning("agent_payload_invalid", role=role.value, errors=e.error_count())
            return UnparsedPayload(role=role, raw=text, fields=parse_key_values(text)), repaired

    for s in sorted(bad):
        merged[s] = copy.deepcopy(defaults[s])
    repaired = repaired + sorted(bad)
    try:
        return build_payload(role, merged), repaired
    except ValidationError as e:
        logger.warning("agent_payload_invalid", role=role.value, errors=e.error_count())
        return UnparsedPayload(role=role, raw=text, fields=parse_key_values(text)), repaired


class CrewAgent:
    """One pipeline role: a single completion call and a lenient read of it.

    `execute` does not raise on model or transport trouble. A failed call is
    replaced by the role's offline answer and reported through `source` and
    `error` on the returned output.
    """

    def __init__(self, client, role: AgentRole):
        self.client = client
        self.role = role

    async def execute(self, prompt: str, context: Optional[AgentContext] = None) -> AgentOutput:
        context = context or AgentContext(prompt=prompt)
        system_prompt = build_system_prompt(self.role)
        user_prompt = build_user_prompt(self.role, prompt, context)

        source = "model"
        error = None
        logger.info("agent_started", role=self.role.value, attempt=context.attempt)
        try:
            text = await self.client.complete(user_prompt, system_prompt, where=self.role.value)
            if not (text or "").strip():
                raise CompletionError("Empty completion")
        except Exception as e:
            logger.warning("agent_fallback_used", role=self.role.value, error=str(e))
            text = json.dumps(offline_answer(self.role, prompt))
            source = "fallback"
            error = str(e)

        payload, repaired = interpret_response(self.role, text)
        if repaired:
            logger.info("agent_sections_repaired", role=self.role.value, sections=repaired)
        logger.info(
            "agent_finished", role=self.role.value, source=source, kind=payload.kind
        )
        return AgentOutput(
            agent_id=self.role,
            success=True,
            data=payload,
            error=error,
            source=source,
            repaired=repaired,
        )
