import json

import pytest

from app_builder.generate.crew import AgentContext, CrewAgent, build_system_prompt, build_user_prompt
from app_builder.generate.payloads import (
    ArchitectPayload,
    BackendPayload,
    DatabasePayload,
    UiUxPayload,
    UnparsedPayload,
)
from app_builder.generate.roles import RESPONSE_SHAPES, ROLE_ORDER, AgentRole, offline_answer
from app_builder.run_utils.llm import CompletionError
from tests.fakes import FakeCompletionClient


@pytest.mark.parametrize("role", ROLE_ORDER)
def test_system_prompt_carries_only_its_own_shape(role):
    prompt = build_system_prompt(role)
    assert "RESPONSE FORMAT (JSON):" in prompt
    assert prompt.count(RESPONSE_SHAPES[role]) == 1
    for other in ROLE_ORDER:
        if other is not role:
            assert RESPONSE_SHAPES[other] not in prompt


def test_user_prompt_threads_previous_outputs_and_attempt():
    arch = ArchitectPayload.model_validate(offline_answer(AgentRole.ARCHITECT, "a todo app"))
    ctx = AgentContext(prompt="a todo app", previous_outputs={AgentRole.ARCHITECT: arch}, attempt=2)

    prompt = build_user_prompt(AgentRole.UI_UX, "a todo app", ctx)

    assert prompt.startswith("USER REQUEST: a todo app")
    assert "PREVIOUS AGENT OUTPUTS:" in prompt
    assert "ARCHITECT: {" in prompt
    assert "RETRY ATTEMPT: 2" in prompt
    assert "Design modern, accessible components" in prompt
    assert prompt.endswith("production-ready solution in the specified JSON format.")


def test_first_attempt_has_no_retry_line():
    prompt = build_user_prompt(AgentRole.BACKEND, "x", AgentContext(prompt="x"))
    assert "RETRY ATTEMPT" not in prompt
    assert "PREVIOUS AGENT OUTPUTS" not in prompt


@pytest.mark.asyncio
async def test_well_formed_answer_becomes_typed_payload():
    client = FakeCompletionClient()
    out = await CrewAgent(client, AgentRole.DATABASE).execute("a todo app")

    assert out.success is True
    assert out.source == "model"
    assert out.repaired == []
    assert isinstance(out.data, DatabasePayload)
    assert out.data.db_schema.tables[0].name == "users"
    assert client.calls[0]["where"] == "database"


@pytest.mark.asyncio
async def test_client_failure_uses_offline_answer():
    client = FakeCompletionClient({"architect": [CompletionError("Cerebras API failed: boom")]})
    out = await CrewAgent(client, AgentRole.ARCHITECT).execute("a habit tracker")

    assert out.success is True
    assert out.source == "fallback"
    assert "boom" in out.error
    assert isinstance(out.data, ArchitectPayload)
    assert "a habit tracker" in out.data.architecture["description"]


@pytest.mark.asyncio
async def test_empty_answer_counts_as_failure():
    client = FakeCompletionClient({"backend": ["   "]})
    out = await CrewAgent(client, AgentRole.BACKEND).execute("x")
    assert out.source == "fallback"
    assert isinstance(out.data, BackendPayload)


@pytest.mark.asyncio
async def test_missing_sections_are_filled_and_reported():
    answer = "Sure!\n" + json.dumps({"design": {"theme": "glass"}}) + "\nThanks"
    client = FakeCompletionClient({"ui-ux": [answer]})
    out = await CrewAgent(client, AgentRole.UI_UX).execute("x")

    assert isinstance(out.data, UiUxPayload)
    assert out.data.design == {"theme": "glass"}
    assert out.repaired == ["components", "layout"]
    assert out.data.components[0].name == "App"


@pytest.mark.asyncio
async def test_section_with_wrong_shape_is_replaced():
    answer = json.dumps(
        {"api": "REST", "endpoints": {"path": "/x"}, "middleware": {"security": "cors"}}
    )
    client = FakeCompletionClient({"backend": [answer]})
    out = await CrewAgent(client, AgentRole.BACKEND).execute("x")

    assert isinstance(out.data, BackendPayload)
    assert out.data.api == {"description": "REST"}
    assert "endpoints" in out.repaired
    assert out.data.endpoints[0].path == "/api/health"


@pytest.mark.asyncio
async def test_loose_list_items_are_coerced():
    answer = json.dumps(
        {
            "api": {"architecture": "REST"},
            "endpoints": ["POST /api/tasks", "/api/tasks/{id}"],
            "middleware": {},
        }
    )
    client = FakeCompletionClient({"backend": [answer]})
    out = await CrewAgent(client, AgentRole.BACKEND).execute("x")

    assert [(e.method, e.path) for e in out.data.endpoints] == [
        ("POST", "/api/tasks"),
        ("GET", "/api/tasks/{id}"),
    ]
    assert out.repaired == ["middleware"]


@pytest.mark.asyncio
async def test_prose_answer_becomes_unparsed_with_fields():
    client = FakeCompletionClient({"tester": ["Strategy: TDD\nCoverage: 90%"]})
    out = await CrewAgent(client, AgentRole.TESTER).execute("x")

    assert out.success is True
    assert isinstance(out.data, UnparsedPayload)
    assert out.data.role is AgentRole.TESTER
    assert out.data.fields == {"Strategy": "TDD", "Coverage": "90%"}
    assert out.data.kind == "unparsed"


@pytest.mark.asyncio
async def test_cut_off_answer_becomes_unparsed():
    full = json.dumps(offline_answer(AgentRole.UI_UX, "a todo app"))
    client = FakeCompletionClient({"ui-ux": [full[:-40]]})
    out = await CrewAgent(client, AgentRole.UI_UX).execute("a todo app")

    assert out.source == "model"
    assert isinstance(out.data, UnparsedPayload)
    assert out.repaired == []
