import asyncio
import itertools

import pytest

from app_builder.generate import project_core
from app_builder.generate.crew import CrewAgent
from app_builder.generate.payloads import UnparsedPayload
from app_builder.generate.project_core import WorkflowEngine, WorkflowError
from app_builder.generate.types import (
    ROLE_ORDER,
    AgentOutput,
    AgentRole,
    AgentStatus,
    GenerationRequest,
    ProjectStatus,
)
from app_builder.run_utils.llm import CompletionError
from app_builder.run_utils.metrics import get_metrics
from app_builder.run_utils.retry import RetryPolicy, constant_backoff
from tests.fakes import FakeCompletionClient

FAST_RETRY = RetryPolicy(max_attempts=2, backoff=constant_backoff(0))


class FailingExecutor:
    def __init__(self):
        self.calls = 0

    async def execute(self, prompt, context=None):
        self.calls += 1
        raise RuntimeError("agent crashed")


class FlakyExecutor:
    """Fails the first attempt, then behaves like the real agent."""

    def __init__(self, inner):
        self.inner = inner
        self.attempts = []

    async def execute(self, prompt, context=None):
        self.attempts.append(context.attempt)
        if len(self.attempts) == 1:
            raise RuntimeError("transient")
        return await self.inner.execute(prompt, context)


class SlowExecutor:
    def __init__(self, inner, delay):
        self.inner = inner
        self.delay = delay

    async def execute(self, prompt, context=None):
        await asyncio.sleep(self.delay)
        return await self.inner.execute(prompt, context)


def _factory(client, overrides):
    def make(role):
        if role in overrides:
            return overrides[role]
        return CrewAgent(client, role)

    return make


@pytest.mark.asyncio
async def test_task_manager_run_reaches_preview_even_when_planning_fails():
    client = FakeCompletionClient({"plan": [CompletionError("Cerebras API failed: down")]})
    snapshots = []
    engine = WorkflowEngine(client)

    project = await engine.execute_workflow(
        GenerationRequest(prompt="Create a task manager with login and dark mode"),
        snapshots.append,
    )

    assert "Authentication" in project.metadata.features
    assert "Dark Mode" in project.metadata.features
    assert project.status is ProjectStatus.PREVIEW
    assert project.preview.url == f"/runs/{project.id}/preview"
    assert project.preview.status == "ready"
    sections = project.codebase.model_dump()
    assert set(sections) == {"frontend", "backend", "database", "config", "tests", "deployment"}
    assert all(isinstance(v, str) and v.strip() for v in sections.values())
    assert [a.id for a in project.agents] == list(ROLE_ORDER)
    assert all(a.status is AgentStatus.COMPLETE and a.progress == 100 for a in project.agents)
    assert snapshots[0].status is ProjectStatus.GENERATING
    assert snapshots[-1] == project


@pytest.mark.asyncio
async def test_later_agents_see_earlier_outputs():
    client = FakeCompletionClient()
    await WorkflowEngine(client).execute_workflow(GenerationRequest(prompt="a todo app"))

    assert "PREVIOUS AGENT OUTPUTS" not in client.calls_for("architect")[0]["prompt"]
    ui_prompt = client.calls_for("ui-ux")[0]["prompt"]
    assert "ARCHITECT: {" in ui_prompt
    deploy_prompt = client.calls_for("deployment")[0]["prompt"]
    for role in ("ARCHITECT", "UI-UX", "BACKEND", "DATABASE", "TESTER"):
        assert f"{role}: " in deploy_prompt


@pytest.mark.asyncio
async def test_critical_agent_failure_stops_the_run():
    client = FakeCompletionClient()
    failing = FailingExecutor()
    engine = WorkflowEngine(
        client,
        retry_policy=FAST_RETRY,
        executor_factory=_factory(client, {AgentRole.ARCHITECT: failing}),
    )

    with pytest.raises(WorkflowError) as exc:
        await engine.execute_workflow(GenerationRequest(prompt="a todo app", project_id="run-c"))

    project = exc.value.project
    assert project.status is ProjectStatus.ERROR
    assert project.status is not ProjectStatus.PREVIEW
    assert "architect" in project.error
    assert project.agent(AgentRole.ARCHITECT).status is AgentStatus.ERROR
    assert project.agent(AgentRole.UI_UX).status is AgentStatus.PENDING
    assert project.codebase is None
    assert failing.calls == 2
    assert get_metrics("run-c")["steps"]["architect"]["attempts"] == 2


@pytest.mark.asyncio
async def test_ui_ux_is_critical_too():
    client = FakeCompletionClient()
    engine = WorkflowEngine(
        client,
        retry_policy=FAST_RETRY,
        executor_factory=_factory(client, {AgentRole.UI_UX: FailingExecutor()}),
    )
    with pytest.raises(WorkflowError) as exc:
        await engine.execute_workflow(GenerationRequest(prompt="x"))
    assert exc.value.project.agent(AgentRole.ARCHITECT).status is AgentStatus.COMPLETE


@pytest.mark.asyncio
async def test_non_critical_failure_is_skipped():
    client = FakeCompletionClient()
    engine = WorkflowEngine(
        client,
        retry_policy=FAST_RETRY,
        executor_factory=_factory(client, {AgentRole.BACKEND: FailingExecutor()}),
    )

    project = await engine.execute_workflow(GenerationRequest(prompt="a todo app"))

    assert project.status is ProjectStatus.PREVIEW
    backend = project.agent(AgentRole.BACKEND)
    assert backend.status is AgentStatus.ERROR
    assert backend.progress == 0
    assert backend.output is None
    assert project.agent(AgentRole.DEPLOYMENT).status is AgentStatus.COMPLETE
    assert "BACKEND: " not in client.calls_for("database")[0]["prompt"]
    assert project.codebase.backend.strip()


@pytest.mark.asyncio
async def test_unsuccessful_output_counts_as_failure():
    class Refusing:
        async def execute(self, prompt, context=None):
            return AgentOutput(
                agent_id=AgentRole.TESTER,
                success=False,
                data=UnparsedPayload(role=AgentRole.TESTER, raw=""),
                error="refused",
            )

    client = FakeCompletionClient()
    engine = WorkflowEngine(
        client,
        retry_policy=FAST_RETRY,
        executor_factory=_factory(client, {AgentRole.TESTER: Refusing()}),
    )
    project = await engine.execute_workflow(GenerationRequest(prompt="x"))
    assert project.agent(AgentRole.TESTER).status is AgentStatus.ERROR


@pytest.mark.asyncio
async def test_retry_passes_attempt_number_and_recovers():
    client = FakeCompletionClient()
    flaky = FlakyExecutor(CrewAgent(client, AgentRole.TESTER))
    engine = WorkflowEngine(
        client,
        retry_policy=FAST_RETRY,
        executor_factory=_factory(client, {AgentRole.TESTER: flaky}),
    )

    project = await engine.execute_workflow(GenerationRequest(prompt="x", project_id="run-r"))

    assert flaky.attempts == [1, 2]
    assert "RETRY ATTEMPT: 2" in client.calls_for("tester")[0]["prompt"]
    assert project.agent(AgentRole.TESTER).status is AgentStatus.COMPLETE
    steps = get_metrics("run-r")["steps"]
    assert steps["tester"]["attempts"] == 2
    assert steps["tester"]["ok"] is True
    assert {"plan", "assemble"} <= set(steps)


@pytest.mark.asyncio
async def test_start_time_covers_every_attempt(monkeypatch):
    clock = itertools.count(1000, 10)
    monkeypatch.setattr(project_core, "now_ms", lambda: next(clock))
    client = FakeCompletionClient()
    flaky = FlakyExecutor(CrewAgent(client, AgentRole.TESTER))
    engine = WorkflowEngine(
        client,
        retry_policy=FAST_RETRY,
        executor_factory=_factory(client, {AgentRole.TESTER: flaky}),
    )
    starts = set()

    def watch(project):
        agent = project.agent(AgentRole.TESTER)
        if agent.status is AgentStatus.WORKING:
            starts.add(agent.start_time)

    project = await engine.execute_workflow(GenerationRequest(prompt="x"), watch)

    tester = project.agent(AgentRole.TESTER)
    assert flaky.attempts == [1, 2]
    assert starts == {tester.start_time}
    assert tester.end_time > tester.start_time


@pytest.mark.asyncio
async def test_progress_ticks_while_agent_works():
    client = FakeCompletionClient()
    slow = SlowExecutor(CrewAgent(client, AgentRole.ARCHITECT), 0.15)
    engine = WorkflowEngine(
        client,
        executor_factory=_factory(client, {AgentRole.ARCHITECT: slow}),
        progress_interval=0.01,
    )
    seen = []

    async def on_update(project):
        seen.append(project.agent(AgentRole.ARCHITECT).progress)

    await engine.execute_workflow(GenerationRequest(prompt="x"), on_update)

    ticks = [p for p in seen if 0 < p < 100]
    assert ticks
    assert max(ticks) <= 85
    assert ticks == sorted(ticks)
    assert seen[-1] == 100
