from __future__ import annotations

import asyncio
import contextlib
import inspect
import random
import uuid
from typing import Any, Awaitable, Callable, Dict, Optional, Union

from app_builder import config
from app_builder.generate.codebase import assemble_codebase
from app_builder.generate.crew import AgentContext, CrewAgent
from app_builder.generate.planner import create_project
from app_builder.generate.types import (
    CRITICAL_ROLES,
    ROLE_ORDER,
    AgentOutput,
    AgentRole,
    AgentStatus,
    GenerationRequest,
    PreviewDescriptor,
    Project,
    ProjectStatus,
    now_ms,
)
from app_builder.logging_config import get_logger
from app_builder.run_utils.metrics import step_end, step_start
from app_builder.run_utils.retry import RetryPolicy

logger = get_logger(__name__)

PROGRESS_CAP = 85

UpdateCallback = Callable[[Project], Union[None, Awaitable[None]]]


class AgentExecutionError(Exception):
    """An agent exhausted its attempts."""

    def __init__(self, role: AgentRole, message: str):
        super().__init__(message)
        self.role = role


class WorkflowError(Exception):
    """The run cannot continue; `project` is the last published snapshot."""

    def __init__(self, message: str, project: Project):
        super().__init__(message)
        self.project = project


class _RunState:
    """Current snapshot of one run and the observer it is published to."""

    def __init__(self, on_update: Optional[UpdateCallback]):
        self.project: Optional[Project] = None
        self.on_update = on_update

    async def publish(self, project: Project):
        self.project = project
        if self.on_update is not None:
            res = self.on_update(project)
            if inspect.isawaitable(res):
                await res

    async def set_agent(self, role: AgentRole, **changes: Any):
        agent = self.project.agent(role).model_copy(update=changes)
        await self.publish(self.project.with_agent(agent))


class WorkflowEngine:
    """Plans a project, runs the six agents in order and assembles the result.

    Each agent runs under `retry_policy`. A critical role (architect, ui-ux)
    that ends in error stops the run with `WorkflowError`; any other role is
    left in error and the run goes on without its output.
    """

    def __init__(
        self,
        client,
        *,
        retry_policy: Optional[RetryPolicy] = None,
        executor_factory: Optional[Callable[[AgentRole], Any]] = None,
        agent_pause: Optional[float] = None,
        progress_interval: Optional[float] = None,
    ):
        self.client = client
        self.retry_policy = retry_policy or RetryPolicy.from_config()
        self.executor_factory = executor_factory or (lambda role: CrewAgent(client, role))
        self.agent_pause = config.AGENT_PAUSE_SECONDS if agent_pause is None else agent_pause
        self.progress_interval = (
            config.PROGRESS_INTERVAL_SECONDS if progress_interval is None else progress_interval
        )

    async def _tick(self, state: _RunState, role: AgentRole):
        value = 0.0
        while value < PROGRESS_CAP:
            await asyncio.sleep(self.progress_interval)
            value = min(PROGRESS_CAP, value + random.uniform(5, 15))
            await state.set_agent(role, progress=int(value))

    async def _run_agent(
        self,
        state: _RunState,
        role: AgentRole,
        prompt: str,
        previous: Dict[AgentRole, Any],
    ) -> AgentOutput:
        run_id = state.project.id
        executor = self.executor_factory(role)
        attempt = 1
        while True:
            step_start(run_id, role.value)
            changes = {"status": AgentStatus.WORKING, "progress": 0, "end_time": None}
            if attempt == 1:
                changes["start_time"] = now_ms()
            await state.set_agent(role, **changes)
            ticker = None
            if self.progress_interval > 0:
                ticker = asyncio.create_task(self._tick(state, role))

            error: Optional[BaseException] = None
            result: Optional[AgentOutput] = None
            try:
                result = await executor.execute(
                    prompt,
                    AgentContext(prompt=prompt, previous_outputs=dict(previous), attempt=attempt),
                )
                if not result.success:
                    raise AgentExecutionError(role, result.error or "Agent execution failed")
            except Exception as e:
                error = e
            finally:
                if ticker is not None:
                    ticker.cancel()
                    with contextlib.suppress(asyncio.CancelledError):
                        await ticker

            if error is None:
                step_end(run_id, role.value, ok=True, extra={"source": result.source})
                await state.set_agent(
                    role,
                    status=AgentStatus.COMPLETE,
                    progress=100,
                    end_time=now_ms(),
                    output=result.data,
                )
                return result

            step_end(run_id, role.value, ok=False, extra={"error": str(error)})
            logger.warning(
                "agent_attempt_failed", run_id=run_id, role=role.value, attempt=attempt, error=str(error)
            )
            if not self.retry_policy.should_retry(error, attempt):
                await state.set_agent(role, status=AgentStatus.ERROR, progress=0, end_time=now_ms())
                raise AgentExecutionError(role, str(error)) from error

            await state.set_agent(role, status=AgentStatus.WORKING, progress=0)
            await asyncio.sleep(self.retry_policy.delay(attempt))
            attempt += 1

    async def execute_workflow(
        self, request: GenerationRequest, on_update: Optional[UpdateCallback] = None
    ) -> Project:
        if not request.project_id:
            request = request.model_copy(update={"project_id": str(uuid.uuid4())})
        run_id = request.project_id
        state = _RunState(on_update)

        step_start(run_id, "plan")
        project = await create_project(self.client, request)
        step_end(run_id, "plan", ok=True, extra={"source": project.metadata.plan_source})
        await state.publish(project)
        logger.info("workflow_started", run_id=run_id, name=project.name)

        previous: Dict[AgentRole, Any] = {}
        for role in ROLE_ORDER:
            try:
                result = await self._run_agent(state, role, request.prompt, previous)
            except AgentExecutionError as e:
                if role in CRITICAL_ROLES:
                    message = f"Critical agent {role.value} failed: {e}"
                    await state.publish(
                        state.project.model_copy(
                            update={"status": ProjectStatus.ERROR, "error": message}
                        )
                    )
                    logger.error("workflow_failed", run_id=run_id, role=role.value, error=str(e))
                    raise WorkflowError(message, state.project) from e
                logger.warning("agent_skipped", run_id=run_id, role=role.value, error=str(e))
            else:
                previous[role] = result.data

            if self.agent_pause > 0:
                await asyncio.sleep(self.agent_pause)

        step_start(run_id, "assemble")
        codebase = assemble_codebase(state.project)
        step_end(run_id, "assemble", ok=True)

        await state.publish(
            state.project.model_copy(
                update={
                    "codebase": codebase,
                    "preview": PreviewDescriptor(url=f"/runs/{run_id}/preview", status="ready"),
                    "status": ProjectStatus.PREVIEW,
                }
            )
        )
        logger.info("workflow_finished", run_id=run_id, status=state.project.status.value)
        return state.project
