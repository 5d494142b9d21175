import pytest
from pydantic import ValidationError

from app_builder.generate.types import ROLE_ORDER, Agent, AgentRole, AgentStatus, Project


def test_new_project_has_one_pending_agent_per_role():
    project = Project(name="P", description="d")
    assert tuple(a.id for a in project.agents) == ROLE_ORDER
    assert {a.status for a in project.agents} == {AgentStatus.PENDING}


@pytest.mark.parametrize(
    "roles",
    [
        (),
        ROLE_ORDER[:-1],
        ROLE_ORDER + (AgentRole.TESTER,),
        tuple(reversed(ROLE_ORDER)),
    ],
)
def test_agents_must_follow_pipeline_order(roles):
    with pytest.raises(ValidationError):
        Project(name="P", description="d", agents=tuple(Agent.pending(r) for r in roles))


def test_agents_invariant_holds_when_loading_json():
    dumped = Project(name="P", description="d").model_dump(mode="json", by_alias=True)
    assert Project.model_validate(dumped).agent(AgentRole.DEPLOYMENT).id is AgentRole.DEPLOYMENT

    dumped["agents"] = dumped["agents"][1:]
    with pytest.raises(ValidationError):
        Project.model_validate(dumped)


def test_with_agent_replaces_in_place():
    project = Project(name="P", description="d")
    working = project.agent(AgentRole.BACKEND).model_copy(update={"status": AgentStatus.WORKING})
    updated = project.with_agent(working)

    assert tuple(a.id for a in updated.agents) == ROLE_ORDER
    assert updated.agent(AgentRole.BACKEND).status is AgentStatus.WORKING
    assert project.agent(AgentRole.BACKEND).status is AgentStatus.PENDING
