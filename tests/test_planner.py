import pytest

from app_builder.generate.planner import create_project, extract_app_name, extract_features
from app_builder.generate.types import ROLE_ORDER, AgentStatus, GenerationRequest, ProjectStatus
from app_builder.run_utils.llm import CompletionError
from tests.fakes import FakeCompletionClient


@pytest.mark.parametrize(
    "prompt,name",
    [
        ("Create a task manager with login", "A Task Manager"),
        ("Build an expense tracker for teams", "An Expense Tracker"),
        ("budget app", "Budget App"),
        ("app for notes", "AI Generated App"),
        ("Something nice", "AI Generated App"),
    ],
)
def test_extract_app_name(prompt, name):
    assert extract_app_name(prompt) == name


def test_extract_features_keywords():
    assert extract_features("Create a task manager with login and dark mode") == [
        "Authentication",
        "Dark Mode",
    ]
    assert extract_features("live dashboard with search") == [
        "Dashboard",
        "Search",
        "Real-time Updates",
    ]


def test_extract_features_defaults_to_common_list():
    assert extract_features("a recipe book") == [
        "User Authentication",
        "Dashboard",
        "Data Management",
        "Responsive Design",
    ]


@pytest.mark.asyncio
async def test_model_plan_is_used():
    client = FakeCompletionClient()
    project = await create_project(client, GenerationRequest(prompt="a todo app"))

    assert project.name == "TaskFlow"
    assert project.metadata.plan_source == "model"
    assert project.metadata.stack["backend"] == "FastAPI"
    assert project.status is ProjectStatus.GENERATING
    assert [a.id for a in project.agents] == list(ROLE_ORDER)
    assert all(a.status is AgentStatus.PENDING and a.progress == 0 for a in project.agents)


@pytest.mark.asyncio
async def test_unparseable_plan_falls_back_to_heuristics():
    client = FakeCompletionClient({"plan": ["Here is a great plan for you!"]})
    prompt = "Create a task manager with login and dark mode"
    project = await create_project(client, GenerationRequest(prompt=prompt, project_id="p-1"))

    assert project.id == "p-1"
    assert project.name == "A Task Manager"
    assert project.description == prompt
    assert project.metadata.plan_source == "heuristic"
    assert project.metadata.features == ["Authentication", "Dark Mode"]
    assert project.metadata.stack == {
        "frontend": "Next.js",
        "backend": "Node.js",
        "database": "PostgreSQL",
    }


@pytest.mark.asyncio
async def test_failed_plan_call_falls_back_to_heuristics():
    client = FakeCompletionClient({"plan": [CompletionError("Cerebras API failed: 500")]})
    project = await create_project(client, GenerationRequest(prompt="Analytics dashboard"))
    assert project.metadata.plan_source == "heuristic"
    assert project.metadata.features == ["Dashboard"]


@pytest.mark.asyncio
async def test_partial_plan_is_completed_from_prompt():
    client = FakeCompletionClient({"plan": ['{"stack": "everything", "features": "Search"}']})
    project = await create_project(client, GenerationRequest(prompt="a search tool"))

    assert project.name == "A Search Tool"
    assert project.description == "a search tool"
    assert project.metadata.features == ["Search"]
    assert project.metadata.stack["frontend"] == "Next.js"
