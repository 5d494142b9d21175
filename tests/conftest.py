import pytest

from app_builder import config
from app_builder.run_utils import metrics, state
from app_builder.run_utils.events import hub
from tests.fakes import FakeCompletionClient


@pytest.fixture
def fake_client():
    return FakeCompletionClient()


@pytest.fixture(autouse=True)
def fast_workflow(monkeypatch):
    monkeypatch.setattr(config, "AGENT_PAUSE_SECONDS", 0.0)
    monkeypatch.setattr(config, "PROGRESS_INTERVAL_SECONDS", 0.0)
    monkeypatch.setattr(config, "RETRY_DELAY_SECONDS", 0.0)


@pytest.fixture(autouse=True)
def clean_registry():
    yield
    state.RUNS.clear()
    state.TASKS.clear()
    metrics.METRICS.clear()
    hub.queues.clear()
    hub.history.clear()
    hub.last_seen.clear()
