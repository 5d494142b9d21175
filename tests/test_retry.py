import pytest

from app_builder import config
from app_builder.run_utils.retry import (
    FatalAgentError,
    RetryPolicy,
    constant_backoff,
    exponential_backoff,
)


def test_retries_until_attempts_run_out():
    policy = RetryPolicy(max_attempts=3)
    err = RuntimeError("flaky")
    assert policy.should_retry(err, 1)
    assert policy.should_retry(err, 2)
    assert not policy.should_retry(err, 3)


def test_fatal_errors_are_not_retried():
    assert not RetryPolicy(max_attempts=5).should_retry(FatalAgentError("bad role"), 1)


def test_custom_classifier():
    policy = RetryPolicy(max_attempts=3, retryable=lambda e: isinstance(e, TimeoutError))
    assert policy.should_retry(TimeoutError(), 1)
    assert not policy.should_retry(ValueError(), 1)


def test_backoff_helpers():
    assert RetryPolicy(backoff=constant_backoff(1.5)).delay(2) == 1.5
    backoff = exponential_backoff(0.5, cap=3)
    assert [backoff(n) for n in (1, 2, 3, 4, 5)] == [0.5, 1.0, 2.0, 3, 3]
    assert RetryPolicy(backoff=lambda n: -1).delay(1) == 0.0


def test_at_least_one_attempt():
    with pytest.raises(ValueError):
        RetryPolicy(max_attempts=0)


def test_from_config(monkeypatch):
    monkeypatch.setattr(config, "AGENT_MAX_ATTEMPTS", 4)
    monkeypatch.setattr(config, "RETRY_DELAY_SECONDS", 2.0)
    policy = RetryPolicy.from_config()
    assert policy.max_attempts == 4
    assert policy.delay(1) == 2.0
