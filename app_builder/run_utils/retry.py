from dataclasses import dataclass, field
from typing import Callable

from app_builder import config


class FatalAgentError(Exception):
    """An agent failure that retrying cannot fix."""


def constant_backoff(seconds: float) -> Callable[[int], float]:
    return lambda attempt: seconds


def exponential_backoff(base: float, cap: float = 30.0) -> Callable[[int], float]:
    return lambda attempt: min(cap, base * (2 ** (attempt - 1)))


def default_retryable(exc: BaseException) -> bool:
    return not isinstance(exc, FatalAgentError)


@dataclass(frozen=True)
class RetryPolicy:
    """How many times an agent is attempted and how long to wait in between.

    `attempt` is 1-based everywhere: `should_retry(exc, 1)` asks whether a
    second attempt may follow the first failure.
    """

    max_attempts: int = 3
    backoff: Callable[[int], float] = field(default=constant_backoff(1.5))
    retryable: Callable[[BaseException], bool] = field(default=default_retryable)

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

    def should_retry(self, exc: BaseException, attempt: int) -> bool:
        return attempt < self.max_attempts and self.retryable(exc)

    def delay(self, attempt: int) -> float:
        return max(0.0, float(self.backoff(attempt)))

    @classmethod
    def from_config(cls) -> "RetryPolicy":
        return cls(
            max_attempts=config.AGENT_MAX_ATTEMPTS,
            backoff=constant_backoff(config.RETRY_DELAY_SECONDS),
        )
