from typing import Callable, Optional

from app_builder.run_utils.llm import CompletionClient

ClientFactory = Callable[..., CompletionClient]


def make_client(api_key: Optional[str] = None, *, run_id: Optional[str] = None) -> CompletionClient:
    return CompletionClient(api_key, run_id=run_id)


def get_client_factory() -> ClientFactory:
    """Dependency handing routers a way to build completion clients.

    Tests override it to return scripted clients.
    """
    return make_client
