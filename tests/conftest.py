"""Shared fixtures: scripted in-memory completion backends."""

from collections.abc import Iterator

import pytest

from src.ai.providers.base import AIProvider

Reply = str | BaseException


class FakeProvider(AIProvider):
    """Backend whose ``complete`` replays scripted replies (last one repeats)."""

    def __init__(
        self,
        provider_name: str,
        api_key: str,
        model: str | None = None,
        replies: list[Reply] | None = None,
    ) -> None:
        self._provider_name = provider_name
        super().__init__(api_key, model)
        self._replies = list(replies or ["ok"])
        self.prompts: list[str] = []

    @property
    def name(self) -> str:
        return self._provider_name

    @property
    def default_model(self) -> str:
        return f"{self._provider_name}-test-model"

    @property
    def env_var(self) -> str:
        return f"{self._provider_name.upper()}_API_KEY"

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        reply = self._replies.pop(0) if len(self._replies) > 1 else self._replies[0]
        if isinstance(reply, BaseException):
            raise reply
        return reply


class FakeBackends:
    """Provider factory for AIService that records what it built.

    Set ``replies[name]`` before constructing the service to script a backend.
    """

    def __init__(self) -> None:
        self.replies: dict[str, list[Reply]] = {}
        self.created: dict[str, FakeProvider] = {}

    def __call__(self, name: str, api_key: str, model: str | None) -> AIProvider:
        provider = FakeProvider(name, api_key, model, self.replies.get(name))
        self.created[name] = provider
        return provider

    def calls(self, name: str) -> int:
        provider = self.created.get(name)
        return len(provider.prompts) if provider else 0


@pytest.fixture
def fake_backends() -> Iterator[FakeBackends]:
    yield FakeBackends()
