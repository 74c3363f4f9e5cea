"""Provider adapters make exactly one upstream call per completion."""

import httpx
import pytest

from kanbanhub.ai.exceptions import AIProviderError
from kanbanhub.ai.providers.anthropic import AnthropicProvider
from kanbanhub.ai.providers.base import AIMessage
from kanbanhub.ai.providers.openai import AzureOpenAIProvider, OpenAIProvider

MESSAGES = [
    AIMessage(role="system", content="Summarize."),
    AIMessage(role="user", content="A task"),
]


class FailingUpstream:
    """Mock transport handler that answers every request with a 500."""

    def __init__(self):
        self.calls = 0

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls += 1
        return httpx.Response(500, json={"error": {"message": "upstream exploded", "type": "server_error"}})


@pytest.fixture()
def upstream():
    return FailingUpstream()


@pytest.fixture()
async def http_client(upstream):
    async with httpx.AsyncClient(transport=httpx.MockTransport(upstream)) as client:
        yield client


async def test_openai_failure_is_not_retried(upstream, http_client):
    provider = OpenAIProvider(api_key="sk-test", http_client=http_client)

    with pytest.raises(AIProviderError):
        await provider.complete(MESSAGES)

    assert upstream.calls == 1


async def test_azure_openai_failure_is_not_retried(upstream, http_client):
    provider = AzureOpenAIProvider(
        endpoint="https://kanbanhub.openai.azure.com",
        api_key="azure-test",
        deployment="gpt-4o",
        http_client=http_client,
    )

    with pytest.raises(AIProviderError):
        await provider.complete(MESSAGES)

    assert upstream.calls == 1


async def test_anthropic_failure_is_not_retried(upstream, http_client):
    provider = AnthropicProvider(api_key="sk-ant-test", http_client=http_client)

    with pytest.raises(AIProviderError):
        await provider.complete(MESSAGES)

    assert upstream.calls == 1
