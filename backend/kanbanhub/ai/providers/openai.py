"""OpenAI and Azure OpenAI provider implementations."""

import time
from typing import Any, List, Optional

import httpx
import openai
from openai import AsyncAzureOpenAI, AsyncOpenAI

from kanbanhub.ai.exceptions import AIProviderError, AIRateLimitError
from kanbanhub.ai.providers.base import AIMessage, AIProvider, AIResponse


class OpenAIProvider(AIProvider):
    """OpenAI chat completions.

    Example:
        ```python
        provider = OpenAIProvider(api_key="sk-...", default_model="gpt-4o")
        response = await provider.complete(
            [AIMessage(role="user", content="Summarize this task...")]
        )
        ```
    """

    def __init__(
        self,
        api_key: str,
        default_model: str = "gpt-4o",
        timeout: float = 60.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        # Single-shot: failures are reported, never retried by the SDK
        self.client: Any = AsyncOpenAI(
            api_key=api_key,
            timeout=timeout,
            max_retries=0,
            http_client=http_client,
        )
        self._default_model = default_model

    @property
    def provider_name(self) -> str:
        return "openai"

    @property
    def default_model(self) -> str:
        return self._default_model

    def _token_limit(self, max_tokens: int) -> dict[str, int]:
        return {"max_completion_tokens": max_tokens}

    async def complete(
        self,
        messages: List[AIMessage],
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: int = 1000,
        json_mode: bool = False,
    ) -> AIResponse:
        """Generate a completion.

        Raises:
            AIProviderError: If the OpenAI API request fails
            AIRateLimitError: If rate limited
        """
        self._validate_messages(messages)

        model = model or self.default_model
        start_time = time.perf_counter()

        request_kwargs: dict[str, Any] = {
            "model": model,
            "messages": [{"role": msg.role, "content": msg.content} for msg in messages],
            **self._token_limit(max_tokens),
        }
        if temperature is not None:
            request_kwargs["temperature"] = temperature
        if json_mode:
            request_kwargs["response_format"] = {"type": "json_object"}

        try:
            response = await self.client.chat.completions.create(**request_kwargs)
        except openai.RateLimitError as e:
            raise AIRateLimitError(provider=self.provider_name, message=str(e))
        except openai.APIError as e:
            raise AIProviderError(
                provider=self.provider_name,
                message=str(e),
                status_code=getattr(e, "status_code", None),
            )

        latency_ms = int((time.perf_counter() - start_time) * 1000)
        choice = response.choices[0]

        return AIResponse(
            content=choice.message.content or "",
            model=model,
            input_tokens=response.usage.prompt_tokens if response.usage else 0,
            output_tokens=response.usage.completion_tokens if response.usage else 0,
            finish_reason=choice.finish_reason or "stop",
            latency_ms=latency_ms,
        )


class AzureOpenAIProvider(OpenAIProvider):
    """Azure-hosted OpenAI deployments."""

    def __init__(
        self,
        endpoint: str,
        api_key: str,
        deployment: str,
        api_version: str = "2024-06-01",
        timeout: float = 60.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.client = AsyncAzureOpenAI(
            azure_endpoint=endpoint,
            api_key=api_key,
            api_version=api_version,
            timeout=timeout,
            max_retries=0,
            http_client=http_client,
        )
        self._default_model = deployment

    @property
    def provider_name(self) -> str:
        return "azure_openai"

    def _token_limit(self, max_tokens: int) -> dict[str, int]:
        return {"max_tokens": max_tokens}
