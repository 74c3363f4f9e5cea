"""Anthropic Claude AI provider implementation."""

import time
from typing import Any, List, Optional

import anthropic
import httpx
from anthropic import AsyncAnthropic

from kanbanhub.ai.exceptions import AIProviderError, AIRateLimitError
from kanbanhub.ai.providers.base import AIMessage, AIProvider, AIResponse


class AnthropicProvider(AIProvider):
    """Anthropic Claude implementation.

    The Messages API has no JSON response mode; ``json_mode`` is satisfied
    by the prompt alone.
    """

    def __init__(
        self,
        api_key: str,
        default_model: str = "claude-sonnet-4-20250514",
        timeout: float = 60.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        # Single-shot: failures are reported, never retried by the SDK
        self.client = AsyncAnthropic(
            api_key=api_key,
            timeout=timeout,
            max_retries=0,
            http_client=http_client,
        )
        self._default_model = default_model

    @property
    def provider_name(self) -> str:
        return "anthropic"

    @property
    def default_model(self) -> str:
        return self._default_model

    async def complete(
        self,
        messages: List[AIMessage],
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: int = 1000,
        json_mode: bool = False,
    ) -> AIResponse:
        """Generate a completion using Claude.

        Raises:
            AIProviderError: If the Anthropic API request fails
            AIRateLimitError: If rate limited by Anthropic
        """
        self._validate_messages(messages)

        model = model or self._default_model
        start_time = time.perf_counter()

        # Separate system message from conversation messages
        system_content = None
        conversation_messages = []
        for msg in messages:
            if msg.role == "system":
                system_content = msg.content
            else:
                conversation_messages.append({"role": msg.role, "content": msg.content})

        request_kwargs: dict[str, Any] = {
            "model": model,
            "messages": conversation_messages,
            "max_tokens": max_tokens,
        }
        if system_content:
            request_kwargs["system"] = system_content
        if temperature is not None:
            request_kwargs["temperature"] = temperature

        try:
            response = await self.client.messages.create(**request_kwargs)
        except anthropic.RateLimitError as e:
            raise AIRateLimitError(provider=self.provider_name, message=str(e))
        except anthropic.APIError as e:
            raise AIProviderError(
                provider=self.provider_name,
                message=str(e),
                status_code=getattr(e, "status_code", None),
            )

        latency_ms = int((time.perf_counter() - start_time) * 1000)
        text = "".join(
            block.text for block in response.content if getattr(block, "type", "") == "text"
        )

        return AIResponse(
            content=text,
            model=model,
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
            finish_reason=response.stop_reason or "stop",
            latency_ms=latency_ms,
        )
