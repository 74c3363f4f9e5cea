"""AI assist service - subtask generation and task summaries.

Both operations are single provider calls: no retries, no streaming.
"""

import json
import re
from functools import lru_cache
from typing import Any, Optional

import structlog

from kanbanhub.ai.exceptions import AIFeatureDisabledError, AIProviderError
from kanbanhub.ai.providers.anthropic import AnthropicProvider
from kanbanhub.ai.providers.base import AIMessage, AIProvider
from kanbanhub.ai.providers.openai import AzureOpenAIProvider, OpenAIProvider
from kanbanhub.ai.templates import DEFAULT_TEMPLATES, render_template
from kanbanhub.config import Settings, get_settings

logger = structlog.get_logger()

_CODE_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


def parse_subtasks(content: str) -> list[str]:
    """Extract subtask titles from a provider response.

    Accepts ``{"subtasks": [...]}`` or a bare JSON array, optionally wrapped
    in a Markdown code fence. Anything else yields an empty list.
    """
    text = _CODE_FENCE.sub("", (content or "").strip())
    try:
        data = json.loads(text)
    except ValueError:
        logger.warning("subtasks_response_not_json", length=len(content or ""))
        return []

    items = data.get("subtasks") if isinstance(data, dict) else data
    if not isinstance(items, list):
        logger.warning("subtasks_response_unexpected_shape", kind=type(items).__name__)
        return []

    return [item.strip() for item in items if isinstance(item, str) and item.strip()]


class AIAssistService:
    """Routes task assist requests to the configured provider.

    Example:
        ```python
        service = AIAssistService()
        subtasks = await service.generate_subtasks("Launch the new pricing page")
        ```
    """

    def __init__(
        self,
        provider: Optional[AIProvider] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or get_settings()
        self._provider = provider

    def _get_provider(self) -> AIProvider:
        """Get or create the provider named by ``ai_primary_provider``.

        Raises:
            AIProviderError: If the provider is unknown or not configured
        """
        if self._provider is not None:
            return self._provider

        name = self.settings.ai_primary_provider
        timeout = self.settings.ai_request_timeout

        if name == "openai":
            api_key = self.settings.openai_api_key.get_secret_value()
            if not api_key:
                raise AIProviderError(name, "OpenAI API key not configured")
            provider: AIProvider = OpenAIProvider(
                api_key=api_key,
                default_model=self.settings.openai_model,
                timeout=timeout,
            )
        elif name == "azure_openai":
            api_key = self.settings.azure_openai_api_key.get_secret_value()
            endpoint = self.settings.azure_openai_endpoint
            if not api_key or not endpoint:
                raise AIProviderError(name, "Azure OpenAI not fully configured")
            provider = AzureOpenAIProvider(
                endpoint=endpoint,
                api_key=api_key,
                deployment=self.settings.azure_openai_deployment,
                timeout=timeout,
            )
        elif name == "anthropic":
            api_key = self.settings.anthropic_api_key.get_secret_value()
            if not api_key:
                raise AIProviderError(name, "Anthropic API key not configured")
            provider = AnthropicProvider(
                api_key=api_key,
                default_model=self.settings.anthropic_model,
                timeout=timeout,
            )
        else:
            raise AIProviderError(name, "Unknown provider")

        self._provider = provider
        return provider

    def _build_messages(self, template: dict[str, Any], variables: dict[str, Any]) -> list[AIMessage]:
        return [
            AIMessage(role="system", content=render_template(template["system_prompt"], variables)),
            AIMessage(role="user", content=render_template(template["user_prompt_template"], variables)),
        ]

    async def _complete(self, template_key: str, variables: dict[str, Any]) -> str:
        if not self.settings.feature_ai_enabled:
            raise AIFeatureDisabledError(template_key)

        template = DEFAULT_TEMPLATES[template_key]
        provider = self._get_provider()
        response = await provider.complete(
            self._build_messages(template, variables),
            json_mode=template["json_mode"],
        )

        logger.info(
            "ai_completion",
            template_key=template_key,
            provider=provider.provider_name,
            model=response.model,
            input_tokens=response.input_tokens,
            output_tokens=response.output_tokens,
            latency_ms=response.latency_ms,
        )
        return response.content

    async def generate_subtasks(self, task_description: str) -> list[str]:
        """Suggest subtasks for a task description.

        A malformed response gives an empty list.

        Raises:
            AIProviderError: If the provider call fails
            AIFeatureDisabledError: If AI features are disabled
        """
        content = await self._complete("task_subtasks", {"task_description": task_description})
        return parse_subtasks(content)

    async def summarize_task(self, content: str) -> str:
        """Summarize task content in one or two sentences.

        Raises:
            AIProviderError: If the provider call fails
            AIFeatureDisabledError: If AI features are disabled
        """
        summary = await self._complete("task_summary", {"content": content})
        return summary.strip()


@lru_cache
def get_ai_service() -> AIAssistService:
    """Get the shared AI assist service."""
    return AIAssistService()
