"""AI Provider implementations."""

from kanbanhub.ai.providers.anthropic import AnthropicProvider
from kanbanhub.ai.providers.base import AIMessage, AIProvider, AIResponse
from kanbanhub.ai.providers.openai import AzureOpenAIProvider, OpenAIProvider

__all__ = [
    "AIMessage",
    "AIProvider",
    "AIResponse",
    "AnthropicProvider",
    "AzureOpenAIProvider",
    "OpenAIProvider",
]
