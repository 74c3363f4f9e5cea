"""Abstract base class for AI providers.

This module defines the interface that all AI providers must implement,
so the assist service does not depend on a particular vendor SDK.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Literal, Optional
from uuid import UUID, uuid4


@dataclass
class AIMessage:
    """A message in an AI conversation.

    Attributes:
        role: The role of the message sender ('system', 'user', or 'assistant')
        content: The text content of the message
    """
    role: Literal["system", "user", "assistant"]
    content: str


@dataclass
class AIResponse:
    """Response from an AI provider.

    Attributes:
        content: The generated text content
        model: The model identifier used for generation
        input_tokens: Number of tokens in the input/prompt
        output_tokens: Number of tokens in the generated response
        finish_reason: Why generation stopped ('stop', 'max_tokens', etc.)
        latency_ms: Time taken for the request in milliseconds
        request_id: Unique identifier for this request
    """
    content: str
    model: str
    input_tokens: int = 0
    output_tokens: int = 0
    finish_reason: str = "stop"
    latency_ms: Optional[int] = None
    request_id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def total_tokens(self) -> int:
        """Total tokens used (input + output)."""
        return self.input_tokens + self.output_tokens


class AIProvider(ABC):
    """Abstract base class for AI providers.

    Example:
        ```python
        provider = OpenAIProvider(api_key="...")

        messages = [
            AIMessage(role="system", content="You are a project manager."),
            AIMessage(role="user", content="Break this task down...")
        ]

        response = await provider.complete(messages, json_mode=True)
        print(response.content)
        ```
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the name of this provider (e.g., 'openai', 'anthropic')."""
        pass

    @property
    @abstractmethod
    def default_model(self) -> str:
        """Return the default model identifier for this provider."""
        pass

    @abstractmethod
    async def complete(
        self,
        messages: List[AIMessage],
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: int = 1000,
        json_mode: bool = False,
    ) -> AIResponse:
        """Generate a single completion for the given messages.

        Args:
            messages: List of messages forming the conversation
            model: Model identifier (uses default if not specified)
            temperature: Sampling temperature, provider default when None
            max_tokens: Maximum tokens to generate
            json_mode: Ask the provider for a JSON object response where supported

        Returns:
            AIResponse containing the generated content and metadata

        Raises:
            AIProviderError: If the provider request fails
        """
        pass

    def _validate_messages(self, messages: List[AIMessage]) -> None:
        """Validate message list before sending to provider.

        Raises:
            ValueError: If messages are invalid
        """
        if not messages:
            raise ValueError("Messages list cannot be empty")

        for msg in messages:
            if msg.role not in ("system", "user", "assistant"):
                raise ValueError(f"Invalid message role: {msg.role}")
            if not msg.content:
                raise ValueError("Message content cannot be empty")
