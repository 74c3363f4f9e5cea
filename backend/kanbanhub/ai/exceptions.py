"""AI module exceptions.

Custom exceptions for AI-related errors. None of them carry upstream
response bodies into API responses.
"""

from typing import Optional


class AIError(Exception):
    """Base exception for AI-related errors."""

    def __init__(self, message: str, code: str = "AI_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class AIProviderError(AIError):
    """Error from the AI provider, or a provider that is not configured."""

    def __init__(
        self,
        provider: str,
        message: str,
        status_code: Optional[int] = None,
    ):
        self.provider = provider
        self.status_code = status_code
        super().__init__(
            message=f"[{provider}] {message}",
            code="AI_PROVIDER_ERROR",
        )


class AIRateLimitError(AIProviderError):
    """Rate limit exceeded with the AI provider. Not retried."""

    def __init__(
        self,
        provider: str,
        message: str,
        retry_after: Optional[int] = None,
    ):
        self.retry_after = retry_after
        super().__init__(provider=provider, message=f"Rate limited: {message}", status_code=429)
        self.code = "AI_RATE_LIMITED"


class AIFeatureDisabledError(AIError):
    """AI features are switched off in configuration."""

    def __init__(self, feature_name: str):
        self.feature_name = feature_name
        super().__init__(
            message=f"AI feature '{feature_name}' is not enabled",
            code="AI_FEATURE_DISABLED",
        )
