"""
AI Provider Exceptions

All exceptions raised by the recommendation tiers (Lyzr, Gemini).
"""

from weathermate.core.exceptions.base import WeatherMateError


class ProviderError(WeatherMateError):
    """Base exception for AI provider errors."""
    pass


class PrimaryProviderError(ProviderError):
    """
    Raised when the Lyzr pipeline cannot produce an answer.

    The orchestrator only distinguishes this base class; the concrete
    subclass identifies the failed step in logs.
    """
    pass


class EnvironmentCreationError(PrimaryProviderError):
    """
    Raised when the Lyzr environment could not be created.

    Common causes:
    - Invalid x-api-key
    - Non-2xx response
    - Response body without an `id`
    """
    pass


class AgentCreationError(PrimaryProviderError):
    """Raised when the Lyzr agent could not be created inside the environment."""
    pass


class ChatRequestError(PrimaryProviderError):
    """Raised when the Lyzr chat call fails or returns no response text."""
    pass


class ToolRegistrationError(ProviderError):
    """
    Describes a failed best-effort tool registration.

    Never raised to callers: it is captured inside a ToolRegistration
    result and logged.
    """
    pass


class SecondaryProviderError(ProviderError):
    """
    Raised when the Gemini generateContent call fails.

    Common causes:
    - Network failure or non-2xx status
    - Response without candidates (e.g. blocked by safety settings)
    """
    pass
