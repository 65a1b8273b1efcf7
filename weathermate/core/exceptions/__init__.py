"""
Exception Module

Structured exception hierarchy for the recommendation core.

Module Structure:
-----------------
- **base.py**: WeatherMateError base class + ConfigurationError
- **provider.py**: Lyzr / Gemini provider exceptions
- **briefing.py**: Weather briefing exceptions

Usage:
------
```python
from weathermate.core.exceptions import PrimaryProviderError, SecondaryProviderError
```
"""

from weathermate.core.exceptions.base import ConfigurationError, WeatherMateError
from weathermate.core.exceptions.briefing import BriefingGenerationError
from weathermate.core.exceptions.provider import (
    AgentCreationError,
    ChatRequestError,
    EnvironmentCreationError,
    PrimaryProviderError,
    ProviderError,
    SecondaryProviderError,
    ToolRegistrationError,
)

__all__ = [
    # Base
    "WeatherMateError",
    "ConfigurationError",
    # Provider
    "ProviderError",
    "PrimaryProviderError",
    "EnvironmentCreationError",
    "AgentCreationError",
    "ChatRequestError",
    "ToolRegistrationError",
    "SecondaryProviderError",
    # Briefing
    "BriefingGenerationError",
]
