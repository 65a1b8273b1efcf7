"""
Core Module

Foundational components: configuration, logging, and exceptions.
"""

from .exceptions import (
    BriefingGenerationError,
    ConfigurationError,
    PrimaryProviderError,
    ProviderError,
    SecondaryProviderError,
    WeatherMateError,
)
from .logging import (
    clear_request_id,
    get_logger,
    get_request_id,
    log_stage,
    set_request_id,
    setup_logging,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "set_request_id",
    "get_request_id",
    "clear_request_id",
    "log_stage",
    "WeatherMateError",
    "ConfigurationError",
    "ProviderError",
    "PrimaryProviderError",
    "SecondaryProviderError",
    "BriefingGenerationError",
]
