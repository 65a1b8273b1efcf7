"""
Briefing Exceptions
"""

from weathermate.core.exceptions.base import WeatherMateError


class BriefingGenerationError(WeatherMateError):
    """
    Raised when a weather briefing cannot be generated.

    Unlike recommendations, briefings have no fallback tier; the caller
    decides how to surface the failure.
    """
    pass
