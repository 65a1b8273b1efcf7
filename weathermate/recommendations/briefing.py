"""
Weather briefing generation.

A briefing is a short Gemini-written paragraph plus one rule-based tip.
There is no fallback chain here: failures raise BriefingGenerationError.
"""

from datetime import datetime, timezone

from weathermate.core.config.constants import Stage
from weathermate.core.exceptions import BriefingGenerationError, SecondaryProviderError
from weathermate.core.logging import get_logger, get_request_id, log_stage
from weathermate.llm_providers.gemini_provider import GeminiProvider
from weathermate.llm_providers.prompts import build_briefing_prompt
from weathermate.models.weather import WeatherBriefing, WeatherSnapshot

logger = get_logger(__name__)


def daily_tip(weather: WeatherSnapshot) -> str:
    """One-line tip from the primary condition and temperature."""
    temp = weather.main.temp
    conditions = weather.condition.main.lower()

    if "rain" in conditions:
        return "Don't forget your umbrella!"
    if temp > 30:
        return "It's very hot - stay hydrated and seek shade!"
    if temp > 25:
        return "Pleasant warm weather - great for outdoor activities!"
    if temp < 10:
        return "It's chilly - bundle up!"
    return "Enjoy the weather!"


class BriefingService:
    """Generates WeatherBriefing objects through Gemini."""

    def __init__(self, provider: GeminiProvider | None):
        self._provider = provider

    async def generate_briefing(self, city: str, weather: WeatherSnapshot) -> WeatherBriefing:
        """
        Raises:
            BriefingGenerationError: Gemini is not configured or the call failed
        """
        if self._provider is None:
            raise BriefingGenerationError(
                "Failed to generate weather briefing",
                request_id=get_request_id(),
                details={"reason": "GEMINI_API_KEY is not configured"},
            )

        log_stage(logger, Stage.BRIEFING, "Generating weather briefing", city=city)

        try:
            text = await self._provider.generate_text(build_briefing_prompt(city, weather))
        except SecondaryProviderError as e:
            log_stage(
                logger, Stage.BRIEFING, "Weather briefing failed",
                level="error", city=city, error=e.to_dict(),
            )
            raise BriefingGenerationError(
                "Failed to generate weather briefing",
                request_id=get_request_id(),
                details={"city": city, **e.details},
            ) from e

        return WeatherBriefing(
            text=text,
            tips=[daily_tip(weather)],
            timestamp=datetime.now(timezone.utc).isoformat(),
        )

    async def aclose(self) -> None:
        if self._provider is not None:
            await self._provider.aclose()
