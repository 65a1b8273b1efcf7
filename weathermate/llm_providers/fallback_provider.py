"""
Local fallback recommendations.

Terminal tier: a fixed template filled from the snapshot. No I/O, and it
cannot fail for any validated WeatherSnapshot.
"""

from weathermate.core.config.constants import ProviderName
from weathermate.models.weather import WeatherSnapshot

FALLBACK_TEMPLATE = (
    "Based on the current weather in {location} ({temp}°C, {description}):\n"
    "\n"
    "👕 Clothing: Light and comfortable clothing suitable for {temp}°C\n"
    "\n"
    "🏃‍♂️ Activities: Weather is suitable for outdoor activities, but monitor conditions\n"
    "\n"
    "🏥 Health: Stay hydrated and use sun protection if needed\n"
    "\n"
    "🚗 Travel: Normal travel conditions, no special precautions needed\n"
    "\n"
    "💡 Tips: Regular ventilation recommended for comfort"
)


def build_fallback_recommendation(weather: WeatherSnapshot) -> str:
    return FALLBACK_TEMPLATE.format(
        location=weather.name,
        temp=weather.rounded_temp,
        description=weather.condition.description,
    )


class FallbackRecommender:
    """Infallible last tier used by the orchestrator."""

    name = ProviderName.FALLBACK.value

    def render(self, weather: WeatherSnapshot) -> str:
        return build_fallback_recommendation(weather)
