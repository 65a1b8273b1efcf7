from .weather import (
    Coordinates,
    MainReadings,
    Rain,
    WeatherBriefing,
    WeatherCondition,
    WeatherSnapshot,
    Wind,
    format_number,
    round_half_up,
)

__all__ = [
    "Coordinates",
    "MainReadings",
    "Rain",
    "WeatherBriefing",
    "WeatherCondition",
    "WeatherSnapshot",
    "Wind",
    "format_number",
    "round_half_up",
]
