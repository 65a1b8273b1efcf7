"""
Weather data models.

WeatherSnapshot mirrors the OpenWeather "current weather" document the
dashboard fetches upstream. Only the fields the recommendation tiers read
are required; everything else is optional so partially populated
snapshots (e.g. from fixtures or cached payloads) still validate.
"""

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


def round_half_up(value: float) -> int:
    """Round the way the dashboard displays temperatures (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def format_number(value: float | int | None, missing: str = "n/a") -> str:
    """Render a reading without a trailing `.0` (20.0 -> "20", 3.6 -> "3.6")."""
    if value is None:
        return missing
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class Coordinates(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", allow_inf_nan=False)

    lon: float
    lat: float


class WeatherCondition(BaseModel):
    """One entry of the `weather` array: category, description and icon."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int | None = None
    main: str = ""
    description: str
    icon: str | None = None


class MainReadings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", allow_inf_nan=False)

    temp: float
    feels_like: float
    temp_min: float | None = None
    temp_max: float | None = None
    pressure: int | float | None = None
    humidity: int | float = Field(..., ge=0, le=100)


class Wind(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", allow_inf_nan=False)

    speed: int | float = Field(..., ge=0)
    deg: int | float | None = None


class Rain(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True, allow_inf_nan=False)

    one_hour: float | None = Field(default=None, alias="1h")
    three_hours: float | None = Field(default=None, alias="3h")


class WeatherSnapshot(BaseModel):
    """
    Current conditions for one location at one point in time.

    Read-only input of every recommendation request.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = Field(..., min_length=1, description="Location name")
    coord: Coordinates | None = None
    weather: tuple[WeatherCondition, ...] = Field(..., min_length=1)
    main: MainReadings
    wind: Wind
    rain: Rain | None = None

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "WeatherSnapshot":
        """Validate an OpenWeather JSON document."""
        return cls.model_validate(payload)

    @property
    def condition(self) -> WeatherCondition:
        """Primary condition descriptor."""
        return self.weather[0]

    @property
    def rounded_temp(self) -> int:
        return round_half_up(self.main.temp)

    @property
    def rounded_feels_like(self) -> int:
        return round_half_up(self.main.feels_like)


class WeatherBriefing(BaseModel):
    """Short AI-written briefing plus rule-based tips for the day."""

    model_config = ConfigDict(frozen=True)

    text: str
    tips: list[str] = Field(default_factory=list)
    timestamp: str
