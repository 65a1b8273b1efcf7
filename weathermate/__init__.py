"""
WeatherMate recommendation core.

Usage:
------
```python
from weathermate import WeatherSnapshot, create_orchestrator, setup_logging

setup_logging()
async with create_orchestrator() as orchestrator:
    text = await orchestrator.get_recommendations(WeatherSnapshot.from_api(payload))
```
"""

from weathermate.core.logging import setup_logging
from weathermate.models.weather import WeatherBriefing, WeatherSnapshot
from weathermate.recommendations import (
    BriefingService,
    RecommendationOrchestrator,
    create_briefing_service,
    create_orchestrator,
)

__version__ = "1.0.0"

__all__ = [
    "BriefingService",
    "RecommendationOrchestrator",
    "WeatherBriefing",
    "WeatherSnapshot",
    "create_briefing_service",
    "create_orchestrator",
    "setup_logging",
]
