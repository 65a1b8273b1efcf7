"""
Recommendations Module

Tier orchestration, provider registration and weather briefings.
"""

from .briefing import BriefingService, daily_tip
from .orchestrator import RecommendationOrchestrator
from .provider_registry import create_briefing_service, create_orchestrator

__all__ = [
    "BriefingService",
    "RecommendationOrchestrator",
    "create_briefing_service",
    "create_orchestrator",
    "daily_tip",
]
