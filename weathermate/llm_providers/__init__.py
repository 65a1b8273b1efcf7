"""
Recommendation Providers Module

Remote tiers (Lyzr agent platform, Gemini) behind one `recommend()`
interface, plus the local fallback recommender.
"""

from .base_provider import BaseProvider, ProviderConfig
from .fallback_provider import FallbackRecommender, build_fallback_recommendation
from .gemini_provider import GeminiProvider
from .lyzr_provider import LyzrProvider, LyzrSession, ToolRegistration

__all__ = [
    "BaseProvider",
    "ProviderConfig",
    "FallbackRecommender",
    "build_fallback_recommendation",
    "GeminiProvider",
    "LyzrProvider",
    "LyzrSession",
    "ToolRegistration",
]
