"""
Provider Registry

Builds the default tier chain from settings during application startup.

Architectural Decision: Conditional registration
- A tier is registered only when its credential is configured
- All tiers share one httpx.AsyncClient owned by the returned object
"""

import httpx

from weathermate.core.config.constants import ProviderName
from weathermate.core.config.settings import Settings, get_settings
from weathermate.core.logging import get_logger
from weathermate.llm_providers import (
    BaseProvider,
    GeminiProvider,
    LyzrProvider,
    ProviderConfig,
)
from weathermate.recommendations.briefing import BriefingService
from weathermate.recommendations.orchestrator import RecommendationOrchestrator

logger = get_logger(__name__)


def _build_gemini(
    settings: Settings, client: httpx.AsyncClient | None
) -> GeminiProvider | None:
    if not settings.gemini.GEMINI_API_KEY:
        return None
    return GeminiProvider(
        ProviderConfig(
            name=ProviderName.GEMINI.value,
            api_key=settings.gemini.GEMINI_API_KEY,
            base_url=settings.gemini.GEMINI_BASE_URL,
            timeout=settings.PROVIDER_TIMEOUT,
        ),
        model=settings.gemini.GEMINI_MODEL,
        client=client,
    )


def create_orchestrator(
    settings: Settings | None = None, client: httpx.AsyncClient | None = None
) -> RecommendationOrchestrator:
    """
    Create an orchestrator with every configured remote tier.

    Args:
        settings: Settings to use (cached settings by default)
        client: HTTP client to share; when omitted one is created with
            PROVIDER_TIMEOUT and closed by the orchestrator's aclose().
            An injected client keeps its own timeout.
    """
    settings = settings or get_settings()
    owns_client = client is None
    client = client or httpx.AsyncClient(timeout=httpx.Timeout(settings.PROVIDER_TIMEOUT))

    providers: list[BaseProvider] = []

    if settings.lyzr.LYZR_API_KEY:
        providers.append(
            LyzrProvider(
                ProviderConfig(
                    name=ProviderName.LYZR.value,
                    api_key=settings.lyzr.LYZR_API_KEY,
                    base_url=settings.lyzr.LYZR_BASE_URL,
                    timeout=settings.PROVIDER_TIMEOUT,
                ),
                llm_api_key=settings.gemini.GEMINI_API_KEY,
                user_id=settings.lyzr.LYZR_USER_ID,
                agent_name=settings.lyzr.LYZR_AGENT_NAME,
                client=client,
            )
        )
        logger.info("Registered Lyzr provider")
    else:
        logger.warning("LYZR_API_KEY not set, primary provider disabled")

    gemini = _build_gemini(settings, client)
    if gemini is not None:
        providers.append(gemini)
        logger.info("Registered Gemini provider")
    else:
        logger.warning("GEMINI_API_KEY not set, secondary provider disabled")

    return RecommendationOrchestrator(providers, client=client if owns_client else None)


def create_briefing_service(
    settings: Settings | None = None, client: httpx.AsyncClient | None = None
) -> BriefingService:
    """Create a briefing service; without a Gemini key every briefing fails."""
    settings = settings or get_settings()
    # Without a shared client the provider creates and closes its own
    return BriefingService(_build_gemini(settings, client))
