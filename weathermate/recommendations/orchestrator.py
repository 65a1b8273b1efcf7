"""
Recommendation Orchestrator

Walks an ordered list of remote provider tiers and returns the first
answer; when every remote tier fails, the local fallback renders a canned
recommendation. Callers always receive a non-empty string: provider
failures are observed only in the logs.

    get_recommendations(snapshot)
        ├─ Lyzr agent      ── ok ──> text
        │    └─ error
        ├─ Gemini          ── ok ──> text
        │    └─ error
        └─ fallback template ─────> text

Dependencies (tiers, fallback, HTTP client) are injected; use
`create_orchestrator()` to build the default chain from settings.
"""

import uuid
from collections.abc import Sequence

import httpx

from weathermate.core.config.constants import Stage
from weathermate.core.exceptions import ProviderError
from weathermate.core.logging import (
    clear_request_id,
    get_logger,
    get_request_id,
    log_stage,
    set_request_id,
)
from weathermate.llm_providers.base_provider import BaseProvider
from weathermate.llm_providers.fallback_provider import FallbackRecommender
from weathermate.models.weather import WeatherSnapshot

logger = get_logger(__name__)


class RecommendationOrchestrator:
    """
    Ordered fallback chain over recommendation providers.

    Tiers after a successful one are never invoked. The orchestrator is
    meant to live as long as the application: the primary tier memoises its
    remote session on the provider instance.
    """

    def __init__(
        self,
        providers: Sequence[BaseProvider],
        fallback: FallbackRecommender | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        """
        Args:
            providers: Remote tiers, in the order they are attempted
            fallback: Terminal local tier
            client: HTTP client owned by this orchestrator, closed by aclose()
        """
        self._providers = tuple(providers)
        self._fallback = fallback or FallbackRecommender()
        self._client = client

        logger.info(
            "Recommendation orchestrator initialized",
            stage=Stage.INITIALIZATION.value,
            tiers=self.tiers,
        )

    @property
    def providers(self) -> tuple[BaseProvider, ...]:
        return self._providers

    @property
    def tiers(self) -> list[str]:
        return [provider.name for provider in self._providers] + [self._fallback.name]

    async def get_recommendations(self, weather: WeatherSnapshot) -> str:
        """
        Return recommendation text from the first tier that succeeds.

        Never raises: the fallback tier is always available.
        """
        owns_request_id = get_request_id() is None
        if owns_request_id:
            set_request_id(str(uuid.uuid4()))

        try:
            for position, provider in enumerate(self._providers):
                text = await self._attempt(provider, weather, position)
                if text is not None:
                    log_stage(
                        logger, Stage.TIER_SELECTION, "Recommendations served",
                        tier=provider.name, location=weather.name,
                    )
                    return text

            log_stage(
                logger, Stage.FALLBACK, "All remote providers failed, using fallback",
                level="warning", location=weather.name,
                attempted=[provider.name for provider in self._providers],
            )
            return self._fallback.render(weather)
        finally:
            if owns_request_id:
                clear_request_id()

    async def _attempt(
        self, provider: BaseProvider, weather: WeatherSnapshot, position: int
    ) -> str | None:
        """Run one tier; None means fall through to the next."""
        next_tier = self.tiers[position + 1]

        try:
            text = await provider.recommend(weather)
        except ProviderError as e:
            log_stage(
                logger, Stage.TIER_SELECTION, "Provider tier failed, falling through",
                level="warning", tier=provider.name, next_tier=next_tier,
                error=e.to_dict(),
            )
            return None
        except Exception as e:
            logger.exception(
                "Unexpected error in provider tier, falling through",
                stage=Stage.TIER_SELECTION.value,
                tier=provider.name,
                next_tier=next_tier,
                error_type=type(e).__name__,
            )
            return None

        if not isinstance(text, str) or not text.strip():
            log_stage(
                logger, Stage.TIER_SELECTION, "Provider tier returned no text, falling through",
                level="warning", tier=provider.name, next_tier=next_tier,
            )
            return None
        return text

    async def aclose(self) -> None:
        """Close provider-owned clients and the shared client, if owned."""
        for provider in self._providers:
            await provider.aclose()
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "RecommendationOrchestrator":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
