#!/usr/bin/env python3
"""
Google Gemini Provider Implementation

Secondary recommendation tier: a single stateless `generateContent` REST
call with a fixed generation and safety configuration. The same client is
reused for briefings (plain prompt, no extra configuration).
"""

from typing import Any

import httpx

from weathermate.core.config.constants import (
    GEMINI_GENERATE_PATH,
    GEMINI_GENERATION_CONFIG,
    GEMINI_SAFETY_CATEGORIES,
    GEMINI_SAFETY_THRESHOLD,
    HEADER_AUTHORIZATION,
    ProviderName,
    Stage,
)
from weathermate.core.exceptions import SecondaryProviderError
from weathermate.core.logging import get_logger
from weathermate.llm_providers.base_provider import BaseProvider, ProviderConfig
from weathermate.llm_providers.prompts import build_recommendation_prompt
from weathermate.models.weather import WeatherSnapshot

logger = get_logger(__name__)


def default_safety_settings() -> list[dict[str, str]]:
    return [
        {"category": category, "threshold": GEMINI_SAFETY_THRESHOLD}
        for category in GEMINI_SAFETY_CATEGORIES
    ]


def extract_candidate_text(payload: dict[str, Any]) -> str:
    """
    Return `candidates[0].content.parts[0].text`.

    Raises:
        SecondaryProviderError: If any level is missing or the text is blank
    """
    try:
        text = payload["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as e:
        raise SecondaryProviderError(
            "Gemini response has no candidate text",
            details={
                "provider": ProviderName.GEMINI.value,
                "prompt_feedback": payload.get("promptFeedback"),
            },
        ) from e

    if not isinstance(text, str) or not text.strip():
        raise SecondaryProviderError(
            "Gemini returned an empty candidate",
            details={"provider": ProviderName.GEMINI.value},
        )
    return text


class GeminiProvider(BaseProvider):
    """
    Concrete implementation of the Gemini generateContent tier.

    STAGE-3: Secondary provider
    """

    def __init__(
        self,
        config: ProviderConfig,
        model: str = "gemini-pro",
        client: httpx.AsyncClient | None = None,
    ):
        super().__init__(config, client=client)
        self.model = model

    async def generate_text(
        self,
        prompt: str,
        generation_config: dict[str, Any] | None = None,
        safety_settings: list[dict[str, str]] | None = None,
    ) -> str:
        """
        Send one prompt and return the first candidate's text.

        Raises:
            SecondaryProviderError: On transport, HTTP or response-shape failure
        """
        body: dict[str, Any] = {"contents": [{"parts": [{"text": prompt}]}]}
        if generation_config is not None:
            body["generationConfig"] = generation_config
        if safety_settings is not None:
            body["safetySettings"] = safety_settings

        logger.debug(
            "Calling Gemini generateContent",
            stage=Stage.SECONDARY_PROVIDER.value,
            model=self.model,
            prompt_length=len(prompt),
        )

        payload = await self._post_json(
            GEMINI_GENERATE_PATH.format(model=self.model),
            body,
            headers={HEADER_AUTHORIZATION: f"Bearer {self.config.api_key}"},
            error_cls=SecondaryProviderError,
            operation="Gemini generateContent",
        )
        return extract_candidate_text(payload)

    async def _recommend_internal(self, weather: WeatherSnapshot) -> str:
        return await self.generate_text(
            build_recommendation_prompt(weather),
            generation_config=dict(GEMINI_GENERATION_CONFIG),
            safety_settings=default_safety_settings(),
        )
