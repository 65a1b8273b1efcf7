#!/usr/bin/env python3
"""
Base Provider Abstract Class

This module defines the abstract base class for the remote recommendation
tiers. Concrete implementations (Lyzr, Gemini) inherit from this class.

Architectural Decision: Abstract base class for consistent patterns
- One `recommend(weather) -> str` capability per tier, so the orchestrator
  can walk an ordered tier list
- Shared JSON-over-HTTP helper that maps every httpx failure onto the
  tier's own ProviderError subclass
- No retries: a failure is terminal for the tier
"""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

import httpx

from weathermate.core.config.constants import (
    CONTENT_TYPE_JSON,
    ERROR_BODY_PREVIEW_CHARS,
    HEADER_CONTENT_TYPE,
    Stage,
)
from weathermate.core.exceptions import ConfigurationError, ProviderError
from weathermate.core.logging import get_logger, get_request_id
from weathermate.models.weather import WeatherSnapshot

logger = get_logger(__name__)


@dataclass
class ProviderConfig:
    """
    Configuration for a remote provider.

    Attributes:
        name: Provider name
        api_key: Credential for the provider
        base_url: Base URL for API
        timeout: Request timeout in seconds (None = no client-side timeout).
            Applied only to the client a provider creates for itself; an
            injected shared client keeps its own timeout.
    """
    name: str
    api_key: str
    base_url: str
    timeout: float | None = None


class BaseProvider(ABC):
    """
    Abstract base class for remote recommendation providers.

    This class provides:
    - Common `recommend()` entry point with structured logging
    - httpx client lifecycle (shared or owned)
    - Uniform error mapping for JSON POST calls

    Subclasses must implement:
    - _recommend_internal(): Provider-specific call sequence

    Usage:
        class GeminiProvider(BaseProvider):
            async def _recommend_internal(self, weather):
                body = await self._post_json(...)
                ...
    """

    def __init__(self, config: ProviderConfig, client: httpx.AsyncClient | None = None):
        """
        Initialize base provider.

        Args:
            config: Provider configuration
            client: Shared HTTP client; one is created (and owned) when omitted

        Raises:
            ConfigurationError: If the provider has no API key
        """
        if not config.api_key:
            raise ConfigurationError(
                f"API key for provider '{config.name}' is not configured",
                details={"provider": config.name},
            )

        self.config = config
        self.name = config.name
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(config.timeout))

        logger.info(
            "Provider initialized",
            stage=Stage.INITIALIZATION.value,
            provider=config.name,
            base_url=config.base_url,
        )

    async def recommend(self, weather: WeatherSnapshot) -> str:
        """
        Produce recommendation text for a snapshot.

        Raises:
            ProviderError: On any failure of this tier
        """
        logger.info(
            "Requesting recommendations",
            provider=self.name,
            location=weather.name,
        )

        try:
            text = await self._recommend_internal(weather)
        except ProviderError as e:
            if e.request_id is None:
                e.request_id = get_request_id()
            e.with_context(location=weather.name)
            logger.warning(
                "Provider failed",
                provider=self.name,
                error_type=type(e).__name__,
                error=e.message,
                details=e.details,
            )
            raise

        logger.info(
            "Recommendations received",
            provider=self.name,
            response_length=len(text),
        )
        return text

    @abstractmethod
    async def _recommend_internal(self, weather: WeatherSnapshot) -> str:
        """
        Provider-specific recommendation logic.

        Must return non-empty text or raise a ProviderError subclass.
        """
        pass

    async def _post_json(
        self,
        path: str,
        body: dict[str, Any],
        headers: dict[str, str],
        error_cls: type[ProviderError],
        operation: str,
    ) -> dict[str, Any]:
        """
        POST a JSON body and return the decoded JSON object.

        Args:
            path: Endpoint path appended to the base URL
            body: JSON request body
            headers: Provider auth headers (Content-Type is added)
            error_cls: Exception raised on any failure
            operation: Human-readable step name for messages

        Raises:
            error_cls: Transport error, non-2xx status, or non-object JSON body
        """
        url = f"{self.config.base_url}{path}"
        request_headers = {HEADER_CONTENT_TYPE: CONTENT_TYPE_JSON, **headers}
        details = {"provider": self.name, "endpoint": path}

        try:
            response = await self._client.post(url, json=body, headers=request_headers)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise error_cls.from_exception(
                e, message=f"{operation} timed out", **details
            ) from e
        except httpx.HTTPStatusError as e:
            raise error_cls(
                f"{operation} returned HTTP {e.response.status_code}",
                details={
                    **details,
                    "status_code": e.response.status_code,
                    "response_text": e.response.text[:ERROR_BODY_PREVIEW_CHARS] if e.response.text else None,
                },
            ) from e
        except httpx.HTTPError as e:
            raise error_cls.from_exception(
                e, message=f"{operation} failed: {type(e).__name__}", **details
            ) from e

        try:
            payload = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise error_cls(
                f"{operation} returned a non-JSON body",
                details={**details, "response_text": response.text[:ERROR_BODY_PREVIEW_CHARS]},
            ) from e

        if not isinstance(payload, dict):
            raise error_cls(
                f"{operation} returned unexpected JSON",
                details={**details, "payload_type": type(payload).__name__},
            )

        return payload

    async def aclose(self) -> None:
        """Close the HTTP client if this provider created it."""
        if self._owns_client:
            await self._client.aclose()
