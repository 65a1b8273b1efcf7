"""
Pytest Configuration and Shared Test Fixtures

All fixtures defined here are automatically available to all test files.
"""

import os
import sys

import httpx
import pytest

# Add project root to sys.path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from tests.test_fixtures.provider_server import (  # noqa: E402
    GEMINI_BASE_URL,
    LYZR_BASE_URL,
    FakeProviderServer,
)
from weathermate.core.config.settings import Settings  # noqa: E402
from weathermate.llm_providers import GeminiProvider, LyzrProvider, ProviderConfig  # noqa: E402
from weathermate.models.weather import WeatherSnapshot  # noqa: E402
from weathermate.recommendations.orchestrator import RecommendationOrchestrator  # noqa: E402

# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def paris_payload():
    """Minimal snapshot document: only the fields the tiers read."""
    return {
        "name": "Paris",
        "main": {"temp": 32, "feels_like": 34, "humidity": 20},
        "weather": [{"description": "clear sky", "main": "Clear"}],
        "wind": {"speed": 3},
    }


@pytest.fixture
def paris_snapshot(paris_payload):
    return WeatherSnapshot.from_api(paris_payload)


@pytest.fixture
def london_payload():
    """Full OpenWeather current-weather document."""
    return {
        "coord": {"lon": -0.1257, "lat": 51.5085},
        "weather": [
            {"id": 500, "main": "Rain", "description": "light rain", "icon": "10d"},
            {"id": 701, "main": "Mist", "description": "mist", "icon": "50d"},
        ],
        "base": "stations",
        "main": {
            "temp": 11.5,
            "feels_like": 10.62,
            "temp_min": 10.1,
            "temp_max": 12.8,
            "pressure": 1008,
            "humidity": 81,
        },
        "visibility": 10000,
        "wind": {"speed": 5.66, "deg": 240},
        "rain": {"1h": 0.42},
        "name": "London",
        "cod": 200,
    }


@pytest.fixture
def london_snapshot(london_payload):
    return WeatherSnapshot.from_api(london_payload)


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def test_settings():
    """Settings isolated from the process environment and any .env file."""
    return Settings(
        _env_file=None,
        LYZR_API_KEY="sk-default-testkey123",
        LYZR_BASE_URL=LYZR_BASE_URL,
        GEMINI_API_KEY="AIzaTestGeminiKey",
        GEMINI_BASE_URL=GEMINI_BASE_URL,
    )


# ============================================================================
# HTTP / Provider Fixtures
# ============================================================================


@pytest.fixture
def provider_server():
    """Scriptable fake of the Lyzr and Gemini APIs."""
    return FakeProviderServer()


@pytest.fixture
def http_client(provider_server):
    return httpx.AsyncClient(transport=httpx.MockTransport(provider_server))


@pytest.fixture
def lyzr_provider(http_client):
    return LyzrProvider(
        ProviderConfig(name="lyzr", api_key="sk-default-testkey123", base_url=LYZR_BASE_URL),
        llm_api_key="AIzaTestGeminiKey",
        client=http_client,
    )


@pytest.fixture
def gemini_provider(http_client):
    return GeminiProvider(
        ProviderConfig(name="gemini", api_key="AIzaTestGeminiKey", base_url=GEMINI_BASE_URL),
        model="gemini-pro",
        client=http_client,
    )


@pytest.fixture
def orchestrator(lyzr_provider, gemini_provider):
    """Default two-tier chain against the fake server."""
    return RecommendationOrchestrator([lyzr_provider, gemini_provider])
