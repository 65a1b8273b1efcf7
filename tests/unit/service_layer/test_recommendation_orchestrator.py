"""
Unit Tests for RecommendationOrchestrator

Tier ordering, fallthrough and the never-raises guarantee, first with stub
tiers and then end-to-end against the fake Lyzr/Gemini server.
"""

import asyncio
from unittest.mock import MagicMock

import pytest

from tests.test_fixtures.provider_factory import ProviderTestFactory
from tests.test_fixtures.provider_server import (
    AGENT,
    CHAT,
    ENVIRONMENT,
    GEMINI,
    GEMINI_ANSWER,
    LYZR_ANSWER,
    MALFORMED_JSON,
    NETWORK_ERROR,
    SERVER_ERROR,
    TIMEOUT,
    TOOL,
    Reply,
)
from weathermate.core.exceptions import (
    ChatRequestError,
    EnvironmentCreationError,
    SecondaryProviderError,
)
from weathermate.core.logging import get_request_id, set_request_id, clear_request_id
from weathermate.llm_providers.fallback_provider import (
    FallbackRecommender,
    build_fallback_recommendation,
)
from weathermate.recommendations.orchestrator import RecommendationOrchestrator


@pytest.mark.unit
class TestTierOrdering:
    """Test suite for tier ordering with stub providers."""

    @pytest.fixture
    def fallback(self):
        fallback = MagicMock(spec=FallbackRecommender)
        fallback.name = "fallback"
        fallback.render.return_value = "canned"
        return fallback

    @pytest.mark.asyncio
    async def test_primary_success_skips_later_tiers(self, paris_snapshot, fallback):
        """Test that a successful first tier is the only tier invoked."""
        primary = ProviderTestFactory.success_provider("lyzr", text="primary answer")
        secondary = ProviderTestFactory.success_provider("gemini", text="secondary answer")
        orchestrator = RecommendationOrchestrator([primary, secondary], fallback=fallback)

        result = await orchestrator.get_recommendations(paris_snapshot)

        assert result == "primary answer"
        assert primary.calls == 1
        assert secondary.calls == 0
        fallback.render.assert_not_called()

    @pytest.mark.asyncio
    async def test_primary_failure_uses_secondary(self, paris_snapshot, fallback):
        """Test that a failing primary falls through to the secondary only."""
        primary = ProviderTestFactory.failing_provider(
            "lyzr", error=ChatRequestError("chat failed")
        )
        secondary = ProviderTestFactory.success_provider("gemini", text="secondary answer")
        orchestrator = RecommendationOrchestrator([primary, secondary], fallback=fallback)

        result = await orchestrator.get_recommendations(paris_snapshot)

        assert result == "secondary answer"
        assert primary.calls == 1
        assert secondary.calls == 1
        fallback.render.assert_not_called()

    @pytest.mark.asyncio
    async def test_all_remote_failures_use_fallback(self, paris_snapshot, fallback):
        """Test that the fallback renders once every remote tier failed."""
        primary = ProviderTestFactory.failing_provider(
            "lyzr", error=EnvironmentCreationError("no environment")
        )
        secondary = ProviderTestFactory.failing_provider(
            "gemini", error=SecondaryProviderError("no candidates")
        )
        orchestrator = RecommendationOrchestrator([primary, secondary], fallback=fallback)

        result = await orchestrator.get_recommendations(paris_snapshot)

        assert result == "canned"
        fallback.render.assert_called_once_with(paris_snapshot)

    @pytest.mark.asyncio
    async def test_unexpected_exception_falls_through(self, paris_snapshot):
        """Test that non-provider errors never escape the orchestrator."""
        primary = ProviderTestFactory.failing_provider("lyzr", error=KeyError("response"))
        secondary = ProviderTestFactory.failing_provider("gemini", error=RuntimeError("boom"))
        orchestrator = RecommendationOrchestrator([primary, secondary])

        result = await orchestrator.get_recommendations(paris_snapshot)

        assert result == build_fallback_recommendation(paris_snapshot)

    @pytest.mark.asyncio
    async def test_blank_text_falls_through(self, paris_snapshot):
        """Test that a tier answering with blank text counts as a failure."""
        primary = ProviderTestFactory.empty_response_provider("lyzr")
        secondary = ProviderTestFactory.success_provider("gemini", text="secondary answer")
        orchestrator = RecommendationOrchestrator([primary, secondary])

        assert await orchestrator.get_recommendations(paris_snapshot) == "secondary answer"

    @pytest.mark.asyncio
    async def test_no_remote_tiers_uses_fallback(self, paris_snapshot):
        """Test an orchestrator with no configured providers."""
        orchestrator = RecommendationOrchestrator([])

        assert orchestrator.tiers == ["fallback"]
        assert await orchestrator.get_recommendations(paris_snapshot) == (
            build_fallback_recommendation(paris_snapshot)
        )

    def test_tiers_lists_providers_then_fallback(self):
        orchestrator = RecommendationOrchestrator(
            [ProviderTestFactory.success_provider("lyzr"), ProviderTestFactory.success_provider("gemini")]
        )

        assert orchestrator.tiers == ["lyzr", "gemini", "fallback"]


@pytest.mark.unit
class TestRequestIdContext:
    """Test request id handling around a recommendation."""

    @pytest.mark.asyncio
    async def test_request_id_cleared_after_call(self, paris_snapshot):
        orchestrator = RecommendationOrchestrator([])
        clear_request_id()

        await orchestrator.get_recommendations(paris_snapshot)

        assert get_request_id() is None

    @pytest.mark.asyncio
    async def test_existing_request_id_is_kept(self, paris_snapshot):
        orchestrator = RecommendationOrchestrator([])
        set_request_id("caller-request")
        try:
            await orchestrator.get_recommendations(paris_snapshot)
            assert get_request_id() == "caller-request"
        finally:
            clear_request_id()

    @pytest.mark.asyncio
    async def test_tier_error_carries_request_id_and_location(self, paris_snapshot):
        error = ChatRequestError("chat failed")
        primary = ProviderTestFactory.failing_provider("lyzr", error=error)
        orchestrator = RecommendationOrchestrator([primary])
        set_request_id("req-42")
        try:
            await orchestrator.get_recommendations(paris_snapshot)
        finally:
            clear_request_id()

        assert error.request_id == "req-42"
        assert error.to_dict()["request_id"] == "req-42"
        assert error.details["location"] == "Paris"

    @pytest.mark.asyncio
    async def test_generated_request_id_reaches_tier_error(self, paris_snapshot):
        error = SecondaryProviderError("no candidates")
        orchestrator = RecommendationOrchestrator(
            [ProviderTestFactory.failing_provider("gemini", error=error)]
        )
        clear_request_id()

        await orchestrator.get_recommendations(paris_snapshot)

        assert error.request_id is not None
        assert get_request_id() is None


@pytest.mark.unit
class TestOrchestratorAgainstProviders:
    """End-to-end tier behaviour against the fake HTTP APIs."""

    @pytest.mark.asyncio
    async def test_primary_success_never_calls_gemini(
        self, orchestrator, provider_server, paris_snapshot
    ):
        result = await orchestrator.get_recommendations(paris_snapshot)

        assert result == LYZR_ANSWER
        assert provider_server.calls[GEMINI] == 0

    @pytest.mark.asyncio
    async def test_full_fallthrough_returns_fallback_text(
        self, orchestrator, provider_server, paris_snapshot
    ):
        """Test that network failures on both remote tiers yield the fallback text."""
        provider_server.fail_lyzr(NETWORK_ERROR)
        provider_server.respond(GEMINI, NETWORK_ERROR)

        result = await orchestrator.get_recommendations(paris_snapshot)

        assert result == build_fallback_recommendation(paris_snapshot)

    @pytest.mark.asyncio
    async def test_paris_example_when_both_providers_fail(
        self, orchestrator, provider_server, paris_snapshot
    ):
        provider_server.fail_lyzr(SERVER_ERROR)
        provider_server.respond(GEMINI, SERVER_ERROR)

        result = await orchestrator.get_recommendations(paris_snapshot)

        assert "Paris" in result
        assert "32" in result
        assert "clear sky" in result

    @pytest.mark.asyncio
    async def test_session_is_memoised_across_requests(
        self, orchestrator, provider_server, paris_snapshot, london_snapshot
    ):
        """Test that environment and agent are created once per orchestrator."""
        first = await orchestrator.get_recommendations(paris_snapshot)
        second = await orchestrator.get_recommendations(london_snapshot)

        assert first == second == LYZR_ANSWER
        assert provider_server.calls[ENVIRONMENT] == 1
        assert provider_server.calls[AGENT] == 1
        assert provider_server.calls[TOOL] == 2
        assert provider_server.calls[CHAT] == 2
        assert [body["session_id"] for body in provider_server.bodies[CHAT]] == [
            "session_Paris",
            "session_London",
        ]

    @pytest.mark.asyncio
    async def test_partial_session_resumes_at_agent_step(
        self, orchestrator, lyzr_provider, provider_server, paris_snapshot
    ):
        """Test that a failed agent step keeps the environment for the next call."""
        provider_server.respond(AGENT, SERVER_ERROR, times=1)

        first = await orchestrator.get_recommendations(paris_snapshot)
        assert first == GEMINI_ANSWER
        assert lyzr_provider.session.environment_id == "env-1"
        assert lyzr_provider.session.agent_id is None

        second = await orchestrator.get_recommendations(paris_snapshot)

        assert second == LYZR_ANSWER
        assert provider_server.calls[ENVIRONMENT] == 1
        assert provider_server.calls[AGENT] == 2
        assert provider_server.bodies[AGENT][1]["environment_id"] == "env-1"

    @pytest.mark.asyncio
    async def test_tool_failure_does_not_fall_through(
        self, orchestrator, provider_server, paris_snapshot
    ):
        provider_server.respond(TOOL, SERVER_ERROR)

        result = await orchestrator.get_recommendations(paris_snapshot)

        assert result == LYZR_ANSWER
        assert provider_server.calls[TOOL] == 1
        assert provider_server.calls[GEMINI] == 0

    @pytest.mark.asyncio
    async def test_concurrent_first_requests_share_one_session(
        self, orchestrator, provider_server, paris_snapshot, london_snapshot
    ):
        results = await asyncio.gather(
            orchestrator.get_recommendations(paris_snapshot),
            orchestrator.get_recommendations(london_snapshot),
            orchestrator.get_recommendations(paris_snapshot),
        )

        assert results == [LYZR_ANSWER] * 3
        assert provider_server.calls[ENVIRONMENT] == 1
        assert provider_server.calls[AGENT] == 1
        assert provider_server.calls[CHAT] == 3

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "lyzr_reply,gemini_reply",
        [
            (NETWORK_ERROR, NETWORK_ERROR),
            (TIMEOUT, TIMEOUT),
            (SERVER_ERROR, SERVER_ERROR),
            (MALFORMED_JSON, MALFORMED_JSON),
            (Reply(json={"unexpected": True}), Reply(json={"candidates": []})),
            (Reply(json=["not", "an", "object"]), Reply(status=403, json={"error": "denied"})),
            (NETWORK_ERROR, Reply(json={"candidates": [{"content": {"parts": [{"text": ""}]}}]})),
        ],
    )
    async def test_never_raises_under_provider_failures(
        self, orchestrator, provider_server, london_snapshot, lyzr_reply, gemini_reply
    ):
        provider_server.fail_lyzr(lyzr_reply)
        provider_server.respond(GEMINI, gemini_reply)

        result = await orchestrator.get_recommendations(london_snapshot)

        assert isinstance(result, str)
        assert result
        assert result == build_fallback_recommendation(london_snapshot)

    @pytest.mark.asyncio
    async def test_chat_failure_after_setup_uses_gemini(
        self, orchestrator, provider_server, paris_snapshot
    ):
        provider_server.respond(CHAT, Reply(json={"response": None}))

        result = await orchestrator.get_recommendations(paris_snapshot)

        assert result == GEMINI_ANSWER
        assert provider_server.calls[GEMINI] == 1


@pytest.mark.unit
class TestOrchestratorLifecycle:
    """Test HTTP client ownership."""

    @pytest.mark.asyncio
    async def test_aclose_closes_owned_client(self, http_client):
        orchestrator = RecommendationOrchestrator([], client=http_client)

        async with orchestrator:
            pass

        assert http_client.is_closed

    @pytest.mark.asyncio
    async def test_aclose_leaves_shared_client_open(self, http_client, lyzr_provider):
        orchestrator = RecommendationOrchestrator([lyzr_provider])

        await orchestrator.aclose()

        assert not http_client.is_closed
