#!/usr/bin/env python3
"""
Lyzr Agent Platform Provider Implementation

Primary recommendation tier. Before the agent can answer, the platform
needs an environment and an agent inside it; both are created lazily and
memoised for the lifetime of the provider:

    EMPTY --create environment--> ENVIRONMENT_READY --create agent--> AGENT_READY

Transitions only move forward. A failed transition leaves the session where
it was and is re-attempted on the next request, so an environment created
before a failed agent call is reused rather than recreated. Session setup is
serialised with an asyncio.Lock: concurrent first requests share a single
in-flight creation instead of each creating (and orphaning) remote resources.

Per request, after the session is ready:
1. register the current snapshot as an example-data tool (best effort)
2. send the chat message and return the agent's answer
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any

import httpx

from weathermate.core.config.constants import (
    HEADER_API_KEY,
    LYZR_AGENT_PATH,
    LYZR_CHAT_PATH,
    LYZR_ENVIRONMENT_FEATURES,
    LYZR_ENVIRONMENT_PATH,
    LYZR_SESSION_PREFIX,
    LYZR_TOOL_PATH,
    ProviderName,
    SessionState,
    Stage,
)
from weathermate.core.exceptions import (
    AgentCreationError,
    ChatRequestError,
    EnvironmentCreationError,
    ToolRegistrationError,
)
from weathermate.core.logging import get_logger, log_stage
from weathermate.llm_providers.base_provider import BaseProvider, ProviderConfig
from weathermate.llm_providers.prompts import (
    WEATHER_AGENT_SYSTEM_PROMPT,
    build_agent_chat_message,
)
from weathermate.models.weather import WeatherSnapshot

logger = get_logger(__name__)


class LyzrSession:
    """
    Remote identifiers required before the agent can chat.

    `agent_id` can only be assigned once `environment_id` is set. Neither
    is ever cleared.
    """

    def __init__(self) -> None:
        self._environment_id: str | None = None
        self._agent_id: str | None = None

    @property
    def environment_id(self) -> str | None:
        return self._environment_id

    @environment_id.setter
    def environment_id(self, value: str) -> None:
        self._environment_id = value

    @property
    def agent_id(self) -> str | None:
        return self._agent_id

    @agent_id.setter
    def agent_id(self, value: str) -> None:
        if self._environment_id is None:
            raise RuntimeError("agent_id cannot be set before environment_id")
        self._agent_id = value

    @property
    def state(self) -> SessionState:
        if self._agent_id is not None:
            return SessionState.AGENT_READY
        if self._environment_id is not None:
            return SessionState.ENVIRONMENT_READY
        return SessionState.EMPTY

    def __repr__(self) -> str:
        return (
            f"LyzrSession(state={self.state.value!r}, "
            f"environment_id={self._environment_id!r}, agent_id={self._agent_id!r})"
        )


@dataclass(frozen=True)
class ToolRegistration:
    """
    Outcome of the best-effort tool registration.

    Failures are carried as data, never raised.
    """
    registered: bool
    tool_ids: list[Any] = field(default_factory=list)
    error: ToolRegistrationError | None = None

    @classmethod
    def succeeded(cls, tool_ids: list[Any]) -> "ToolRegistration":
        return cls(registered=True, tool_ids=list(tool_ids))

    @classmethod
    def failed(cls, error: ToolRegistrationError) -> "ToolRegistration":
        return cls(registered=False, error=error)


def build_weather_tool_schema(weather: WeatherSnapshot) -> dict[str, Any]:
    """OpenAPI document exposing the snapshot as example response data."""
    return {
        "openapi": "3.0.0",
        "info": {
            "title": "Current Weather Data",
            "version": "1.0",
        },
        "paths": {
            "/current": {
                "get": {
                    "operationId": "getCurrentWeather",
                    "summary": "Get current weather data",
                    "responses": {
                        "200": {
                            "description": "Current weather data",
                            "content": {
                                "application/json": {
                                    "schema": {
                                        "type": "object",
                                        "properties": {
                                            "location": {"type": "string"},
                                            "temperature": {"type": "number"},
                                            "feels_like": {"type": "number"},
                                            "humidity": {"type": "number"},
                                            "wind_speed": {"type": "number"},
                                            "conditions": {"type": "string"},
                                            "pressure": {"type": "number"},
                                        },
                                    },
                                    "example": {
                                        "location": weather.name,
                                        "temperature": weather.main.temp,
                                        "feels_like": weather.main.feels_like,
                                        "humidity": weather.main.humidity,
                                        "wind_speed": weather.wind.speed,
                                        "conditions": weather.condition.description,
                                        "pressure": weather.main.pressure,
                                    },
                                }
                            },
                        }
                    },
                }
            }
        },
    }


def _require_str(payload: dict[str, Any], key: str) -> str | None:
    value = payload.get(key)
    if isinstance(value, str) and value.strip():
        return value
    return None


class LyzrProvider(BaseProvider):
    """
    Concrete implementation of the Lyzr agent tier.

    STAGE-2: Primary provider
    """

    def __init__(
        self,
        config: ProviderConfig,
        llm_api_key: str | None,
        user_id: str = "weathermate_user",
        agent_name: str = "WeatherAgent",
        session: LyzrSession | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        """
        Args:
            config: Lyzr API key and server
            llm_api_key: LLM credential handed to the environment
            user_id: User id sent with every chat message
            agent_name: Name of the created agent
            session: Pre-existing session state (a new empty one by default)
            client: Shared HTTP client
        """
        super().__init__(config, client=client)
        self.llm_api_key = llm_api_key
        self.user_id = user_id
        self.agent_name = agent_name
        self.session = session or LyzrSession()
        self._session_lock = asyncio.Lock()

    @property
    def _auth_headers(self) -> dict[str, str]:
        return {HEADER_API_KEY: self.config.api_key}

    async def _recommend_internal(self, weather: WeatherSnapshot) -> str:
        agent_id = await self.ensure_session()
        await self.register_weather_tool(weather)
        return await self.send_chat(agent_id, weather)

    async def ensure_session(self) -> str:
        """
        Advance the session to AGENT_READY and return the agent id.

        Raises:
            EnvironmentCreationError: Environment step failed (nothing stored)
            AgentCreationError: Agent step failed (environment id kept)
        """
        if self.session.state is SessionState.AGENT_READY:
            return self.session.agent_id

        async with self._session_lock:
            # Another request may have finished setup while we waited
            if self.session.environment_id is None:
                self.session.environment_id = await self._create_environment()
            if self.session.agent_id is None:
                self.session.agent_id = await self._create_agent(self.session.environment_id)

        return self.session.agent_id

    async def _create_environment(self) -> str:
        log_stage(logger, Stage.ENVIRONMENT_SETUP, "Creating Lyzr environment")

        payload = await self._post_json(
            LYZR_ENVIRONMENT_PATH,
            {
                "features": [
                    {"module": module, "enabled": True} for module in LYZR_ENVIRONMENT_FEATURES
                ],
                "llm_api_key": self.llm_api_key,
            },
            headers=self._auth_headers,
            error_cls=EnvironmentCreationError,
            operation="Lyzr environment creation",
        )

        environment_id = _require_str(payload, "id")
        if environment_id is None:
            raise EnvironmentCreationError(
                "Lyzr environment response has no id",
                details={"provider": ProviderName.LYZR.value, "keys": sorted(payload)},
            )

        log_stage(
            logger, Stage.ENVIRONMENT_SETUP, "Lyzr environment created",
            environment_id=environment_id,
        )
        return environment_id

    async def _create_agent(self, environment_id: str) -> str:
        log_stage(
            logger, Stage.AGENT_SETUP, "Creating Lyzr agent", environment_id=environment_id
        )

        payload = await self._post_json(
            LYZR_AGENT_PATH,
            {
                "name": self.agent_name,
                "system_prompt": WEATHER_AGENT_SYSTEM_PROMPT,
                "environment_id": environment_id,
            },
            headers=self._auth_headers,
            error_cls=AgentCreationError,
            operation="Lyzr agent creation",
        )

        agent_id = _require_str(payload, "agent_id")
        if agent_id is None:
            raise AgentCreationError(
                "Lyzr agent response has no agent_id",
                details={
                    "provider": ProviderName.LYZR.value,
                    "environment_id": environment_id,
                    "keys": sorted(payload),
                },
            )

        log_stage(logger, Stage.AGENT_SETUP, "Lyzr agent created", agent_id=agent_id)
        return agent_id

    async def register_weather_tool(self, weather: WeatherSnapshot) -> ToolRegistration:
        """
        Register the snapshot as a tool the agent may consult.

        Best effort: the chat works without it, so failures are logged and
        returned, never raised.
        """
        try:
            payload = await self._post_json(
                LYZR_TOOL_PATH,
                {"schema": build_weather_tool_schema(weather)},
                headers=self._auth_headers,
                error_cls=ToolRegistrationError,
                operation="Lyzr tool registration",
            )
            tool_ids = payload.get("tool_ids")
            if not tool_ids:
                raise ToolRegistrationError(
                    "Lyzr tool response has no tool_ids",
                    details={"provider": ProviderName.LYZR.value, "keys": sorted(payload)},
                )
        except ToolRegistrationError as e:
            log_stage(
                logger, Stage.TOOL_REGISTRATION, "Weather tool registration failed, continuing",
                level="warning", error=e.message, details=e.details,
            )
            return ToolRegistration.failed(e)

        if not isinstance(tool_ids, list):
            tool_ids = [tool_ids]
        log_stage(
            logger, Stage.TOOL_REGISTRATION, "Weather tool registered", tool_count=len(tool_ids)
        )
        return ToolRegistration.succeeded(tool_ids)

    async def send_chat(self, agent_id: str, weather: WeatherSnapshot) -> str:
        """
        Raises:
            ChatRequestError: Call failed or returned no response text
        """
        session_id = f"{LYZR_SESSION_PREFIX}{weather.name}"
        log_stage(
            logger, Stage.AGENT_CHAT, "Sending chat message",
            agent_id=agent_id, session_id=session_id,
        )

        payload = await self._post_json(
            LYZR_CHAT_PATH,
            {
                "user_id": self.user_id,
                "agent_id": agent_id,
                "session_id": session_id,
                "message": build_agent_chat_message(weather),
            },
            headers=self._auth_headers,
            error_cls=ChatRequestError,
            operation="Lyzr chat",
        )

        response = _require_str(payload, "response")
        if response is None:
            raise ChatRequestError(
                "Lyzr chat returned no response text",
                details={"provider": ProviderName.LYZR.value, "agent_id": agent_id},
            )
        return response
