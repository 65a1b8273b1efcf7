"""
System Constants and Enumerations

This module defines constants and enumerations shared across the
recommendation core: log stage identifiers, provider session states,
provider names, and the fixed request payload fragments sent to the
remote AI providers.

Architectural Decision: Centralized constants for maintainability
- Single source of truth for wire-level magic values
- Type-safe enums for state management
"""

from enum import Enum

# ============================================================================
# Stage Identifiers (for structured logging)
# ============================================================================


class Stage(str, Enum):
    """
    Recommendation request stages.

    Format: {SEQUENCE}_{DESCRIPTIVE_NAME}
    Used as the `stage` field of every structured log entry.
    """

    # Main request lifecycle
    INITIALIZATION = "0.0_INITIALIZATION"
    TIER_SELECTION = "1.0_TIER_SELECTION"
    ENVIRONMENT_SETUP = "2.1_ENVIRONMENT_SETUP"
    AGENT_SETUP = "2.2_AGENT_SETUP"
    TOOL_REGISTRATION = "2.3_TOOL_REGISTRATION"
    AGENT_CHAT = "2.4_AGENT_CHAT"
    SECONDARY_PROVIDER = "3.0_SECONDARY_PROVIDER"
    FALLBACK = "4.0_FALLBACK"

    # Cross-cutting
    BRIEFING = "B_BRIEFING"


# ============================================================================
# Provider Session States
# ============================================================================


class SessionState(str, Enum):
    """
    Primary provider session states.

    EMPTY: Nothing created remotely yet
    ENVIRONMENT_READY: Environment exists, agent pending
    AGENT_READY: Agent exists, chat may proceed

    Transitions only move forward; a failed transition is re-attempted
    on the next request.
    """

    EMPTY = "empty"
    ENVIRONMENT_READY = "environment_ready"
    AGENT_READY = "agent_ready"


# ============================================================================
# Provider Names
# ============================================================================


class ProviderName(str, Enum):
    """Tier names used in logs and error details."""

    LYZR = "lyzr"
    GEMINI = "gemini"
    FALLBACK = "fallback"


# ============================================================================
# HTTP
# ============================================================================

HEADER_API_KEY = "x-api-key"
HEADER_AUTHORIZATION = "Authorization"
HEADER_CONTENT_TYPE = "Content-Type"
CONTENT_TYPE_JSON = "application/json"

# Response bodies quoted in error details are cut to this many characters
ERROR_BODY_PREVIEW_CHARS = 500


# ============================================================================
# Lyzr Agent Platform
# ============================================================================

LYZR_ENVIRONMENT_PATH = "/v2/environment"
LYZR_AGENT_PATH = "/v2/agent"
LYZR_TOOL_PATH = "/v2/tool"
LYZR_CHAT_PATH = "/v2/chat"

LYZR_ENVIRONMENT_FEATURES: tuple[str, ...] = (
    "TOOL_CALLING",
    "OPEN_AI_RETRIEVAL_ASSISTANT",
    "SHORT_TERM_MEMORY",
    "LONG_TERM_MEMORY",
)

LYZR_SESSION_PREFIX = "session_"


# ============================================================================
# Gemini
# ============================================================================

GEMINI_GENERATE_PATH = "/v1beta/models/{model}:generateContent"

GEMINI_GENERATION_CONFIG: dict[str, float | int] = {
    "temperature": 0.7,
    "topK": 40,
    "topP": 0.95,
    "maxOutputTokens": 1000,
}

GEMINI_SAFETY_THRESHOLD = "BLOCK_MEDIUM_AND_ABOVE"

GEMINI_SAFETY_CATEGORIES: tuple[str, ...] = (
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
)
