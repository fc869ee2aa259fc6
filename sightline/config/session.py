"""Realtime session configuration (env names and defaults only)."""

from __future__ import annotations

ENV_SESSION_ENDPOINT_URL = "SESSION_ENDPOINT_URL"
ENV_SESSION_MODEL = "SESSION_MODEL"
ENV_SESSION_SYSTEM_INSTRUCTION = "SESSION_SYSTEM_INSTRUCTION"
ENV_SESSION_RESPONSE_MODALITIES = "SESSION_RESPONSE_MODALITIES"
ENV_SESSION_TOKEN_QUERY_PARAM = "SESSION_TOKEN_QUERY_PARAM"
ENV_SESSION_CONNECT_TIMEOUT_S = "SESSION_CONNECT_TIMEOUT_S"
ENV_SESSION_CLOSE_TIMEOUT_S = "SESSION_CLOSE_TIMEOUT_S"
ENV_SESSION_GO_AWAY_MARGIN_MS = "SESSION_GO_AWAY_MARGIN_MS"
ENV_SESSION_BUSY_TIMEOUT_MS = "SESSION_BUSY_TIMEOUT_MS"
ENV_SESSION_SEND_FAILURE_LIMIT = "SESSION_SEND_FAILURE_LIMIT"

DEFAULT_SESSION_ENDPOINT_URL = (
    "wss://generativelanguage.googleapis.com/ws/"
    "google.ai.generativelanguage.v1alpha.GenerativeService.BidiGenerateContentConstrained"
)
DEFAULT_SESSION_MODEL = "models/gemini-2.5-flash-preview-native-audio-dialog"
DEFAULT_SESSION_SYSTEM_INSTRUCTION = (
    "You are an AI assistant that serves as 'eyes for the blind'. You receive both audio questions "
    "from the user and real-time video from their camera. Describe what you see in detail, answer "
    "questions about the visual environment, help with navigation, identify objects, read text, and "
    "provide helpful guidance. Be descriptive, clear, and concise. Always respond with audio output "
    "to help blind users understand their surroundings."
)
DEFAULT_SESSION_RESPONSE_MODALITIES = ("AUDIO",)
DEFAULT_SESSION_TOKEN_QUERY_PARAM = "access_token"
DEFAULT_SESSION_CONNECT_TIMEOUT_S: float = 15.0
DEFAULT_SESSION_CLOSE_TIMEOUT_S: float = 5.0

# Hand over to a fresh connection this long before a go-away deadline.
DEFAULT_SESSION_GO_AWAY_MARGIN_MS: int = 10_000

# Audio sends stay gated at most this long waiting for a completion signal.
DEFAULT_SESSION_BUSY_TIMEOUT_MS: int = 10_000

# Consecutive failed sends before the connection is considered dead.
DEFAULT_SESSION_SEND_FAILURE_LIMIT: int = 3

__all__ = [
    "DEFAULT_SESSION_BUSY_TIMEOUT_MS",
    "DEFAULT_SESSION_CLOSE_TIMEOUT_S",
    "DEFAULT_SESSION_CONNECT_TIMEOUT_S",
    "DEFAULT_SESSION_ENDPOINT_URL",
    "DEFAULT_SESSION_GO_AWAY_MARGIN_MS",
    "DEFAULT_SESSION_MODEL",
    "DEFAULT_SESSION_RESPONSE_MODALITIES",
    "DEFAULT_SESSION_SEND_FAILURE_LIMIT",
    "DEFAULT_SESSION_SYSTEM_INSTRUCTION",
    "DEFAULT_SESSION_TOKEN_QUERY_PARAM",
    "ENV_SESSION_BUSY_TIMEOUT_MS",
    "ENV_SESSION_CLOSE_TIMEOUT_S",
    "ENV_SESSION_CONNECT_TIMEOUT_S",
    "ENV_SESSION_ENDPOINT_URL",
    "ENV_SESSION_GO_AWAY_MARGIN_MS",
    "ENV_SESSION_MODEL",
    "ENV_SESSION_RESPONSE_MODALITIES",
    "ENV_SESSION_SEND_FAILURE_LIMIT",
    "ENV_SESSION_SYSTEM_INSTRUCTION",
    "ENV_SESSION_TOKEN_QUERY_PARAM",
]
