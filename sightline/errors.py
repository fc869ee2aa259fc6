"""Shared error types for the realtime session client."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CredentialUnavailable(Exception):
    """Raised when an ephemeral credential could not be issued."""

    reason: str

    def __str__(self) -> str:
        return f"credential unavailable: {self.reason}"


@dataclass(frozen=True, slots=True)
class AuthRejected(Exception):
    """Raised when the remote endpoint rejects the presented credential."""

    reason: str
    code: int | None = None

    def __str__(self) -> str:
        return f"credential rejected (code={self.code}): {self.reason}"


@dataclass(frozen=True, slots=True)
class ConnectionLost(Exception):
    """Raised when the realtime channel fails or closes abnormally."""

    reason: str
    code: int | None = None

    def __str__(self) -> str:
        return f"connection lost (code={self.code}): {self.reason}"


@dataclass(frozen=True, slots=True)
class SendFailed(Exception):
    """Raised when a single outbound input could not be transmitted."""

    reason: str

    def __str__(self) -> str:
        return f"send failed: {self.reason}"


@dataclass(frozen=True, slots=True)
class ReconnectExhausted(Exception):
    """Raised (and reported) once the reconnection budget is spent."""

    attempts: int
    last_error: str

    def __str__(self) -> str:
        return f"gave up after {self.attempts} reconnect attempts: {self.last_error}"


@dataclass(frozen=True, slots=True)
class ConfigurationError(Exception):
    """Raised for unrecoverable configuration problems."""

    reason: str

    def __str__(self) -> str:
        return f"configuration error: {self.reason}"


class ConnectionStateError(RuntimeError):
    """Raised when a connection is used outside its open window."""


__all__ = [
    "AuthRejected",
    "ConfigurationError",
    "ConnectionLost",
    "ConnectionStateError",
    "CredentialUnavailable",
    "ReconnectExhausted",
    "SendFailed",
]
