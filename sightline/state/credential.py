"""Short-lived credential value type."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Credential:
    token: str
    issued_at: float
    expires_at: float

    def remaining(self, now: float) -> float:
        return self.expires_at - now

    def is_valid(self, now: float, buffer_s: float = 0.0) -> bool:
        """True while more than `buffer_s` seconds of lifetime are left."""
        return self.remaining(now) > buffer_s

    def __repr__(self) -> str:
        # Never print the token itself.
        return f"Credential(issued_at={self.issued_at:.3f}, expires_at={self.expires_at:.3f})"


__all__ = ["Credential"]
