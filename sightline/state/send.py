"""Outcome of a single send through the session manager."""

from __future__ import annotations

import enum


class SendResult(enum.Enum):
    SENT = "sent"
    # Audio-bearing unit arrived while a response was still pending.
    DROPPED = "dropped"
    # Session was not connected; the remote endpoint was not contacted.
    REJECTED = "rejected"
    FAILED = "failed"


__all__ = ["SendResult"]
