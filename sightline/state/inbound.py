"""Structured view of a decoded inbound realtime message."""

from __future__ import annotations

from typing import Any
from dataclasses import field, dataclass


@dataclass(frozen=True, slots=True)
class ResumptionUpdate:
    new_handle: str | None
    resumable: bool


@dataclass(frozen=True, slots=True)
class TerminationWarning:
    time_left_s: float


@dataclass(frozen=True, slots=True)
class InboundMessage:
    """One server message with its lifecycle-relevant parts pulled out.

    Every field is optional; a message may carry several at once. Anything
    not modelled here stays available in `raw`.
    """

    setup_complete: bool = False
    resumption_update: ResumptionUpdate | None = None
    termination_warning: TerminationWarning | None = None
    generation_complete: bool = False
    audio: tuple[bytes, ...] = ()
    audio_mime_type: str | None = None
    text: str | None = None
    raw: dict[str, Any] = field(default_factory=dict)


__all__ = ["InboundMessage", "ResumptionUpdate", "TerminationWarning"]
