"""Combine independently clocked audio chunks and video frames into send units."""

from __future__ import annotations

import logging
from typing import Any
from collections.abc import Callable, Awaitable

from sightline.state.media import AudioUnit, VideoUnit, MultimodalInput

from .slot import LatestFrameSlot

logger = logging.getLogger(__name__)

InputSink = Callable[[MultimodalInput], Awaitable[Any]]


class PairingBuffer:
    """Pair each audio chunk with the most recent eligible video frame.

    Holds at most one frame (the slot) and one audio chunk (only while it is
    being handed to the sink). A frame stays in the slot until overwritten, so
    consecutive chunks may carry the same frame.
    """

    def __init__(self, sink: InputSink, *, max_frame_age_ms: int = 0) -> None:
        self._sink = sink
        self._slot = LatestFrameSlot()
        self._max_frame_age_s = max(0, max_frame_age_ms) / 1000.0
        self._pending_audio: AudioUnit | None = None

    @property
    def slot(self) -> LatestFrameSlot:
        return self._slot

    def pending_counts(self) -> tuple[int, int]:
        """(pending audio chunks, pending video frames); each is 0 or 1."""
        return (0 if self._pending_audio is None else 1), len(self._slot)

    def push_video(self, frame: VideoUnit) -> None:
        self._slot.put(frame)

    def select_frame(self, chunk: AudioUnit) -> VideoUnit | None:
        frame = self._slot.peek()
        if frame is None:
            return None
        if frame.captured_at > chunk.captured_at:
            # Never attach a frame newer than the audio it accompanies.
            return None
        age_s = chunk.captured_at - frame.captured_at
        if self._max_frame_age_s > 0 and age_s > self._max_frame_age_s:
            logger.debug("latest frame is %.2fs older than audio; sending audio only", age_s)
            return None
        return frame

    async def push_audio(self, chunk: AudioUnit) -> Any:
        self._pending_audio = chunk
        try:
            unit = MultimodalInput(audio=chunk, video=self.select_frame(chunk), timestamp=chunk.captured_at)
            return await self._sink(unit)
        finally:
            self._pending_audio = None

    async def emit_video_only(self, frame: VideoUnit) -> Any:
        """Store `frame` and send it on its own (capture sources without audio)."""
        self._slot.put(frame)
        return await self._sink(MultimodalInput(audio=None, video=frame, timestamp=frame.captured_at))


__all__ = ["InputSink", "PairingBuffer"]
