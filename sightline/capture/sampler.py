"""Two periodic capture loops feeding the pairing buffer."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from collections import Counter

from sightline.state.send import SendResult
from sightline.runtime.clock import Clock, SystemClock
from sightline.config.video import VIDEO_FRAME_MIME
from sightline.state.media import AudioUnit, VideoUnit
from sightline.state.settings import AudioSettings, VideoSettings

from .pcm import pcm16_level, pcm16_duration_ms
from .source import CaptureSource
from .pairing import PairingBuffer

logger = logging.getLogger(__name__)


class CaptureSampler:
    """Drive the audio chunker and video sampler on their own periods.

    Both loops pace against `t0 + n * period` so scheduling jitter does not
    accumulate. A failing read is logged and the loop keeps going; a source
    that returns None has run dry and its loop ends.
    """

    def __init__(
        self,
        source: CaptureSource,
        buffer: PairingBuffer,
        *,
        audio: AudioSettings,
        video: VideoSettings,
        clock: Clock | None = None,
    ) -> None:
        self._source = source
        self._buffer = buffer
        self._audio = audio
        self._video = video
        self._clock = clock or SystemClock()
        self._tasks: list[asyncio.Task] = []
        self.results: Counter[SendResult] = Counter()

    @property
    def running(self) -> bool:
        return any(not t.done() for t in self._tasks)

    def start(self) -> None:
        if self._tasks:
            return
        t0 = self._clock.now()
        if self._source.has_video:
            self._tasks.append(asyncio.create_task(self._video_loop(t0)))
        if self._source.has_audio:
            self._tasks.append(asyncio.create_task(self._audio_loop(t0)))
        logger.info(
            "capture started (audio=%s @ %d ms, video=%s @ %.1f fps)",
            self._source.has_audio,
            self._audio.chunk_period_ms,
            self._source.has_video,
            self._video.frame_rate,
        )

    async def stop(self) -> None:
        tasks, self._tasks = self._tasks, []
        for task in tasks:
            task.cancel()
        for task in tasks:
            with contextlib.suppress(asyncio.CancelledError):
                await task

    async def wait(self) -> None:
        """Wait until every loop has ended (sources exhausted)."""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    async def _sleep_until(self, target: float) -> None:
        await self._clock.sleep(max(0.0, target - self._clock.now()))

    async def _audio_loop(self, t0: float) -> None:
        period_s = self._audio.chunk_period_ms / 1000.0
        n = 0
        while True:
            n += 1
            await self._sleep_until(t0 + n * period_s)
            try:
                data = await self._source.read_audio_chunk()
            except Exception:
                logger.warning("audio capture read failed", exc_info=True)
                continue
            if data is None:
                logger.info("audio source exhausted")
                return
            if not data:
                continue

            chunk = AudioUnit(
                data=data,
                mime_type=self._audio.mime_type,
                captured_at=self._clock.now(),
                duration_ms=pcm16_duration_ms(
                    data, sample_rate_hz=self._audio.sample_rate_hz, channels=self._audio.channels
                ),
            )
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("audio chunk %d: %.0f ms, level %.1f", n, chunk.duration_ms, pcm16_level(data))
            try:
                self._record(await self._buffer.push_audio(chunk))
            except Exception:
                logger.exception("failed to deliver paired input")

    async def _video_loop(self, t0: float) -> None:
        period_s = self._video.frame_period_ms / 1000.0
        n = 0
        while True:
            # First frame right away so the first audio chunk has something to pair with.
            await self._sleep_until(t0 + n * period_s)
            n += 1
            try:
                data = await self._source.read_video_frame()
            except Exception:
                logger.warning("video capture read failed", exc_info=True)
                continue
            if data is None:
                logger.info("video source exhausted")
                return
            if not data:
                continue

            frame = VideoUnit(
                data=data,
                mime_type=VIDEO_FRAME_MIME,
                width=self._video.width,
                height=self._video.height,
                captured_at=self._clock.now(),
            )
            if self._source.has_audio:
                self._buffer.push_video(frame)
                continue
            try:
                self._record(await self._buffer.emit_video_only(frame))
            except Exception:
                logger.exception("failed to deliver video-only input")

    def _record(self, result: object) -> None:
        if isinstance(result, SendResult):
            self.results[result] += 1


__all__ = ["CaptureSampler"]
