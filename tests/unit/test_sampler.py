from __future__ import annotations

import logging

import pytest

from sightline.state.send import SendResult
from sightline.capture.pairing import PairingBuffer
from sightline.capture.sampler import CaptureSampler
from sightline.state.media import MultimodalInput
from tests.utils import FakeClock
from tests.utils.settings import AUDIO, VIDEO

ONE_SECOND_PCM16 = b"\x01\x00" * AUDIO.samples_per_chunk


class _FakeSource:
    def __init__(
        self,
        *,
        audio_chunks: int = 0,
        video: bool = True,
        failing_frame_reads: int = 0,
    ) -> None:
        self._audio_chunks = audio_chunks
        self._video = video
        self._failing_frame_reads = failing_frame_reads
        self.audio_reads = 0
        self.frame_reads = 0

    @property
    def has_audio(self) -> bool:
        return self._audio_chunks > 0

    @property
    def has_video(self) -> bool:
        return self._video

    async def read_audio_chunk(self) -> bytes | None:
        if self.audio_reads >= self._audio_chunks:
            return None
        self.audio_reads += 1
        return ONE_SECOND_PCM16

    async def read_video_frame(self) -> bytes | None:
        self.frame_reads += 1
        if self.frame_reads <= self._failing_frame_reads:
            raise OSError("camera busy")
        return f"frame-{self.frame_reads}".encode()

    def close(self) -> None:
        pass


class _Sink:
    def __init__(self) -> None:
        self.units: list[MultimodalInput] = []

    async def __call__(self, unit: MultimodalInput) -> SendResult:
        self.units.append(unit)
        return SendResult.SENT


def _sampler(source: _FakeSource, clock: FakeClock, sink: _Sink) -> CaptureSampler:
    return CaptureSampler(source, PairingBuffer(sink), audio=AUDIO, video=VIDEO, clock=clock)


@pytest.mark.asyncio
async def test_audio_chunks_pair_with_latest_frame() -> None:
    clock = FakeClock()
    sink = _Sink()
    sampler = _sampler(_FakeSource(audio_chunks=3), clock, sink)
    sampler.start()

    await clock.advance(3.2)
    await sampler.stop()

    assert [u.audio.captured_at for u in sink.units] == [1.0, 2.0, 3.0]
    assert [u.video.captured_at for u in sink.units] == [0.5, 1.5, 2.5]
    assert all(u.audio.mime_type == "audio/pcm;rate=16000" for u in sink.units)
    assert all(u.audio.duration_ms == 1000.0 for u in sink.units)
    assert sampler.results[SendResult.SENT] == 3


@pytest.mark.asyncio
async def test_audio_loop_ends_when_source_runs_dry() -> None:
    clock = FakeClock()
    sink = _Sink()
    sampler = _sampler(_FakeSource(audio_chunks=2, video=False), clock, sink)
    sampler.start()

    await clock.advance(5.0)
    await sampler.wait()

    assert sampler.running is False
    assert len(sink.units) == 2
    assert all(u.video is None for u in sink.units)


@pytest.mark.asyncio
async def test_video_only_source_emits_frames() -> None:
    clock = FakeClock()
    sink = _Sink()
    sampler = _sampler(_FakeSource(audio_chunks=0), clock, sink)
    sampler.start()

    await clock.advance(1.0)
    await sampler.stop()

    assert [u.video.captured_at for u in sink.units] == [0.0, 0.5, 1.0]
    assert all(u.audio is None for u in sink.units)


@pytest.mark.asyncio
async def test_read_errors_do_not_stop_sampling() -> None:
    clock = FakeClock()
    sink = _Sink()
    source = _FakeSource(audio_chunks=0, failing_frame_reads=1)
    sampler = _sampler(source, clock, sink)
    sampler.start()

    await clock.advance(1.0)
    await sampler.stop()

    assert source.frame_reads == 3
    assert [u.video.data for u in sink.units] == [b"frame-2", b"frame-3"]


@pytest.mark.asyncio
async def test_audio_chunk_level_logged_at_debug(caplog) -> None:
    caplog.set_level(logging.DEBUG, logger="sightline.capture.sampler")
    clock = FakeClock()
    sampler = _sampler(_FakeSource(audio_chunks=2, video=False), clock, _Sink())
    sampler.start()

    await clock.advance(2.5)
    await sampler.stop()

    levels = [r.getMessage() for r in caplog.records if "level" in r.getMessage()]
    assert levels == ["audio chunk 1: 1000 ms, level 0.0", "audio chunk 2: 1000 ms, level 0.0"]
