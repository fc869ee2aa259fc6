from __future__ import annotations

import pytest

from sightline.capture.slot import LatestFrameSlot
from sightline.capture.pairing import PairingBuffer
from sightline.state.media import AudioUnit, VideoUnit, MultimodalInput


def _chunk(t: float) -> AudioUnit:
    return AudioUnit(data=b"\x00\x00" * 8, mime_type="audio/pcm;rate=16000", captured_at=t, duration_ms=1000.0)


def _frame(t: float) -> VideoUnit:
    return VideoUnit(data=f"frame@{t}".encode(), mime_type="image/jpeg", width=640, height=480, captured_at=t)


class _Sink:
    def __init__(self) -> None:
        self.units: list[MultimodalInput] = []
        self.observed_counts: list[tuple[int, int]] = []
        self.buffer: PairingBuffer | None = None

    async def __call__(self, unit: MultimodalInput) -> str:
        self.units.append(unit)
        if self.buffer is not None:
            self.observed_counts.append(self.buffer.pending_counts())
        return "ok"


def test_slot_overwrites() -> None:
    slot = LatestFrameSlot()
    assert len(slot) == 0
    slot.put(_frame(0.0))
    slot.put(_frame(0.5))
    assert len(slot) == 1
    assert slot.peek() == _frame(0.5)
    assert slot.overwritten == 1
    slot.clear()
    assert slot.peek() is None


@pytest.mark.asyncio
async def test_audio_without_frames_is_sent_alone() -> None:
    sink = _Sink()
    buffer = PairingBuffer(sink)

    assert await buffer.push_audio(_chunk(1.0)) == "ok"
    assert sink.units == [MultimodalInput(audio=_chunk(1.0), video=None, timestamp=1.0)]


@pytest.mark.asyncio
async def test_pairs_with_most_recent_frame() -> None:
    sink = _Sink()
    buffer = PairingBuffer(sink)

    buffer.push_video(_frame(0.0))
    buffer.push_video(_frame(0.5))
    await buffer.push_audio(_chunk(1.0))

    assert sink.units[0].video == _frame(0.5)
    assert sink.units[0].timestamp == 1.0


@pytest.mark.asyncio
async def test_never_pairs_frame_captured_after_audio() -> None:
    sink = _Sink()
    buffer = PairingBuffer(sink)

    buffer.push_video(_frame(1.2))
    await buffer.push_audio(_chunk(1.0))
    assert sink.units[0].video is None


@pytest.mark.asyncio
async def test_frame_reused_until_overwritten() -> None:
    sink = _Sink()
    buffer = PairingBuffer(sink)

    buffer.push_video(_frame(0.5))
    await buffer.push_audio(_chunk(1.0))
    await buffer.push_audio(_chunk(2.0))
    buffer.push_video(_frame(2.5))
    await buffer.push_audio(_chunk(3.0))

    assert [u.video for u in sink.units] == [_frame(0.5), _frame(0.5), _frame(2.5)]


@pytest.mark.asyncio
async def test_stale_frames_excluded_when_bounded() -> None:
    sink = _Sink()
    buffer = PairingBuffer(sink, max_frame_age_ms=1500)

    buffer.push_video(_frame(0.0))
    await buffer.push_audio(_chunk(1.0))
    await buffer.push_audio(_chunk(2.0))

    assert sink.units[0].video == _frame(0.0)
    assert sink.units[1].video is None


@pytest.mark.asyncio
async def test_holds_at_most_one_chunk_and_one_frame() -> None:
    sink = _Sink()
    buffer = PairingBuffer(sink)
    sink.buffer = buffer

    for i in range(10):
        buffer.push_video(_frame(i * 0.5))
        buffer.push_video(_frame(i * 0.5 + 0.25))
        await buffer.push_audio(_chunk(i + 1.0))

    assert sink.observed_counts == [(1, 1)] * 10
    assert buffer.pending_counts() == (0, 1)


@pytest.mark.asyncio
async def test_video_only_emission() -> None:
    sink = _Sink()
    buffer = PairingBuffer(sink)

    await buffer.emit_video_only(_frame(0.5))
    assert sink.units == [MultimodalInput(audio=None, video=_frame(0.5), timestamp=0.5)]
    assert buffer.slot.peek() == _frame(0.5)
