from __future__ import annotations

import numpy as np
import pytest
import soundfile as sf

from sightline.errors import ConfigurationError
from sightline.capture.file_source import FileCaptureSource, find_frame_files, load_pcm16
from tests.utils.settings import AUDIO


def _write_tone(path, *, seconds: float, sr: int, channels: int) -> None:
    t = np.arange(int(seconds * sr), dtype=np.float32) / sr
    tone = 0.25 * np.sin(2 * np.pi * 440.0 * t)
    sf.write(str(path), np.repeat(tone[:, None], channels, axis=1), sr, subtype="PCM_16")


def test_load_pcm16_resamples_and_downmixes(tmp_path) -> None:
    wav = tmp_path / "tone.wav"
    _write_tone(wav, seconds=1.0, sr=48000, channels=2)

    pcm = load_pcm16(str(wav), sample_rate_hz=16000)

    # One second of mono PCM16 at 16 kHz, give or take resampler edge samples.
    assert abs(len(pcm) // 2 - 16000) <= 16


@pytest.mark.asyncio
async def test_audio_chunks_then_runs_dry(tmp_path) -> None:
    wav = tmp_path / "speech.wav"
    _write_tone(wav, seconds=2.5, sr=16000, channels=1)
    source = FileCaptureSource(audio=AUDIO, audio_path=str(wav))

    assert source.has_audio and not source.has_video
    chunks = []
    while (chunk := await source.read_audio_chunk()) is not None:
        chunks.append(chunk)

    assert [len(c) for c in chunks] == [32000, 32000, 16000]
    assert await source.read_video_frame() is None


@pytest.mark.asyncio
async def test_frames_in_name_order_and_loop(tmp_path) -> None:
    frames = tmp_path / "frames"
    frames.mkdir()
    (frames / "b.jpg").write_bytes(b"second")
    (frames / "a.JPEG").write_bytes(b"first")
    (frames / "notes.txt").write_bytes(b"ignored")

    assert [p.name for p in find_frame_files(str(frames))] == ["a.JPEG", "b.jpg"]

    source = FileCaptureSource(audio=AUDIO, frames_dir=str(frames), loop=True)
    reads = [await source.read_video_frame() for _ in range(3)]
    assert reads == [b"first", b"second", b"first"]

    source.close()
    assert await source.read_video_frame() is None


def test_missing_inputs_are_configuration_errors(tmp_path) -> None:
    with pytest.raises(ConfigurationError):
        FileCaptureSource(audio=AUDIO)
    with pytest.raises(ConfigurationError):
        FileCaptureSource(audio=AUDIO, frames_dir=str(tmp_path / "missing"))
    with pytest.raises(ConfigurationError):
        FileCaptureSource(audio=AUDIO, frames_dir=str(tmp_path))
    (tmp_path / "broken.wav").write_bytes(b"not audio")
    with pytest.raises(ConfigurationError):
        FileCaptureSource(audio=AUDIO, audio_path=str(tmp_path / "broken.wav"))
