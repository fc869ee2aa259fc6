from __future__ import annotations

import numpy as np
import pytest
import soundfile as sf

from sightline.state.inbound import InboundMessage
from sightline.runtime.response_audio import ResponseAudioRecorder, parse_pcm_rate


@pytest.mark.parametrize(
    ("mime", "expected"),
    [
        ("audio/pcm;rate=16000", 16000),
        ("audio/pcm; rate=22050", 22050),
        ("audio/pcm", 24000),
        ("audio/pcm;rate=abc", 24000),
        ("audio/pcm;rate=0", 24000),
        (None, 24000),
    ],
)
def test_parse_pcm_rate(mime, expected) -> None:
    assert parse_pcm_rate(mime) == expected


def test_recorder_writes_wav(tmp_path) -> None:
    recorder = ResponseAudioRecorder()
    assert not recorder.has_audio

    pcm = np.arange(-400, 400, dtype="<i2").tobytes()
    recorder.on_message(InboundMessage(audio=(pcm[:800],), audio_mime_type="audio/pcm;rate=8000"))
    recorder.on_message(InboundMessage(audio=(pcm[800:],), text="a red mug"))
    recorder.on_message(InboundMessage(generation_complete=True))

    out = tmp_path / "reply.wav"
    duration_s = recorder.write_wav(str(out))

    assert recorder.transcript == ["a red mug"]
    assert duration_s == pytest.approx(800 / 8000)
    data, sr = sf.read(str(out), dtype="int16")
    assert sr == 8000
    assert data.tolist() == list(range(-400, 400))
