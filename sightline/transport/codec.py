"""Wire encoding for the realtime endpoint.

Outbound frames are JSON objects with a single top-level key (`setup` or
`realtimeInput`). Inbound frames are decoded once, here, into an
`InboundMessage`; nothing past this module looks at raw dictionaries.
"""

from __future__ import annotations

import base64
from typing import Any

import orjson

from sightline.state.media import MultimodalInput
from sightline.state.settings import SessionSettings
from sightline.state.inbound import InboundMessage, ResumptionUpdate, TerminationWarning
from sightline.config.websocket import (
    WS_KEY_SETUP,
    WS_KEY_GO_AWAY,
    WS_KEY_SETUP_COMPLETE,
    WS_KEY_REALTIME_INPUT,
    WS_KEY_SERVER_CONTENT,
    WS_KEY_RESUMPTION_UPDATE,
)


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def encode_setup(session: SessionSettings, resumption_handle: str | None = None) -> str:
    setup: dict[str, Any] = {
        "model": session.model,
        "generationConfig": {"responseModalities": list(session.response_modalities)},
        # An empty object still asks the server to emit resumption updates.
        "sessionResumption": {"handle": resumption_handle} if resumption_handle else {},
    }
    if session.system_instruction:
        setup["systemInstruction"] = {"parts": [{"text": session.system_instruction}]}
    return orjson.dumps({WS_KEY_SETUP: setup}).decode("utf-8")


def encode_realtime_input(unit: MultimodalInput) -> str:
    payload: dict[str, Any] = {}
    if unit.audio is not None:
        payload["audio"] = {"data": _b64(unit.audio.data), "mimeType": unit.audio.mime_type}
    if unit.video is not None:
        payload["video"] = {"data": _b64(unit.video.data), "mimeType": unit.video.mime_type}
    if not payload:
        raise ValueError("input carries neither audio nor video")
    return orjson.dumps({WS_KEY_REALTIME_INPUT: payload}).decode("utf-8")


def parse_duration_s(raw: Any) -> float:
    """Parse a protobuf-JSON duration ("30s", "1.5s", {"seconds": 30}) or a plain number."""
    if isinstance(raw, bool):
        raise ValueError("duration must be numeric")
    if isinstance(raw, (int, float)):
        return float(raw)
    if isinstance(raw, str):
        text = raw.strip()
        if text.endswith("s"):
            text = text[:-1]
        return float(text)
    if isinstance(raw, dict):
        seconds = float(raw.get("seconds") or 0)
        nanos = float(raw.get("nanos") or 0)
        return seconds + nanos / 1e9
    raise ValueError(f"unsupported duration {raw!r}")


def _decode_resumption(raw: Any) -> ResumptionUpdate | None:
    if not isinstance(raw, dict):
        return None
    handle = raw.get("newHandle")
    return ResumptionUpdate(
        new_handle=handle if isinstance(handle, str) and handle else None,
        resumable=bool(raw.get("resumable")),
    )


def _decode_go_away(raw: Any) -> TerminationWarning | None:
    if not isinstance(raw, dict):
        return None
    try:
        time_left = parse_duration_s(raw.get("timeLeft", 0))
    except ValueError:
        time_left = 0.0
    return TerminationWarning(time_left_s=max(0.0, time_left))


def _decode_parts(content: dict[str, Any]) -> tuple[list[bytes], str | None, list[str]]:
    audio: list[bytes] = []
    mime: str | None = None
    texts: list[str] = []
    model_turn = content.get("modelTurn")
    parts = model_turn.get("parts") if isinstance(model_turn, dict) else None
    for part in parts if isinstance(parts, list) else []:
        if not isinstance(part, dict):
            continue
        inline = part.get("inlineData")
        if isinstance(inline, dict) and isinstance(inline.get("data"), str):
            part_mime = inline.get("mimeType")
            if isinstance(part_mime, str) and part_mime.startswith("audio/"):
                audio.append(base64.b64decode(inline["data"]))
                mime = mime or part_mime
        text = part.get("text")
        if isinstance(text, str) and text:
            texts.append(text)
    return audio, mime, texts


def decode_server_message(raw: str | bytes) -> InboundMessage:
    try:
        msg = orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        raise ValueError(f"invalid JSON: {exc}") from exc
    if not isinstance(msg, dict):
        raise ValueError("message must be a JSON object")

    content = msg.get(WS_KEY_SERVER_CONTENT)
    generation_complete = False
    audio: list[bytes] = []
    audio_mime: str | None = None
    texts: list[str] = []
    if isinstance(content, dict):
        generation_complete = bool(content.get("generationComplete") or content.get("turnComplete"))
        audio, audio_mime, texts = _decode_parts(content)

    return InboundMessage(
        setup_complete=WS_KEY_SETUP_COMPLETE in msg,
        resumption_update=_decode_resumption(msg.get(WS_KEY_RESUMPTION_UPDATE)),
        termination_warning=_decode_go_away(msg.get(WS_KEY_GO_AWAY)),
        generation_complete=generation_complete,
        audio=tuple(audio),
        audio_mime_type=audio_mime,
        text="".join(texts) or None,
        raw=msg,
    )


__all__ = [
    "decode_server_message",
    "encode_realtime_input",
    "encode_setup",
    "parse_duration_s",
]
