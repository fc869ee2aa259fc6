"""Run one realtime session from a recording (audio file + JPEG frames)."""

from __future__ import annotations

import asyncio
import logging
import argparse
import contextlib
from collections.abc import Sequence

from sightline.errors import ConfigurationError
from sightline.state.session import SessionState
from sightline.state.callbacks import SessionCallbacks
from sightline.runtime.logging import configure_logging
from sightline.capture.file_source import FileCaptureSource
from sightline.runtime.settings_loader import load_settings
from sightline.runtime.response_audio import ResponseAudioRecorder
from sightline.runtime.dependencies import build_session_runtime

logger = logging.getLogger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Stream a recording into a realtime audio/video model session")
    p.add_argument("--audio", help="Audio file to stream (any format soundfile can read)")
    p.add_argument("--frames", help="Directory of JPEG frames to sample as video")
    p.add_argument("--duration", type=float, default=30.0, help="Seconds to run; 0 runs until capture ends")
    p.add_argument("--loop", action="store_true", help="Loop audio and frames instead of stopping at the end")
    p.add_argument("--out", help="Write the model's audio replies to this WAV file")
    args = p.parse_args(argv)
    if not args.audio and not args.frames:
        p.error("at least one of --audio or --frames is required")
    if args.duration < 0:
        p.error("--duration must be >= 0")
    return args


async def run_session(args: argparse.Namespace) -> int:
    settings = load_settings()
    source = FileCaptureSource(audio=settings.audio, audio_path=args.audio, frames_dir=args.frames, loop=args.loop)
    recorder = ResponseAudioRecorder()
    fatal = asyncio.Event()
    closed = asyncio.Event()

    def on_state_change(state: SessionState) -> None:
        if state is SessionState.CLOSED:
            closed.set()

    callbacks = SessionCallbacks(
        on_state_change=on_state_change,
        on_message=recorder.on_message,
        on_fatal=lambda _exc: fatal.set(),
    )
    runtime = build_session_runtime(source, settings=settings, callbacks=callbacks)
    try:
        await runtime.start()
        # CLOSED covers fatal errors and a clean server close alike.
        waiters = {
            asyncio.create_task(closed.wait()),
            asyncio.create_task(runtime.sampler.wait()),
        }
        _done, pending = await asyncio.wait(
            waiters,
            timeout=args.duration or None,
            return_when=asyncio.FIRST_COMPLETED,
        )
        for task in pending:
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
    finally:
        await runtime.shutdown()

    results = runtime.sampler.results
    logger.info(
        "session finished: %s; dropped while busy=%d",
        ", ".join(f"{k.value}={v}" for k, v in sorted(results.items(), key=lambda kv: kv[0].value)) or "nothing sent",
        runtime.manager.dropped_sends,
    )
    if args.out:
        if recorder.has_audio:
            recorder.write_wav(args.out)
        else:
            logger.warning("no model audio received; %s not written", args.out)
    return 1 if fatal.is_set() else 0


def main(argv: Sequence[str] | None = None) -> int:
    configure_logging()
    args = parse_args(argv)
    try:
        return asyncio.run(run_session(args))
    except ConfigurationError as exc:
        logger.error("%s", exc)
        return 2
    except KeyboardInterrupt:
        return 130


__all__ = ["main", "parse_args", "run_session"]
