"""Runtime dependency construction (credentials, connection, manager, capture)."""

from __future__ import annotations

import logging

from sightline.state import SessionRuntime
from sightline.transport.dialer import Dialer
from sightline.state.settings import AppSettings
from sightline.capture.source import CaptureSource
from sightline.capture.pairing import PairingBuffer
from sightline.capture.sampler import CaptureSampler
from sightline.credentials.store import CredentialStore
from sightline.credentials.issuer import HttpCredentialIssuer
from sightline.session.manager import SessionLifecycleManager
from sightline.transport.connection import RealtimeConnection
from sightline.state.callbacks import SessionCallbacks, ConnectionListener

from .clock import Clock, SystemClock
from .settings_loader import load_settings

logger = logging.getLogger(__name__)


def build_session_runtime(
    source: CaptureSource,
    *,
    settings: AppSettings | None = None,
    callbacks: SessionCallbacks | None = None,
    clock: Clock | None = None,
    dial: Dialer | None = None,
) -> SessionRuntime:
    settings = settings or load_settings()
    clock = clock or SystemClock()

    issuer = HttpCredentialIssuer(
        url=settings.credential.issuer_url,
        api_key=settings.credential.api_key,
        timeout_s=settings.credential.request_timeout_s,
        now_fn=clock.now,
    )
    credentials = CredentialStore(
        issuer.issue,
        refresh_lead_ms=settings.credential.refresh_lead_ms,
        safety_buffer_ms=settings.credential.safety_buffer_ms,
        clock=clock,
    )

    def connection_factory(listener: ConnectionListener) -> RealtimeConnection:
        return RealtimeConnection(listener, session=settings.session, dial=dial, now_fn=clock.now)

    manager = SessionLifecycleManager(
        credentials=credentials,
        connection_factory=connection_factory,
        reconnect=settings.reconnect,
        session=settings.session,
        health=settings.health,
        clock=clock,
        callbacks=callbacks,
    )
    buffer = PairingBuffer(manager.send, max_frame_age_ms=settings.video.max_frame_age_ms)
    sampler = CaptureSampler(source, buffer, audio=settings.audio, video=settings.video, clock=clock)
    logger.debug("session runtime built for model %s", settings.session.model)

    return SessionRuntime(
        manager=manager,
        sampler=sampler,
        credentials=credentials,
        settings=settings,
        _issuer=issuer,
        _source=source,
    )


__all__ = ["SessionRuntime", "build_session_runtime"]
