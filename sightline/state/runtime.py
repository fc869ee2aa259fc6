"""Typed runtime state objects for dependency wiring."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from sightline.state.settings import AppSettings
    from sightline.capture.source import CaptureSource
    from sightline.capture.sampler import CaptureSampler
    from sightline.credentials.store import CredentialStore
    from sightline.credentials.issuer import HttpCredentialIssuer
    from sightline.session.manager import SessionLifecycleManager


@dataclass(slots=True)
class SessionRuntime:
    manager: SessionLifecycleManager
    sampler: CaptureSampler
    credentials: CredentialStore
    settings: AppSettings
    _issuer: HttpCredentialIssuer
    _source: CaptureSource

    async def start(self) -> None:
        await self.manager.start()
        self.sampler.start()

    async def shutdown(self) -> None:
        """Release everything; a failing step never skips the ones after it."""
        steps = (
            ("capture sampler", self.sampler.stop),
            ("session manager", self.manager.stop),
            ("credential issuer", self._issuer.aclose),
        )
        for name, stop in steps:
            try:
                await stop()
            except Exception:
                logger.exception("failed to stop %s", name)
        try:
            self._source.close()
        except Exception:
            logger.exception("failed to close capture source")


__all__ = ["SessionRuntime"]
