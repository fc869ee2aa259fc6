"""Holder for the current ephemeral credential with single-flight refresh."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from collections.abc import Callable, Awaitable

from sightline.state.credential import Credential
from sightline.runtime.clock import Clock, SystemClock
from sightline.errors import ConfigurationError, CredentialUnavailable

logger = logging.getLogger(__name__)

IssueFn = Callable[[], Awaitable[Credential]]


class CredentialStore:
    """Keep at most one valid credential and refresh it before it expires.

    `ensure_valid()` is the only entry point callers need. Concurrent callers
    share one in-flight issuance instead of each hitting the issuer.
    """

    def __init__(
        self,
        issue: IssueFn,
        *,
        refresh_lead_ms: int,
        safety_buffer_ms: int,
        clock: Clock | None = None,
    ) -> None:
        self._issue = issue
        self._refresh_lead_s = float(refresh_lead_ms) / 1000.0
        self._safety_buffer_s = float(safety_buffer_ms) / 1000.0
        self._clock = clock or SystemClock()
        self._credential: Credential | None = None
        self._inflight: asyncio.Future[Credential] | None = None
        self._refresh_task: asyncio.Task | None = None

    @property
    def current(self) -> Credential | None:
        return self._credential

    @property
    def refreshing(self) -> bool:
        return self._inflight is not None

    async def ensure_valid(self) -> Credential:
        credential = self._credential
        if credential is not None and credential.is_valid(self._clock.now(), self._safety_buffer_s):
            return credential
        return await self._refresh()

    def invalidate(self) -> None:
        if self._credential is not None:
            logger.info("credential invalidated")
        self._credential = None
        self._cancel_refresh_timer()

    def clear(self) -> None:
        self.invalidate()
        inflight, self._inflight = self._inflight, None
        if inflight is not None and not inflight.done():
            inflight.cancel()

    async def _refresh(self) -> Credential:
        if self._inflight is None:
            self._inflight = asyncio.ensure_future(self._issue_once())
            self._inflight.add_done_callback(_consume_result)
        # Shield so one cancelled waiter does not abort the issuance for the others.
        return await asyncio.shield(self._inflight)

    async def _issue_once(self) -> Credential:
        try:
            try:
                credential = await self._issue()
            except (CredentialUnavailable, ConfigurationError):
                raise
            except Exception as exc:
                raise CredentialUnavailable(f"issuer failed: {exc!r}") from exc

            if not credential.is_valid(self._clock.now(), self._safety_buffer_s):
                raise CredentialUnavailable("issued credential expires inside the safety buffer")

            self._credential = credential
            self._schedule_refresh(credential)
            return credential
        finally:
            if self._inflight is asyncio.current_task():
                self._inflight = None

    def _schedule_refresh(self, credential: Credential) -> None:
        self._cancel_refresh_timer()
        remaining = credential.remaining(self._clock.now())
        delay_s = max(remaining - self._refresh_lead_s, (remaining - self._safety_buffer_s) / 2.0)
        self._refresh_task = asyncio.create_task(self._refresh_later(delay_s))
        logger.debug("proactive credential refresh in %.1fs", delay_s)

    async def _refresh_later(self, delay_s: float) -> None:
        await self._clock.sleep(delay_s)
        self._refresh_task = None
        logger.info("refreshing credential ahead of expiry")
        try:
            await self._refresh()
        except (CredentialUnavailable, ConfigurationError) as exc:
            logger.warning("proactive credential refresh failed: %s", exc)

    def _cancel_refresh_timer(self) -> None:
        task, self._refresh_task = self._refresh_task, None
        if task is not None and task is not asyncio.current_task():
            task.cancel()


def _consume_result(fut: asyncio.Future) -> None:
    # Waiters may all have been cancelled; keep asyncio from warning about an unretrieved error.
    with contextlib.suppress(asyncio.CancelledError):
        fut.exception()


__all__ = ["CredentialStore", "IssueFn"]
