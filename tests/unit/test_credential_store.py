from __future__ import annotations

import asyncio

import pytest

from sightline.state.credential import Credential
from sightline.credentials.store import CredentialStore
from sightline.errors import ConfigurationError, CredentialUnavailable
from tests.utils import FakeClock, settle


class _FakeIssuer:
    def __init__(self, clock: FakeClock, *, lifetime_s: float = 600.0) -> None:
        self.clock = clock
        self.lifetime_s = lifetime_s
        self.calls = 0
        self.gate: asyncio.Event | None = None
        self.error: BaseException | None = None

    async def issue(self) -> Credential:
        self.calls += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        now = self.clock.now()
        return Credential(token=f"tok-{self.calls}", issued_at=now, expires_at=now + self.lifetime_s)


def _store(issuer: _FakeIssuer, clock: FakeClock) -> CredentialStore:
    return CredentialStore(issuer.issue, refresh_lead_ms=180_000, safety_buffer_ms=60_000, clock=clock)


@pytest.mark.asyncio
async def test_valid_credential_is_reused() -> None:
    clock = FakeClock()
    issuer = _FakeIssuer(clock)
    store = _store(issuer, clock)

    first = await store.ensure_valid()
    second = await store.ensure_valid()
    assert first is second
    assert issuer.calls == 1
    store.clear()


@pytest.mark.asyncio
async def test_proactive_refresh_fires_at_expiry_minus_lead() -> None:
    clock = FakeClock()
    issuer = _FakeIssuer(clock)
    store = _store(issuer, clock)

    await store.ensure_valid()
    await clock.advance(419.0)
    assert issuer.calls == 1

    await clock.advance(1.0)
    assert issuer.calls == 2
    assert store.current is not None
    assert store.current.token == "tok-2"
    store.clear()


@pytest.mark.asyncio
async def test_concurrent_callers_share_one_issuance() -> None:
    clock = FakeClock()
    issuer = _FakeIssuer(clock)
    issuer.gate = asyncio.Event()
    store = _store(issuer, clock)

    waiters = [asyncio.create_task(store.ensure_valid()) for _ in range(5)]
    await settle()
    assert issuer.calls == 1
    assert store.refreshing is True

    issuer.gate.set()
    results = await asyncio.gather(*waiters)
    assert {c.token for c in results} == {"tok-1"}
    assert issuer.calls == 1
    assert store.refreshing is False
    store.clear()


@pytest.mark.asyncio
async def test_clear_drops_credential_and_refresh_timer() -> None:
    clock = FakeClock()
    issuer = _FakeIssuer(clock)
    store = _store(issuer, clock)

    await store.ensure_valid()
    store.clear()
    await clock.advance(600.0)
    assert issuer.calls == 1
    assert store.current is None

    await store.ensure_valid()
    assert issuer.calls == 2
    store.clear()


@pytest.mark.asyncio
async def test_invalidate_forces_new_issuance() -> None:
    clock = FakeClock()
    issuer = _FakeIssuer(clock)
    store = _store(issuer, clock)

    await store.ensure_valid()
    store.invalidate()
    assert store.current is None
    credential = await store.ensure_valid()
    assert credential.token == "tok-2"
    store.clear()


@pytest.mark.asyncio
async def test_short_lived_credential_is_rejected() -> None:
    clock = FakeClock()
    issuer = _FakeIssuer(clock, lifetime_s=30.0)
    store = _store(issuer, clock)

    with pytest.raises(CredentialUnavailable):
        await store.ensure_valid()
    assert store.current is None


@pytest.mark.asyncio
async def test_unexpected_issuer_errors_are_wrapped() -> None:
    clock = FakeClock()
    issuer = _FakeIssuer(clock)
    issuer.error = RuntimeError("boom")
    store = _store(issuer, clock)

    with pytest.raises(CredentialUnavailable):
        await store.ensure_valid()


@pytest.mark.asyncio
async def test_configuration_errors_pass_through() -> None:
    clock = FakeClock()
    issuer = _FakeIssuer(clock)
    issuer.error = ConfigurationError("bad key")
    store = _store(issuer, clock)

    with pytest.raises(ConfigurationError):
        await store.ensure_valid()


@pytest.mark.asyncio
async def test_failed_proactive_refresh_keeps_current_credential() -> None:
    clock = FakeClock()
    issuer = _FakeIssuer(clock)
    store = _store(issuer, clock)

    first = await store.ensure_valid()
    issuer.error = CredentialUnavailable("issuer down")
    await clock.advance(420.0)

    assert issuer.calls == 2
    assert store.current is first
    store.clear()


def test_credential_repr_hides_token() -> None:
    credential = Credential(token="secret-token", issued_at=0.0, expires_at=600.0)
    assert "secret-token" not in repr(credential)
    assert credential.remaining(100.0) == 500.0
    assert credential.is_valid(100.0, 60.0) is True
    assert credential.is_valid(550.0, 60.0) is False
