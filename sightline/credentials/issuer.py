"""HTTP client for the ephemeral credential authority."""

from __future__ import annotations

import time
import asyncio
import logging
from typing import Any
from datetime import datetime
from collections.abc import Callable

import httpx

from sightline.state.credential import Credential
from sightline.config.websocket import WS_AUTH_HTTP_STATUSES
from sightline.errors import ConfigurationError, CredentialUnavailable
from sightline.config.credential import (
    EPOCH_MS_THRESHOLD,
    ISSUER_TOKEN_KEYS,
    ISSUER_EXPIRY_KEYS,
    ISSUER_API_KEY_HEADER,
)

logger = logging.getLogger(__name__)


def _parse_expiry(raw: Any) -> float:
    if isinstance(raw, bool):
        raise ValueError("expiry must be a timestamp")
    if isinstance(raw, (int, float)):
        value = float(raw)
        return value / 1000.0 if value > EPOCH_MS_THRESHOLD else value
    if isinstance(raw, str) and raw.strip():
        text = raw.strip()
        try:
            numeric = float(text)
        except ValueError:
            numeric = None
        if numeric is not None:
            return _parse_expiry(numeric)
        parsed = datetime.fromisoformat(text)
        if parsed.tzinfo is None:
            raise ValueError(f"expiry timestamp {text!r} has no timezone")
        return parsed.timestamp()
    raise ValueError(f"unsupported expiry value {raw!r}")


def parse_credential(body: Any, *, issued_at: float) -> Credential:
    """Build a Credential from an issuer response body."""
    if not isinstance(body, dict):
        raise ValueError("issuer response must be a JSON object")

    token = next((body[k] for k in ISSUER_TOKEN_KEYS if isinstance(body.get(k), str) and body[k].strip()), None)
    if token is None:
        raise ValueError("issuer response missing token")

    expiry = next((body[k] for k in ISSUER_EXPIRY_KEYS if body.get(k) is not None), None)
    if expiry is None:
        raise ValueError("issuer response missing expiry")

    return Credential(token=token.strip(), issued_at=issued_at, expires_at=_parse_expiry(expiry))


class HttpCredentialIssuer:
    """Mint short-lived session tokens from a long-lived API key.

    Only one request is in flight at a time; retries are left to the caller.
    """

    def __init__(
        self,
        *,
        url: str,
        api_key: str,
        timeout_s: float,
        client: httpx.AsyncClient | None = None,
        now_fn: Callable[[], float] | None = None,
    ) -> None:
        if not url:
            raise ConfigurationError("no credential issuer URL configured")
        if not url.startswith(("http://", "https://")):
            raise ConfigurationError("credential issuer URL must include http/https scheme")
        self._url = url
        self._api_key = api_key
        self._client = client or httpx.AsyncClient(timeout=timeout_s)
        self._owns_client = client is None
        self._now = now_fn or time.time
        self._lock = asyncio.Lock()

    async def issue(self) -> Credential:
        async with self._lock:
            headers = {ISSUER_API_KEY_HEADER: self._api_key} if self._api_key else {}
            try:
                resp = await self._client.post(self._url, headers=headers, json={})
                resp.raise_for_status()
            except httpx.HTTPStatusError as exc:
                status = exc.response.status_code
                if status in WS_AUTH_HTTP_STATUSES:
                    raise ConfigurationError(f"credential issuer rejected the API key (HTTP {status})") from exc
                raise CredentialUnavailable(f"issuer returned HTTP {status}") from exc
            except httpx.HTTPError as exc:
                raise CredentialUnavailable(f"issuer request failed: {exc!r}") from exc

            try:
                credential = parse_credential(resp.json(), issued_at=self._now())
            except ValueError as exc:
                raise CredentialUnavailable(f"malformed issuer response: {exc}") from exc

            logger.info("credential issued; expires in %.0fs", credential.remaining(self._now()))
            return credential

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


__all__ = ["HttpCredentialIssuer", "parse_credential"]
