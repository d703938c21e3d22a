"""OAuth 2 client-credentials token lifecycle.

A :class:`Credentials` instance owns one consumer key pair and at most one
cached bearer token.  :meth:`Credentials.acquire` hands out the cached token
while it is valid and otherwise performs a single token exchange, however
many tasks ask at once: the exchange runs while holding an
:class:`asyncio.Lock`, and tasks queued behind it find the fresh token
already in the slot.

Expiry is checked lazily at acquisition time; nothing refreshes in the
background.  A token is considered expired once ``now >= expires_at`` where
``expires_at = sent_at + expires_in`` and ``sent_at`` is read from the clock
just before the exchange request is sent, so the local expiry never lags the
server's.

A failed or cancelled exchange leaves the slot exactly as it was.

Usage::

    credentials = Credentials.from_settings()
    async with httpx.AsyncClient() as http:
        token = await credentials.acquire(http)
        headers = {"Authorization": f"Bearer {token.get_secret_value()}"}
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

import httpx
import structlog
from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError

from tumblr_api.config.settings import Settings, get_settings
from tumblr_api.core.exceptions import ConfigurationError, OAuthError, TokenNetworkError

logger = structlog.get_logger(__name__)

TOKEN_URL: str = "https://api.tumblr.com/v2/oauth2/token"
"""OAuth 2.0 token endpoint for the Client Credentials grant."""

DEFAULT_SCOPE: str = "basic offline_access write"
"""Scopes requested with every exchange."""


# ---------------------------------------------------------------------------
# Token endpoint bodies
# ---------------------------------------------------------------------------


class _TokenGrant(BaseModel):
    """Successful token endpoint body.  Other keys (``token_type``...) are ignored."""

    access_token: SecretStr
    expires_in: int = Field(ge=0)


class _TokenRejection(BaseModel):
    """RFC 6749 section 5.2 error body."""

    model_config = ConfigDict(extra="ignore")

    error: str
    error_description: Optional[str] = None
    error_uri: Optional[str] = None


@dataclass(frozen=True)
class _TokenWithExpiry:
    token: SecretStr
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


def _parse_token_body(body: Any) -> Union[_TokenGrant, _TokenRejection]:
    """Classify a token endpoint body by which keys it carries.

    Raises:
        TokenNetworkError: If the body is neither a grant nor a rejection.
    """
    if not isinstance(body, dict):
        raise TokenNetworkError("token endpoint returned a non-object body")
    try:
        if "access_token" in body:
            return _TokenGrant.model_validate(body)
        if "error" in body:
            return _TokenRejection.model_validate(body)
    except ValidationError as exc:
        raise TokenNetworkError(f"malformed token endpoint body: {exc.error_count()} issue(s)") from exc
    raise TokenNetworkError("token endpoint body has neither 'access_token' nor 'error'")


# ---------------------------------------------------------------------------
# Credentials
# ---------------------------------------------------------------------------


class Credentials:
    """A consumer key pair plus its cached bearer token.

    Args:
        consumer_key: OAuth consumer key (sent as ``client_id``).
        consumer_secret: OAuth consumer secret (sent as ``client_secret``).
        token_url: Token endpoint URL.
        scope: Space-separated scopes requested.
        clock: Monotonic seconds source; injectable for tests.
    """

    def __init__(
        self,
        consumer_key: Union[str, SecretStr],
        consumer_secret: Union[str, SecretStr],
        *,
        token_url: str = TOKEN_URL,
        scope: str = DEFAULT_SCOPE,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._consumer_key = SecretStr(consumer_key) if isinstance(consumer_key, str) else consumer_key
        self._consumer_secret = (
            SecretStr(consumer_secret) if isinstance(consumer_secret, str) else consumer_secret
        )
        self.token_url = token_url
        self.scope = scope
        self._clock = clock
        self._lock = asyncio.Lock()
        self._slot: Optional[_TokenWithExpiry] = None

    def __repr__(self) -> str:
        state = "cached" if self._slot is not None else "empty"
        return f"Credentials(consumer_key='**********', token_url={self.token_url!r}, token={state})"

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> Credentials:
        """Build credentials from ``TUMBLR_*`` configuration.

        Raises:
            ConfigurationError: If the consumer key or secret is not set.
        """
        settings = settings or get_settings()
        if settings.consumer_key is None or settings.consumer_secret is None:
            raise ConfigurationError(
                "TUMBLR_CONSUMER_KEY and TUMBLR_CONSUMER_SECRET must both be set"
            )
        return cls(
            settings.consumer_key,
            settings.consumer_secret,
            token_url=settings.token_url,
            scope=settings.oauth_scope,
        )

    @property
    def expires_at(self) -> Optional[float]:
        """Clock reading at which the cached token lapses, or None when empty."""
        return self._slot.expires_at if self._slot is not None else None

    async def acquire(self, http_client: httpx.AsyncClient) -> SecretStr:
        """Return a valid bearer token, exchanging for a new one if needed.

        Concurrent callers share a single in-flight exchange.

        Args:
            http_client: Client used for the exchange request.

        Returns:
            The access token.

        Raises:
            TokenNetworkError: Transport failure or undecodable response.
            OAuthError: The endpoint rejected the credentials.
        """
        async with self._lock:
            slot = self._slot
            if slot is not None and not slot.is_expired(self._clock()):
                return slot.token
            self._slot = await self._exchange(http_client)
            return self._slot.token

    def invalidate(self) -> None:
        """Drop the cached token so the next :meth:`acquire` exchanges anew."""
        if self._slot is not None:
            logger.info("token_invalidated", endpoint=self.token_url)
        self._slot = None

    async def _exchange(self, http_client: httpx.AsyncClient) -> _TokenWithExpiry:
        form = {
            "grant_type": "client_credentials",
            "scope": self.scope,
            "client_id": self._consumer_key.get_secret_value(),
            "client_secret": self._consumer_secret.get_secret_value(),
        }
        sent_at = self._clock()
        logger.debug("token_exchange_started", endpoint=self.token_url)
        try:
            response = await http_client.post(self.token_url, data=form)
            body = response.json()
        except httpx.HTTPError as exc:
            logger.warning("token_exchange_failed", endpoint=self.token_url, error=type(exc).__name__)
            raise TokenNetworkError(f"token exchange failed: {exc}") from exc
        except ValueError as exc:
            logger.warning(
                "token_exchange_failed",
                endpoint=self.token_url,
                status=response.status_code,
                error="non-JSON body",
            )
            raise TokenNetworkError(
                f"token endpoint returned a non-JSON body (HTTP {response.status_code})"
            ) from exc

        parsed = _parse_token_body(body)
        if isinstance(parsed, _TokenRejection):
            logger.warning(
                "token_exchange_rejected",
                endpoint=self.token_url,
                status=response.status_code,
                oauth_error=parsed.error,
            )
            raise OAuthError(parsed.error, parsed.error_description, parsed.error_uri)

        logger.info("token_exchange_succeeded", endpoint=self.token_url, expires_in=parsed.expires_in)
        return _TokenWithExpiry(token=parsed.access_token, expires_at=sent_at + parsed.expires_in)
