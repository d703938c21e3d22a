"""Library settings loaded from environment variables.

Uses Pydantic Settings v2 for validated, type-safe configuration. Every
variable carries the ``TUMBLR_`` prefix, e.g. ``TUMBLR_CONSUMER_KEY``.

Usage::

    from tumblr_api.config.settings import get_settings

    settings = get_settings()
    credentials = Credentials.from_settings(settings)
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from tumblr_api.npf.formatting import OffsetUnit


class Settings(BaseSettings):
    """Configuration backed by environment variables and an optional .env file.

    Nothing here is required: the consumer key pair may instead be passed
    directly to :class:`~tumblr_api.auth.credentials.Credentials`.
    """

    model_config = SettingsConfigDict(
        env_prefix="TUMBLR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ------------------------------------------------------------------
    # Credentials
    # ------------------------------------------------------------------

    consumer_key: Optional[SecretStr] = None
    """OAuth consumer key registered at https://www.tumblr.com/oauth/apps."""

    consumer_secret: Optional[SecretStr] = None
    """OAuth consumer secret paired with ``consumer_key``."""

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    api_base_url: str = "https://api.tumblr.com/v2"
    """Base URL of the v2 REST API, without a trailing slash."""

    token_url: str = "https://api.tumblr.com/v2/oauth2/token"
    """OAuth 2 token endpoint used for the client-credentials grant."""

    oauth_scope: str = "basic offline_access write"
    """Space-separated scopes requested in every token exchange."""

    request_timeout: float = Field(default=30.0, gt=0)
    """Timeout in seconds applied to the default ``httpx.AsyncClient``."""

    user_agent: str = "tumblr-api-python/0.1"
    """``User-Agent`` header sent on every request."""

    # ------------------------------------------------------------------
    # Behaviour
    # ------------------------------------------------------------------

    log_level: str = "INFO"
    """Logging verbosity.  One of: DEBUG, INFO, WARNING, ERROR, CRITICAL."""

    text_offset_unit: OffsetUnit = OffsetUnit.UTF16
    """Unit used to interpret inline-format ``start``/``end`` offsets."""


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance.

    Cached so the environment is read once; tests call
    ``get_settings.cache_clear()`` after patching the environment.
    """
    return Settings()
