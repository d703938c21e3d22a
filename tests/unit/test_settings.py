"""Tests for environment-backed settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from tumblr_api.config.settings import Settings, get_settings
from tumblr_api.npf import OffsetUnit


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings(_env_file=None)

        assert settings.api_base_url == "https://api.tumblr.com/v2"
        assert settings.token_url == "https://api.tumblr.com/v2/oauth2/token"
        assert settings.oauth_scope == "basic offline_access write"
        assert settings.consumer_key is None
        assert settings.text_offset_unit is OffsetUnit.UTF16

    def test_environment_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TUMBLR_CONSUMER_KEY", "env-key")
        monkeypatch.setenv("TUMBLR_REQUEST_TIMEOUT", "5.5")
        monkeypatch.setenv("TUMBLR_TEXT_OFFSET_UNIT", "codepoint")

        settings = get_settings()

        assert settings.consumer_key.get_secret_value() == "env-key"
        assert settings.request_timeout == 5.5
        assert settings.text_offset_unit is OffsetUnit.CODEPOINT

    def test_secrets_are_masked_in_repr(self, settings: Settings) -> None:
        assert "test-consumer-secret" not in repr(settings)

    def test_get_settings_is_cached(self) -> None:
        assert get_settings() is get_settings()

    def test_timeout_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, request_timeout=0)
