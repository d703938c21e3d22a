"""Shared pytest fixtures for tumblr-api tests.

Fixture summary
---------------
clear_settings_cache: Autouse; isolates ``get_settings()`` between tests.
settings            : A Settings instance with dummy consumer credentials.
fake_clock          : Manually advanced monotonic clock for token expiry.
credentials         : Credentials wired to ``fake_clock``.
load_fixture        : Loads JSON files from ``tests/fixtures/api_responses``.

No test touches the network: HTTP is mocked with respx.
"""

from __future__ import annotations

import json
import os
from collections.abc import Iterator
from pathlib import Path
from typing import Any, Callable

import pytest

from tumblr_api.auth.credentials import Credentials
from tumblr_api.config.settings import Settings, get_settings

FIXTURES_DIR = Path(__file__).parent / "fixtures" / "api_responses"

TEST_CONSUMER_KEY = "test-consumer-key"
TEST_CONSUMER_SECRET = "test-consumer-secret"


class FakeClock:
    """Monotonic clock stand-in; advance it explicitly with :meth:`advance`."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def clear_settings_cache(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Drop cached settings and any TUMBLR_* variables from the environment."""
    for key in list(os.environ):
        if key.startswith("TUMBLR_"):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        consumer_key=TEST_CONSUMER_KEY,
        consumer_secret=TEST_CONSUMER_SECRET,
    )


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def credentials(fake_clock: FakeClock) -> Credentials:
    return Credentials(TEST_CONSUMER_KEY, TEST_CONSUMER_SECRET, clock=fake_clock)


@pytest.fixture
def load_fixture() -> Callable[[str], Any]:
    def _load(name: str) -> Any:
        return json.loads((FIXTURES_DIR / name).read_text(encoding="utf-8"))

    return _load
