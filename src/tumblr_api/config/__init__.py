"""Configuration package for tumblr-api.

Re-exports the settings symbols so callers can write::

    from tumblr_api.config import get_settings
"""

from __future__ import annotations

from tumblr_api.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
