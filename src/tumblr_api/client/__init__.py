"""Async request layer."""

from tumblr_api.client.client import Attachment, TumblrClient

__all__ = ["TumblrClient", "Attachment"]
