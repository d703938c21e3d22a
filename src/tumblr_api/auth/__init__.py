"""OAuth 2 token lifecycle."""

from tumblr_api.auth.credentials import DEFAULT_SCOPE, TOKEN_URL, Credentials

__all__ = ["Credentials", "TOKEN_URL", "DEFAULT_SCOPE"]
