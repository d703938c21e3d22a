"""Typed access to the Tumblr v2 API.

- :mod:`tumblr_api.npf` decodes and encodes Neue Post Format content.
- :mod:`tumblr_api.api` handles the post envelope, the response envelope and
  endpoint payloads.
- :mod:`tumblr_api.auth` manages the OAuth 2 client-credentials token.
- :mod:`tumblr_api.client` ties them together into an async client.
"""

from tumblr_api.api import NPFPost, decode_post, decode_response, encode_post, unwrap_response
from tumblr_api.auth import Credentials
from tumblr_api.client import Attachment, TumblrClient
from tumblr_api.config import Settings, get_settings
from tumblr_api.core.exceptions import (
    ApiResponseError,
    AuthError,
    ConfigurationError,
    DecodeError,
    DecodeErrorKind,
    EncodeError,
    NetworkError,
    OAuthError,
    OAuthErrorCode,
    TokenNetworkError,
    TumblrError,
)
from tumblr_api.core.logging_config import configure_logging
from tumblr_api.npf import ContentBlock, decode_block, decode_blocks, encode_block, encode_blocks

__version__ = "0.1.0"

__all__ = [
    "TumblrClient",
    "Attachment",
    "Credentials",
    "Settings",
    "get_settings",
    "configure_logging",
    "ContentBlock",
    "decode_block",
    "decode_blocks",
    "encode_block",
    "encode_blocks",
    "NPFPost",
    "decode_post",
    "encode_post",
    "decode_response",
    "unwrap_response",
    "TumblrError",
    "DecodeError",
    "DecodeErrorKind",
    "EncodeError",
    "NetworkError",
    "AuthError",
    "TokenNetworkError",
    "OAuthError",
    "OAuthErrorCode",
    "ApiResponseError",
    "ConfigurationError",
]
