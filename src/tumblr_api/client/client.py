"""Async request layer over the v2 REST API.

:class:`TumblrClient` composes the other layers: it asks
:class:`~tumblr_api.auth.credentials.Credentials` for a bearer token, sends the
request over a shared :class:`httpx.AsyncClient`, decodes the envelope and the
payload, and raises the failure envelope as
:class:`~tumblr_api.core.exceptions.ApiResponseError`.

Usage::

    async with TumblrClient(Credentials.from_settings()) as client:
        info = await client.user_info()
        post = await client.get_post("staff", 1234567891234567)
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Optional, TypeVar, Union

import httpx
import structlog

from tumblr_api.api.envelope import FailureResponse, decode_response
from tumblr_api.api.payloads import (
    BlogInfoResponse,
    CreatePostRequest,
    CreatePostResponse,
    CreatePostState,
    LimitsResponse,
    UserInfoResponse,
)
from tumblr_api.api.post import NPFPost, decode_post
from tumblr_api.auth.credentials import Credentials
from tumblr_api.client.config import (
    BLOG_INFO_PATH,
    BLOG_POST_PATH,
    BLOG_POSTS_PATH,
    MULTIPART_FILE_NAME,
    MULTIPART_JSON_PART,
    POST_FORMAT_NPF,
    USER_INFO_PATH,
    USER_LIMITS_PATH,
)
from tumblr_api.config.settings import Settings, get_settings
from tumblr_api.core.exceptions import NetworkError
from tumblr_api.npf.base import NpfModel
from tumblr_api.npf.blocks import ContentBlock
from tumblr_api.npf.codec import decode_model, encode_model

logger = structlog.get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Attachment:
    """A media file uploaded alongside a new post.

    Attributes:
        identifier: Multipart part name; must match the ``identifier`` of the
            media object in the post content that refers to this file.
        data: Raw file bytes.
        mime_type: Content type of the file, e.g. ``"image/png"``.
    """

    identifier: str
    data: bytes
    mime_type: str


class TumblrClient:
    """Authenticated client for the Tumblr v2 API.

    Args:
        credentials: Token source; shared safely between clients.
        http_client: Optional injected :class:`httpx.AsyncClient`.  When
            omitted, one is created and closed by :meth:`aclose`.
        settings: Optional settings; defaults to :func:`get_settings`.
    """

    def __init__(
        self,
        credentials: Credentials,
        http_client: httpx.AsyncClient | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._credentials = credentials
        self._settings = settings or get_settings()
        self._owns_http_client = http_client is None
        self._http_client = http_client or httpx.AsyncClient(
            timeout=self._settings.request_timeout,
            headers={"User-Agent": self._settings.user_agent},
        )
        self._base_url = self._settings.api_base_url.rstrip("/")

    async def __aenter__(self) -> TumblrClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http_client:
            await self._http_client.aclose()

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    async def user_info(self) -> UserInfoResponse:
        """Fetch the authenticated user's account information."""
        return await self._request("GET", USER_INFO_PATH, _model_decoder(UserInfoResponse))

    async def api_limits(self) -> LimitsResponse:
        """Fetch the authenticated user's daily rate limits."""
        return await self._request("GET", USER_LIMITS_PATH, _model_decoder(LimitsResponse))

    async def blog_info(self, blog: str) -> BlogInfoResponse:
        """Fetch public information about ``blog``."""
        return await self._request(
            "GET", BLOG_INFO_PATH.format(blog=blog), _model_decoder(BlogInfoResponse)
        )

    async def get_post(self, blog: str, post_id: Union[int, str]) -> NPFPost:
        """Fetch one post in Neue Post Format.

        Args:
            blog: Blog identifier.
            post_id: Post id, as an integer or its decimal string.

        Returns:
            The decoded post.
        """
        return await self._request(
            "GET",
            BLOG_POST_PATH.format(blog=blog, post_id=post_id),
            decode_post,
            params={"post_format": POST_FORMAT_NPF},
        )

    async def create_post(
        self,
        blog: str,
        content: list[ContentBlock],
        *,
        tags: Optional[list[str]] = None,
        state: Optional[CreatePostState] = None,
        publish_on: Optional[datetime] = None,
        source_url: Optional[str] = None,
        attachments: Optional[list[Attachment]] = None,
    ) -> CreatePostResponse:
        """Create a post on ``blog``.

        Args:
            blog: Blog identifier.
            content: NPF blocks making up the post.
            tags: Tags to apply; sent comma-separated.
            state: Initial state.  Defaults to the service's default.
            publish_on: Schedule the post.  Implies ``state=queue``.
            source_url: Source attribution for the content.
            attachments: Media files referenced by ``identifier`` in
                ``content``; switches the request to multipart.

        Returns:
            The id of the created post.

        Raises:
            ValueError: If ``publish_on`` is combined with a state other than
                ``queue``.
            EncodeError: If a block violates an encode-time constraint.
        """
        if publish_on is not None:
            if state not in (None, CreatePostState.QUEUE):
                raise ValueError(f"publish_on requires state 'queue', got {state.value!r}")
            state = CreatePostState.QUEUE

        request = CreatePostRequest(
            content=content,
            state=state,
            publish_on=publish_on,
            tags=",".join(tags) if tags else None,
            source_url=source_url,
        )
        body = encode_model(request)
        path = BLOG_POSTS_PATH.format(blog=blog)
        decoder = _model_decoder(CreatePostResponse)

        if not attachments:
            return await self._request("POST", path, decoder, json=body)

        files: list[tuple[str, tuple[Optional[str], Union[str, bytes], str]]] = [
            (MULTIPART_JSON_PART, (None, json.dumps(body), "application/json"))
        ]
        files.extend(
            (attachment.identifier, (MULTIPART_FILE_NAME, attachment.data, attachment.mime_type))
            for attachment in attachments
        )
        return await self._request("POST", path, decoder, files=files)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _request(
        self,
        method: str,
        path: str,
        decode_payload: Callable[[Any], T],
        **kwargs: Any,
    ) -> T:
        """Send an authenticated request and decode its envelope.

        Raises:
            TokenNetworkError: If no token could be obtained.
            OAuthError: If the token endpoint rejected the credentials.
            NetworkError: On transport failure or a non-JSON body.
            ApiResponseError: If the API answered with a failure envelope.
            DecodeError: If the payload does not match the expected type.
        """
        token = await self._credentials.acquire(self._http_client)
        url = f"{self._base_url}{path}"
        headers = {"Authorization": f"Bearer {token.get_secret_value()}"}

        try:
            response = await self._http_client.request(method, url, headers=headers, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("api_request_failed", method=method, path=path, error=type(exc).__name__)
            raise NetworkError(f"{method} {path} failed: {exc}") from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise NetworkError(
                f"{method} {path} returned a non-JSON body (HTTP {response.status_code})"
            ) from exc

        envelope = decode_response(body, decode_payload)
        if isinstance(envelope, FailureResponse):
            if envelope.meta.status == 401:
                self._credentials.invalidate()
            logger.warning(
                "api_request_rejected",
                method=method,
                path=path,
                status=envelope.meta.status,
                errors=len(envelope.errors),
            )
            raise envelope.to_error()

        logger.debug("api_request_succeeded", method=method, path=path, status=response.status_code)
        return envelope.response


def _model_decoder(model_type: type[NpfModel]) -> Callable[[Any], Any]:
    def decode(data: Any) -> Any:
        return decode_model(model_type, data)

    return decode
