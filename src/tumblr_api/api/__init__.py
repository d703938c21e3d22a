"""Post envelope codec, API envelope and endpoint payloads."""

from __future__ import annotations

from tumblr_api.api.base import ApiModel
from tumblr_api.api.envelope import (
    FailureResponse,
    Response,
    ResponseErrorEntry,
    ResponseMeta,
    SuccessResponse,
    decode_response,
    unwrap_response,
)
from tumblr_api.api.payloads import (
    AvatarShape,
    BlogInfo,
    BlogInfoResponse,
    BlogTheme,
    CreatePostRequest,
    CreatePostResponse,
    CreatePostState,
    LimitEntry,
    LimitsResponse,
    UserInfo,
    UserInfoBlog,
    UserInfoResponse,
    UserLimits,
)
from tumblr_api.api.post import (
    AskInfo,
    BlazeInfo,
    Blog,
    InteractabilityInfo,
    NPFPost,
    PostState,
    ReblogInteractability,
    SourceInfo,
    SubmissionInfo,
    decode_post,
    encode_post,
)

__all__ = [
    "ApiModel",
    # post
    "NPFPost",
    "Blog",
    "PostState",
    "ReblogInteractability",
    "SourceInfo",
    "BlazeInfo",
    "InteractabilityInfo",
    "AskInfo",
    "SubmissionInfo",
    "decode_post",
    "encode_post",
    # envelope
    "Response",
    "ResponseMeta",
    "ResponseErrorEntry",
    "SuccessResponse",
    "FailureResponse",
    "decode_response",
    "unwrap_response",
    # payloads
    "UserInfoResponse",
    "UserInfo",
    "UserInfoBlog",
    "LimitsResponse",
    "UserLimits",
    "LimitEntry",
    "BlogInfoResponse",
    "BlogInfo",
    "BlogTheme",
    "AvatarShape",
    "CreatePostRequest",
    "CreatePostState",
    "CreatePostResponse",
]
