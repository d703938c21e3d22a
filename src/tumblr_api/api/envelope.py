"""The ``{"meta": ..., "response" | "errors": ...}`` envelope around every reply.

Success::

    {"meta": {"status": 200, "msg": "OK"}, "response": {...}}

Failure::

    {"meta": {"status": 404, "msg": "Not Found"},
     "response": [],
     "errors": [{"title": "Not Found", "code": 0}]}

Failure replies sometimes carry an empty ``response`` alongside ``errors``,
so the presence of ``errors`` is checked first.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, TypeAdapter

from tumblr_api.core.exceptions import (
    ApiResponseError,
    DecodeError,
    DecodeErrorKind,
    DecodeIssue,
)
from tumblr_api.npf.codec import decode_with

T = TypeVar("T")


class ResponseMeta(BaseModel):
    """HTTP status and reason phrase echoed inside the body."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    status: int
    msg: str


class ResponseErrorEntry(BaseModel):
    """One entry of a failure envelope's ``errors`` list.

    See https://www.tumblr.com/docs/en/api/v2#errors-and-error-subcodes.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    title: str
    code: int
    detail: Optional[str] = None


@dataclass(frozen=True)
class SuccessResponse(Generic[T]):
    meta: ResponseMeta
    response: T


@dataclass(frozen=True)
class FailureResponse:
    meta: ResponseMeta
    errors: list[ResponseErrorEntry]

    def to_error(self) -> ApiResponseError:
        return ApiResponseError(self.meta, self.errors)


Response = Union[SuccessResponse[T], FailureResponse]

_ERROR_LIST_ADAPTER: TypeAdapter[list[ResponseErrorEntry]] = TypeAdapter(list[ResponseErrorEntry])


def _prefixed(exc: DecodeError, prefix: str) -> DecodeError:
    issues = [
        DecodeIssue(
            path=f"{prefix}.{issue.path}" if issue.path and not issue.path.startswith("[")
            else f"{prefix}{issue.path}",
            kind=issue.kind,
            message=issue.message,
        )
        for issue in exc.issues
    ]
    return DecodeError(issues, type_name=exc.type_name)


def decode_response(
    data: Any,
    decode_payload: Optional[Callable[[Any], T]] = None,
) -> Union[SuccessResponse[T], FailureResponse]:
    """Decode an API envelope.

    Args:
        data: Parsed JSON body.
        decode_payload: Decoder applied to ``response`` on success; the raw
            value is returned when omitted.

    Returns:
        A :class:`SuccessResponse` or a :class:`FailureResponse`.

    Raises:
        DecodeError: If the envelope or the payload is malformed.  Payload
            error paths are prefixed with ``response``.
    """
    if not isinstance(data, dict):
        raise DecodeError(
            [DecodeIssue("", DecodeErrorKind.TYPE_MISMATCH, "expected a JSON object")],
            type_name="Response",
        )
    if "meta" not in data:
        raise DecodeError(
            [DecodeIssue("meta", DecodeErrorKind.MISSING_FIELD, "Field required")],
            type_name="Response",
        )
    meta = decode_with(ResponseMeta.model_validate, data["meta"], "ResponseMeta", prefix="meta")

    if "errors" in data:
        errors = decode_with(
            _ERROR_LIST_ADAPTER.validate_python, data["errors"], "ResponseErrorEntry", prefix="errors"
        )
        return FailureResponse(meta=meta, errors=errors)

    if "response" not in data:
        raise DecodeError(
            [DecodeIssue("response", DecodeErrorKind.MISSING_FIELD, "Field required")],
            type_name="Response",
        )
    if decode_payload is None:
        return SuccessResponse(meta=meta, response=data["response"])
    try:
        payload = decode_payload(data["response"])
    except DecodeError as exc:
        raise _prefixed(exc, "response") from exc
    return SuccessResponse(meta=meta, response=payload)


def unwrap_response(envelope: Union[SuccessResponse[T], FailureResponse]) -> SuccessResponse[T]:
    """Return the success envelope or raise its failure as an exception.

    Raises:
        ApiResponseError: For a failure envelope.
    """
    if isinstance(envelope, FailureResponse):
        raise envelope.to_error()
    return envelope
