"""Library-wide exception hierarchy for tumblr-api.

All custom exceptions subclass ``TumblrError``, enabling consistent error
handling across the codec, token lifecycle, and request layers.

Hierarchy::

    TumblrError
    ├── DecodeError              (path, kind, issues)
    ├── EncodeError              (path)
    ├── NetworkError
    ├── AuthError
    │   ├── TokenNetworkError    (also a NetworkError)
    │   └── OAuthError           (error, code, description, uri)
    ├── ApiResponseError         (meta, errors)
    └── ConfigurationError
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from tumblr_api.api.envelope import ResponseErrorEntry, ResponseMeta


class TumblrError(Exception):
    """Base class for all tumblr-api exceptions.

    Callers can catch the entire hierarchy with a single ``except`` clause
    when they do not care which layer failed.
    """


# ---------------------------------------------------------------------------
# Codec exceptions
# ---------------------------------------------------------------------------


class DecodeErrorKind(str, Enum):
    """Reason a wire value could not be decoded.

    Attributes:
        MISSING_FIELD: A required field (or the discriminant) is absent.
        TYPE_MISMATCH: A field is present but has the wrong JSON shape.
        UNKNOWN_VARIANT: A tagged-union discriminant matched no known variant.
        UNKNOWN_FIELD: A closed-world type received a field it does not model.
        CONSTRAINT_VIOLATION: The shape is right but a rule is broken, e.g. a
            two-element array where a single-or-list-of-one is expected.
    """

    MISSING_FIELD = "missing_field"
    TYPE_MISMATCH = "type_mismatch"
    UNKNOWN_VARIANT = "unknown_variant"
    UNKNOWN_FIELD = "unknown_field"
    CONSTRAINT_VIOLATION = "constraint_violation"


@dataclass(frozen=True)
class DecodeIssue:
    """A single problem found while decoding.

    Attributes:
        path: Dotted field path, e.g. ``"content[0].media[1].url"``.
        kind: Classification of the problem.
        message: Human-readable detail.
    """

    path: str
    kind: DecodeErrorKind
    message: str


class DecodeError(TumblrError):
    """Raised when a wire JSON value cannot be decoded into a typed value.

    Decoding is all-or-nothing: no partial result accompanies this error.
    The first issue is exposed directly as ``path`` / ``kind``; every issue
    found is available in ``issues``.

    Args:
        issues: Non-empty list of problems, most relevant first.
        type_name: Name of the type being decoded (for the message).
    """

    def __init__(self, issues: list[DecodeIssue], type_name: str | None = None) -> None:
        if not issues:
            raise ValueError("DecodeError requires at least one issue")
        first = issues[0]
        where = first.path or "<root>"
        msg = f"{first.kind.value} at {where}: {first.message}"
        if type_name:
            msg = f"failed to decode {type_name}: {msg}"
        if len(issues) > 1:
            msg += f" (+{len(issues) - 1} more)"
        super().__init__(msg)
        self.issues = issues
        self.type_name = type_name
        self.path = first.path
        self.kind = first.kind


class EncodeError(TumblrError):
    """Raised when a typed value cannot be encoded to its wire shape.

    Only caller-supplied input can trigger this: oversized text fields, or an
    overflow key that collides with a modeled key.

    Args:
        message: Description of the violation.
        path: Field path of the offending value.
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(f"{message} (at {path})" if path else message)
        self.path = path


# ---------------------------------------------------------------------------
# Transport and auth exceptions
# ---------------------------------------------------------------------------


class NetworkError(TumblrError):
    """Raised on transport-level failure (DNS, connect, timeout, unreadable body)."""


class AuthError(TumblrError):
    """Base class for failures while obtaining a bearer token."""


class TokenNetworkError(AuthError, NetworkError):
    """Raised when the token exchange fails below the OAuth layer."""


class OAuthErrorCode(str, Enum):
    """OAuth 2 ``error`` codes from RFC 6749 section 5.2.

    ``UNKNOWN`` stands in for any code outside the standard enumeration;
    the raw string is kept on :class:`OAuthError` as ``error``.
    """

    INVALID_REQUEST = "invalid_request"
    INVALID_CLIENT = "invalid_client"
    INVALID_GRANT = "invalid_grant"
    UNAUTHORIZED_CLIENT = "unauthorized_client"
    UNSUPPORTED_GRANT_TYPE = "unsupported_grant_type"
    INVALID_SCOPE = "invalid_scope"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str) -> OAuthErrorCode:
        """Map a wire error code to a member, falling back to ``UNKNOWN``."""
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


class OAuthError(AuthError):
    """Raised when the token endpoint returns a structured OAuth rejection.

    Args:
        error: Raw ``error`` string from the response body.
        description: Optional ``error_description``.
        uri: Optional ``error_uri``.
    """

    def __init__(
        self,
        error: str,
        description: Optional[str] = None,
        uri: Optional[str] = None,
    ) -> None:
        msg = f"oauth error: {error}"
        if description:
            msg += f" - {description}"
        if uri:
            msg += f" ({uri})"
        super().__init__(msg)
        self.error = error
        self.code = OAuthErrorCode.parse(error)
        self.description = description
        self.uri = uri


# ---------------------------------------------------------------------------
# API-level exceptions
# ---------------------------------------------------------------------------


class ApiResponseError(TumblrError):
    """Raised when the API answers with a failure envelope.

    Args:
        meta: The response ``meta`` block (status and message).
        errors: Every ``errors[]`` entry the server reported.
    """

    def __init__(self, meta: ResponseMeta, errors: list[ResponseErrorEntry]) -> None:
        super().__init__(f"{meta.status} {meta.msg}{_format_error_entries(errors)}")
        self.meta = meta
        self.errors = errors

    @property
    def status(self) -> int:
        return self.meta.status


def _format_error_entries(errors: list[Any]) -> str:
    if not errors:
        return " (no details provided)"
    if len(errors) == 1:
        return f" - ({errors[0].code}) {errors[0].title}"
    lines = [" - causes:"]
    lines.extend(f"   - ({err.code}) {err.title}" for err in errors)
    return "\n".join(lines)


class ConfigurationError(TumblrError):
    """Raised when required settings (e.g. consumer key) are missing."""
