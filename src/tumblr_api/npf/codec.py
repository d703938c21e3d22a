"""Decode/encode machinery shared by every NPF and API type.

Pydantic performs the structural validation; this module turns its
``ValidationError`` into the library's own :class:`DecodeError` (field path
plus a :class:`DecodeErrorKind`), and hosts the reusable shape-reconciliation
rules observed on the live API:

- *attribution-or-empty*: ``"attribution": []`` means "no attribution".
- *single-or-list-of-one*: a bare object and ``[object]`` are the same value.

Encoding always goes through :func:`encode_model`, which writes aliases
(``mime_type`` → ``"type"``) and enforces per-field length ceilings.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, TypeVar

from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticCustomError

from tumblr_api.core.exceptions import DecodeError, DecodeErrorKind, DecodeIssue, EncodeError

logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)

# ---------------------------------------------------------------------------
# Pydantic error translation
# ---------------------------------------------------------------------------

#: Maps pydantic-core error ``type`` strings to decode error kinds.  Anything
#: not listed is a shape problem and classifies as TYPE_MISMATCH.
_KIND_BY_ERROR_TYPE: dict[str, DecodeErrorKind] = {
    "missing": DecodeErrorKind.MISSING_FIELD,
    "union_tag_not_found": DecodeErrorKind.MISSING_FIELD,
    "union_tag_invalid": DecodeErrorKind.UNKNOWN_VARIANT,
    "enum": DecodeErrorKind.UNKNOWN_VARIANT,
    "literal_error": DecodeErrorKind.UNKNOWN_VARIANT,
    "extra_forbidden": DecodeErrorKind.UNKNOWN_FIELD,
    "value_error": DecodeErrorKind.CONSTRAINT_VIOLATION,
    "assertion_error": DecodeErrorKind.CONSTRAINT_VIOLATION,
    "greater_than_equal": DecodeErrorKind.CONSTRAINT_VIOLATION,
    "greater_than": DecodeErrorKind.CONSTRAINT_VIOLATION,
    "less_than_equal": DecodeErrorKind.CONSTRAINT_VIOLATION,
    "string_too_long": DecodeErrorKind.CONSTRAINT_VIOLATION,
    "attribution_shape": DecodeErrorKind.CONSTRAINT_VIOLATION,
    "single_or_list_of_one": DecodeErrorKind.CONSTRAINT_VIOLATION,
}


def format_path(loc: tuple[int | str, ...], prefix: str = "", data: Any = None) -> str:
    """Render a pydantic ``loc`` tuple as ``content[0].media[1].url``.

    When the raw input *data* is supplied, ``loc`` is walked alongside it so
    that segments which are not wire keys are dropped: the branch name pydantic
    inserts after a tagged-union value (``[0].text.text`` becomes
    ``[0].text``), and wrapper keys introduced by a before-validator.

    Args:
        loc: Location tuple from a pydantic error entry.
        prefix: Path of the enclosing value, if decoding a nested part.
        data: Raw input the error was raised against.

    Returns:
        The dotted/indexed path string (empty for the root).
    """
    path = prefix
    current = data
    tagged: set[int] = set()
    last = len(loc) - 1
    for position, item in enumerate(loc):
        if isinstance(current, dict) and isinstance(item, str):
            if current.get("type") == item and id(current) not in tagged:
                tagged.add(id(current))
                continue
            if item in current:
                current = current[item]
            elif position < last:
                continue
            else:
                current = None
        elif isinstance(current, list) and isinstance(item, int) and 0 <= item < len(current):
            current = current[item]
        else:
            current = None
        if isinstance(item, int):
            path += f"[{item}]"
        else:
            path += f".{item}" if path else str(item)
    return path


def issues_from_validation_error(
    exc: ValidationError, prefix: str = "", data: Any = None
) -> list[DecodeIssue]:
    """Convert every entry of a pydantic ``ValidationError`` to a DecodeIssue."""
    issues: list[DecodeIssue] = []
    for err in exc.errors(include_url=False):
        kind = _KIND_BY_ERROR_TYPE.get(err["type"], DecodeErrorKind.TYPE_MISMATCH)
        loc = tuple(err["loc"])
        if err["type"] in ("union_tag_not_found", "union_tag_invalid"):
            loc += ("type",)
        issues.append(
            DecodeIssue(
                path=format_path(loc, prefix, data),
                kind=kind,
                message=err["msg"],
            )
        )
    return issues


def decode_with(
    validate: Callable[[Any], T],
    data: Any,
    type_name: str,
    prefix: str = "",
) -> T:
    """Run a pydantic validator, translating failures to :class:`DecodeError`.

    Args:
        validate: A ``model_validate`` or ``TypeAdapter.validate_python``.
        data: Raw JSON-compatible value.
        type_name: Name used in the error message.
        prefix: Field path of *data* within a larger document.

    Returns:
        The validated value.

    Raises:
        DecodeError: If validation fails for any reason.
    """
    try:
        return validate(data)
    except ValidationError as exc:
        issues = issues_from_validation_error(exc, prefix, data)
        logger.debug("npf: decode of %s failed with %d issue(s)", type_name, len(issues))
        raise DecodeError(issues, type_name=type_name) from exc


def decode_model(model_type: type[M], data: Any) -> M:
    """Decode a JSON object into an instance of *model_type*."""
    return decode_with(model_type.model_validate, data, model_type.__name__)


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


def _check_max_lengths(value: Any, path: str) -> None:
    if isinstance(value, BaseModel):
        limits: dict[str, int] = getattr(type(value), "max_lengths", {})
        for name, field in type(value).model_fields.items():
            wire_name = field.alias or name
            field_path = f"{path}.{wire_name}" if path else wire_name
            field_value = getattr(value, name)
            limit = limits.get(name)
            if limit is not None and isinstance(field_value, str) and len(field_value) > limit:
                raise EncodeError(
                    f"{wire_name} is {len(field_value)} characters; maximum is {limit}",
                    path=field_path,
                )
            _check_max_lengths(field_value, field_path)
    elif isinstance(value, list):
        for index, item in enumerate(value):
            _check_max_lengths(item, f"{path}[{index}]")


def encode_model(model: BaseModel) -> dict[str, Any]:
    """Encode a model to its wire JSON object.

    Raises:
        EncodeError: If a string field exceeds its documented ceiling.
    """
    _check_max_lengths(model, "")
    return model.model_dump(mode="json", by_alias=True)


def encode_model_list(models: list[BaseModel]) -> list[dict[str, Any]]:
    """Encode a list of models; error paths carry the list index (``[1].caption``)."""
    _check_max_lengths(models, "")
    return [model.model_dump(mode="json", by_alias=True) for model in models]


# ---------------------------------------------------------------------------
# Shape-reconciliation rules (used as BeforeValidators)
# ---------------------------------------------------------------------------


def empty_list_as_absent(value: Any) -> Any:
    """Treat ``[]`` as "absent"; any other array is a constraint violation.

    Attributions are sent as a bare object when present, but some posts
    carry ``"attribution": []`` instead of omitting the key.
    """
    if isinstance(value, list):
        if not value:
            return None
        raise PydanticCustomError(
            "attribution_shape",
            "expected a single object or an empty array, got an array of {length} items",
            {"length": len(value)},
        )
    return value


def single_or_list_of_one(value: Any) -> Any:
    """Unwrap ``[x]`` to ``x``; arrays of any other length are rejected."""
    if isinstance(value, list):
        if len(value) == 1:
            return value[0]
        raise PydanticCustomError(
            "single_or_list_of_one",
            "expected an object or an array of exactly one object, got an array of {length}",
            {"length": len(value)},
        )
    return value
