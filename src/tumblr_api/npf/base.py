"""Shared Pydantic base for every Neue Post Format value type.

NPF types are immutable, closed-world values: unknown keys are rejected at
decode time, and optional fields that are absent are omitted on encode
rather than written as ``null`` (the wire service treats ``null`` and
"missing" differently for several fields).
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, SerializerFunctionWrapHandler, model_serializer


class NpfModel(BaseModel):
    """Base class for NPF wire types.

    Class Attributes:
        omit_if_empty: Field names that are omitted on encode when they hold
            an empty list, in addition to the blanket ``None`` omission.
        omit_if_unset: Defaulted field names that are omitted on encode
            unless they were given explicitly (decoded from the wire, passed
            to the constructor, or set through ``model_copy(update=...)``).
        max_lengths: Maximum character length per field, checked by
            :func:`tumblr_api.npf.codec.encode_model`.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        populate_by_name=True,
    )

    omit_if_empty: ClassVar[frozenset[str]] = frozenset()
    omit_if_unset: ClassVar[frozenset[str]] = frozenset()
    max_lengths: ClassVar[dict[str, int]] = {}

    @model_serializer(mode="wrap")
    def _serialize(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        for name, field in type(self).model_fields.items():
            value = getattr(self, name)
            if (
                value is None
                or (name in self.omit_if_empty and value == [])
                or (name in self.omit_if_unset and name not in self.model_fields_set)
            ):
                data.pop(name, None)
                if field.alias:
                    data.pop(field.alias, None)
        return data
