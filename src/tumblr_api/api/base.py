"""Base for API payload types that must survive additive wire changes."""

from __future__ import annotations

from typing import Any

from pydantic import ConfigDict

from tumblr_api.npf.base import NpfModel


class ApiModel(NpfModel):
    """An NPF-style model that keeps unknown keys instead of rejecting them.

    Keys the model does not declare are stored by pydantic as extras and
    written back verbatim on encode, so fields added by the service are
    never silently dropped.
    """

    model_config = ConfigDict(extra="allow")

    @property
    def other_fields(self) -> dict[str, Any]:
        """Keys present on the wire that no declared field captured."""
        return dict(self.model_extra or {})
