"""Base model for backend payloads.

Every wire model inherits from :class:`IpsasBaseModel` which provides:

* ``alias_generator=to_camel`` so the backend's camelCase keys map
  automatically to snake_case fields.
* A ``raw`` dict that captures the original payload on validation.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class IpsasBaseModel(BaseModel):
    """Base for backend request/response models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    raw: dict[str, Any] = Field(default_factory=dict, exclude=True)
    """Original backend dict."""

    @model_validator(mode="before")
    @classmethod
    def _stash_raw(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        # Keep the caller's raw= when constructing with kwargs.
        if "raw" in values:
            return values
        return {**values, "raw": dict(values)}
