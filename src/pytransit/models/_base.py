"""Base model for provider payloads.

Every provider-facing model inherits from :class:`TransitBaseModel` which
provides:

* frozen instances, so parsed records can be shared between snapshots;
* ``populate_by_name`` so both the provider's keys and the Python field
  names are accepted;
* a ``raw`` dict that captures the original payload.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class TransitBaseModel(BaseModel):
    """Base for transit-provider response models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    raw: dict[str, Any] = Field(default_factory=dict, repr=False)
    """Original provider dict."""

    @model_validator(mode="before")
    @classmethod
    def _ensure_raw(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        # Only auto-stash raw when validating a provider dict; explicit raw= wins.
        if "raw" in values:
            return values
        merged = dict(values)
        merged["raw"] = values
        return merged
