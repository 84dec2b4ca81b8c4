"""Fleet model descriptor."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ModelDescriptor(BaseModel):
    """Vehicle model and whether it is a battery-electric (charging) unit."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    model: str
    charging: bool = False


UNKNOWN_MODEL = ModelDescriptor(model="Unknown", charging=False)
"""Sentinel returned for ids outside every fleet range."""
