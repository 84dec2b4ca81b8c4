"""Stop departures ("seek") response model."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import Field, ValidationError, field_validator

from pytransit.models._base import TransitBaseModel
from pytransit.models.vehicle import Vehicle

_logger = logging.getLogger(__name__)


def parse_vehicles(raw: Any) -> list[Vehicle]:
    """Validate a list of vehicle dicts, dropping the ones that fail."""
    if not isinstance(raw, list):
        return []
    vehicles: list[Vehicle] = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        try:
            vehicles.append(Vehicle.model_validate(item))
        except ValidationError:
            _logger.debug("Dropping malformed vehicle record: %s", item, exc_info=True)
    return vehicles


class StopDepartures(TransitBaseModel):
    """Routes serving a stop and the vehicles approaching it."""

    stop: str = ""
    routes: list[str] = Field(default_factory=list)
    vehicles: list[Vehicle] = Field(default_factory=list)

    @field_validator("routes", mode="before")
    @classmethod
    def _route_names(cls, value: Any) -> list[str]:
        if not isinstance(value, list):
            return []
        names: list[str] = []
        for item in value:
            name = item.get("name") if isinstance(item, dict) else item
            if name is not None and str(name).strip():
                names.append(str(name).strip())
        return names

    @field_validator("vehicles", mode="before")
    @classmethod
    def _vehicles(cls, value: Any) -> list[Vehicle]:
        return parse_vehicles(value)
