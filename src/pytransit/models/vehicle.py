"""Live vehicle models."""

from __future__ import annotations

import enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from pytransit.ingestion.normalize import safe_str
from pytransit.models._base import TransitBaseModel
from pytransit.models.coordinate import Coordinate
from pytransit.models.fleet import ModelDescriptor


class Vehicle(TransitBaseModel):
    """A vehicle as reported by the vehicle-by-route or seek endpoints.

    String fields fall back to ``""`` when absent.  ``scheduled`` and
    ``delay`` are kept verbatim; see :mod:`pytransit.schedule` for the
    arithmetic.
    """

    vehicle_id: str = Field(default="", validation_alias=AliasChoices("vehicle_id", "vehicle_number", "vehicleId", "id"))
    route: str = ""
    branch: str = ""
    destination: str = ""
    location: Coordinate | None = None
    scheduled: str = ""
    """Scheduled time, ``HH:MM:SS``."""
    delay: str = ""
    """Signed schedule offset, ``±MM:SS``."""
    actual: str = ""
    """Provider-computed actual time (seek responses only)."""

    @model_validator(mode="before")
    @classmethod
    def _extract_location(cls, values: Any) -> Any:
        if not isinstance(values, dict) or isinstance(values.get("location"), (Coordinate, dict)):
            return values
        merged = dict(values)
        lat = next((values[k] for k in ("lat", "latitude") if k in values), None)
        lon = next((values[k] for k in ("lon", "lng", "longitude") if k in values), None)
        merged["location"] = Coordinate.try_parse(lat, lon)
        merged.setdefault("raw", values)
        return merged

    @field_validator("location", mode="before")
    @classmethod
    def _coerce_location(cls, value: Any) -> Coordinate | None:
        if isinstance(value, dict):
            return Coordinate.try_parse(
                value.get("latitude", value.get("lat")),
                value.get("longitude", value.get("lon", value.get("lng"))),
            )
        return value

    @field_validator(
        "vehicle_id",
        "route",
        "branch",
        "destination",
        "scheduled",
        "delay",
        "actual",
        mode="before",
    )
    @classmethod
    def _coerce_str(cls, value: Any) -> str:
        return safe_str(value) or ""


class Adherence(enum.StrEnum):
    """Schedule adherence derived from the delay string."""

    EARLY = "early"
    ON_TIME = "on_time"
    LATE = "late"
    UNKNOWN = "unknown"


class TrackedVehicle(BaseModel):
    """Render-ready vehicle produced by the poller.

    Parameters
    ----------
    vehicle : Vehicle
        The provider record.
    actual : str
        Resolved ``HH:MM:SS`` actual time, ``""`` when it could not be
        computed from either the schedule or the provider.
    delay_seconds : int or None
        Signed offset applied to the scheduled time (negative = early,
        positive = late).  ``None`` when the delay is unparsable.
    adherence : Adherence
        Early / on time / late classification of ``delay_seconds``.
    model : ModelDescriptor
        Fleet model resolved from the vehicle id.
    """

    model_config = ConfigDict(frozen=True)

    vehicle: Vehicle
    actual: str = ""
    delay_seconds: int | None = None
    adherence: Adherence = Adherence.UNKNOWN
    model: ModelDescriptor

    @property
    def vehicle_id(self) -> str:
        return self.vehicle.vehicle_id
