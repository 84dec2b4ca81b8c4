"""Geographic coordinate value type."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from pytransit.ingestion.normalize import safe_float


class Coordinate(BaseModel):
    """A WGS84 point.

    Construction rejects NaN, infinities and values outside
    ``[-90, 90]`` / ``[-180, 180]``.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        allow_inf_nan=False,
    )

    latitude: float = Field(ge=-90.0, le=90.0, validation_alias=AliasChoices("latitude", "lat", "stop_lat"))
    longitude: float = Field(
        ge=-180.0,
        le=180.0,
        validation_alias=AliasChoices("longitude", "lon", "lng", "stop_lon"),
    )

    @classmethod
    def try_parse(cls, latitude: Any, longitude: Any) -> Coordinate | None:
        """Build a coordinate from loosely-typed provider values.

        Returns ``None`` instead of raising when either value is missing,
        non-numeric or out of range.
        """
        lat = safe_float(latitude)
        lon = safe_float(longitude)
        if lat is None or lon is None:
            return None
        try:
            return cls(latitude=lat, longitude=lon)
        except ValidationError:
            return None

    def as_tuple(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)
