"""Per-rider session context.

Holds what a host UI would otherwise keep in ambient globals (theme,
whether the location prompt was dismissed, the rider's position).  The host
creates one at session start and replaces it with the updated copies the
methods return.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from pytransit._constants import DEFAULT_CENTER, DEFAULT_RADIUS_M
from pytransit.config import TransitConfig
from pytransit.models.coordinate import Coordinate

Theme = Literal["light", "dark"]


class TransitSession(BaseModel):
    """Immutable rider session state.

    Parameters
    ----------
    theme : {"light", "dark"}
        Colour theme chosen by the rider.
    location_prompt_dismissed : bool
        Whether the "enable location?" prompt has been answered.
    position : Coordinate or None
        Rider position, ``None`` when location is off or denied.
    radius_m : float
        Proximity radius in metres.
    fallback_center : Coordinate
        Map center used while ``position`` is unknown.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    theme: Theme = "light"
    location_prompt_dismissed: bool = False
    position: Coordinate | None = None
    radius_m: float = Field(default=DEFAULT_RADIUS_M, ge=0)
    fallback_center: Coordinate = Field(
        default_factory=lambda: Coordinate(latitude=DEFAULT_CENTER[0], longitude=DEFAULT_CENTER[1])
    )

    @classmethod
    def from_config(cls, config: TransitConfig) -> TransitSession:
        lat, lon = config.default_center
        return cls(
            radius_m=config.default_radius_m,
            fallback_center=Coordinate(latitude=lat, longitude=lon),
        )

    @property
    def center(self) -> Coordinate:
        """Rider position if known, else the fallback center."""
        return self.position if self.position is not None else self.fallback_center

    @property
    def has_position(self) -> bool:
        return self.position is not None

    def toggle_theme(self) -> TransitSession:
        return self.model_copy(update={"theme": "dark" if self.theme == "light" else "light"})

    def dismiss_prompt(self) -> TransitSession:
        return self.model_copy(update={"location_prompt_dismissed": True})

    def with_position(self, position: Coordinate | None) -> TransitSession:
        """Record a located position, or ``None`` when location was denied."""
        return self.model_copy(update={"position": position, "location_prompt_dismissed": True})

    def with_radius(self, radius_m: float) -> TransitSession:
        return self.model_validate({**self.model_dump(), "radius_m": radius_m})
