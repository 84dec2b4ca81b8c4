"""Nearby-stop filtering around a reference point."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from pytransit.exceptions import InvalidCoordinateError
from pytransit.geo import distance
from pytransit.models.coordinate import Coordinate
from pytransit.models.stop import Stop, parse_stop_catalog

_logger = logging.getLogger(__name__)


class ProximityResult(BaseModel):
    """A stop within the search radius and its distance in whole metres."""

    model_config = ConfigDict(frozen=True)

    stop: Stop
    distance_m: int = Field(ge=0)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _as_stops(stops: Iterable[Stop] | Mapping[str, Any]) -> Iterable[Any]:
    if isinstance(stops, Mapping):
        # Already-parsed catalogs ({code: Stop}) and raw provider catalogs both arrive as mappings.
        values = list(stops.values())
        if all(isinstance(v, Stop) for v in values):
            return values
        return parse_stop_catalog(dict(stops)).values()
    return stops


def find_nearby(
    stops: Iterable[Stop] | Mapping[str, Any],
    center: Coordinate,
    radius_m: float,
) -> list[ProximityResult]:
    """Return the stops within *radius_m* metres of *center*, nearest first.

    A stop exactly on the radius is included; the comparison uses the
    unrounded distance.  Stops without a usable location are skipped.
    Equal distances keep catalog order.

    Raises
    ------
    InvalidCoordinateError
        If *center* is not a valid coordinate.
    """
    if not isinstance(center, Coordinate):
        raise InvalidCoordinateError(f"center must be a Coordinate, got {type(center).__name__}")
    # Validate once up front so a bad center is never mistaken for a bad stop.
    distance(center, center)

    matches: list[tuple[float, Stop]] = []
    skipped = 0
    for stop in _as_stops(stops):
        if not isinstance(stop, Stop) or stop.location is None:
            skipped += 1
            continue
        try:
            meters = distance(center, stop.location)
        except InvalidCoordinateError:
            skipped += 1
            continue
        if math.isfinite(meters) and meters <= radius_m:
            matches.append((meters, stop))

    if skipped:
        _logger.debug("Skipped %d stops without usable coordinates", skipped)

    # sort() is stable, so equal distances keep catalog order.
    matches.sort(key=lambda item: item[0])
    _logger.debug("Found %d stops within %sm", len(matches), radius_m)
    return [ProximityResult(stop=stop, distance_m=_round_half_up(meters)) for meters, stop in matches]


def find_stop(stops: Iterable[Stop] | Mapping[str, Any], code: str) -> Stop | None:
    """Look up a stop by code; ``None`` when the catalog has no such stop."""
    wanted = str(code).strip()
    if isinstance(stops, Mapping):
        found = stops.get(wanted)
        if isinstance(found, Stop):
            return found
    for stop in _as_stops(stops):
        if isinstance(stop, Stop) and stop.code == wanted:
            return stop
    return None
