"""Great-circle distance."""

from __future__ import annotations

import math

from pytransit._constants import EARTH_RADIUS_M
from pytransit.exceptions import InvalidCoordinateError
from pytransit.models.coordinate import Coordinate


def _checked_radians(point: Coordinate) -> tuple[float, float]:
    lat, lon = point.latitude, point.longitude
    if not (math.isfinite(lat) and math.isfinite(lon)) or not (-90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0):
        raise InvalidCoordinateError(f"invalid coordinate ({lat}, {lon})")
    return math.radians(lat), math.radians(lon)


def distance(a: Coordinate, b: Coordinate) -> float:
    """Haversine distance between *a* and *b* in metres.

    Raises :class:`InvalidCoordinateError` for non-finite or out-of-range
    points (only reachable through ``Coordinate.model_construct``).
    """
    lat1, lon1 = _checked_radians(a)
    lat2, lon2 = _checked_radians(b)
    sin_dlat = math.sin((lat2 - lat1) / 2)
    sin_dlon = math.sin((lon2 - lon1) / 2)
    h = sin_dlat * sin_dlat + math.cos(lat1) * math.cos(lat2) * sin_dlon * sin_dlon
    # Rounding can push h a hair past 1 for antipodal points.
    h = min(1.0, h)
    return 2 * EARTH_RADIUS_M * math.asin(math.sqrt(h))
