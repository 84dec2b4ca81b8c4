from __future__ import annotations

import math

import pytest
from pydantic import ValidationError

from pytransit.exceptions import InvalidCoordinateError
from pytransit.geo import distance
from pytransit.models.coordinate import Coordinate

TORONTO = Coordinate(latitude=43.6532, longitude=-79.3832)
MONTREAL = Coordinate(latitude=45.5019, longitude=-73.5674)


def test_distance_to_self_is_zero() -> None:
    assert distance(TORONTO, TORONTO) == 0.0


def test_distance_is_symmetric() -> None:
    assert distance(TORONTO, MONTREAL) == pytest.approx(distance(MONTREAL, TORONTO))


def test_one_degree_of_longitude_on_equator() -> None:
    a = Coordinate(latitude=0.0, longitude=0.0)
    b = Coordinate(latitude=0.0, longitude=1.0)
    expected = 2 * math.pi * 6_371_000.0 / 360
    assert distance(a, b) == pytest.approx(expected, rel=1e-9)


def test_city_scale_distance() -> None:
    # Toronto -> Montreal is roughly 505 km great-circle.
    assert distance(TORONTO, MONTREAL) == pytest.approx(504_000, rel=0.01)


def test_antipodal_points_are_finite() -> None:
    a = Coordinate(latitude=0.0, longitude=0.0)
    b = Coordinate(latitude=0.0, longitude=180.0)
    assert distance(a, b) == pytest.approx(math.pi * 6_371_000.0)


def test_nan_coordinate_rejected_at_construction() -> None:
    with pytest.raises(ValidationError):
        Coordinate(latitude=float("nan"), longitude=0.0)


def test_out_of_range_coordinate_rejected_at_construction() -> None:
    with pytest.raises(ValidationError):
        Coordinate(latitude=91.0, longitude=0.0)
    with pytest.raises(ValidationError):
        Coordinate(latitude=0.0, longitude=-180.5)


def test_distance_rejects_unvalidated_nan() -> None:
    bad = Coordinate.model_construct(latitude=float("nan"), longitude=0.0)
    with pytest.raises(InvalidCoordinateError):
        distance(bad, TORONTO)


def test_try_parse_accepts_numeric_strings() -> None:
    point = Coordinate.try_parse("43.65", " -79.38 ")
    assert point == Coordinate(latitude=43.65, longitude=-79.38)


@pytest.mark.parametrize(
    ("lat", "lon"),
    [(None, 1.0), ("abc", 1.0), ("", "2"), (95, 0), (float("nan"), 0), (True, 0)],
)
def test_try_parse_returns_none_for_bad_values(lat: object, lon: object) -> None:
    assert Coordinate.try_parse(lat, lon) is None
