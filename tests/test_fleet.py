from __future__ import annotations

import logging

import pytest

from pytransit.exceptions import TransitConfigError
from pytransit.fleet import DEFAULT_FLEET, ModelResolver
from pytransit.models.fleet import UNKNOWN_MODEL, ModelDescriptor


def test_resolves_id_inside_range() -> None:
    resolver = ModelResolver({"1000-1999": {"model": "A", "charging": True}})

    assert resolver.resolve("1234") == ModelDescriptor(model="A", charging=True)


def test_bounds_are_inclusive() -> None:
    resolver = ModelResolver({"1000-1999": ModelDescriptor(model="A")})

    assert resolver.resolve("1000").model == "A"
    assert resolver.resolve("1999").model == "A"
    assert resolver.resolve("2000") is UNKNOWN_MODEL


def test_unmatched_id_returns_unknown_sentinel() -> None:
    resolver = ModelResolver({"1000-1999": {"model": "A", "charging": True}})

    result = resolver.resolve("9999")

    assert result is UNKNOWN_MODEL
    assert result.charging is False


@pytest.mark.parametrize("vehicle_id", ["", "abc", "12.5", "١٢٣٤", None])
def test_unparsable_id_returns_unknown_sentinel(vehicle_id: object) -> None:
    resolver = ModelResolver({"0-99999": {"model": "A"}})

    assert resolver.resolve(vehicle_id) is UNKNOWN_MODEL  # type: ignore[arg-type]


def test_unsorted_table_resolves_correctly() -> None:
    resolver = ModelResolver(
        {
            "8000-8099": {"model": "C"},
            "1000-1999": {"model": "A"},
            "3000-3099": {"model": "B"},
        }
    )

    assert [resolver.resolve(i).model for i in ("1500", "3050", "8001")] == ["A", "B", "C"]


def test_overlapping_ranges_first_in_table_order_wins(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="pytransit.fleet"):
        resolver = ModelResolver({"100-200": {"model": "first"}, "150-300": {"model": "second"}})

    assert resolver.resolve("175").model == "first"
    assert resolver.resolve("250").model == "second"
    assert resolver.overlaps() == [("100-200", "150-300")]
    assert "overlap" in caplog.text


def test_single_id_key() -> None:
    assert ModelResolver({"42": {"model": "Solo"}}).resolve(42).model == "Solo"


@pytest.mark.parametrize("key", ["abc", "10-", "-10", "20-10", "1-2-3"])
def test_malformed_range_key_raises(key: str) -> None:
    with pytest.raises(TransitConfigError):
        ModelResolver({key: {"model": "X"}})


def test_default_fleet_has_no_overlaps() -> None:
    resolver = ModelResolver()

    assert resolver.overlaps() == []
    assert resolver.resolve("3301") == DEFAULT_FLEET["3300-3359"]
