"""Typed entities for transit-provider data."""

from pytransit.models.coordinate import Coordinate
from pytransit.models.departures import StopDepartures, parse_vehicles
from pytransit.models.fleet import UNKNOWN_MODEL, ModelDescriptor
from pytransit.models.stop import Stop, parse_stop, parse_stop_catalog
from pytransit.models.vehicle import Adherence, TrackedVehicle, Vehicle

__all__ = [
    "UNKNOWN_MODEL",
    "Adherence",
    "Coordinate",
    "ModelDescriptor",
    "Stop",
    "StopDepartures",
    "TrackedVehicle",
    "Vehicle",
    "parse_stop",
    "parse_stop_catalog",
    "parse_vehicles",
]
