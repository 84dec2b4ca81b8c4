"""pytransit - Async Python client for nearby stops, routes and live vehicles."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pytransit")
except PackageNotFoundError:
    __version__ = "0+local"
from pytransit.cache import FileStore, KeyValueStore, MemoryStore, TTLCache
from pytransit.client import TransitClient
from pytransit.config import TransitConfig
from pytransit.exceptions import (
    InvalidCoordinateError,
    TransitApiError,
    TransitConfigError,
    TransitError,
    TransitTransportError,
)
from pytransit.fleet import DEFAULT_FLEET, ModelResolver
from pytransit.geo import distance
from pytransit.models import (
    UNKNOWN_MODEL,
    Adherence,
    Coordinate,
    ModelDescriptor,
    Stop,
    StopDepartures,
    TrackedVehicle,
    Vehicle,
)
from pytransit.poller import PollState, Subscription, VehiclePoller
from pytransit.proximity import ProximityResult, find_nearby, find_stop
from pytransit.routes import RouteBand, route_band, route_display_name
from pytransit.schedule import INVALID_TIME, resolve_actual
from pytransit.session import TransitSession

__all__ = [
    "__version__",
    "DEFAULT_FLEET",
    "INVALID_TIME",
    "UNKNOWN_MODEL",
    "Adherence",
    "Coordinate",
    "FileStore",
    "InvalidCoordinateError",
    "KeyValueStore",
    "MemoryStore",
    "ModelDescriptor",
    "ModelResolver",
    "PollState",
    "ProximityResult",
    "RouteBand",
    "Stop",
    "StopDepartures",
    "Subscription",
    "TTLCache",
    "TrackedVehicle",
    "TransitApiError",
    "TransitClient",
    "TransitConfig",
    "TransitConfigError",
    "TransitError",
    "TransitSession",
    "TransitTransportError",
    "Vehicle",
    "VehiclePoller",
    "distance",
    "find_nearby",
    "find_stop",
    "resolve_actual",
    "route_band",
    "route_display_name",
]
