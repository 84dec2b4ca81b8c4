"""Internal constants shared across the library."""

BASE_URL = "https://api.transit.example"
STOPS_URL = "https://api.npoint.io/96cc873ccf014e5cbd0c"
USER_AGENT = "pytransit"

# Downtown Toronto, used when the rider's position is unknown.
DEFAULT_CENTER: tuple[float, float] = (43.6532, -79.3832)
DEFAULT_RADIUS_M = 2000.0

#: Mean earth radius in metres (spherical model used by Leaflet's ``distanceTo``).
EARTH_RADIUS_M = 6_371_000.0

DEFAULT_POLL_INTERVAL = 60.0
ROUTE_CATALOG_TTL = 24 * 3600.0
ROUTE_CATALOG_CACHE_KEY = "routes"

SECONDS_PER_DAY = 24 * 3600
