"""High-level async client for the transit-data provider."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp
from pydantic import ValidationError

from pytransit._constants import ROUTE_CATALOG_CACHE_KEY
from pytransit._transport import HttpTransport, Transport
from pytransit.cache import FileStore, KeyValueStore, MemoryStore, TTLCache
from pytransit.config import TransitConfig
from pytransit.exceptions import TransitApiError, TransitError
from pytransit.fleet import ModelResolver
from pytransit.models.coordinate import Coordinate
from pytransit.models.departures import StopDepartures, parse_vehicles
from pytransit.models.stop import Stop, parse_stop_catalog
from pytransit.models.vehicle import Vehicle
from pytransit.poller import Listener, Subscription, VehiclePoller
from pytransit.proximity import ProximityResult, find_nearby, find_stop
from pytransit.routes import RouteCatalog, parse_route_catalog

_logger = logging.getLogger(__name__)


class TransitClient:
    """Async client for stops, routes and live vehicles.

    Usage::

        async with TransitClient(config) as client:
            nearby = await client.find_nearby_stops()
            sub = client.track_route("505", render)
    """

    def __init__(
        self,
        config: TransitConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        store: KeyValueStore | None = None,
        transport: Transport | None = None,
        resolver: ModelResolver | None = None,
    ) -> None:
        self._config = config if config is not None else TransitConfig()
        self._external_session = session is not None
        self._http_session = session
        self._transport = transport
        self._external_transport = transport is not None
        if store is None:
            store = FileStore(self._config.cache_dir) if self._config.cache_dir else MemoryStore()
        self._route_cache: TTLCache[RouteCatalog] = TTLCache(
            store,
            dict[str, str],
            self._config.route_cache_ttl,
        )
        self._resolver = resolver if resolver is not None else ModelResolver()
        self._stops: dict[str, Stop] | None = None
        self._route_poller = VehiclePoller(
            self.get_route_vehicles,
            resolver=self._resolver,
            interval=self._config.poll_interval,
        )
        self._stop_poller = VehiclePoller(
            self._get_stop_vehicles,
            resolver=self._resolver,
            interval=self._config.poll_interval,
        )

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> TransitClient:
        if self._transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = HttpTransport(self._http_session, timeout=self._config.request_timeout)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Stop pollers and release the HTTP session if we own it."""
        self._route_poller.stop()
        self._stop_poller.stop()
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        if not self._external_transport:
            self._transport = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise TransitError("Client not initialized. Use 'async with TransitClient(...) as client:'")
        return self._transport

    def _url(self, path: str) -> str:
        return f"{self._config.base_url.rstrip('/')}{path}"

    # ------------------------------------------------------------------
    # Stops
    # ------------------------------------------------------------------

    async def get_stops(self) -> dict[str, Stop]:
        """Stop catalog, fetched once per client and then held read-only."""
        if self._stops is None:
            raw = await self._require_transport().get_json(self._config.stops_url)
            if not isinstance(raw, dict):
                raise TransitApiError("Stop catalog is not an object", endpoint=self._config.stops_url)
            self._stops = parse_stop_catalog(raw)
            _logger.debug("Loaded %d stops", len(self._stops))
        return self._stops

    async def get_stop(self, code: str) -> Stop | None:
        return find_stop(await self.get_stops(), code)

    async def find_nearby_stops(
        self,
        center: Coordinate | None = None,
        radius_m: float | None = None,
    ) -> list[ProximityResult]:
        """Stops near *center* (default: configured fallback center)."""
        if center is None:
            lat, lon = self._config.default_center
            center = Coordinate(latitude=lat, longitude=lon)
        radius = self._config.default_radius_m if radius_m is None else radius_m
        return find_nearby(await self.get_stops(), center, radius)

    # ------------------------------------------------------------------
    # Routes
    # ------------------------------------------------------------------

    async def _fetch_routes(self) -> RouteCatalog:
        url = self._url("/routes")
        raw = await self._require_transport().get_json(url)
        if not isinstance(raw, dict):
            raise TransitApiError("Route catalog is not an object", endpoint=url)
        return parse_route_catalog(raw)

    async def get_routes(self, *, force_refresh: bool = False) -> RouteCatalog:
        """Route catalog, served from the TTL cache when fresh."""
        if force_refresh:
            self._route_cache.invalidate(ROUTE_CATALOG_CACHE_KEY)
        return await self._route_cache.get_or_fetch(ROUTE_CATALOG_CACHE_KEY, self._fetch_routes)

    # ------------------------------------------------------------------
    # Vehicles
    # ------------------------------------------------------------------

    async def get_route_vehicles(self, route: str) -> list[Vehicle]:
        url = self._url("/vehicles")
        raw = await self._require_transport().post_json(url, {"route": str(route)})
        if not isinstance(raw, dict) or not isinstance(raw.get("vehicles"), list):
            raise TransitApiError("Vehicle response has no 'vehicles' list", endpoint=url)
        return parse_vehicles(raw["vehicles"])

    async def seek_stop(self, stop: str) -> StopDepartures:
        """Routes serving *stop* and the vehicles heading to it."""
        url = self._url("/seek")
        raw = await self._require_transport().post_json(url, {"stop": str(stop)})
        if not isinstance(raw, dict):
            raise TransitApiError("Seek response is not an object", endpoint=url)
        try:
            return StopDepartures.model_validate({**raw, "stop": str(stop)})
        except ValidationError as exc:
            raise TransitApiError(f"Malformed seek response: {exc}", endpoint=url) from exc

    async def _get_stop_vehicles(self, stop: str) -> list[Vehicle]:
        return (await self.seek_stop(stop)).vehicles

    def track_route(self, route: str, listener: Listener, interval: float | None = None) -> Subscription:
        """Poll vehicles on *route*; replaces any previous route subscription."""
        return self._route_poller.start(route, listener, interval)

    def track_stop(self, stop: str, listener: Listener, interval: float | None = None) -> Subscription:
        """Poll vehicles approaching *stop*; replaces any previous stop subscription."""
        return self._stop_poller.start(stop, listener, interval)
