"""Recurring live-vehicle polling.

A :class:`VehiclePoller` owns at most one :class:`Subscription` at a time.
Each subscription fetches immediately, then again on a fixed cadence, and
hands every result to its listener as an immutable :class:`PollState`.

State rules:

* before the first response the subscription reports ``is_loading``; this
  state is readable from :attr:`Subscription.state` but never emitted;
* the first emission carries ``is_initial=True``, all later ones ``False``;
* a failed fetch keeps the last-known-good vehicles and sets ``error``;
* after :meth:`Subscription.dispose` nothing is emitted, even if a fetch
  that was already running completes.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence

from pydantic import BaseModel, ConfigDict

from pytransit._constants import DEFAULT_POLL_INTERVAL
from pytransit.exceptions import TransitError
from pytransit.fleet import ModelResolver
from pytransit.models.vehicle import TrackedVehicle, Vehicle
from pytransit.schedule import adherence, parse_delay, resolve_actual

_logger = logging.getLogger(__name__)

Fetch = Callable[[str], Awaitable[Sequence[Vehicle]]]
Listener = Callable[["PollState"], None]


class PollState(BaseModel):
    """Snapshot handed to the listener after every fetch."""

    model_config = ConfigDict(frozen=True)

    key: str
    vehicles: tuple[TrackedVehicle, ...] = ()
    is_loading: bool = False
    is_initial: bool = False
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


def track_vehicle(vehicle: Vehicle, resolver: ModelResolver) -> TrackedVehicle:
    """Attach actual time, signed delay and fleet model to *vehicle*."""
    actual = resolve_actual(vehicle.scheduled, vehicle.delay) or vehicle.actual
    return TrackedVehicle(
        vehicle=vehicle,
        actual=actual,
        delay_seconds=parse_delay(vehicle.delay),
        adherence=adherence(vehicle.delay),
        model=resolver.resolve(vehicle.vehicle_id),
    )


class Subscription:
    """Handle for one polling cycle; call :meth:`dispose` to stop it."""

    def __init__(
        self,
        key: str,
        fetch: Fetch,
        listener: Listener,
        *,
        resolver: ModelResolver,
        interval: float,
    ) -> None:
        self._key = key
        self._fetch = fetch
        self._listener = listener
        self._resolver = resolver
        self._interval = interval
        self._state = PollState(key=key, is_loading=True)
        self._emissions = 0
        self._active = True
        self._timer: asyncio.Task[None] | None = None
        self._inflight: asyncio.Task[None] | None = None

    @property
    def key(self) -> str:
        return self._key

    @property
    def state(self) -> PollState:
        """Latest state; ``is_loading`` until the first fetch completes."""
        return self._state

    @property
    def active(self) -> bool:
        return self._active

    def _start(self) -> None:
        self._timer = asyncio.get_running_loop().create_task(self._run())

    def dispose(self) -> None:
        """Stop polling.  Safe to call more than once."""
        if not self._active:
            return
        self._active = False
        for task in (self._timer, self._inflight):
            if task is not None and not task.done():
                task.cancel()
        self._timer = None
        self._inflight = None
        _logger.debug("Disposed vehicle subscription for %s", self._key)

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        next_tick = loop.time()
        while self._active:
            if self._inflight is None or self._inflight.done():
                self._inflight = loop.create_task(self._poll_once())
            else:
                _logger.debug("Fetch for %s still running, skipping tick", self._key)
            next_tick += self._interval
            now = loop.time()
            # Fixed wall-clock cadence; ticks missed while the loop was busy are dropped.
            while next_tick <= now:
                next_tick += self._interval
            await asyncio.sleep(next_tick - now)

    async def _poll_once(self) -> None:
        try:
            vehicles = await self._fetch(self._key)
        except TransitError as exc:
            if self._active:
                _logger.warning("Vehicle poll for %s failed: %s", self._key, exc)
                self._fail(str(exc) or type(exc).__name__)
            return
        except Exception as exc:
            if self._active:
                _logger.warning("Vehicle poll for %s failed unexpectedly", self._key, exc_info=True)
                self._fail(str(exc) or type(exc).__name__)
            return

        if not self._active:
            _logger.debug("Discarding late response for %s", self._key)
            return
        tracked = tuple(track_vehicle(vehicle, self._resolver) for vehicle in vehicles)
        self._emit(PollState(key=self._key, vehicles=tracked, is_initial=self._emissions == 0))

    def _fail(self, message: str) -> None:
        # Keep whatever was last shown; a failed first fetch has nothing to keep.
        self._emit(
            PollState(
                key=self._key,
                vehicles=self._state.vehicles,
                is_initial=self._emissions == 0,
                error=message,
            )
        )

    def _emit(self, state: PollState) -> None:
        self._state = state
        self._emissions += 1
        try:
            self._listener(state)
        except Exception:
            _logger.warning("Vehicle listener for %s raised", self._key, exc_info=True)


class VehiclePoller:
    """Poll live vehicles for one route or stop key at a time.

    Usage::

        poller = VehiclePoller(client.get_route_vehicles)
        sub = poller.start("505", render)
        ...
        sub.dispose()

    Parameters
    ----------
    fetch : callable
        ``async fetch(key) -> Sequence[Vehicle]``.  Transit errors it raises
        become ``PollState.error``.
    resolver : ModelResolver or None
        Fleet lookup; defaults to :data:`pytransit.fleet.DEFAULT_FLEET`.
    interval : float
        Default seconds between fetches.
    """

    def __init__(
        self,
        fetch: Fetch,
        *,
        resolver: ModelResolver | None = None,
        interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self._fetch = fetch
        self._resolver = resolver if resolver is not None else ModelResolver()
        self._interval = interval
        self._current: Subscription | None = None

    @property
    def current(self) -> Subscription | None:
        return self._current

    def start(self, key: str, listener: Listener, interval: float | None = None) -> Subscription:
        """Begin polling *key*, replacing any running subscription.

        Must be called from a running event loop.  The new subscription
        starts over in the loading state.
        """
        period = self._interval if interval is None else interval
        if period <= 0:
            raise ValueError(f"interval must be positive, got {period}")
        self.stop()
        subscription = Subscription(
            str(key),
            self._fetch,
            listener,
            resolver=self._resolver,
            interval=period,
        )
        subscription._start()
        self._current = subscription
        _logger.debug("Polling vehicles for %s every %ss", key, period)
        return subscription

    def stop(self) -> None:
        if self._current is not None:
            self._current.dispose()
            self._current = None
