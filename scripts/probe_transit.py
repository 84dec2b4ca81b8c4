#!/usr/bin/env python3
"""Live probe for a transit-data provider.

Loads the stop catalog, prints the stops near a point, and optionally tracks
one route for a few polling cycles.

Configuration comes from ``TRANSIT_*`` environment variables (see
``TransitConfig.from_env``); command-line flags override them.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pytransit import (  # noqa: E402
    Coordinate,
    PollState,
    TransitClient,
    TransitConfig,
    TransitError,
    route_display_name,
)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--lat", type=float, help="Center latitude (default: configured center)")
    parser.add_argument("--lon", type=float, help="Center longitude (default: configured center)")
    parser.add_argument("--radius", type=float, help="Radius in metres")
    parser.add_argument("--limit", type=int, default=10, help="Max stops to print")
    parser.add_argument("--route", help="Track this route after listing stops")
    parser.add_argument("--cycles", type=int, default=2, help="Polling cycles to print when tracking")
    parser.add_argument("--interval", type=float, help="Polling interval in seconds")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable DEBUG logging")
    return parser.parse_args(argv)


def _print_state(state: PollState, routes: dict[str, str]) -> None:
    label = route_display_name(routes, state.key)
    if state.error:
        print(f"[{label}] error: {state.error} (showing {len(state.vehicles)} cached vehicles)")
    else:
        print(f"[{label}] {len(state.vehicles)} vehicles{' (initial)' if state.is_initial else ''}")
    for tracked in state.vehicles:
        vehicle = tracked.vehicle
        print(
            f"  #{vehicle.vehicle_id:<6} {tracked.model.model:<24} -> {vehicle.destination}"
            f"  sched {vehicle.scheduled} actual {tracked.actual or '?'} ({tracked.adherence.value})"
        )


async def _run(args: argparse.Namespace) -> int:
    overrides = {}
    if args.interval is not None:
        overrides["poll_interval"] = args.interval
    config = TransitConfig.from_env(**overrides)

    async with TransitClient(config) as client:
        center = None
        if args.lat is not None and args.lon is not None:
            center = Coordinate(latitude=args.lat, longitude=args.lon)
        try:
            nearby = await client.find_nearby_stops(center, args.radius)
        except TransitError as exc:
            print(f"Failed to load stops: {exc}", file=sys.stderr)
            return 1

        print(f"{len(nearby)} stops found")
        for result in nearby[: args.limit]:
            print(f"  {result.stop.code:<8} {result.distance_m:>5} m  {result.stop.name}")

        if not args.route:
            return 0

        try:
            routes = await client.get_routes()
        except TransitError as exc:
            print(f"Route catalog unavailable: {exc}", file=sys.stderr)
            routes = {}

        done = asyncio.Event()
        seen = 0

        def on_state(state: PollState) -> None:
            nonlocal seen
            seen += 1
            _print_state(state, routes)
            if seen >= args.cycles:
                done.set()

        client.track_route(args.route, on_state)
        await done.wait()
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    return asyncio.run(_run(args))


if __name__ == "__main__":
    raise SystemExit(main())
