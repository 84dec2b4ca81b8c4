"""Route catalog helpers."""

from __future__ import annotations

import enum
import logging
from typing import Any

from pytransit.ingestion.normalize import safe_int, safe_str

_logger = logging.getLogger(__name__)

RouteCatalog = dict[str, str]
"""Route number -> display name."""


class RouteBand(enum.Enum):
    """Service family implied by the route number, with its display colour."""

    REGULAR = ("regular", None)
    SEASONAL = ("seasonal", "#ec4899")
    NIGHT = ("night", "#3b82f6")
    EXPRESS = ("express", "#10b981")

    def __init__(self, label: str, color: str | None) -> None:
        self.label = label
        self.color = color


_BANDS: tuple[tuple[int, int, RouteBand], ...] = (
    (200, 299, RouteBand.SEASONAL),
    (300, 399, RouteBand.NIGHT),
    (900, 999, RouteBand.EXPRESS),
)


def parse_route_catalog(raw: Any) -> RouteCatalog:
    """Validate a provider route catalog (``{number: name}``)."""
    if not isinstance(raw, dict):
        return {}
    catalog: RouteCatalog = {}
    for number, name in raw.items():
        key = safe_str(number)
        if key is None:
            continue
        catalog[key] = safe_str(name) or ""
    if len(catalog) != len(raw):
        _logger.debug("Dropped %d route catalog entries", len(raw) - len(catalog))
    return catalog


def route_display_name(catalog: RouteCatalog, number: str) -> str:
    """Catalog name for *number*, falling back to ``"Route <number>"``."""
    return catalog.get(str(number)) or f"Route {number}"


def sorted_route_numbers(catalog: RouteCatalog) -> list[str]:
    """Route numbers in numeric order; non-numeric numbers sort last, by text."""

    def key(number: str) -> tuple[int, int, str]:
        parsed = safe_int(number)
        if parsed is None:
            return (1, 0, number)
        return (0, parsed, number)

    return sorted(catalog, key=key)


def route_band(number: str | int) -> RouteBand:
    parsed = safe_int(number)
    if parsed is None:
        return RouteBand.REGULAR
    for start, end, band in _BANDS:
        if start <= parsed <= end:
            return band
    return RouteBand.REGULAR
