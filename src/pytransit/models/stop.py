"""Stop model and stop-catalog boundary validation."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from pytransit.ingestion.normalize import safe_str
from pytransit.models.coordinate import Coordinate

_logger = logging.getLogger(__name__)


class Stop(BaseModel):
    """A boarding location identified by its stop code.

    Parameters
    ----------
    code : str
        Unique stop code (the catalog key).
    name : str
        Display name, ``""`` when the provider omitted it.
    location : Coordinate or None
        ``None`` when the provider sent missing or non-numeric coordinates.
        Such stops can still be looked up by code but are never "nearby".
    """

    model_config = ConfigDict(frozen=True)

    code: str = Field(min_length=1)
    name: str = ""
    location: Coordinate | None = None


def parse_stop(code: Any, entry: Any) -> Stop | None:
    """Validate one catalog entry (``{stop_name, stop_lat, stop_lon}``)."""
    stop_code = safe_str(code)
    if stop_code is None or not isinstance(entry, dict):
        return None
    location = Coordinate.try_parse(entry.get("stop_lat"), entry.get("stop_lon"))
    if location is None:
        _logger.debug("Stop %s has no usable coordinates", stop_code)
    return Stop(code=stop_code, name=safe_str(entry.get("stop_name")) or "", location=location)


def parse_stop_catalog(raw: Any) -> dict[str, Stop]:
    """Validate a provider stop catalog into ``{code: Stop}``.

    Catalog order is preserved.  Entries that are not objects are dropped;
    entries with bad coordinates are kept with ``location=None``.
    """
    if not isinstance(raw, dict):
        return {}
    stops: dict[str, Stop] = {}
    skipped = 0
    for code, entry in raw.items():
        stop = parse_stop(code, entry)
        if stop is None:
            skipped += 1
            continue
        stops[stop.code] = stop
    if skipped:
        _logger.debug("Skipped %d malformed stop catalog entries", skipped)
    return stops
