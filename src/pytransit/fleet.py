"""Vehicle model lookup by fleet-number range."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pytransit.exceptions import TransitConfigError
from pytransit.ingestion.normalize import safe_int
from pytransit.models.fleet import UNKNOWN_MODEL, ModelDescriptor

_logger = logging.getLogger(__name__)

# Fleet numbers are inclusive ranges.
DEFAULT_FLEET: dict[str, ModelDescriptor] = {
    "1000-1149": ModelDescriptor(model="Orion VII NG Hybrid", charging=False),
    "3100-3109": ModelDescriptor(model="New Flyer XE40", charging=True),
    "3300-3359": ModelDescriptor(model="BYD K9M", charging=True),
    "3700-3724": ModelDescriptor(model="Proterra Catalyst BE40", charging=True),
    "8000-8099": ModelDescriptor(model="Nova Bus LFS", charging=False),
    "8100-8396": ModelDescriptor(model="Nova Bus LFS Smart Bus", charging=False),
    "8400-8591": ModelDescriptor(model="Nova Bus LFS", charging=False),
    "8700-8799": ModelDescriptor(model="New Flyer XD40", charging=False),
}


def parse_range(key: str) -> tuple[int, int]:
    """Parse ``"start-end"`` (or a single id) into inclusive bounds."""
    text = str(key).strip()
    start_text, sep, end_text = text.partition("-")
    start = safe_int(start_text)
    end = safe_int(end_text) if sep else start
    if start is None or end is None or start_text[:1] in ("+", "-") or end_text[:1] in ("+", "-"):
        raise TransitConfigError(f"invalid fleet range {key!r}")
    if end < start:
        raise TransitConfigError(f"fleet range {key!r} ends before it starts")
    return start, end


class ModelResolver:
    """Resolve vehicle ids to :class:`ModelDescriptor` via a range table.

    The table maps ``"start-end"`` keys to descriptors (or ``{model,
    charging}`` dicts).  Lookup returns the first range in table order
    that contains the id.  Ranges are meant to be disjoint; overlapping
    ranges are tolerated with a warning and the first one wins, see
    :meth:`overlaps`.
    """

    def __init__(self, table: Mapping[str, ModelDescriptor | Mapping[str, Any]] | None = None) -> None:
        source = DEFAULT_FLEET if table is None else table
        self._ranges: list[tuple[int, int, ModelDescriptor]] = []
        for key, descriptor in source.items():
            start, end = parse_range(key)
            if not isinstance(descriptor, ModelDescriptor):
                descriptor = ModelDescriptor.model_validate(descriptor)
            self._ranges.append((start, end, descriptor))
        for first, second in self.overlaps():
            _logger.warning("Fleet ranges %s and %s overlap; %s wins", first, second, first)

    def overlaps(self) -> list[tuple[str, str]]:
        """Pairs of overlapping ranges, each as ``"start-end"`` in table order."""
        found: list[tuple[str, str]] = []
        for i, (start_a, end_a, _) in enumerate(self._ranges):
            for start_b, end_b, _ in self._ranges[i + 1 :]:
                if start_a <= end_b and start_b <= end_a:
                    found.append((f"{start_a}-{end_a}", f"{start_b}-{end_b}"))
        return found

    def resolve(self, vehicle_id: str | int) -> ModelDescriptor:
        """Descriptor for *vehicle_id*, or :data:`UNKNOWN_MODEL`."""
        number = safe_int(vehicle_id)
        if number is None:
            return UNKNOWN_MODEL
        for start, end, descriptor in self._ranges:
            if start <= number <= end:
                return descriptor
        return UNKNOWN_MODEL
