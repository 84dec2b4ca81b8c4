"""Schedule-adherence time arithmetic.

Times are ``HH:MM:SS`` clock strings; delays are ``±MM:SS`` offsets where a
leading ``+`` means the vehicle is running early and ``-`` means late::

    >>> resolve_actual("12:00:00", "+02:00")
    '11:58:00'
    >>> resolve_actual("12:00:00", "-01:30")
    '12:01:30'

The magnitude is ``minutes * 60 + seconds``.  The provider writes a zero
minutes field without a usable sign, so a ``-`` only marks the delay late
when the minutes field is nonzero; ``"-00:20"`` reads as 20 seconds early.

Nothing here raises on malformed input: unparsable values resolve to
:data:`INVALID_TIME` (or ``None`` for the numeric helpers).
"""

from __future__ import annotations

from pytransit._constants import SECONDS_PER_DAY
from pytransit.ingestion.normalize import safe_int
from pytransit.models.vehicle import Adherence

INVALID_TIME = ""
"""Sentinel for a time that could not be computed."""


def _unsigned(text: str) -> int | None:
    if text[:1] in ("+", "-"):
        return None
    return safe_int(text)


def parse_clock(value: str) -> int | None:
    """Seconds since midnight for ``HH:MM:SS``; ``None`` if malformed.

    Minutes and seconds must be below 60.  Hours are unbounded and wrap
    when formatted.
    """
    parts = str(value).strip().split(":")
    if len(parts) != 3:
        return None
    fields = [_unsigned(part) for part in parts]
    if any(field is None for field in fields):
        return None
    hours, minutes, seconds = fields
    if minutes >= 60 or seconds >= 60:  # type: ignore[operator]
        return None
    return hours * 3600 + minutes * 60 + seconds  # type: ignore[operator]


def format_clock(total_seconds: int) -> str:
    """Format seconds as ``HH:MM:SS``, wrapping modulo 24 hours."""
    total = total_seconds % SECONDS_PER_DAY
    hours = total // 3600
    minutes = (total % 3600) // 60
    seconds = total % 60
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def parse_delay(value: str) -> int | None:
    """Signed seconds to add to the scheduled time, ``None`` if malformed.

    ``"+02:00"`` (two minutes early) gives ``-120``; ``"-01:30"`` gives
    ``90``.  An unsigned delay reads as ``+``.
    """
    text = str(value).strip()
    parts = text.split(":")
    if len(parts) != 2:
        return None
    minutes = safe_int(parts[0])
    seconds = _unsigned(parts[1])
    if minutes is None or seconds is None:
        return None
    magnitude = abs(minutes) * 60 + seconds
    # A zero minutes field carries no sign.
    late = parts[0].lstrip()[:1] == "-" and minutes != 0
    return magnitude if late else -magnitude


def resolve_actual(scheduled: str, delay: str) -> str:
    """Apply *delay* to *scheduled* and return the actual ``HH:MM:SS``.

    Returns :data:`INVALID_TIME` when either input is unparsable.
    """
    base = parse_clock(scheduled)
    offset = parse_delay(delay)
    if base is None or offset is None:
        return INVALID_TIME
    return format_clock(base + offset)


def adherence(delay: str) -> Adherence:
    """Classify *delay* as early, on time or late; ``UNKNOWN`` if unparsable."""
    offset = parse_delay(delay)
    if offset is None:
        return Adherence.UNKNOWN
    if offset < 0:
        return Adherence.EARLY
    if offset > 0:
        return Adherence.LATE
    return Adherence.ON_TIME
