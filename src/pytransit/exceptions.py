"""Custom exception hierarchy for pytransit."""

from __future__ import annotations


class TransitError(Exception):
    """Base exception for all pytransit errors."""


class TransitConfigError(TransitError):
    """Invalid or missing configuration."""


class TransitTransportError(TransitError):
    """HTTP-level failure (network, non-200, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class TransitApiError(TransitError):
    """Provider answered, but not with the shape the endpoint promises."""

    def __init__(self, message: str, *, endpoint: str = "") -> None:
        self.endpoint = endpoint
        super().__init__(message)


class InvalidCoordinateError(TransitError, ValueError):
    """A coordinate is non-finite or outside the valid lat/lon range."""
