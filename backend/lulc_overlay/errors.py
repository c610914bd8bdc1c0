"""Request failure kinds and the HTTP status each one maps to."""

from __future__ import annotations


class OverlayError(Exception):
    """Base class for failures surfaced to API clients."""

    status_code = 500
    error = "Server error"

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class BadRequest(OverlayError):
    status_code = 400
    error = "Provide state and/or village"


class NotFound(OverlayError):
    status_code = 404
    error = "Not found"


class UpstreamError(OverlayError):
    """A remote ArcGIS service failed, timed out or returned an error payload."""

    status_code = 502
    error = "Upstream error"
