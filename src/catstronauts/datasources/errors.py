"""Errors raised by upstream REST data sources."""

from __future__ import annotations


class TrackAPIError(Exception):
    """Base class for failures talking to the tracks REST API."""

    pass


class UpstreamError(TrackAPIError):
    """Raised when the upstream REST API does not answer with a success status.

    Carries the upstream HTTP status code and response body so callers can
    report them without inspecting the transport response.
    """

    def __init__(self, status: int, body: str, message: str | None = None):
        self.status = status
        self.body = body
        super().__init__(message or f"Upstream request failed with status {status}: {body}")


class NotFound(UpstreamError):
    """Raised when a read operation targets a resource the upstream does not know."""

    def __init__(self, resource: str, resource_id: str, body: str = ""):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(
            404,
            body or f"{resource} {resource_id} not found",
            message=f"{resource.capitalize()} not found: {resource_id}",
        )
