"""REST data source for the Catstronauts tracks API.

Single point of contact with the upstream service. Each public coroutine
performs exactly one HTTP call and returns the parsed JSON payload; failures
are raised as :class:`UpstreamError` (or :class:`NotFound` for reads).
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from ..logging import get_logger, get_request_id
from .errors import NotFound, UpstreamError

logger = get_logger(__name__)

# Status reported when the upstream is unreachable or answers with an unusable payload
BAD_GATEWAY_STATUS = 502


def _response_body(response: httpx.Response) -> str:
    """Extract the body of an upstream response as text.

    JSON string bodies (e.g. ``"Track not found"``) are unwrapped so the
    caller sees the plain message.
    """
    content_type = response.headers.get("content-type", "")
    if "json" in content_type:
        try:
            payload = response.json()
        except ValueError:
            return response.text
        if isinstance(payload, str):
            return payload
    return response.text


def _require_id(value: str, name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{name} must be a non-empty string")
    return quote(value, safe="")


class TrackAPI:
    """Typed client for the tracks, authors and modules REST resources."""

    def __init__(
        self,
        base_url: str,
        client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ):
        """
        Initialize the data source.

        Args:
            base_url: Root URL of the upstream REST API
            client: Optional shared HTTP client; when omitted every call opens its own
            timeout: Per-call timeout in seconds
        """
        self.base_url = base_url if base_url.endswith("/") else f"{base_url}/"
        self.timeout = timeout
        self._client = client

    async def get_tracks_for_home(self) -> list[dict[str, Any]]:
        """Get the tracks shown on the homepage grid, in upstream order."""
        return self._expect_list(await self._request("GET", "tracks"))

    async def get_author(self, author_id: str) -> dict[str, Any]:
        """Get a single author by ID."""
        segment = _require_id(author_id, "author_id")
        return self._expect_object(
            await self._request("GET", f"author/{segment}", resource=("author", author_id))
        )

    async def get_track(self, track_id: str) -> dict[str, Any]:
        """Get a single track by ID."""
        segment = _require_id(track_id, "track_id")
        return self._expect_object(
            await self._request("GET", f"track/{segment}", resource=("track", track_id))
        )

    async def get_track_modules(self, track_id: str) -> list[dict[str, Any]]:
        """Get the modules of a track, in upstream order. An empty list is valid."""
        segment = _require_id(track_id, "track_id")
        return self._expect_list(
            await self._request("GET", f"track/{segment}/modules", resource=("track", track_id))
        )

    async def get_module(self, module_id: str) -> dict[str, Any]:
        """Get a single module by ID."""
        segment = _require_id(module_id, "module_id")
        return self._expect_object(
            await self._request("GET", f"module/{segment}", resource=("module", module_id))
        )

    async def increment_track_views(self, track_id: str) -> dict[str, Any]:
        """Increment the view counter of a track and return the updated track.

        Not idempotent: every call mutates upstream state once.

        Raises:
            UpstreamError: For any non-success response, including 404
        """
        segment = _require_id(track_id, "track_id")
        return self._expect_object(await self._request("PATCH", f"track/{segment}/numberOfViews"))

    async def _request(
        self,
        method: str,
        path: str,
        resource: tuple[str, str] | None = None,
    ) -> Any:
        """Perform one HTTP call against the upstream API and parse its JSON body.

        Args:
            method: HTTP method
            path: Path relative to the base URL
            resource: ``(name, id)`` of the resource being read; when set, a 404
                response is raised as NotFound instead of UpstreamError

        Returns:
            The decoded JSON payload
        """
        url = f"{self.base_url}{path}"
        headers = {"Accept": "application/json"}
        if request_id := get_request_id():
            headers["X-Request-ID"] = request_id

        try:
            if self._client is not None:
                response = await self._client.request(
                    method, url, headers=headers, timeout=self.timeout
                )
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.request(
                        method, url, headers=headers, timeout=self.timeout
                    )
        except httpx.RequestError as e:
            logger.warning("Upstream request failed", method=method, url=url, error=str(e))
            raise UpstreamError(BAD_GATEWAY_STATUS, str(e) or type(e).__name__) from e

        logger.debug(
            "Upstream response", method=method, url=url, status_code=response.status_code
        )

        if response.status_code == 404 and resource is not None:
            name, resource_id = resource
            raise NotFound(name, resource_id, _response_body(response))

        if not response.is_success:
            raise UpstreamError(response.status_code, _response_body(response))

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(BAD_GATEWAY_STATUS, response.text) from e

    def _expect_list(self, payload: Any) -> list[dict[str, Any]]:
        if not isinstance(payload, list):
            raise UpstreamError(
                BAD_GATEWAY_STATUS, f"Expected a JSON array, got {type(payload).__name__}"
            )
        return payload

    def _expect_object(self, payload: Any) -> dict[str, Any]:
        if not isinstance(payload, dict):
            raise UpstreamError(
                BAD_GATEWAY_STATUS, f"Expected a JSON object, got {type(payload).__name__}"
            )
        return payload
