"""
Shared pytest fixtures and configuration for all tests.
"""

import os
from collections.abc import AsyncGenerator, Generator
from copy import deepcopy
from typing import Any
from urllib.parse import unquote

import httpx
import pytest
import pytest_asyncio

from catstronauts.datasources.track_api import TrackAPI

BASE_URL = "http://tracks.test/"

TRACKS = [
    {
        "id": "c_0",
        "title": "Splish splash: how cats take baths",
        "authorId": "cat-1",
        "thumbnail": "https://res.cloudinary.com/apollographql/image/upload/splash.jpg",
        "length": 1210,
        "modulesCount": 2,
        "description": "Cats are notoriously clean creatures.",
        "numberOfViews": 12,
    },
    {
        "id": "c_1",
        "title": "Kitty space suits",
        "authorId": "cat-2",
        "thumbnail": "https://res.cloudinary.com/apollographql/image/upload/suits.jpg",
        "length": 2377,
        "modulesCount": 1,
        "description": "Every kitty needs a suit.",
        "numberOfViews": 4,
    },
    {
        "id": "c_2",
        "title": "Cat-stronomy, an introduction",
        "authorId": "cat-1",
        "thumbnail": "https://res.cloudinary.com/apollographql/image/upload/stars.jpg",
        "length": 600,
        "modulesCount": 0,
        "description": "Look up.",
        "numberOfViews": 0,
    },
]

AUTHORS = [
    {"id": "cat-1", "name": "Henri, le Chat Noir", "photo": "https://images.test/henri.jpg"},
    {"id": "cat-2", "name": "Grumpy Cat", "photo": "https://images.test/grumpy.jpg"},
]

MODULES = [
    {
        "id": "l_0",
        "trackId": "c_0",
        "title": "Bath time basics",
        "length": 300,
        "content": "Lick, repeat.",
        "videoUrl": "https://videos.test/l_0.mp4",
    },
    {
        "id": "l_1",
        "trackId": "c_0",
        "title": "Advanced grooming",
        "length": 910,
        "content": "Behind the ears.",
        "videoUrl": "https://videos.test/l_1.mp4",
    },
    {
        "id": "l_2",
        "trackId": "c_1",
        "title": "Suit sizing",
        "length": 2377,
        "content": "Measure twice.",
        "videoUrl": "https://videos.test/l_2.mp4",
    },
]


class FakeTracksUpstream:
    """In-memory stand-in for the tracks REST API, served through httpx.MockTransport."""

    def __init__(
        self,
        tracks: list[dict[str, Any]] | None = None,
        authors: list[dict[str, Any]] | None = None,
        modules: list[dict[str, Any]] | None = None,
    ):
        self.tracks = deepcopy(TRACKS if tracks is None else tracks)
        self.authors = {a["id"]: a for a in deepcopy(AUTHORS if authors is None else authors)}
        self.modules = deepcopy(MODULES if modules is None else modules)
        self.requests: list[httpx.Request] = []

    def _track(self, track_id: str) -> dict[str, Any] | None:
        return next((t for t in self.tracks if t["id"] == track_id), None)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        raw_path = request.url.raw_path.decode("ascii").split("?", 1)[0]
        parts = [unquote(part) for part in raw_path.strip("/").split("/")]

        if request.method == "GET" and parts == ["tracks"]:
            return httpx.Response(200, json=self.tracks)

        if request.method == "GET" and len(parts) == 2 and parts[0] == "author":
            author = self.authors.get(parts[1])
            if author is None:
                return httpx.Response(404, text="Author not found")
            return httpx.Response(200, json=author)

        if request.method == "GET" and len(parts) == 2 and parts[0] == "module":
            module = next((m for m in self.modules if m["id"] == parts[1]), None)
            if module is None:
                return httpx.Response(404, text="Module not found")
            return httpx.Response(200, json=module)

        if len(parts) >= 2 and parts[0] == "track":
            track = self._track(parts[1])
            if track is None:
                return httpx.Response(404, text="Track not found")
            if request.method == "GET" and len(parts) == 2:
                return httpx.Response(200, json=track)
            if request.method == "GET" and parts[2:] == ["modules"]:
                return httpx.Response(
                    200, json=[m for m in self.modules if m["trackId"] == track["id"]]
                )
            if request.method == "PATCH" and parts[2:] == ["numberOfViews"]:
                track["numberOfViews"] += 1
                return httpx.Response(200, json=track)

        return httpx.Response(405, text="Method not allowed")

    def paths(self) -> list[str]:
        return [f"{r.method} {r.url.path}" for r in self.requests]


@pytest.fixture
def base_url() -> str:
    """Base URL the fake upstream is mounted at."""
    return BASE_URL


@pytest.fixture
def upstream() -> FakeTracksUpstream:
    """Fake upstream REST API seeded with sample tracks, authors and modules."""
    return FakeTracksUpstream()


@pytest_asyncio.fixture
async def http_client(upstream: FakeTracksUpstream) -> AsyncGenerator[httpx.AsyncClient, None]:
    """HTTP client whose requests are answered by the fake upstream."""
    async with httpx.AsyncClient(transport=httpx.MockTransport(upstream)) as client:
        yield client


@pytest.fixture
def track_api(http_client: httpx.AsyncClient) -> TrackAPI:
    """TrackAPI pointed at the fake upstream."""
    return TrackAPI(BASE_URL, client=http_client)


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


# Test markers
def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "unit: mark test as unit test")
