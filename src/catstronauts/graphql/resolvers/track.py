from __future__ import annotations

from typing import TYPE_CHECKING, Any

import strawberry

from ...datasources.errors import NotFound, UpstreamError
from ...logging import get_logger
from ..context import get_track_api

if TYPE_CHECKING:
    from ..types.track import Author, IncrementTrackViewsResponse, Module, Track

logger = get_logger(__name__)

INCREMENT_SUCCESS_MESSAGE = "Track views incremented"


def track_from_api(data: dict[str, Any]) -> Track:
    """Convert an upstream track payload to the GraphQL type."""
    from ..types.track import Track as TrackType

    author_id = data.get("authorId")
    return TrackType(
        id=data.get("id"),
        title=data.get("title"),
        author_id=str(author_id) if author_id is not None else None,
        thumbnail=data.get("thumbnail"),
        length=data.get("length"),
        modules_count=data.get("modulesCount"),
        description=data.get("description"),
        number_of_views=data.get("numberOfViews"),
    )


def author_from_api(data: dict[str, Any]) -> Author:
    """Convert an upstream author payload to the GraphQL type."""
    from ..types.track import Author as AuthorType

    return AuthorType(id=data.get("id"), name=data.get("name"), photo=data.get("photo"))


def module_from_api(data: dict[str, Any]) -> Module:
    """Convert an upstream module payload to the GraphQL type."""
    from ..types.track import Module as ModuleType

    return ModuleType(
        id=data.get("id"),
        title=data.get("title"),
        length=data.get("length"),
        content=data.get("content"),
        video_url=data.get("videoUrl"),
    )


# Query resolvers
async def resolve_tracks_for_home(info: strawberry.Info) -> list[Track]:
    """Resolve the homepage tracks, preserving upstream order."""
    tracks = await get_track_api(info).get_tracks_for_home()
    return [track_from_api(track) for track in tracks]


async def resolve_track_by_id(info: strawberry.Info, id: str) -> Track:
    """
    Resolve a track by its ID.

    NotFound propagates to the caller as a GraphQL field error.
    """
    try:
        track = await get_track_api(info).get_track(id)
    except NotFound:
        logger.info("Track not found", track_id=id)
        raise

    return track_from_api(track)


# Field resolvers
async def resolve_track_author(track: Track, info: strawberry.Info) -> Author:
    """Resolve the author of a track from its authorId."""
    if not track.author_id:
        raise ValueError(f"Track {track.id} has no authorId")

    try:
        author = await get_track_api(info).get_author(track.author_id)
    except NotFound:
        logger.info("Author not found", track_id=str(track.id), author_id=track.author_id)
        raise

    return author_from_api(author)


async def resolve_track_modules(track: Track, info: strawberry.Info) -> list[Module]:
    """Resolve the modules of a track, preserving upstream order."""
    modules = await get_track_api(info).get_track_modules(str(track.id))
    return [module_from_api(module) for module in modules]


# Mutation resolvers
async def increment_track_views(info: strawberry.Info, id: str) -> IncrementTrackViewsResponse:
    """
    Increment the view count of a track.

    Never raises for upstream failures: the outcome is always reported
    through the response envelope's code, success and message fields.
    """
    from ..types.track import IncrementTrackViewsResponse as ResponseType

    try:
        track = await get_track_api(info).increment_track_views(id)
    except UpstreamError as e:
        logger.warning(
            "Failed to increment track views", track_id=id, status=e.status, body=e.body
        )
        return ResponseType(code=e.status, success=False, message=e.body, track=None)
    except ValueError as e:
        return ResponseType(code=400, success=False, message=str(e), track=None)

    logger.info("Track views incremented", track_id=id)
    return ResponseType(
        code=200,
        success=True,
        message=INCREMENT_SUCCESS_MESSAGE,
        track=track_from_api(track),
    )
