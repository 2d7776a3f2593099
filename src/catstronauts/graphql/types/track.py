"""
Track GraphQL type definitions
"""

import strawberry


@strawberry.type
class Author:
    """Author of a complete Track."""

    id: strawberry.ID
    name: str
    photo: str | None


@strawberry.type
class Module:
    """A Module is a single unit of teaching. Multiple Modules compose a Track."""

    id: strawberry.ID
    title: str
    length: int | None
    content: str | None
    video_url: str | None


@strawberry.type
class Track:
    """A track is a group of Modules that teaches about a specific topic."""

    id: strawberry.ID
    title: str
    author_id: strawberry.Private[str | None]
    thumbnail: str | None
    length: int | None
    modules_count: int | None
    description: str | None
    number_of_views: int | None

    @strawberry.field
    async def author(self, info: strawberry.Info) -> Author | None:
        """The track's main author."""
        from ..resolvers.track import resolve_track_author

        return await resolve_track_author(self, info)

    @strawberry.field
    async def modules(self, info: strawberry.Info) -> list[Module]:
        """The track's complete array of Modules, in upstream order."""
        from ..resolvers.track import resolve_track_modules

        return await resolve_track_modules(self, info)


@strawberry.type
class IncrementTrackViewsResponse:
    """Result envelope of the incrementTrackViews mutation."""

    code: int
    success: bool
    message: str
    track: Track | None = None
