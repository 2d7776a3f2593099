"""
Root GraphQL mutation definitions
"""

import strawberry

from ..types.track import IncrementTrackViewsResponse


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    @strawberry.mutation(name="incrementTrackViews")
    async def increment_track_views(
        self, info: strawberry.Info, id: strawberry.ID
    ) -> IncrementTrackViewsResponse:
        """Increment the number of views of a given track, when the track card is clicked."""
        from ..resolvers.track import increment_track_views

        return await increment_track_views(info, id)
