"""
Request context helpers for GraphQL resolvers
"""

from typing import TYPE_CHECKING

import strawberry

if TYPE_CHECKING:
    from ..datasources.track_api import TrackAPI


def get_track_api(info: strawberry.Info) -> "TrackAPI":
    """
    Extract the request-scoped TrackAPI from the GraphQL info object.

    Raises:
        RuntimeError: If the context was built without a data source
    """
    track_api = info.context.get("track_api")
    if track_api is None:
        raise RuntimeError("TrackAPI not found in GraphQL context")
    return track_api
