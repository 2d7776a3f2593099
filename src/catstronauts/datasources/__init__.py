"""REST data sources backing the GraphQL resolvers."""

from .errors import NotFound, TrackAPIError, UpstreamError
from .track_api import TrackAPI

__all__ = ["NotFound", "TrackAPI", "TrackAPIError", "UpstreamError"]
