"""Resolver package for GraphQL schema.

Resolver functions referenced by the GraphQL types, queries and mutations.
Each one reaches the upstream REST API through the request-scoped TrackAPI.
"""

# Intentionally empty; functions are defined in sibling modules.
