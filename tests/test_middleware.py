"""
Tests for request logging middleware helpers
"""

import json

import pytest
from starlette.requests import Request

from catstronauts.middleware import extract_graphql_operation_name, loggable_query_params


def make_request(method: str, path: str, body: bytes = b"", query_string: bytes = b"") -> Request:
    scope = {
        "type": "http",
        "method": method,
        "path": path,
        "query_string": query_string,
        "headers": [(b"content-type", b"application/json")],
    }

    async def receive():
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, receive)


def test_loggable_query_params_redacts_graphql_payload():
    params = {"query": "{ tracksForHome { id } }", "variables": "{}", "operationName": "Home"}

    assert loggable_query_params("/graphql", params) == {
        "query": "[REDACTED]",
        "variables": "[REDACTED]",
        "operationName": "Home",
    }


def test_loggable_query_params_passes_other_paths_through():
    assert loggable_query_params("/health", {"query": "x"}) == {"query": "x"}
    assert loggable_query_params("/graphql", {}) is None


@pytest.mark.asyncio
async def test_operation_name_from_post_body():
    body = json.dumps({"operationName": "GetTracks", "query": "query GetTracks { x }"}).encode()

    assert await extract_graphql_operation_name(make_request("POST", "/graphql", body)) == (
        "GetTracks"
    )


@pytest.mark.asyncio
async def test_operation_name_parsed_from_mutation():
    body = json.dumps({"query": "mutation IncrementTrackViews { x }"}).encode()

    result = await extract_graphql_operation_name(make_request("POST", "/graphql", body))

    assert result == "mutation:IncrementTrackViews"


@pytest.mark.asyncio
async def test_operation_name_unnamed_and_introspection():
    unnamed = json.dumps({"query": "{ tracksForHome { id } }"}).encode()
    introspection = json.dumps({"query": "query { __schema { types { name } } }"}).encode()

    assert (
        await extract_graphql_operation_name(make_request("POST", "/graphql", unnamed))
        == "unnamed_operation"
    )
    assert (
        await extract_graphql_operation_name(make_request("POST", "/graphql", introspection))
        == "__introspection"
    )


@pytest.mark.asyncio
async def test_operation_name_from_get_query_string():
    request = make_request("GET", "/graphql", query_string=b"query=query%20GetTrack%20%7B%20x%20%7D")

    assert await extract_graphql_operation_name(request) == "GetTrack"


@pytest.mark.asyncio
async def test_operation_name_ignores_other_paths_and_bad_bodies():
    assert await extract_graphql_operation_name(make_request("GET", "/health")) is None
    assert await extract_graphql_operation_name(make_request("POST", "/graphql", b"{not json")) is None
    assert await extract_graphql_operation_name(make_request("POST", "/graphql", b"[1, 2]")) is None
