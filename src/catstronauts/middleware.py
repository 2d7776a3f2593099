"""
Request id propagation and access logging for the gateway
"""

import json
import re
from collections.abc import Callable
from typing import Any

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from .logging import clear_request_context, get_logger, set_request_context

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
GRAPHQL_PATH = "/graphql"

# GraphQL documents and variables may carry arbitrary client data
GRAPHQL_PAYLOAD_PARAMS = ("query", "variables", "extensions")
REDACTED = "[REDACTED]"

_NAMED_OPERATION = re.compile(r"^\s*(query|mutation)\s+(\w+)")


def loggable_query_params(path: str, params: dict[str, str]) -> dict[str, str] | None:
    """Query parameters as they may appear in the access log.

    GraphQL payload parameters on the GraphQL endpoint are replaced by a
    placeholder; everything else passes through.
    """
    if not params:
        return None
    if path != GRAPHQL_PATH:
        return dict(params)
    return {
        name: REDACTED if name in GRAPHQL_PAYLOAD_PARAMS else value
        for name, value in params.items()
    }


def _operation_name_from_document(document: Any) -> str | None:
    if not isinstance(document, str) or not document:
        return None
    if "__schema" in document or "IntrospectionQuery" in document:
        return "__introspection"

    match = _NAMED_OPERATION.match(document)
    if match is None:
        return "unnamed_operation"
    kind, name = match.groups()
    return f"mutation:{name}" if kind == "mutation" else name


async def _graphql_payload(request: Request) -> dict[str, Any] | None:
    if request.method == "GET":
        return dict(request.query_params)
    if request.method != "POST":
        return None
    body = await request.body()
    if not body:
        return None
    try:
        payload = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    return payload if isinstance(payload, dict) else None


async def extract_graphql_operation_name(request: Request) -> str | None:
    """Best-effort GraphQL operation name for GET and POST /graphql requests."""
    if request.url.path != GRAPHQL_PATH:
        return None

    payload = await _graphql_payload(request)
    if payload is None:
        return None

    operation_name = payload.get("operationName")
    if isinstance(operation_name, str) and operation_name:
        return operation_name
    return _operation_name_from_document(payload.get("query"))


class LoggingContextMiddleware(BaseHTTPMiddleware):
    """Bind a request id for the duration of each request and log its outcome.

    The id is taken from the incoming ``X-Request-ID`` header or generated,
    forwarded upstream by the data source, and echoed on the response.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = set_request_context(request.headers.get(REQUEST_ID_HEADER) or None)
        path = request.url.path

        try:
            operation = await extract_graphql_operation_name(request)
            logger.info(
                "Request started",
                method=request.method,
                path=path,
                query_params=loggable_query_params(path, dict(request.query_params)),
                graphql_operation=operation,
                user_agent=request.headers.get("user-agent"),
                remote_addr=request.client.host if request.client else None,
            )

            response = await call_next(request)

            logger.info(
                "Request completed",
                method=request.method,
                path=path,
                status_code=response.status_code,
                graphql_operation=operation,
            )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response

        except Exception as e:
            logger.error("Request failed", method=request.method, path=path, error=str(e))
            raise

        finally:
            clear_request_context()
