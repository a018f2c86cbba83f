"""
Request ID Middleware.

Tags every request with an id exposed as request.state.request_id and the
X-Request-Id response header.
"""

import uuid

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware

REQUEST_ID_HEADER = "X-Request-Id"


def new_request_id() -> str:
    """Generate a lowercase hex request id."""
    return uuid.uuid4().hex


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Middleware to assign request ids."""

    async def dispatch(self, request: Request, call_next):
        """Store the id on the request and echo it in the response."""
        request_id = new_request_id()
        request.state.request_id = request_id

        response = await call_next(request)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def setup_request_id(app: FastAPI) -> None:
    """
    Configure request id middleware.

    Args:
        app: FastAPI application instance
    """
    app.add_middleware(RequestIdMiddleware)
