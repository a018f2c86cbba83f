"""
Middleware Module.

Exports middleware setup functions for FastAPI application.
"""

from fastapi import FastAPI

from rental_api.middleware.cors import setup_cors
from rental_api.middleware.logging import setup_logging
from rental_api.middleware.request_id import REQUEST_ID_HEADER, setup_request_id


def setup_middleware(app: FastAPI) -> None:
    """
    Configure all middleware for the application.

    Added innermost first: request logging needs the request id, and CORS
    wraps everything.

    Args:
        app: FastAPI application instance
    """
    setup_logging(app)
    setup_request_id(app)
    setup_cors(app)


__all__ = [
    "REQUEST_ID_HEADER",
    "setup_middleware",
]
