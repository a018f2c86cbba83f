"""
CORS Middleware Configuration.

Handles Cross-Origin Resource Sharing settings.
"""

import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rental_api.middleware.request_id import REQUEST_ID_HEADER


def setup_cors(app: FastAPI) -> None:
    """
    Configure CORS middleware for the application.

    Origins come from CORS_ORIGINS (comma separated, default "*").

    Args:
        app: FastAPI application instance
    """
    origins = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=origins != ["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["Authorization", "Content-Type"],
        expose_headers=[REQUEST_ID_HEADER],
    )
