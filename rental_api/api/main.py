"""
FastAPI Application.

Main entry point for the API server.
"""

import logging
import sys
from contextlib import asynccontextmanager

from dotenv import load_dotenv

# Load .env file at startup
load_dotenv()

from fastapi import FastAPI, Request  # noqa: E402
from fastapi.exceptions import RequestValidationError  # noqa: E402
from fastapi.responses import JSONResponse  # noqa: E402
from loguru import logger  # noqa: E402
from starlette.exceptions import HTTPException as StarletteHTTPException  # noqa: E402

from config.settings import get_settings  # noqa: E402


class InterceptHandler(logging.Handler):
    """Intercept standard logging and redirect to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        # Get corresponding loguru level
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


# Configure loguru format with default module
logger.configure(extra={"module": "Server"})
logger.remove()
logger.add(
    sys.stderr,
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{extra[module]: <14}</cyan> | <level>{message}</level>",
    level=get_settings().log_level.upper(),
)

# Intercept uvicorn logs
for name in ("uvicorn", "uvicorn.access", "uvicorn.error"):
    uv_logger = logging.getLogger(name)
    uv_logger.handlers = [InterceptHandler()]
    uv_logger.propagate = False

log = logger.bind(module="App")

from rental_api.api.routes import (  # noqa: E402
    auth_router,
    flats_router,
    health_router,
    houses_router,
)
from rental_api.connections.postgres import close_postgres, get_postgres  # noqa: E402
from rental_api.errors import (  # noqa: E402
    AuthorizationError,
    FlatNotFoundError,
    RentalError,
    StoreError,
    TransitionError,
    ValidationError,
)
from rental_api.middleware import setup_middleware  # noqa: E402
from rental_api.modules.validation import format_validation_errors  # noqa: E402

# Most specific first
ERROR_STATUS = (
    (ValidationError, 400),
    (TransitionError, 409),
    (AuthorizationError, 403),
    (FlatNotFoundError, 404),
    (StoreError, 500),
)

RETRY_AFTER_SECONDS = "30"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan events."""
    await get_postgres()
    log.info("Server started")

    yield

    # Shutdown
    await close_postgres()
    log.info("Server stopped")


app = FastAPI(
    title="Rental API",
    description="Houses, flats and flat moderation",
    version="0.1.0",
    lifespan=lifespan,
)

# Setup middleware
setup_middleware(app)

# Register routes
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(houses_router)
app.include_router(flats_router)


def error_response(request: Request, status_code: int, message, headers=None) -> JSONResponse:
    """Build the unified error body."""
    if status_code >= 500:
        headers = {**(headers or {}), "Retry-After": RETRY_AFTER_SECONDS}
    return JSONResponse(
        status_code=status_code,
        content={
            "message": message,
            "request_id": getattr(request.state, "request_id", None),
            "code": status_code,
        },
        headers=headers,
    )


# Custom exception handlers for unified error response format
@app.exception_handler(RentalError)
async def rental_exception_handler(request: Request, exc: RentalError):
    """Convert domain errors to unified error format."""
    status_code = next(
        (code for cls, code in ERROR_STATUS if isinstance(exc, cls)), 500
    )
    return error_response(request, status_code, str(exc))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Convert HTTPException to unified error format."""
    return error_response(
        request, exc.status_code, exc.detail, headers=getattr(exc, "headers", None)
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Convert validation errors to unified error format."""
    return error_response(request, 400, format_validation_errors(exc.errors()))
