"""Main FastAPI application with middleware and error handlers"""

import logging
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from tether import __version__
from tether.api.endpoints import router
from tether.api.metrics import ERROR_COUNT
from tether.api.middleware import RequestLoggingMiddleware
from tether.api.models import ErrorResponse
from tether.exceptions import (
    CatalogError,
    TetherException,
    ValidationError,
)
from tether.logging_config import setup_logging

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)

# Create main application
app = FastAPI(
    title="Tether Resource Matching API",
    description="Matches patients to community mental-health resources",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

app.add_middleware(RequestLoggingMiddleware)


def _error_response(
    request: Request,
    status_code: int,
    error: str,
    message: str,
    details: dict = None
) -> JSONResponse:
    request_id = getattr(request.state, "request_id", "unknown")
    ERROR_COUNT.labels(error_type=error).inc()

    error_response = ErrorResponse(error=error, message=message, details=details)

    return JSONResponse(
        status_code=status_code,
        content=error_response.model_dump(mode="json"),
        headers={"X-Request-ID": request_id}
    )


# Exception handlers
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle Pydantic validation errors.

    Args:
        request: Request that caused the error
        exc: Validation error

    Returns:
        JSON response with validation error details
    """
    errors = []
    for error in exc.errors():
        errors.append({
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"]
        })

    logger.warning("Validation error", extra={"errors": errors})

    return _error_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        "ValidationError",
        "Request validation failed",
        {"validation_errors": errors}
    )


@app.exception_handler(TetherException)
async def tether_exception_handler(
    request: Request,
    exc: TetherException
) -> JSONResponse:
    """Map Tether exceptions onto HTTP status codes"""
    if isinstance(exc, (ValidationError, CatalogError)):
        status_code = status.HTTP_400_BAD_REQUEST
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    logger.warning(f"{type(exc).__name__}: {exc.message}")

    return _error_response(
        request,
        status_code,
        type(exc).__name__,
        exc.message,
        exc.details
    )


@app.get("/metrics", response_class=PlainTextResponse)
async def metrics():
    """Prometheus metrics endpoint"""
    return PlainTextResponse(generate_latest(), media_type=CONTENT_TYPE_LATEST)


app.include_router(router)
