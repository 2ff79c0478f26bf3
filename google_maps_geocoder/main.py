"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator
import logging
import time

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from google_maps_geocoder import __version__
from google_maps_geocoder.dependencies import settings
from google_maps_geocoder.logging_config import configure_logging
from google_maps_geocoder.routers import geocoding
from google_maps_geocoder.services.geocoding_service import GeocodingError

# Configure logging
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log each request with its status and duration."""

    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.error(
                f"{request.method} {request.url.path} failed",
                exc_info=True,
                extra={"duration_ms": round((time.perf_counter() - start_time) * 1000, 2)}
            )
            raise

        duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} ({duration_ms} ms)",
            extra={
                "address": request.query_params.get("address"),
                "status_code": response.status_code,
                "duration_ms": duration_ms
            }
        )
        return response


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager for startup and shutdown events."""
    logger.info(f"Application started: {settings.app_name}")
    logger.info(f"Debug mode: {settings.debug}")
    if not settings.has_api_key:
        logger.warning("GOOGLE_MAPS_API_KEY is not set; requests are sent without a key")

    yield

    logger.info(f"Application shutdown: {settings.app_name}")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="""
    Google Maps Geocoder API

    Converts postal addresses into structured location data: coordinates,
    city, county, state, country, postal code and formatted addresses.

    ## Error Handling

    All errors return consistent JSON responses with:
    - `detail`: Human-readable error message
    - `error_code`: Machine-readable error code

    Geocoding errors additionally carry the `status` reported by Google Maps.

    Common HTTP status codes:
    - `200`: Success
    - `400`: Invalid request
    - `404`: Address not found
    - `422`: Validation Error
    - `429`: Google Maps query limit exceeded
    - `502`: Google Maps returned an error
    - `503`: Google Maps unreachable
    - `504`: Google Maps timeout
    - `500`: Internal Server Error
    """,
    version=__version__,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "geocoding",
            "description": "Geocoding operations. Convert addresses to coordinates and address segments.",
        },
    ],
)

# Add logging middleware
app.add_middleware(LoggingMiddleware)


@app.get("/")
async def root() -> dict:
    """Root endpoint returning API information."""
    return {
        "name": settings.app_name,
        "version": __version__,
        "status": "operational",
        "docs": "/api/docs"
    }


# Include routers
app.include_router(geocoding.router, tags=["geocoding"])


@app.get("/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app_name": settings.app_name
    }


# Global exception handlers

# Google Maps status -> (HTTP status, error code)
GEOCODING_STATUS_MAP = {
    "ZERO_RESULTS": (404, "NOT_FOUND"),
    "OVER_QUERY_LIMIT": (429, "RATE_LIMITED"),
    "OVER_DAILY_LIMIT": (429, "RATE_LIMITED"),
    "INVALID_REQUEST": (400, "BAD_REQUEST"),
}


@app.exception_handler(GeocodingError)
async def geocoding_error_handler(request: Request, exc: GeocodingError) -> JSONResponse:
    """Handle error statuses returned by Google Maps."""
    status_code, error_code = GEOCODING_STATUS_MAP.get(
        exc.status, (502, "GEOCODING_ERROR")
    )
    if status_code >= 500:
        logger.error(f"Geocoding error {exc.status}: {request.url.path} - {exc}")
    else:
        logger.info(f"Geocoding failed with {exc.status}: {request.url.path}")

    return JSONResponse(
        status_code=status_code,
        content={
            "detail": str(exc),
            "error_code": error_code,
            "status": exc.status
        }
    )


@app.exception_handler(httpx.TimeoutException)
async def geocoding_timeout_handler(request: Request, exc: httpx.TimeoutException) -> JSONResponse:
    """Handle Google Maps request timeouts."""
    logger.error("Google Maps request timeout")
    return JSONResponse(
        status_code=504,
        content={
            "detail": "Geocoding service timeout",
            "error_code": "GATEWAY_TIMEOUT"
        }
    )


@app.exception_handler(httpx.HTTPError)
async def geocoding_transport_handler(request: Request, exc: httpx.HTTPError) -> JSONResponse:
    """Handle Google Maps transport failures."""
    logger.error(f"Google Maps request error: {exc}")
    return JSONResponse(
        status_code=503,
        content={
            "detail": "Geocoding service unavailable",
            "error_code": "SERVICE_UNAVAILABLE"
        }
    )


# Status code -> error code for HTTP errors raised by routing and endpoints
HTTP_ERROR_CODES = {
    400: "BAD_REQUEST",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    422: "VALIDATION_ERROR",
}


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Give HTTP errors, including unknown routes, the common error body."""
    logger.info(f"HTTP {exc.status_code}: {request.url.path}")
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "detail": exc.detail,
            "error_code": HTTP_ERROR_CODES.get(exc.status_code, f"HTTP_{exc.status_code}")
        },
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled exception: {request.method} {request.url.path}", exc_info=True)

    content = {"detail": "Internal server error", "error_code": "INTERNAL_ERROR"}
    if settings.debug:
        content["error_type"] = type(exc).__name__
        content["error_message"] = str(exc)
    return JSONResponse(status_code=500, content=content)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "google_maps_geocoder.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
