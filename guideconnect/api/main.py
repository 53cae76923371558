"""
FastAPI application entry point.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Dict

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from guideconnect import __app_name__, __version__, cache
from guideconnect.api.routes.v1.health import check_dependencies
from guideconnect.config import settings
from guideconnect.database import check_db_connection, close_db_connections
from guideconnect.exceptions import (
    AuthenticationError,
    ConfigurationException,
    ConflictError,
    DatabaseConnectionError,
    InvalidInputError,
    NotFoundError,
    PermissionDeniedError,
    SearchServiceException,
)

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parents[2] / "static"


def validate_startup_config() -> None:
    """Warn about optional features that are switched off by configuration."""
    warnings = []

    if not settings.brave_search_api_key:
        warnings.append("BRAVE_SEARCH_API_KEY not set - /api/v1/search will return 503")

    if not settings.redis_url:
        warnings.append("REDIS_URL not set - statistics will not be cached")

    if settings.environment == "production" and settings.debug:
        warnings.append("DEBUG is enabled in production - error responses include internals")

    if warnings:
        logger.warning("Startup configuration warnings:")
        for warning in warnings:
            logger.warning(f"  - {warning}")
    else:
        logger.info("Startup configuration validated successfully")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Redis is optional: if it cannot be reached after retries the app starts
    without a statistics cache. The database is required.
    """
    logger.info(f"Starting {__app_name__} v{__version__}")
    logger.info(f"Environment: {settings.environment}")

    validate_startup_config()

    if settings.redis_url:
        try:
            cache.redis_client = await cache.connect_to_redis(str(settings.redis_url))
        except Exception as e:
            logger.warning(f"Redis unavailable, statistics caching disabled: {e}")
            cache.redis_client = None

    if not await check_db_connection():
        error = DatabaseConnectionError(str(settings.database_url).split("@")[-1])
        logger.error(str(error))
        raise error

    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application")

    if cache.redis_client is not None:
        await cache.redis_client.aclose()
        cache.redis_client = None
        logger.info("Redis connection closed")

    await close_db_connections()

    logger.info("Application shutdown complete")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Travel booking site and admin dashboard for guided trips in Nepal",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# Configured via ALLOWED_ORIGINS; credentials are needed for the session cookie
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(GZipMiddleware, minimum_size=1000)

app.mount("/static", StaticFiles(directory=str(STATIC_DIR), check_dir=False), name="static")


def _error(status_code: int, message: str, **extra: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, **extra})


# Exception handlers
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    response = _error(exc.status_code, str(exc.detail))
    if getattr(exc, "headers", None):
        response.headers.update(exc.headers)
    return response


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {
            "loc": [str(part) for part in error.get("loc", ())],
            "msg": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in exc.errors()
    ]
    logger.info(f"Validation failed for {request.method} {request.url.path}: {details}")
    return _error(status.HTTP_400_BAD_REQUEST, "Validation error", details=details)


@app.exception_handler(InvalidInputError)
async def invalid_input_handler(request: Request, exc: InvalidInputError) -> JSONResponse:
    details = [{"loc": ["body", exc.field] if exc.field else ["body"], "msg": exc.message, "type": "value_error"}]
    return _error(status.HTTP_400_BAD_REQUEST, "Validation error", details=details)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return _error(status.HTTP_404_NOT_FOUND, exc.message)


@app.exception_handler(ConflictError)
async def conflict_handler(request: Request, exc: ConflictError) -> JSONResponse:
    return _error(status.HTTP_409_CONFLICT, exc.message)


@app.exception_handler(AuthenticationError)
async def authentication_handler(request: Request, exc: AuthenticationError) -> JSONResponse:
    return _error(status.HTTP_401_UNAUTHORIZED, "Unauthorized")


@app.exception_handler(PermissionDeniedError)
async def permission_denied_handler(request: Request, exc: PermissionDeniedError) -> JSONResponse:
    return _error(status.HTTP_403_FORBIDDEN, "Forbidden")


@app.exception_handler(ConfigurationException)
async def configuration_handler(request: Request, exc: ConfigurationException) -> JSONResponse:
    logger.error(f"Configuration error during {request.method} {request.url.path}: {exc}")
    message = getattr(exc, "message", None) or "Service is not configured"
    return _error(status.HTTP_503_SERVICE_UNAVAILABLE, message)


@app.exception_handler(SearchServiceException)
async def search_service_handler(request: Request, exc: SearchServiceException) -> JSONResponse:
    logger.error(f"Search provider error: {exc.message}")
    return _error(status.HTTP_502_BAD_GATEWAY, exc.message)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler for unhandled exceptions."""
    logger.error(
        f"Unhandled exception during {request.method} {request.url.path}: {exc}",
        exc_info=True,
    )
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


# Health check endpoint
@app.get("/health", tags=["Health"], status_code=status.HTTP_200_OK)
async def health_check() -> JSONResponse:
    """Application status and dependency health checks."""

    db_healthy, dependencies = await check_dependencies()
    response = {
        "status": "healthy" if db_healthy else "unhealthy",
        "version": __version__,
        "environment": settings.environment,
        "dependencies": dependencies,
    }
    status_code = status.HTTP_200_OK if db_healthy else status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(content=response, status_code=status_code)


@app.get("/api", tags=["Root"])
async def api_root() -> Dict[str, Any]:
    """API root endpoint with version information."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "api_versions": {
            "v1": {
                "status": "stable",
                "prefix": "/api/v1",
                "endpoints": {
                    "version": "/api/v1/version",
                    "health": "/api/v1/health",
                    "auth": "/api/v1/auth",
                    "dashboard": "/api/v1/dashboard",
                    "bookings": "/api/v1/bookings",
                    "destinations": "/api/v1/destinations",
                    "guides": "/api/v1/guides",
                    "reviews": "/api/v1/reviews",
                    "notifications": "/api/v1/notifications",
                    "search": "/api/v1/search",
                },
            },
        },
        "docs": "/docs",
        "health": "/health",
    }


# Import and include routers
from guideconnect.api.routes import (  # noqa: E402
    auth,
    bookings,
    dashboard,
    destinations,
    guides,
    notifications,
    reviews,
    search,
    web,
)
from guideconnect.api.routes.v1 import router as v1_router  # noqa: E402

# Public site pages (/, /destinations, /guides, /community, /contact)
app.include_router(web.router, tags=["Web"])

app.include_router(v1_router, prefix="/api/v1")
app.include_router(auth.router, prefix="/api/v1", tags=["Auth"])
app.include_router(dashboard.router, prefix="/api/v1", tags=["Dashboard"])
app.include_router(bookings.router, prefix="/api/v1", tags=["Bookings"])
app.include_router(destinations.router, prefix="/api/v1", tags=["Destinations"])
app.include_router(guides.router, prefix="/api/v1", tags=["Guides"])
app.include_router(reviews.router, prefix="/api/v1", tags=["Reviews"])
app.include_router(notifications.router, prefix="/api/v1", tags=["Notifications"])
app.include_router(search.router, prefix="/api/v1", tags=["Search"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "guideconnect.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
