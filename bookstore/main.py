"""
FastAPI Application Entry Point

This module creates and configures the bookstore API.

Key Concepts:
=============

1. Application Factory Pattern
   - create_app() function returns configured app
   - Tests can build a fresh instance

2. Lifespan Events
   - startup: create missing tables (development convenience)
   - shutdown: dispose of the connection pool

3. Middleware Stack
   - CORS: the catalog frontend runs on a different origin
   - Rate limiting: slowapi

4. Exception Handlers
   - BookNotFoundError → 404, BookIdMismatchError → 400
   - Database errors → 500 without internals
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from sqlalchemy.exc import SQLAlchemyError

from bookstore.config import get_settings
from bookstore.database import create_tables, engine
from bookstore.exceptions import BookIdMismatchError, BookNotFoundError
from bookstore.routers import books_router
from bookstore.services.rate_limiter import limiter, rate_limit_exceeded_handler

# =============================================================================
# Logging Configuration
# =============================================================================
settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# =============================================================================
# Lifespan Events
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Code before yield: Runs on startup
    Code after yield: Runs on shutdown
    """
    # ----- STARTUP -----
    logger.info(f"Starting {settings.app_name}...")
    logger.info(f"Debug mode: {settings.debug}")
    logger.info(f"Environment: {settings.environment}")

    if settings.auto_create_tables:
        create_tables()
        logger.info("Database tables verified")

    yield

    # ----- SHUTDOWN -----
    logger.info(f"Shutting down {settings.app_name}...")
    engine.dispose()


# =============================================================================
# Application Factory
# =============================================================================
def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.app_name,
        description="""
## Online Bookstore API

Backend for the bookstore catalog, admin pages and shopping cart.

### Features
- **Catalog**: Paginated, sortable list of books filterable by category
- **Admin**: Create, replace and delete books

JSON field names are camelCase (`bookId`, `pageCount`, ...).
        """,
        version=settings.api_version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # -------------------------------------------------------------------------
    # Rate Limiting
    # -------------------------------------------------------------------------
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # -------------------------------------------------------------------------
    # CORS Middleware
    # -------------------------------------------------------------------------
    # The catalog frontend is served from its own origin
    # (e.g. http://localhost:3000) and calls the API cross-origin.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Location"],
    )

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    @app.exception_handler(BookNotFoundError)
    async def book_not_found_handler(
        request: Request,
        exc: BookNotFoundError,
    ) -> JSONResponse:
        """Missing book ids are a normal client error, not a server fault."""
        logger.info(f"{request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=404,
            content={"detail": str(exc)},
        )

    @app.exception_handler(BookIdMismatchError)
    async def book_id_mismatch_handler(
        request: Request,
        exc: BookIdMismatchError,
    ) -> JSONResponse:
        logger.info(f"{request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=400,
            content={"detail": str(exc)},
        )

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(
        request: Request,
        exc: SQLAlchemyError,
    ) -> JSONResponse:
        """
        Handle SQLAlchemy database errors.

        Logs the actual error for debugging while hiding details from users.
        """
        logger.error(f"Database error: {exc}")
        return JSONResponse(
            status_code=500,
            content={
                "detail": "A database error occurred. Please try again later."
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """
        Catch-all exception handler.

        In production, hide internal errors from users.
        In debug mode, show more details.
        """
        logger.error(f"Unhandled error: {exc}", exc_info=True)

        if settings.debug:
            return JSONResponse(
                status_code=500,
                content={"detail": str(exc)},
            )

        return JSONResponse(
            status_code=500,
            content={"detail": "An internal error occurred."},
        )

    # -------------------------------------------------------------------------
    # Register Routers
    # -------------------------------------------------------------------------
    # Unversioned prefix: clients call /api/Books
    app.include_router(books_router, prefix="/api")

    # -------------------------------------------------------------------------
    # Health Check Endpoint
    # -------------------------------------------------------------------------
    @app.get(
        "/health",
        tags=["Health"],
        summary="Health check",
        description="Check if the API is running and healthy.",
    )
    async def health_check() -> dict:
        """Used by load balancers and the deployment platform's probes."""
        return {
            "status": "healthy",
            "app": settings.app_name,
            "version": settings.api_version,
            "database": engine.dialect.name,
            "rate_limiting": {
                "enabled": settings.rate_limit_enabled,
                "default_limit": settings.rate_limit_default,
                "write_limit": settings.rate_limit_write,
            },
        }

    @app.get(
        "/",
        tags=["Root"],
        summary="API root",
        description="Welcome message and API information.",
    )
    async def root() -> dict:
        """Root endpoint with API information."""
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.api_version,
            "books": "/api/Books",
            "docs": "/docs",
            "health": "/health",
        }

    return app


# =============================================================================
# Application Instance
# =============================================================================
# This is what uvicorn imports: uvicorn bookstore.main:app

app = create_app()


# =============================================================================
# Development Server
# =============================================================================
# python -m bookstore.main
# In production, use: uvicorn bookstore.main:app --host 0.0.0.0 --port 5300

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "bookstore.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
