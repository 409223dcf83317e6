"""Storefront catalog API.

Assembles the FastAPI application: catalog and category routers, health
checks, request middleware, and the mapping from domain errors to the
standard error body.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storefront.api.categories import router as categories_router
from storefront.api.health import router as health_router
from storefront.api.middleware import error_response, setup_middleware
from storefront.api.products import router as products_router
from storefront.domain.exceptions import NotFoundError, StorefrontError
from storefront.infrastructure.config import settings
from storefront.infrastructure.database import create_tables, engine
from storefront.infrastructure.logging import configure_logging

configure_logging(settings.log_level)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Create the catalog schema on startup and release the pool on shutdown."""
    logger.info(
        "Starting Storefront API",
        version=settings.api_version,
        database=settings.database_url.split("://", 1)[0],
    )
    await create_tables()

    yield

    await engine.dispose()
    logger.info("Storefront API stopped")


app = FastAPI(
    title="Storefront API",
    description="Read-only product catalog: product detail, related products, photos and browse listings",
    version=settings.api_version,
    lifespan=lifespan,
)

# Storefront pages are served from another origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)
setup_middleware(app)

app.include_router(health_router, tags=["Health"])
app.include_router(products_router)
app.include_router(categories_router)


# ============================================================================
# Exception Handlers
# ============================================================================


@app.exception_handler(StorefrontError)
async def storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    """Not-found kinds map to 404, other domain errors to 400."""
    status_code = 404 if isinstance(exc, NotFoundError) else 400
    logger.info(
        "Domain error",
        path=request.url.path,
        error_code=exc.error_code,
        status_code=status_code,
    )
    return error_response(request, status_code, exc.error_code, exc.message)


@app.exception_handler(HTTPException)
async def http_error_handler(request: Request, exc: HTTPException) -> JSONResponse:
    detail = exc.detail if isinstance(exc.detail, dict) else {"message": str(exc.detail)}
    return error_response(
        request,
        exc.status_code,
        detail.get("error_code", "ERROR"),
        detail.get("message", ""),
        detail.get("details"),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled exception in handler",
        path=request.url.path,
        method=request.method,
        error_type=type(exc).__name__,
    )
    return error_response(request, 500, "INTERNAL_ERROR", "An internal error occurred")


def run() -> None:
    """Serve the API with uvicorn on the configured host and port."""
    uvicorn.run(
        "storefront.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
