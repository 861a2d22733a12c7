"""FastAPI application for the deli menu, cart and admin menu management."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.address import router as address_router
from app.api.cart import router as cart_router
from app.api.menu import router as menu_router
from app.api.users import router as users_router
from app.config import settings
from app.database import engine
from app.models import Base
from app.services.errors import ServiceError

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Create tables in development and release the engine on shutdown."""
    logger.info("Starting deli API (env=%s)", settings.app_env)

    if settings.app_env == "development":
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ready")

    if not settings.mapbox_token:
        logger.warning("MAPBOX_TOKEN is not set; address search will return 503")

    yield

    logger.info("Closing database connections")
    await engine.dispose()


app = FastAPI(
    title="Deli Ordering",
    description="Menu, cart and menu management for a small restaurant",
    version="1.0.0",
    lifespan=lifespan,
)

if settings.cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=["Content-Type", "X-User-Id", "X-Auth-Error"],
    )

for router in (menu_router, cart_router, users_router, address_router):
    app.include_router(router)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """
    Turn a service error into a JSON error response.

    The status code comes from the error class (404 not found, 422 invalid
    input, 401/403 permission, 503 store failure).
    """
    if exc.status_code >= 500:
        logger.error(
            "%s on %s: %s", type(exc).__name__, request.url.path, exc, exc_info=exc
        )
    else:
        logger.warning("%s on %s: %s", type(exc).__name__, request.url.path, exc)
    return JSONResponse({"detail": str(exc)}, status_code=exc.status_code)


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s: %s", request.url.path, exc, exc_info=exc)
    return JSONResponse(
        {"detail": "Something went wrong. Please try again."}, status_code=500
    )


@app.get("/health")
async def health() -> dict[str, str | bool]:
    """Health check with the environment name and optional features."""
    return {
        "status": "healthy",
        "environment": settings.app_env,
        "address_search": bool(settings.mapbox_token),
    }
