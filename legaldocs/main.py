"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import Annotated, AsyncGenerator

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from legaldocs.api.v1.router import api_router
from legaldocs.config import settings
from legaldocs.dependencies import get_profile_store
from legaldocs.schemas.response import HealthCheckResponse, RootResponse
from legaldocs.services.profiles.profile_store import SavedProfileStore
from legaldocs.utils.logging import configure_logging, get_logger

configure_logging(settings.log_level)

LOGGER = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Args:
        app: FastAPI application instance

    Yields:
        None
    """
    LOGGER.info(
        "Starting application",
        extra={
            "app_name": settings.app_name,
            "version": settings.app_version,
            "environment": settings.environment,
            "extraction_api_url": settings.extraction_api_url,
        },
    )

    yield

    LOGGER.info("Shutting down application")
    store = app.dependency_overrides.get(get_profile_store, get_profile_store)()
    if not store.is_synced and not store.flush():
        LOGGER.error(
            "Saved profiles could not be written before shutdown",
            extra={"error": store.last_error},
        )


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Review structured legal document extractions and manage saved party profiles",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get(
    "/health",
    response_model=HealthCheckResponse,
    tags=["Health"],
    summary="Health check endpoint",
    description="Check if the service is running and healthy",
    operation_id="get_service_health_status",
)
async def health_check(
    store: Annotated[SavedProfileStore, Depends(get_profile_store)],
) -> HealthCheckResponse:
    """Health check endpoint.

    The service is degraded while saved profiles are out of sync with storage.
    """
    return HealthCheckResponse(
        status="healthy" if store.is_synced else "degraded",
        version=settings.app_version,
        service=settings.app_name,
        profile_storage="ok" if store.is_synced else "unsynced",
    )


@app.get(
    "/",
    response_model=RootResponse,
    tags=["Root"],
    summary="Root endpoint",
    description="Get basic information about the API",
    operation_id="get_public_root_metadata",
)
async def root() -> RootResponse:
    return RootResponse(
        message="Server is running",
        version=settings.app_version,
        docs="/docs",
        health="/health",
    )


# Include routers
app.include_router(api_router, prefix=settings.api_v1_prefix)

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "legaldocs.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
