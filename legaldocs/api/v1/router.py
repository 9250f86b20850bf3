from fastapi import APIRouter

from legaldocs.api.v1.endpoints import extractions, profiles

# Create API router
api_router = APIRouter()

# Include routers
api_router.include_router(extractions.router, prefix="/extractions", tags=["Extractions"])
api_router.include_router(profiles.router, prefix="/profiles", tags=["Profiles"])

__all__ = ["api_router"]
