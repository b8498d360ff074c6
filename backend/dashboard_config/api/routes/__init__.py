"""API routes."""

from fastapi import APIRouter

from dashboard_config.api.routes import features, presets, sectors, venues

api_router = APIRouter()

api_router.include_router(features.router, prefix="/features", tags=["features"])
api_router.include_router(presets.router, prefix="/presets", tags=["presets"])
api_router.include_router(sectors.router, prefix="/sectors", tags=["sectors"])
api_router.include_router(venues.router, prefix="/venues", tags=["venues", "white-label"])
