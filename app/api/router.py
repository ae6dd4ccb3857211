"""
API Router - Aggregates all endpoints.
"""

from fastapi import APIRouter

from app.api import assets, health

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(health.router, tags=["health"])
api_router.include_router(assets.router, prefix="/asset", tags=["assets"])
