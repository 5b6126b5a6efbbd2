"""
API router.
"""
from fastapi import APIRouter

from hwid_api.api.endpoints import health, keys

api_router = APIRouter()

# Health check endpoint (no prefix, so it's /api/health)
api_router.include_router(health.router, tags=["health"])

api_router.include_router(keys.router, prefix="/keys", tags=["keys"])
