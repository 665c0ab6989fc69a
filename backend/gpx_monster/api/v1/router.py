"""
API Router v1

Combines all route modules.
"""

from fastapi import APIRouter

from gpx_monster.api.v1.routes import gpx

api_router = APIRouter()

api_router.include_router(gpx.router, prefix="/gpx", tags=["GPX"])
