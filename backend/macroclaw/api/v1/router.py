"""
API Router v1

Combines all route modules.
"""

from fastapi import APIRouter

from macroclaw.api.v1.routes import activities, strava

api_router = APIRouter()

api_router.include_router(strava.router, tags=["Strava"])
api_router.include_router(activities.router, tags=["Activities"])
