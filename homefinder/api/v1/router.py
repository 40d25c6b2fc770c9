from fastapi import APIRouter

from homefinder.api.v1.preferences import router as preferences_router
from homefinder.api.v1.properties import router as properties_router

api_router = APIRouter()

api_router.include_router(properties_router)
api_router.include_router(preferences_router)
