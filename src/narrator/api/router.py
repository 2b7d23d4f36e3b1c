from fastapi import APIRouter

from narrator.api.endpoints import narration, profile, storyboard, system

api_router = APIRouter()
api_router.include_router(narration.router, tags=["narration"])
api_router.include_router(storyboard.router, prefix="/storyboard", tags=["storyboard"])
api_router.include_router(profile.router, prefix="/profile", tags=["profile"])
api_router.include_router(system.router, tags=["system"])
