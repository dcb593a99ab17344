from fastapi import APIRouter

from src.churchhub.api.v1 import auth, churches, members, privacy

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(auth.router)
api_router.include_router(churches.router)
api_router.include_router(members.router)
api_router.include_router(privacy.router)
