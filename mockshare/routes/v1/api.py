from fastapi import APIRouter

from mockshare.mockups.router import router as mockups_router
from mockshare.versions.router import router as versions_router
from mockshare.comments.router import router as comments_router

api_router = APIRouter()

api_router.include_router(mockups_router)
api_router.include_router(versions_router)
api_router.include_router(comments_router)
