"""
REST API, mounted under /api.
"""

from fastapi import APIRouter

from postr_api import __version__, responses
from postr_api.rest import categories, comments, posts, users

api_router = APIRouter(prefix="/api")


@api_router.get("/health", tags=["Health"], summary="REST API status")
async def rest_health():
    return responses.success({
        "status": "ok",
        "api": "REST API operational",
        "version": __version__,
    })


api_router.include_router(users.router)
api_router.include_router(posts.router)
api_router.include_router(categories.router)
api_router.include_router(comments.router)

__all__ = ["api_router"]
