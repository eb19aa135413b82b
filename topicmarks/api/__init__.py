from fastapi import APIRouter

from .topics import router as topics_router
from .bookmarks import router as bookmarks_router


api_router = APIRouter()
api_router.include_router(topics_router)
api_router.include_router(bookmarks_router)
