from fastapi import APIRouter

from update_feed.api.v1 import updates

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(updates.router)
