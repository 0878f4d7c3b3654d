"""API route registration."""

from fastapi import APIRouter

from app.api.routes import files, health, storage, usage

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(files.router, prefix="/files", tags=["files"])
api_router.include_router(usage.router, prefix="/usage", tags=["usage"])
api_router.include_router(storage.router, prefix="/storage", tags=["storage"])
