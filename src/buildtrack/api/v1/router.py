from fastapi import APIRouter

from src.buildtrack.api.v1 import comments, photos, projects, tasks, templates, trades

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(projects.router)
api_router.include_router(trades.router)
api_router.include_router(tasks.router)
api_router.include_router(comments.router)
api_router.include_router(photos.router)
api_router.include_router(templates.router)
