from fastapi import APIRouter

from app.api.routes import chat, projects, utils

api_router = APIRouter()
api_router.include_router(chat.router, tags=["chat"])
api_router.include_router(projects.router, tags=["projects"])
api_router.include_router(utils.router, tags=["utils"])
