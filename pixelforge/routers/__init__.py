from fastapi import APIRouter

from . import auth, documents, health, projects, users

api_router = APIRouter()
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(projects.router)
api_router.include_router(documents.router)

__all__ = [
    "api_router",
    "auth",
    "users",
    "projects",
    "documents",
    "health",
]
