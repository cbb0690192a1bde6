from fastapi import FastAPI

from .activity import router as activity_router
from .auth import router as auth_router
from .profile import router as profile_router
from .users import router as users_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(profile_router)
    app.include_router(activity_router)
