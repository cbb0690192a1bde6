"""ASGI entry point for the DYPSE API.

Serve it with uvicorn, which is installed with the project::

    uvicorn main:app --reload
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from dypse_api.config import get_settings
from dypse_api.infrastructure.database import engine, initialize_database
from dypse_api.infrastructure.storage import UPLOADS_URL_PREFIX
from dypse_api.interfaces.api.routes import register_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create missing tables and roles on startup, dispose the pool on shutdown."""

    initialize_database()
    yield
    engine.dispose()


def create_app() -> FastAPI:
    """Build the DYPSE API with its routers and the uploaded files mount."""

    settings = get_settings()
    app = FastAPI(title="DYPSE API", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)

    # Profile pictures and CVs are served back under /uploads.
    settings.upload_dir.mkdir(parents=True, exist_ok=True)
    app.mount(UPLOADS_URL_PREFIX, StaticFiles(directory=settings.upload_dir), name="uploads")
    return app


app = create_app()
