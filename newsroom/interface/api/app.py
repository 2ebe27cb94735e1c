"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from newsroom.config import Settings
from newsroom.interface.api.routes import auth, comments, health, posts, tags, users
from newsroom.util.di.container import create_container, setup_di
from newsroom.util.observability import instrument_fastapi

ROUTERS = (
    health.router,
    auth.router,
    posts.router,
    comments.router,
    tags.router,
    users.router,
)


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Logfire should be configured first; ``scripts/start_app.py`` does that.

    Args:
        container: DI container to use; tests pass one with in-memory
            persistence. Defaults to the production container.
    """
    settings = Settings()

    app_instance = FastAPI(
        title="Newsroom API",
        description="Posts, tags and threaded comments with role-based access",
        version="0.1.0",
    )
    instrument_fastapi(app_instance)

    # Cookies carry the session, so origins must be listed explicitly
    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept"],
        max_age=settings.cors.max_age,
    )

    setup_di(app_instance, container or create_container())
    for router in ROUTERS:
        app_instance.include_router(router)

    return app_instance


# Imported by uvicorn via "newsroom.interface.api.app:app"
app = create_app()
