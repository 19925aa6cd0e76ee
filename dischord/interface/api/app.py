"""FastAPI application."""

from fastapi import FastAPI

from dischord.interface.api.routes import (
    health,
    messages,
    posts,
    servers,
    users,
    votes,
)
from dischord.interface.error import register_error_handlers
from dischord.util.di.container import create_container, setup_di
from dischord.util.observability import instrument_fastapi


def create_app() -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    In tests, configure in conftest.py if needed.
    """
    app_instance = FastAPI(
        title="Dischord API",
        description="Backend API for Dischord - servers, posts, votes, friends and chat",
        version="0.1.0",
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    # Setup dependency injection
    # Settings are loaded from environment automatically
    container = create_container()
    setup_di(app_instance, container)

    # Register routes
    app_instance.include_router(health.router)
    app_instance.include_router(users.router)
    app_instance.include_router(servers.router)
    app_instance.include_router(posts.router)
    app_instance.include_router(votes.router)
    app_instance.include_router(messages.router)

    register_error_handlers(app_instance)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
# In production: start_app.py handles this
# In tests: configure in conftest.py
app = create_app()
