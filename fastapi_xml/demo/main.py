"""
Demo application entry point.

Creates the FastAPI application and wires together:
- Routers
- Error handlers (XML rejection mapping)
- Logging configuration

No business logic belongs here.
"""

from fastapi import FastAPI

from fastapi_xml.core.config import settings
from fastapi_xml.demo.router import UserStore, router
from fastapi_xml.shared.errors.handlers import register_error_handlers
from fastapi_xml.shared.logging import configure_logging


def create_app() -> FastAPI:
    """Create and configure the demo application.

    Each call gets its own user store, so tests can build isolated apps.

    Returns:
        A fully configured FastAPI application instance.
    """
    configure_logging(level=settings.log_level)

    app = FastAPI(
        title=settings.project_name,
        version=settings.version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )
    app.state.user_store = UserStore()

    # --- Error Handlers ---
    register_error_handlers(app)

    # --- Routers ---
    app.include_router(router, prefix="/api/v1")

    return app


app = create_app()
