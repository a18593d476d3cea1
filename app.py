"""
app.py — FastAPI application factory and startup lifecycle.

This is the ASGI application object imported by uvicorn.
It wires the game session service and registers the game router.

Usage (via launcher):
    python main.py

Usage (direct uvicorn):
    uvicorn app:app --reload
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from concierge.controllers.game_controller import router as game_router
from concierge.services.session_service import GameSessionService
from concierge.utils.config import Settings, get_settings
from concierge.utils.logger import get_logger


logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build and wire the FastAPI application.

    The session service is created here and exposed through app.state, so
    every dependency is traceable from this function.
    """
    settings = settings or get_settings()

    session_service = GameSessionService(settings=settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Log the starting game before accepting requests."""
        _startup(app)
        yield

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # --- Routers ---
    app.include_router(game_router)

    # --- Inject services into app.state for dependency resolution ---
    app.state.settings = settings
    app.state.session_service = session_service

    return app


def _startup(app: FastAPI) -> None:
    session_service: GameSessionService = app.state.session_service
    status = session_service.status()
    logger.info(
        "Startup complete — hotel=%s | rooms=%s | day=%s",
        status["hotel_name"],
        sum(row["total"] for row in status["rooms"]),
        status["day"],
    )


# Module-level app object for uvicorn
app = create_app()
