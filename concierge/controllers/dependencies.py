"""Shared FastAPI dependency providers for controller layer."""

from __future__ import annotations

from fastapi import HTTPException, Request, status

from concierge.services.session_service import GameSessionService
from concierge.utils.config import get_settings


def get_session_service(request: Request) -> GameSessionService:
    service = getattr(request.app.state, "session_service", None)
    if service is None:
        service = GameSessionService(settings=get_settings())
        request.app.state.session_service = service
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Game session service is not initialized",
        )
    return service
