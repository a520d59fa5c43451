"""Application factory: wires settings, store, service and routes together."""

import logging
import random
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api.routes import router
from src.core.config import Settings
from src.core.exceptions import (
    GameError,
    InvalidStateError,
    NotFoundError,
    OccupiedError,
    TurnError,
    ValidationError,
)
from src.db.memory_repository import InMemoryRepository
from src.services.match_service import MatchService

logger = logging.getLogger(__name__)

# Anything deriving from GameError that is not listed here is a server-side problem (500).
ERROR_STATUS_CODES: dict[type[GameError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    InvalidStateError: status.HTTP_400_BAD_REQUEST,
    TurnError: status.HTTP_400_BAD_REQUEST,
    OccupiedError: status.HTTP_400_BAD_REQUEST,
}


def status_code_for(error: GameError) -> int:
    for error_type, status_code in ERROR_STATUS_CODES.items():
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def handle_game_error(request: Request, exc: Exception) -> JSONResponse:
    status_code = (
        status_code_for(exc)
        if isinstance(exc, GameError)
        else status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.exception("Unexpected error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=status_code, content={"error": str(exc)})


def create_app(
    settings: Optional[Settings] = None, service: Optional[MatchService] = None
) -> FastAPI:
    """A fresh app with its own in-memory store, unless a service is handed in."""
    settings = settings or Settings()
    if service is None:
        rng = random.Random(settings.cpu_seed) if settings.cpu_seed is not None else None
        service = MatchService(InMemoryRepository(), rng=rng)

    app = FastAPI(title="Tic-tac-toe API")
    app.state.service = service
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(GameError, handle_game_error)
    app.include_router(router)
    return app
