"""HTTP routes. Each route only translates between HTTP and a MatchService call."""

from datetime import datetime, timezone
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, Response, status

from src.api.models import (
    CpuStepRequest,
    CreateGameRequest,
    GameResponse,
    GetGameRequest,
    HealthResponse,
    ListPlayersRequest,
    MoveBody,
    MoveRequest,
    PlayerResponse,
    RegisterPlayerRequest,
    ResetGameRequest,
)
from src.services.match_service import MatchService

router = APIRouter(prefix="/api")


def get_service(request: Request) -> MatchService:
    """The app owns a single service (and store) for its whole lifetime."""
    return request.app.state.service


Service = Annotated[MatchService, Depends(get_service)]


@router.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(ok=True, time=datetime.now(timezone.utc))


# --- players ---
@router.get("/players", response_model=list[PlayerResponse])
def list_players(
    service: Service, player_type: Annotated[str, Query(alias="type")] = "all"
) -> list[PlayerResponse]:
    return service.list_players(ListPlayersRequest(type=player_type))


@router.post(
    "/players", response_model=PlayerResponse, status_code=status.HTTP_201_CREATED
)
def register_player(
    body: RegisterPlayerRequest, service: Service, response: Response
) -> PlayerResponse:
    """201 for a new player, 200 when the name was already registered."""
    player, created = service.register_player(body)
    if not created:
        response.status_code = status.HTTP_200_OK
    return player


# --- games ---
@router.get("/games", response_model=list[GameResponse])
def list_games(service: Service) -> list[GameResponse]:
    return service.list_games()


@router.post("/games", response_model=GameResponse, status_code=status.HTTP_201_CREATED)
def create_game(body: CreateGameRequest, service: Service) -> GameResponse:
    return service.create_game(body)


@router.get("/games/{game_id}", response_model=GameResponse)
def get_game(game_id: UUID, service: Service) -> GameResponse:
    return service.get_game(GetGameRequest(game_id=game_id))


@router.post("/games/{game_id}/moves", response_model=GameResponse)
def make_move(game_id: UUID, body: MoveBody, service: Service) -> GameResponse:
    return service.make_move(MoveRequest(game_id=game_id, index=body.index))


@router.post("/games/{game_id}/reset", response_model=GameResponse)
def reset_game(game_id: UUID, service: Service) -> GameResponse:
    return service.reset_game(ResetGameRequest(game_id=game_id))


@router.post("/games/{game_id}/cpu-step", response_model=GameResponse)
def step_cpu_turn(game_id: UUID, service: Service) -> GameResponse:
    return service.step_cpu_turn(CpuStepRequest(game_id=game_id))
