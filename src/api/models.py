"""Requests and Response models"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from src.core.exceptions import ValidationError
from src.core.shared_types import GameMode, PlayerFilter


class CamelModel(BaseModel):
    """JSON uses camelCase keys (playerXId, currentSymbol, ...), Python code uses snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- REQUEST MODELS ---
class RegisterPlayerRequest(CamelModel):
    name: Optional[str] = Field(default="", validate_default=True)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: Optional[str]) -> str:
        name = (value or "").strip()
        if not name:
            raise ValidationError("Name is required.")
        return name


class ListPlayersRequest(CamelModel):
    type: PlayerFilter = PlayerFilter.ALL

    @field_validator("type", mode="before")
    @classmethod
    def fallback_to_all(cls, value: Optional[str]) -> PlayerFilter:
        """Anything that is not 'human' or 'cpu' lists every player."""
        candidate = str(value or "").strip().lower()
        if candidate in tuple(PlayerFilter):
            return PlayerFilter(candidate)
        return PlayerFilter.ALL


class CreateGameRequest(CamelModel):
    mode: str = Field(default="", validate_default=True)
    player_x_id: Optional[UUID] = None
    player_o_id: Optional[UUID] = None

    @field_validator("mode")
    @classmethod
    def validate_mode(cls, value: str) -> str:
        mode = value.strip().lower()
        if mode not in tuple(GameMode):
            raise ValidationError(
                f"Invalid mode: {value!r}. Pick one from {', '.join(GameMode)}."
            )
        return mode

    @field_validator("player_x_id", "player_o_id", mode="before")
    @classmethod
    def drop_unknown_ids(cls, value: object) -> object:
        """An ID that is not a UUID cannot name a player: it counts as missing, the seating rules report it."""
        if value is None or isinstance(value, UUID):
            return value
        try:
            return UUID(str(value))
        except ValueError:
            return None


class GetGameRequest(CamelModel):
    game_id: UUID


class MoveRequest(CamelModel):
    game_id: UUID
    # Range is checked by the Game, after it knows the game exists and is still in progress.
    index: int


class MoveBody(CamelModel):
    """Body of POST /api/games/{game_id}/moves (the game ID comes from the path)."""

    index: int


class ResetGameRequest(CamelModel):
    game_id: UUID


class CpuStepRequest(CamelModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class PlayerResponse(CamelModel):
    id: UUID
    name: str
    type: str
    created_at: datetime


class GameResponse(CamelModel):
    id: UUID
    board: list[Optional[str]]
    player_x_id: UUID
    player_o_id: UUID
    player_x: Optional[PlayerResponse]
    player_o: Optional[PlayerResponse]
    current_symbol: str
    status: str
    winner_symbol: Optional[str]
    winner_id: Optional[UUID]
    mode: str
    created_at: datetime
    last_move_at: Optional[datetime]


class HealthResponse(CamelModel):
    ok: bool
    time: datetime
