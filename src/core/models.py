"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
The service layer builds them from the domain objects, the repository stores them and hands back copies.
(Decouples the storage from the domain/API representation of a player or a game)
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID

# Type alias to make GameModel easier to read: None, "X" or "O"
Cell = Optional[str]


@dataclass(frozen=True)
class PlayerModel:
    """Registered player. Never changes after creation."""

    id: UUID
    name: str
    type: str
    created_at: datetime


@dataclass
class GameModel:
    """Transport-safe representation of a tic-tac-toe game used between Service, DB, and Game layers."""

    board: list[Cell]
    player_x_id: UUID
    player_o_id: UUID
    current_symbol: str
    status: str
    mode: str
    created_at: datetime
    winner_symbol: Optional[str] = None
    winner_id: Optional[UUID] = None
    last_move_at: Optional[datetime] = None
