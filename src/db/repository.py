"""Protocol repository (the in-memory store implements it; a persistent one could be added the same way)"""

from typing import Optional, Protocol
from uuid import UUID

from src.core.models import GameModel, PlayerModel


class PlayerRepository(Protocol):
    """Storage of registered (human and CPU) players"""

    def get_player(self, player_id: UUID) -> PlayerModel | None:
        """Get player by ID, if record exists."""
        ...

    def find_player(self, player_type: str, name: str) -> PlayerModel | None:
        """First player of the given type with this name (case-insensitive for humans, exact for CPU labels)."""
        ...

    def create_player(self, name: str, player_type: str) -> PlayerModel:
        """Store a new player and return it, with its newly created ID."""
        ...

    def list_players(self, player_type: Optional[str] = None) -> list[PlayerModel]:
        """All players in creation order, optionally only those of one type."""
        ...

    def next_cpu_labels(self, count: int) -> list[str]:
        """Reserve `count` consecutive labels ("CPU 1", "CPU 2", ...) from the store's counter."""
        ...


class GameRepository(Protocol):
    """Storage of games"""

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        ...

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""
        ...

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Replace the state of an existing record."""
        ...

    def list_games(self) -> list[tuple[UUID, GameModel]]:
        """All games, most recently created first."""
        ...


class MatchRepository(PlayerRepository, GameRepository, Protocol):
    """Everything the match service needs from persistence."""
