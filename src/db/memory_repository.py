"""Implementation of the repositories keeping everything in memory, for the lifetime of the process."""

import logging
import threading
from copy import deepcopy
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

from src.core.models import GameModel, PlayerModel
from src.core.shared_types import CPU_LABEL, PlayerType

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryRepository:
    """
    Players and games stored in dictionaries (insertion order = creation order).

    Records are copied on the way in and on the way out, so a caller only ever sees committed snapshots
    and can mutate what it got back without touching the store.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._players: dict[UUID, PlayerModel] = {}
        self._games: dict[UUID, GameModel] = {}
        self._cpu_counter = 1

    # --- players ---
    def get_player(self, player_id: UUID) -> PlayerModel | None:
        """Get player by ID, if record exists."""
        with self._lock:
            return self._players.get(player_id)

    def find_player(self, player_type: str, name: str) -> PlayerModel | None:
        """First player of the given type with this name. Human names ignore case, CPU labels match exactly."""
        ignore_case = player_type == PlayerType.HUMAN
        wanted = name.casefold() if ignore_case else name
        with self._lock:
            return next(
                (
                    player
                    for player in self._players.values()
                    if player.type == player_type
                    and (player.name.casefold() if ignore_case else player.name) == wanted
                ),
                None,
            )

    def create_player(self, name: str, player_type: str) -> PlayerModel:
        """Store a new player and return it, with its newly created ID."""
        player = PlayerModel(
            id=uuid4(), name=name, type=player_type, created_at=utc_now()
        )
        with self._lock:
            self._players[player.id] = player
        logger.info("Created %s player %r (%s)", player_type, name, player.id)
        return player

    def list_players(self, player_type: Optional[str] = None) -> list[PlayerModel]:
        """All players in creation order, optionally only those of one type."""
        with self._lock:
            return [
                player
                for player in self._players.values()
                if player_type is None or player.type == player_type
            ]

    def next_cpu_labels(self, count: int) -> list[str]:
        """Reserve `count` consecutive labels ("CPU 1", "CPU 2", ...) from the store's counter."""
        with self._lock:
            first = self._cpu_counter
            self._cpu_counter += count
        return [f"{CPU_LABEL} {number}" for number in range(first, first + count)]

    # --- games ---
    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        with self._lock:
            game = self._games.get(game_id)
            return deepcopy(game) if game is not None else None

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""
        new_id = uuid4()
        with self._lock:
            self._games[new_id] = deepcopy(game)
        return deepcopy(game), new_id

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Replace the state of an existing record."""
        with self._lock:
            if game_id not in self._games:
                return None
            self._games[game_id] = deepcopy(game)
        return deepcopy(game)

    def list_games(self) -> list[tuple[UUID, GameModel]]:
        """All games, most recently created first."""
        with self._lock:
            return [
                (game_id, deepcopy(game))
                for game_id, game in reversed(self._games.items())
            ]
