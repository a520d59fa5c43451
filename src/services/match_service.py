"""Match management: validates requests, drives the Game, and stores the result (API router <-> domain <-> repository)."""

import logging
import random
import threading
from contextlib import contextmanager
from typing import Iterator, Optional
from uuid import UUID

from src.api.models import (
    CpuStepRequest,
    CreateGameRequest,
    GameResponse,
    GetGameRequest,
    ListPlayersRequest,
    MoveRequest,
    PlayerResponse,
    RegisterPlayerRequest,
    ResetGameRequest,
)
from src.core.exceptions import NotFoundError, ValidationError
from src.core.models import GameModel, PlayerModel
from src.core.shared_types import (
    CPU_LABEL,
    GameMode,
    PlayerFilter,
    PlayerType,
    Symbol,
)
from src.db.repository import MatchRepository
from src.tictactoe.game import Game, Seats

logger = logging.getLogger(__name__)


class MatchService:
    """Orchestration of layers for tic-tac-toe matches."""

    def __init__(
        self, repository: MatchRepository, rng: Optional[random.Random] = None
    ) -> None:
        self.repo = repository
        self.rng = rng
        # check-then-insert of players (human registration and CPU provisioning)
        self._players_lock = threading.Lock()
        # one lock per game: moves, resets and CPU steps on a game never interleave
        self._game_locks: dict[UUID, threading.Lock] = {}
        self._game_locks_guard = threading.Lock()

    # -- API routes logic ---
    def register_player(
        self, request: RegisterPlayerRequest
    ) -> tuple[PlayerResponse, bool]:
        """
        Register a human player by name.
        ----
        Registering the same name twice (case-insensitive) returns the existing player.
        The boolean tells whether a new player was created.
        """
        with self._players_lock:
            existing = self.repo.find_player(PlayerType.HUMAN, request.name)
            if existing is not None:
                return self._create_player_response(existing), False
            player = self.repo.create_player(request.name, PlayerType.HUMAN)
        return self._create_player_response(player), True

    def list_players(
        self, request: Optional[ListPlayersRequest] = None
    ) -> list[PlayerResponse]:
        """Players in creation order (all of them, or only humans or only CPUs)."""
        request = request or ListPlayersRequest()
        player_type = None if request.type == PlayerFilter.ALL else str(request.type)
        return [
            self._create_player_response(player)
            for player in self.repo.list_players(player_type)
        ]

    def create_game(self, request: CreateGameRequest) -> GameResponse:
        """Start a new match. Seats are checked (or CPU players provisioned) according to the mode."""
        mode = GameMode(request.mode)
        player_x, player_o = self._seat_players(mode, request)

        game = Game.new_game(
            mode=mode,
            player_x_id=player_x.id,
            player_o_id=player_o.id,
            seats=self._seats(player_x, player_o),
        )
        # X always starts and is never a CPU outside of cpu-cpu, so this does not play anything (yet).
        if mode != GameMode.CPU_CPU:
            game.run_cpu_turns(self.rng)

        stored_game, game_id = self.repo.create_game(game.to_model())
        logger.info(
            "Created %s game %s (X: %s, O: %s)", mode, game_id, player_x.name, player_o.name
        )
        return self._create_game_response(game_id, stored_game)

    def get_game(self, request: GetGameRequest) -> GameResponse:
        """
        Current state of one game, with both players attached.
        ----
        Clients waiting for the other side (or for a cpu-cpu step) call this repeatedly.
        """
        game_model = self._fetch_game(request.game_id)
        return self._create_game_response(request.game_id, game_model)

    def list_games(self) -> list[GameResponse]:
        """All games, most recently created first."""
        return [
            self._create_game_response(game_id, model)
            for game_id, model in self.repo.list_games()
        ]

    def make_move(self, request: MoveRequest) -> GameResponse:
        """A human plays a cell. All CPU turns that follow are played right away."""
        with self._game_lock(request.game_id):
            game = self._load_game(request.game_id)
            game.make_move(request.index)
            played = game.run_cpu_turns(self.rng)
            after_move = self._save_game(request.game_id, game)

        logger.debug(
            "Game %s: cell %d played, CPU answered %s",
            request.game_id,
            request.index,
            played,
        )
        return self._create_game_response(request.game_id, after_move)

    def reset_game(self, request: ResetGameRequest) -> GameResponse:
        """Clear the board of an existing game (the only way out of a finished game)."""
        with self._game_lock(request.game_id):
            game = self._load_game(request.game_id)
            game.reset()
            if game.mode != GameMode.CPU_CPU:
                game.run_cpu_turns(self.rng)
            after_reset = self._save_game(request.game_id, game)

        logger.info("Game %s reset", request.game_id)
        return self._create_game_response(request.game_id, after_reset)

    def step_cpu_turn(self, request: CpuStepRequest) -> GameResponse:
        """
        Play exactly one CPU turn, without cascading.
        ----
        Used by the frontend's timer to pace cpu-cpu games one move at a time.
        """
        with self._game_lock(request.game_id):
            game = self._load_game(request.game_id)
            game.play_cpu_turn(self.rng)
            after_step = self._save_game(request.game_id, game)
        return self._create_game_response(request.game_id, after_step)

    # -- Internal helpers --
    def _seat_players(
        self, mode: GameMode, request: CreateGameRequest
    ) -> tuple[PlayerModel, PlayerModel]:
        """Players for X and O, after checking the rules that apply to this mode."""
        if mode == GameMode.HUMAN_HUMAN:
            player_x = self._lookup_player(request.player_x_id)
            player_o = self._lookup_player(request.player_o_id)
            if player_x is None or player_o is None:
                raise ValidationError("Both players are required.")
            if player_x.id == player_o.id:
                raise ValidationError("Player X and O must be different.")
            if any(p.type != PlayerType.HUMAN for p in (player_x, player_o)):
                raise ValidationError("Players must be human.")
            return player_x, player_o

        if mode == GameMode.HUMAN_CPU:
            player_x = self._lookup_player(request.player_x_id)
            if player_x is None or player_x.type != PlayerType.HUMAN:
                raise ValidationError("Human player is required for X.")
            return player_x, self._ensure_cpu_player(CPU_LABEL)

        label_x, label_o = self.repo.next_cpu_labels(2)
        return self._ensure_cpu_player(label_x), self._ensure_cpu_player(label_o)

    def _lookup_player(self, player_id: Optional[UUID]) -> PlayerModel | None:
        if player_id is None:
            return None
        return self.repo.get_player(player_id)

    def _ensure_cpu_player(self, label: str) -> PlayerModel:
        """CPU players are created on first use and shared by every game that asks for the same label."""
        with self._players_lock:
            existing = self.repo.find_player(PlayerType.CPU, label)
            if existing is not None:
                return existing
            return self.repo.create_player(label, PlayerType.CPU)

    def _seats(self, player_x: PlayerModel, player_o: PlayerModel) -> Seats:
        return {
            Symbol.X: PlayerType(player_x.type),
            Symbol.O: PlayerType(player_o.type),
        }

    @contextmanager
    def _game_lock(self, game_id: UUID) -> Iterator[None]:
        """Lock of an existing game. Unknown IDs raise before any lock is created for them."""
        with self._game_locks_guard:
            lock = self._game_locks.get(game_id)
            if lock is None:
                self._fetch_game(game_id)
                lock = self._game_locks[game_id] = threading.Lock()
        with lock:
            yield

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise NotFoundError(f"Game with {game_id=} not found.")
        return game_model

    def _load_game(self, game_id: UUID) -> Game:
        """Rebuild the domain Game, joining in the type of each seated player."""
        stored_model = self._fetch_game(game_id)
        player_x = self._require_player(stored_model.player_x_id)
        player_o = self._require_player(stored_model.player_o_id)
        return Game.from_model(stored_model, self._seats(player_x, player_o))

    def _require_player(self, player_id: UUID) -> PlayerModel:
        player = self.repo.get_player(player_id)
        if player is None:
            raise NotFoundError(f"Player with {player_id=} not found.")
        return player

    def _save_game(self, game_id: UUID, game: Game) -> GameModel:
        stored = self.repo.update_game(game_id, game.to_model())
        if stored is None:
            raise NotFoundError(f"Game with {game_id=} not found.")
        if game.is_over:
            logger.info(
                "Game %s finished: %s%s",
                game_id,
                game.status,
                f" ({game.winner_symbol} wins)" if game.winner_symbol else "",
            )
        return stored

    def _create_player_response(self, player: PlayerModel) -> PlayerResponse:
        return PlayerResponse(
            id=player.id,
            name=player.name,
            type=player.type,
            created_at=player.created_at,
        )

    def _create_game_response(self, game_id: UUID, model: GameModel) -> GameResponse:
        """Convert info in GameModel to a GameResponse, with both players looked up (not stored with the game)."""
        player_x = self.repo.get_player(model.player_x_id)
        player_o = self.repo.get_player(model.player_o_id)
        return GameResponse(
            id=game_id,
            board=list(model.board),
            player_x_id=model.player_x_id,
            player_o_id=model.player_o_id,
            player_x=self._create_player_response(player_x) if player_x else None,
            player_o=self._create_player_response(player_o) if player_o else None,
            current_symbol=model.current_symbol,
            status=model.status,
            winner_symbol=model.winner_symbol,
            winner_id=model.winner_id,
            mode=model.mode,
            created_at=model.created_at,
            last_move_at=model.last_move_at,
        )
