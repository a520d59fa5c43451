"""
The Game class is what the service layer talks to in the domain layer.
It owns the state of a single match: it accepts moves, resolves win/draw after each of them, and plays the CPU turns.

Which kind of player (human or CPU) sits behind each symbol is looked up by the service and handed to the Game,
the Game itself only stores the player IDs.
"""

import logging
import random
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Self
from uuid import UUID

from src.core.exceptions import (
    InternalConsistencyError,
    InvalidStateError,
    OccupiedError,
    TurnError,
    ValidationError,
)
from src.core.models import GameModel
from src.core.shared_types import GameMode, PlayerType, Status, Symbol
from src.tictactoe.cpu import pick_cpu_move
from src.tictactoe.rules import (
    BOARD_SIZE,
    empty_board,
    is_draw,
    is_valid_cell,
    opponent,
    validate_board,
    winner,
)

logger = logging.getLogger(__name__)

Seats = dict[Symbol, PlayerType]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: list[Optional[Symbol]]
    player_x_id: UUID
    player_o_id: UUID
    current_symbol: Symbol
    status: Status
    mode: GameMode
    created_at: datetime
    seats: Seats
    winner_symbol: Optional[Symbol] = None
    winner_id: Optional[UUID] = None
    last_move_at: Optional[datetime] = None

    @classmethod
    def new_game(
        cls, mode: GameMode, player_x_id: UUID, player_o_id: UUID, seats: Seats
    ) -> Self:
        """Empty board, X to move."""
        return cls(
            board=empty_board(),
            player_x_id=player_x_id,
            player_o_id=player_o_id,
            current_symbol=Symbol.X,
            status=Status.IN_PROGRESS,
            mode=mode,
            created_at=utc_now(),
            seats=seats,
        )

    @classmethod
    def from_model(cls, model: GameModel, seats: Seats) -> Self:
        """Define how to construct a Game from the information the Service layer actually has"""
        try:
            current_symbol = Symbol(model.current_symbol)
            status = Status(model.status)
            mode = GameMode(model.mode)
            winner_symbol = (
                Symbol(model.winner_symbol) if model.winner_symbol else None
            )
        except ValueError as exc:
            raise ValidationError(f"Invalid stored game: {exc}") from exc

        return cls(
            board=validate_board(model.board),
            player_x_id=model.player_x_id,
            player_o_id=model.player_o_id,
            current_symbol=current_symbol,
            status=status,
            mode=mode,
            created_at=model.created_at,
            seats=seats,
            winner_symbol=winner_symbol,
            winner_id=model.winner_id,
            last_move_at=model.last_move_at,
        )

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""
        return GameModel(
            board=[str(cell) if cell else None for cell in self.board],
            player_x_id=self.player_x_id,
            player_o_id=self.player_o_id,
            current_symbol=str(self.current_symbol),
            status=str(self.status),
            mode=str(self.mode),
            created_at=self.created_at,
            winner_symbol=str(self.winner_symbol) if self.winner_symbol else None,
            winner_id=self.winner_id,
            last_move_at=self.last_move_at,
        )

    @property
    def is_over(self) -> bool:
        return self.status != Status.IN_PROGRESS

    @property
    def moves_played(self) -> int:
        return sum(1 for cell in self.board if cell is not None)

    def player_id(self, symbol: Symbol) -> UUID:
        return self.player_x_id if symbol == Symbol.X else self.player_o_id

    def is_cpu_turn(self) -> bool:
        return self.seats[self.current_symbol] == PlayerType.CPU

    def make_move(self, index: int) -> None:
        """
        Move submitted by a human player.
        ----

        Checks, in this order:
        1. game still in progress
        2. index is a cell on the board
        3. it is a human's turn
        4. the cell is empty
        """
        self._assert_in_progress()

        if not is_valid_cell(index):
            raise ValidationError(
                f"Invalid index: {index}. Must be between 0 and {BOARD_SIZE - 1}."
            )

        if self.is_cpu_turn():
            raise TurnError("It is not a human turn.")

        self._place(index)

    def play_cpu_turn(self, rng: Optional[random.Random] = None) -> int:
        """Let the CPU to move pick and play exactly one cell. Returns the index it played."""
        self._assert_in_progress()

        if not self.is_cpu_turn():
            raise TurnError("It is not a CPU turn.")

        index = pick_cpu_move(self.board, self.current_symbol, rng)
        if index is None:
            raise InternalConsistencyError(
                f"CPU found no move while the game is still in progress. board: {self.board}"
            )
        logger.debug("CPU %s plays cell %d", self.current_symbol, index)
        self._place(index)
        return index

    def run_cpu_turns(self, rng: Optional[random.Random] = None) -> list[int]:
        """
        Cascade: keep playing CPU turns until the game is over or a human has to move.

        A game never lasts more than 9 moves, so neither does the cascade.
        """
        played: list[int] = []
        for _ in range(BOARD_SIZE):
            if self.is_over or not self.is_cpu_turn():
                break
            played.append(self.play_cpu_turn(rng))
        return played

    def reset(self) -> None:
        """Back to an empty board. ID, players, mode and creation time are kept."""
        self.board = empty_board()
        self.current_symbol = Symbol.X
        self.status = Status.IN_PROGRESS
        self.winner_symbol = None
        self.winner_id = None
        self.last_move_at = None

    # --- internal helpers ---
    def _assert_in_progress(self) -> None:
        if self.is_over:
            raise InvalidStateError(f"Game is over. status: {self.status}")

    def _place(self, index: int) -> None:
        """
        The one primitive that changes the board:
        write the current symbol, resolve the status, and hand the turn over if the game continues.
        """
        if self.board[index] is not None:
            raise OccupiedError(f"Square already taken: {index}")

        symbol = self.current_symbol
        self.board[index] = symbol
        self.last_move_at = utc_now()
        self._update_status()

        if not self.is_over:
            self.current_symbol = opponent(symbol)

    def _update_status(self) -> None:
        winning_symbol = winner(self.board)
        if winning_symbol is not None:
            self.status = Status.WON
            self.winner_symbol = winning_symbol
            self.winner_id = self.player_id(winning_symbol)
            return
        if is_draw(self.board):
            self.status = Status.DRAW
