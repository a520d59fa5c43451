"""
Move selection for CPU players.

Rules are tried in a fixed priority order and the first one that applies decides the move:
1. win now
2. block the opponent
3. take the center
4. take a random free corner
5. take a random free cell
"""

import random
from typing import Optional

from src.core.shared_types import Symbol
from src.tictactoe.rules import (
    CENTER,
    CORNERS,
    Board,
    available_moves,
    find_winning_move,
    opponent,
)


def pick_cpu_move(
    board: Board, symbol: Symbol, rng: Optional[random.Random] = None
) -> Optional[int]:
    """Cell the CPU playing `symbol` picks. None only when the board is full."""
    chooser = rng if rng is not None else random

    win = find_winning_move(board, symbol)
    if win is not None:
        return win

    block = find_winning_move(board, opponent(symbol))
    if block is not None:
        return block

    if board[CENTER] is None:
        return CENTER

    free_corners = [idx for idx in CORNERS if board[idx] is None]
    if free_corners:
        return chooser.choice(free_corners)

    moves = available_moves(board)
    if not moves:
        return None
    return chooser.choice(moves)
