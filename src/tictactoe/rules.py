"""
The rules of tic-tac-toe as pure functions over a board.

A board is a list of 9 cells in row-major order (index 0 is the top left, 8 the bottom right),
each cell holding either None (empty) or the Symbol that was placed there.
"""

from typing import Optional, Sequence

from src.core.exceptions import ValidationError
from src.core.shared_types import Symbol

BOARD_SIZE = 9
CENTER = 4
CORNERS = (0, 2, 6, 8)

Board = Sequence[Optional[Symbol]]

# rows, columns, diagonals. The order matters: the first complete line found is the one reported.
WIN_LINES: tuple[tuple[int, int, int], ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)


def empty_board() -> list[Optional[Symbol]]:
    return [None] * BOARD_SIZE


def opponent(symbol: Symbol) -> Symbol:
    return Symbol.O if symbol == Symbol.X else Symbol.X


def is_valid_cell(index: int) -> bool:
    return 0 <= index < BOARD_SIZE


def winner(board: Board) -> Optional[Symbol]:
    """Symbol occupying a complete line, if any."""
    for a, b, c in WIN_LINES:
        if board[a] is not None and board[a] == board[b] == board[c]:
            return Symbol(board[a])
    return None


def is_full(board: Board) -> bool:
    return all(cell is not None for cell in board)


def is_draw(board: Board) -> bool:
    return is_full(board) and winner(board) is None


def available_moves(board: Board) -> list[int]:
    """Indices of the empty cells, ascending."""
    return [idx for idx, cell in enumerate(board) if cell is None]


def find_winning_move(board: Board, symbol: Symbol) -> Optional[int]:
    """Lowest empty index that would complete a line for `symbol`."""
    for idx in available_moves(board):
        candidate = list(board)
        candidate[idx] = symbol
        if winner(candidate) == symbol:
            return idx
    return None


def validate_board(cells: Sequence[Optional[str]]) -> list[Optional[Symbol]]:
    """Convert stored cells back into Symbols, refusing anything that is not a 3x3 board."""
    if len(cells) != BOARD_SIZE:
        raise ValidationError(
            f"Board must have {BOARD_SIZE} cells, got {len(cells)}."
        )
    board: list[Optional[Symbol]] = []
    for cell in cells:
        if cell is None:
            board.append(None)
        elif cell in tuple(Symbol):
            board.append(Symbol(cell))
        else:
            raise ValidationError(f"Invalid cell value: {cell!r}")
    return board
