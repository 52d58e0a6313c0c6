"""
Game state for Time-Travel TicTacToe.
Defines cells, boards, moves, and the engine state (history + pointers).

Everything here is an immutable value. A new move never changes an old
board, which is what makes jumping around the history safe.
"""

from enum import Enum
from typing import Optional, List, Tuple
from dataclasses import dataclass

from .config import GameConfig


class Cell(Enum):
    """What a single board cell holds."""
    EMPTY = "empty"
    X = "X"
    O = "O"

    @property
    def symbol(self) -> str:
        """Character used when drawing the board."""
        return " " if self is Cell.EMPTY else self.value

    def opposite(self) -> "Cell":
        """Get the opposite player."""
        if self is Cell.EMPTY:
            raise ValueError("EMPTY has no opposite player")
        return Cell.O if self is Cell.X else Cell.X


def index_to_position(index: int) -> Tuple[int, int]:
    """Convert a cell index (0-8) to (row, col)."""
    return divmod(index, GameConfig.BOARD_SIZE)


def position_to_index(row: int, col: int) -> int:
    """Convert (row, col) to a cell index (0-8)."""
    return row * GameConfig.BOARD_SIZE + col


class Board(tuple):
    """
    A 3x3 board snapshot: exactly 9 cells in row-major order.

    Boards are tuples, so they can't be changed after construction.
    Use with_cell() to get a new board with one cell replaced.
    """

    def __new__(cls, cells=None):
        if cells is None:
            cells = [Cell.EMPTY] * GameConfig.CELL_COUNT
        cells = tuple(cells)

        if len(cells) != GameConfig.CELL_COUNT:
            raise ValueError(
                f"Board needs exactly {GameConfig.CELL_COUNT} cells, got {len(cells)}"
            )
        for cell in cells:
            if not isinstance(cell, Cell):
                raise ValueError(f"Invalid cell value: {cell!r}")

        return super().__new__(cls, cells)

    @classmethod
    def empty(cls) -> "Board":
        """An all-empty board."""
        return cls()

    def with_cell(self, index: int, cell: Cell) -> "Board":
        """Return a copy of this board with one cell replaced."""
        cells = list(self)
        cells[index] = cell
        return Board(cells)

    def empty_cells(self) -> List[int]:
        """Indices of all empty cells."""
        return [i for i, cell in enumerate(self) if cell is Cell.EMPTY]

    def is_full(self) -> bool:
        """True when no empty cell is left."""
        return all(cell is not Cell.EMPTY for cell in self)

    def rows(self) -> List[Tuple[Cell, ...]]:
        """The board as three row tuples, top to bottom."""
        size = GameConfig.BOARD_SIZE
        return [tuple(self[r * size:(r + 1) * size]) for r in range(size)]

    def __repr__(self) -> str:
        return "Board(" + "".join(
            "." if cell is Cell.EMPTY else cell.value for cell in self
        ) + ")"


@dataclass(frozen=True)
class Move:
    """
    One entry in the game history.

    The very first entry is a synthetic start move with an empty board
    and no player/position.
    """
    resulting_board: Board                  # Board *after* the move
    position: Optional[Tuple[int, int]] = None  # (row, col), None for start
    player: Optional[Cell] = None           # X or O, None for start

    def __post_init__(self):
        if self.player is Cell.EMPTY:
            raise ValueError("A move must be played by X or O")
        if (self.player is None) != (self.position is None):
            raise ValueError("player and position must both be set or both be None")

    @classmethod
    def start(cls) -> "Move":
        """The synthetic start-of-game entry."""
        return cls(resulting_board=Board.empty())

    @property
    def is_start(self) -> bool:
        return self.player is None

    @property
    def index(self) -> Optional[int]:
        """Cell index of this move, or None for the start move."""
        if self.position is None:
            return None
        return position_to_index(*self.position)


@dataclass(frozen=True)
class EngineState:
    """
    The complete state of the game.

    Tracks:
    - The move history (history[0] is always the start move)
    - current_step: the history entry being displayed / played from
    - selected_step: a step the player jumped to, for highlighting
    """
    history: Tuple[Move, ...]
    current_step: int = 0
    selected_step: Optional[int] = None

    def __post_init__(self):
        if not self.history or not self.history[0].is_start:
            raise ValueError("history must begin with the start move")
        if not 0 <= self.current_step < len(self.history):
            raise ValueError(
                f"current_step {self.current_step} outside history of {len(self.history)}"
            )
        if self.selected_step is not None and not 0 <= self.selected_step < len(self.history):
            raise ValueError(
                f"selected_step {self.selected_step} outside history of {len(self.history)}"
            )

    @classmethod
    def initial(cls) -> "EngineState":
        """State at the start of a new game."""
        return cls(history=(Move.start(),))

    @property
    def current_board(self) -> Board:
        return self.history[self.current_step].resulting_board

    @property
    def next_player(self) -> Cell:
        """Whose turn it is at current_step. X plays on even steps."""
        return Cell.X if self.current_step % 2 == 0 else Cell.O


def format_board(board: Board, highlight=()) -> str:
    """
    Draw a board as text.

    Highlighted cells are wrapped in brackets, e.g. [X].
    """
    lines = ["    0   1   2"]
    for row, cells in enumerate(board.rows()):
        parts = []
        for col, cell in enumerate(cells):
            if position_to_index(row, col) in highlight:
                parts.append(f"[{cell.symbol}]")
            else:
                parts.append(f" {cell.symbol} ")
        lines.append(f"{row} " + "|".join(parts))
        if row < GameConfig.BOARD_SIZE - 1:
            lines.append("  " + "+".join(["---"] * GameConfig.BOARD_SIZE))
    return "\n".join(lines)
