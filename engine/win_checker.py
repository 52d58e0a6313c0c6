"""
Win checker for Time-Travel TicTacToe.
Checks if a player has won or if the board is a draw.
"""

from typing import Optional, Set, Tuple
from dataclasses import dataclass

from .game_state import Board, Cell


# All possible winning lines as cell indices, in the order they are checked
WINNING_LINES: Tuple[Tuple[int, int, int], ...] = (
    # Rows, top to bottom
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    # Columns, left to right
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    # Diagonals
    (0, 4, 8),
    (2, 4, 6),
)


@dataclass(frozen=True)
class WinResult:
    """A completed line."""
    player: Cell
    line: Tuple[int, int, int]


class WinChecker:
    """
    Checks for win conditions in TicTacToe.

    Win condition: 3 cells of the same player in a row
    (horizontally, vertically, or diagonally).

    The checker holds no state; every method is a pure function of the
    board passed in.
    """

    WINNING_LINES = WINNING_LINES

    def evaluate(self, board: Board) -> Optional[WinResult]:
        """
        Find the winning line, if any.

        Lines are checked in WINNING_LINES order and the first complete
        line wins. Two complete lines at once can't happen through legal
        play, but the order keeps the answer deterministic anyway.

        Args:
            board: The board to check.

        Returns:
            WinResult with the player and line, or None if nobody has won.
            A full board without a line also returns None.
        """
        for line in self.WINNING_LINES:
            player = self._check_line(board, line)
            if player is not None:
                return WinResult(player=player, line=line)
        return None

    def _check_line(self, board: Board, line: Tuple[int, int, int]) -> Optional[Cell]:
        """Return the owner of a line if all 3 cells match and aren't empty."""
        a, b, c = line
        if board[a] is not Cell.EMPTY and board[a] == board[b] == board[c]:
            return board[a]
        return None

    def winners(self, board: Board) -> Set[Cell]:
        """Every player that owns at least one complete line."""
        found = set()
        for line in self.WINNING_LINES:
            player = self._check_line(board, line)
            if player is not None:
                found.add(player)
        return found

    def check_draw(self, board: Board) -> bool:
        """
        Check if the board is a draw.

        A draw occurs when all cells are filled AND nobody has a line.
        """
        return board.is_full() and self.evaluate(board) is None
