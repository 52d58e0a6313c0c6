"""
Move validator for Time-Travel TicTacToe.
Validates that moves and jumps follow the rules.
"""

from enum import Enum
from typing import Optional, List
from dataclasses import dataclass

from .config import GameConfig
from .game_state import Board, Cell, EngineState
from .win_checker import WinChecker


class MoveError(Enum):
    """Why an intent was rejected."""
    CELL_OCCUPIED = "cell_occupied"
    GAME_ALREADY_WON = "game_already_won"
    INDEX_OUT_OF_RANGE = "index_out_of_range"


@dataclass(frozen=True)
class ValidationResult:
    """Result of move validation."""
    is_valid: bool
    error: Optional[MoveError] = None
    error_message: Optional[str] = None


def _is_int(value) -> bool:
    # bool is an int subclass, but True/False are not cell indices
    return isinstance(value, int) and not isinstance(value, bool)


class MoveValidator:
    """
    Validates TicTacToe intents against the current state.

    Rules:
    1. Cell index must be 0-8
    2. Can only place on empty cells
    3. No moves once the active board has a winner
    4. Jumps must target an existing history step
    """

    def __init__(self, win_checker: Optional[WinChecker] = None):
        self.win_checker = win_checker or WinChecker()

    def validate_move(self, state: EngineState, index) -> ValidationResult:
        """
        Validate playing a cell on the active board.

        Args:
            state: Current engine state.
            index: Cell index to play (0-8).

        Returns:
            ValidationResult with is_valid, error and error_message.
        """
        if not _is_int(index) or not 0 <= index < GameConfig.CELL_COUNT:
            return ValidationResult(
                is_valid=False,
                error=MoveError.INDEX_OUT_OF_RANGE,
                error_message=f"Invalid cell {index!r}. Must be 0-{GameConfig.CELL_COUNT - 1}."
            )

        board = state.current_board

        if board[index] is not Cell.EMPTY:
            return ValidationResult(
                is_valid=False,
                error=MoveError.CELL_OCCUPIED,
                error_message=f"Cell {index} is already occupied by {board[index].value}"
            )

        result = self.win_checker.evaluate(board)
        if result is not None:
            return ValidationResult(
                is_valid=False,
                error=MoveError.GAME_ALREADY_WON,
                error_message=f"Game is already won by {result.player.value}!"
            )

        return ValidationResult(is_valid=True)

    def validate_jump(self, state: EngineState, step) -> ValidationResult:
        """
        Validate jumping to a history step.

        Args:
            state: Current engine state.
            step: History index to jump to.

        Returns:
            ValidationResult.
        """
        last = len(state.history) - 1
        if not _is_int(step) or not 0 <= step <= last:
            return ValidationResult(
                is_valid=False,
                error=MoveError.INDEX_OUT_OF_RANGE,
                error_message=f"Invalid step {step!r}. Must be 0-{last}."
            )
        return ValidationResult(is_valid=True)

    def get_valid_moves(self, board: Board) -> List[int]:
        """
        Get all playable cells on a board.

        Args:
            board: The active board.

        Returns:
            Cell indices, empty if the board is already won.
        """
        if self.win_checker.evaluate(board) is not None:
            return []
        return board.empty_cells()
