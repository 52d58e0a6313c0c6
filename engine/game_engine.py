"""
Game engine for Time-Travel TicTacToe.
Owns the move history, applies moves, and handles jumping back in time.

The history is one linear timeline. Jumping to an earlier step keeps the
later moves around until a new move is played from that step; the new
move then replaces everything after it.
"""

import logging
import threading
from enum import Enum
from typing import Optional, Tuple
from dataclasses import dataclass

from .game_state import Board, Cell, EngineState, Move, index_to_position
from .move_validator import MoveError, MoveValidator, ValidationResult
from .win_checker import WinChecker

logger = logging.getLogger(__name__)


class StatusKind(Enum):
    """The two terminal outcomes plus the game still going."""
    IN_PROGRESS = "in_progress"
    WON = "won"
    DRAW = "draw"


@dataclass(frozen=True)
class GameStatus:
    """
    Status of the board at the current step.

    - IN_PROGRESS: next_player is set
    - WON: winner and line are set
    - DRAW: nothing else is set
    """
    kind: StatusKind
    next_player: Optional[Cell] = None
    winner: Optional[Cell] = None
    line: Optional[Tuple[int, int, int]] = None

    @classmethod
    def in_progress(cls, next_player: Cell) -> "GameStatus":
        return cls(StatusKind.IN_PROGRESS, next_player=next_player)

    @classmethod
    def won(cls, winner: Cell, line: Tuple[int, int, int]) -> "GameStatus":
        return cls(StatusKind.WON, winner=winner, line=line)

    @classmethod
    def draw(cls) -> "GameStatus":
        return cls(StatusKind.DRAW)

    @property
    def is_terminal(self) -> bool:
        return self.kind is not StatusKind.IN_PROGRESS


@dataclass(frozen=True)
class MoveResult:
    """Outcome of apply_move / jump_to. On failure, state is the unchanged state."""
    ok: bool
    state: EngineState
    error: Optional[MoveError] = None
    message: Optional[str] = None

    @classmethod
    def rejected(cls, state: EngineState, validation: ValidationResult) -> "MoveResult":
        return cls(
            ok=False,
            state=state,
            error=validation.error,
            message=validation.error_message,
        )


class GameEngine:
    """
    The TicTacToe engine.

    Game flow:
    1. apply_move(index) plays the next player's mark on the current board
    2. jump_to(step) moves the current pointer anywhere in the history
    3. apply_move after a jump drops the moves after that step
    4. new_game() starts over

    Whose turn it is comes from the parity of current_step, so it can't
    drift out of sync with the history.

    Mutating calls are serialized with a lock, so the engine can be driven
    from more than one thread (e.g. UI callbacks and a worker).
    """

    def __init__(
        self,
        validator: Optional[MoveValidator] = None,
        win_checker: Optional[WinChecker] = None
    ):
        """
        Initialize the engine with a fresh game.

        Args:
            validator: Move validator (default: MoveValidator()).
            win_checker: Win checker (default: the validator's checker).
        """
        self.validator = validator or MoveValidator(win_checker)
        self.win_checker = win_checker or self.validator.win_checker
        self._lock = threading.RLock()
        self._state = EngineState.initial()

    @property
    def state(self) -> EngineState:
        """The current (immutable) engine state."""
        with self._lock:
            return self._state

    def apply_move(self, index: int) -> MoveResult:
        """
        Play the next player's mark at a cell of the current board.

        Args:
            index: Cell index (0-8), row-major.

        Returns:
            MoveResult. On success, state is the new state; otherwise the
            error says why and nothing changed.
        """
        with self._lock:
            state = self._state
            validation = self.validator.validate_move(state, index)
            if not validation.is_valid:
                logger.debug("Rejected move at %r: %s", index, validation.error_message)
                return MoveResult.rejected(state, validation)

            player = state.next_player
            board = state.current_board.with_cell(index, player)
            move = Move(
                resulting_board=board,
                position=index_to_position(index),
                player=player,
            )

            # Anything after current_step belongs to an abandoned timeline
            history = state.history[:state.current_step + 1] + (move,)
            discarded = len(state.history) - state.current_step - 1
            if discarded:
                logger.info("Discarding %d move(s) after step %d", discarded, state.current_step)

            self._state = EngineState(
                history=history,
                current_step=len(history) - 1,
                selected_step=None,
            )
            logger.info("Step %d: %s plays cell %d", len(history) - 1, player.value, index)
            return MoveResult(ok=True, state=self._state)

    def jump_to(self, step: int) -> MoveResult:
        """
        Move the current pointer to a history step.

        The history is not truncated; only the next apply_move does that.

        Args:
            step: History index (0 = start of game).

        Returns:
            MoveResult.
        """
        with self._lock:
            state = self._state
            validation = self.validator.validate_jump(state, step)
            if not validation.is_valid:
                logger.debug("Rejected jump to %r: %s", step, validation.error_message)
                return MoveResult.rejected(state, validation)

            self._state = EngineState(
                history=state.history,
                current_step=step,
                selected_step=step,
            )
            logger.info("Jumped to step %d of %d", step, len(state.history) - 1)
            return MoveResult(ok=True, state=self._state)

    def new_game(self) -> EngineState:
        """Reset to the starting state."""
        with self._lock:
            self._state = EngineState.initial()
            logger.info("New game started")
            return self._state

    def current_board(self) -> Board:
        """The board at the current step."""
        return self.state.current_board

    def status(self) -> GameStatus:
        """
        Status of the current board.

        Recomputed on every call since jumps change the current board.
        """
        return self.status_of(self.state)

    def status_of(self, state: EngineState) -> GameStatus:
        """Status of the current board of any engine state."""
        board = state.current_board
        result = self.win_checker.evaluate(board)
        if result is not None:
            return GameStatus.won(result.player, result.line)
        if self.win_checker.check_draw(board):
            return GameStatus.draw()
        return GameStatus.in_progress(state.next_player)

    def can_play(self) -> bool:
        """True if apply_move can succeed on some cell."""
        return bool(self.validator.get_valid_moves(self.current_board()))
