"""
History view for Time-Travel TicTacToe.
Turns the engine state into what a front end shows: move list labels,
sort order, highlighted cells, and the status line.
"""

from typing import FrozenSet, List, Optional
from dataclasses import dataclass

from .config import GameConfig
from .game_engine import GameStatus, StatusKind
from .game_state import EngineState
from .win_checker import WinChecker


@dataclass(frozen=True)
class MoveDescription:
    """One entry of the move list."""
    step: int
    label: str
    is_current: bool = False


class HistoryView:
    """
    Read-only projection of an EngineState.

    The only thing the view owns is the sort order of the move list;
    reversing the list never touches the history or current_step.
    """

    def __init__(self, ascending: bool = True, win_checker: Optional[WinChecker] = None):
        self._ascending = ascending
        self.win_checker = win_checker or WinChecker()

    @property
    def ascending(self) -> bool:
        return self._ascending

    def set_sort_order(self, ascending: bool):
        self._ascending = bool(ascending)

    def toggle_sort_order(self) -> bool:
        """Flip the sort order and return the new value."""
        self._ascending = not self._ascending
        return self._ascending

    @property
    def sort_label(self) -> str:
        """Label for a toggle button: the order a click switches to."""
        if self._ascending:
            return GameConfig.SORT_DESCENDING_LABEL
        return GameConfig.SORT_ASCENDING_LABEL

    def move_descriptions(self, state: EngineState) -> List[MoveDescription]:
        """
        Describe every history step, oldest first.

        Step 0 is the start of the game. Later steps show the move number,
        the player and the position as (col, row).
        """
        descriptions = []
        for step, move in enumerate(state.history):
            if move.is_start:
                label = GameConfig.START_LABEL
            else:
                row, col = move.position
                label = GameConfig.MOVE_LABEL_FORMAT.format(
                    step=step, player=move.player.value, col=col, row=row
                )
            descriptions.append(MoveDescription(
                step=step,
                label=label,
                is_current=(step == state.current_step),
            ))
        return descriptions

    def ordered_move_descriptions(
        self,
        state: EngineState,
        ascending: Optional[bool] = None
    ) -> List[MoveDescription]:
        """
        Same as move_descriptions(), newest first when ascending is False.

        Args:
            state: Engine state to describe.
            ascending: Sort order; None uses the view's own setting.
        """
        if ascending is None:
            ascending = self._ascending
        descriptions = self.move_descriptions(state)
        if not ascending:
            descriptions.reverse()
        return descriptions

    def highlighted_cells(self, state: EngineState) -> FrozenSet[int]:
        """
        Cells a front end should highlight.

        - The winning line, if the current board is won
        - Otherwise the cell played at selected_step (none for step 0)
        - Otherwise nothing
        """
        result = self.win_checker.evaluate(state.current_board)
        if result is not None:
            return frozenset(result.line)

        step = state.selected_step
        if step is None or step == 0:
            return frozenset()

        before = state.history[step - 1].resulting_board
        after = state.history[step].resulting_board
        return frozenset(i for i, (a, b) in enumerate(zip(before, after)) if a != b)

    def status_text(self, status: GameStatus) -> str:
        """The status line shown above the board."""
        if status.kind is StatusKind.WON:
            return GameConfig.STATUS_WINNER_FORMAT.format(player=status.winner.value)
        if status.kind is StatusKind.DRAW:
            return GameConfig.STATUS_DRAW
        return GameConfig.STATUS_NEXT_FORMAT.format(player=status.next_player.value)
