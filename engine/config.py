"""
Game configuration for Time-Travel TicTacToe.
Board constants, history label formats, and logging defaults.
"""

import os


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def resolve_log_level(value, default: str = "WARNING") -> str:
    """Normalize a log level name; unknown or missing names give the default."""
    if not value:
        return default
    value = str(value).strip().upper()
    return value if value in LOG_LEVELS else default


class GameConfig:
    """
    Configuration class for the game engine.
    Change these values to adjust labels and logging.
    """

    # ==================== BOARD SETTINGS ====================
    # TicTacToe is a 3x3 grid
    BOARD_SIZE = 3

    # Total number of cells (row-major, index = row * 3 + col)
    CELL_COUNT = BOARD_SIZE * BOARD_SIZE  # 9

    # ==================== HISTORY LABELS ====================
    # Step 0 is the synthetic start of the game
    START_LABEL = "Go to start of game"

    # Steps 1..N. Column is reported before row.
    MOVE_LABEL_FORMAT = "Go to move #{step}: {player} at ({col}, {row})"

    # Text for the sort-order toggle (shows the order you switch TO)
    SORT_ASCENDING_LABEL = "Sort: oldest first"
    SORT_DESCENDING_LABEL = "Sort: newest first"

    # ==================== STATUS TEXT ====================
    STATUS_NEXT_FORMAT = "Next player: {player}"
    STATUS_WINNER_FORMAT = "Winner: {player}"
    STATUS_DRAW = "Draw"

    # ==================== LOGGING ====================
    # Override with the TICTACTOE_LOG_LEVEL environment variable
    # Unknown names fall back to WARNING
    LOG_LEVELS = LOG_LEVELS
    LOG_LEVEL = resolve_log_level(os.environ.get("TICTACTOE_LOG_LEVEL"))
    LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
