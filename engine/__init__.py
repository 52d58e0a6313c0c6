"""
Engine module for Time-Travel TicTacToe.
Handles board state, rules, win detection, and move history.
"""

from .config import GameConfig
from .game_state import Board, Cell, EngineState, Move, format_board
from .win_checker import WinChecker, WinResult, WINNING_LINES
from .move_validator import MoveError, MoveValidator, ValidationResult
from .game_engine import GameEngine, GameStatus, MoveResult, StatusKind
from .history_view import HistoryView, MoveDescription

__version__ = "1.0.0"
