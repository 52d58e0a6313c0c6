"""
Pytest configuration and shared fixtures.

This file is automatically loaded by pytest and provides
fixtures available to all test files.
"""

import pytest

from engine import GameEngine, HistoryView


# X takes the top row on the 5th move
TOP_ROW_WIN = [0, 4, 1, 3, 2]

# Fills the board with no line:
#   X | O | X
#   X | O | O
#   O | X | X
DRAW_GAME = [0, 1, 2, 4, 3, 5, 7, 6, 8]


def play(engine: GameEngine, moves):
    """Apply moves in order, failing the test if any is rejected."""
    for index in moves:
        result = engine.apply_move(index)
        assert result.ok, f"move {index} rejected: {result.message}"
    return engine.state


@pytest.fixture
def engine() -> GameEngine:
    """A fresh engine at the start of a game."""
    return GameEngine()


@pytest.fixture
def won_engine() -> GameEngine:
    """An engine where X has just won along the top row."""
    eng = GameEngine()
    play(eng, TOP_ROW_WIN)
    return eng


@pytest.fixture
def drawn_engine() -> GameEngine:
    """An engine with a full board and no winner."""
    eng = GameEngine()
    play(eng, DRAW_GAME)
    return eng


@pytest.fixture
def view() -> HistoryView:
    """A history view in ascending order."""
    return HistoryView()
