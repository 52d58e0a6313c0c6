"""
Unit tests for the game engine: moves, jumps, status and time travel.
"""

import threading

import pytest

from engine import Board, Cell, GameEngine, GameStatus, MoveError, StatusKind, WinChecker
from engine.game_state import EngineState

from conftest import DRAW_GAME, TOP_ROW_WIN, play


def assert_history_consistent(state: EngineState):
    """Each step adds exactly one mark and players alternate from X."""
    assert state.history[0].is_start
    for step in range(1, len(state.history)):
        before = state.history[step - 1].resulting_board
        after = state.history[step].resulting_board
        changed = [i for i in range(9) if before[i] != after[i]]
        assert len(changed) == 1
        assert before[changed[0]] is Cell.EMPTY
        expected = Cell.X if step % 2 == 1 else Cell.O
        assert after[changed[0]] is expected
        assert state.history[step].player is expected
        assert state.history[step].index == changed[0]


class TestApplyMove:
    """Test playing moves."""

    def test_first_move_is_x(self, engine):
        """X plays first."""
        result = engine.apply_move(4)
        assert result.ok
        assert result.error is None
        assert engine.current_board()[4] is Cell.X
        assert engine.state.current_step == 1
        assert engine.state.history[1].position == (1, 1)

    def test_players_alternate(self, engine):
        """X, O, X, O..."""
        state = play(engine, [0, 1, 2, 3])
        assert [m.player for m in state.history[1:]] == [Cell.X, Cell.O, Cell.X, Cell.O]
        assert_history_consistent(state)

    def test_occupied_cell(self, engine):
        """Playing a taken cell fails and changes nothing."""
        engine.apply_move(0)
        before = engine.state
        result = engine.apply_move(0)
        assert not result.ok
        assert result.error is MoveError.CELL_OCCUPIED
        assert result.state is before
        assert engine.state is before

    @pytest.mark.parametrize("index", [-1, 9, "a", None])
    def test_out_of_range(self, engine, index):
        """Bad indices are rejected without raising."""
        before = engine.state
        result = engine.apply_move(index)
        assert result.error is MoveError.INDEX_OUT_OF_RANGE
        assert engine.state is before

    def test_no_moves_after_win(self, won_engine):
        """A won board accepts no more moves."""
        before = won_engine.state
        result = won_engine.apply_move(8)
        assert result.error is MoveError.GAME_ALREADY_WON
        assert won_engine.state is before

    def test_move_clears_selected_step(self, engine):
        """A new move drops the inspected step."""
        play(engine, [0, 1])
        engine.jump_to(1)
        assert engine.state.selected_step == 1
        engine.apply_move(8)
        assert engine.state.selected_step is None

    def test_old_boards_never_change(self, engine):
        """Earlier history entries are untouched by later moves."""
        engine.apply_move(0)
        first = engine.state.history[1]
        play(engine, [1, 2])
        assert engine.state.history[1] is first
        assert first.resulting_board == Board().with_cell(0, Cell.X)


class TestJumpTo:
    """Test time travel."""

    def test_jump_keeps_history(self, engine):
        """Jumping back doesn't drop later moves."""
        play(engine, [0, 1, 2])
        result = engine.jump_to(1)
        assert result.ok
        assert len(engine.state.history) == 4
        assert engine.state.current_step == 1
        assert engine.state.selected_step == 1
        assert engine.current_board() == Board().with_cell(0, Cell.X)

    def test_jump_forward_again(self, engine):
        """You can jump back to the future before playing."""
        play(engine, [0, 1, 2])
        engine.jump_to(0)
        engine.jump_to(3)
        assert engine.current_board()[2] is Cell.X

    @pytest.mark.parametrize("step", [-1, 2, 100, "1"])
    def test_invalid_step(self, engine, step):
        """Steps outside the history are rejected."""
        engine.apply_move(0)
        before = engine.state
        result = engine.jump_to(step)
        assert result.error is MoveError.INDEX_OUT_OF_RANGE
        assert engine.state is before

    def test_rewrite_future(self, engine):
        """A move after a jump discards the old future."""
        play(engine, [0, 1, 2, 3])
        previous_step = 2
        engine.jump_to(previous_step)
        engine.apply_move(8)
        assert len(engine.state.history) == previous_step + 2
        assert engine.state.current_step == 3
        assert engine.current_board()[8] is Cell.O
        assert engine.current_board()[3] is Cell.EMPTY
        assert_history_consistent(engine.state)

    def test_turn_parity_follows_step(self, engine):
        """The next player comes from the step jumped to."""
        play(engine, [0, 1, 2])
        engine.jump_to(1)
        assert engine.status().next_player is Cell.O
        engine.jump_to(2)
        assert engine.status().next_player is Cell.X

    def test_alternation_survives_jumps(self, engine):
        """Players alternate no matter how often we jump."""
        play(engine, [0, 1, 2])
        engine.jump_to(1)
        play(engine, [5, 6])
        engine.jump_to(0)
        play(engine, [8, 7, 6, 5])
        engine.jump_to(2)
        play(engine, [0])
        assert_history_consistent(engine.state)

    def test_jump_out_of_won_game(self, won_engine):
        """Jumping before the win makes the game playable again."""
        won_engine.jump_to(4)
        assert won_engine.status().kind is StatusKind.IN_PROGRESS
        assert won_engine.apply_move(8).ok
        assert len(won_engine.state.history) == 6


class TestStatus:
    """Test game status."""

    def test_fresh_game(self, engine):
        """X to move at the start."""
        assert engine.status() == GameStatus.in_progress(Cell.X)
        assert engine.can_play()

    def test_top_row_win(self, won_engine):
        """[0, 4, 1, 3, 2] wins the top row for X."""
        assert won_engine.status() == GameStatus.won(Cell.X, (0, 1, 2))
        assert won_engine.status().is_terminal
        assert not won_engine.can_play()

    def test_jump_back_from_win(self, won_engine):
        """jump_to(2) shows X at 0, O at 4, X to move; then 1 rebases."""
        won_engine.jump_to(2)
        expected = Board().with_cell(0, Cell.X).with_cell(4, Cell.O)
        assert won_engine.current_board() == expected
        assert won_engine.status() == GameStatus.in_progress(Cell.X)

        result = won_engine.apply_move(1)
        assert result.ok
        assert len(won_engine.state.history) == 4
        assert won_engine.state.current_step == 3

    def test_draw(self, drawn_engine):
        """A full board with no line is a draw."""
        assert drawn_engine.status() == GameStatus.draw()
        assert drawn_engine.status().kind is StatusKind.DRAW

    def test_draw_blocks_play(self, drawn_engine):
        """No cell is playable after a draw."""
        assert not drawn_engine.can_play()

    def test_draw_uses_win_checker(self):
        """The draw decision comes from the engine's win checker."""
        calls = []

        class RecordingChecker(WinChecker):
            def check_draw(self, board):
                calls.append(board)
                return super().check_draw(board)

        engine = GameEngine(win_checker=RecordingChecker())
        play(engine, DRAW_GAME)
        assert engine.status() == GameStatus.draw()
        assert calls[-1] == engine.current_board()

    def test_no_moves_after_draw(self, drawn_engine):
        """Every cell is taken after a draw."""
        for index in range(9):
            result = drawn_engine.apply_move(index)
            assert result.error in (MoveError.CELL_OCCUPIED, MoveError.GAME_ALREADY_WON)

    def test_reads_are_idempotent(self, won_engine):
        """Reading twice without a mutation gives the same answer."""
        assert won_engine.current_board() == won_engine.current_board()
        assert won_engine.status() == won_engine.status()
        won_engine.jump_to(3)
        assert won_engine.status() == won_engine.status()

    def test_status_not_cached(self, won_engine):
        """Status follows jumps."""
        assert won_engine.status().kind is StatusKind.WON
        won_engine.jump_to(3)
        assert won_engine.status() == GameStatus.in_progress(Cell.O)
        won_engine.jump_to(5)
        assert won_engine.status().kind is StatusKind.WON


class TestNewGame:
    """Test resetting."""

    def test_new_game_resets(self, won_engine):
        """new_game() goes back to the initial state."""
        state = won_engine.new_game()
        assert state == EngineState.initial()
        assert won_engine.state == EngineState.initial()
        assert won_engine.status() == GameStatus.in_progress(Cell.X)


class TestConcurrency:
    """Test that concurrent callers can't corrupt the history."""

    def test_concurrent_moves(self):
        """Threads racing apply_move still produce a valid timeline."""
        engine = GameEngine()
        barrier = threading.Barrier(9)
        results = []

        def worker(index):
            barrier.wait()
            results.append(engine.apply_move(index))

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(9)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        accepted = [r for r in results if r.ok]
        assert len(engine.state.history) == len(accepted) + 1
        assert_history_consistent(engine.state)
        for r in results:
            if not r.ok:
                assert r.error is MoveError.GAME_ALREADY_WON
