"""
Main entry point for Time-Travel TicTacToe.

This script ties together:
- The engine (board, rules, move history)
- The history view (move list, highlights, status line)
- A front end: the Tkinter UI, or a console game with --no-ui

Run this script to play!
"""

import logging
from typing import Optional

from engine import GameConfig, GameEngine, HistoryView, format_board
from engine.config import resolve_log_level

logger = logging.getLogger(__name__)


HELP_TEXT = """Commands:
  0-8    play a cell (0 = top-left, 8 = bottom-right)
  j N    jump to step N of the history
  h      show the move history
  r      reverse the history order
  n      new game
  q      quit"""


class ConsoleGame:
    """
    Console front end.

    Reads one command per line and forwards it to the engine. Rejected
    intents (occupied cell, game already won, bad step) are reported and
    otherwise ignored.
    """

    def __init__(self, engine: Optional[GameEngine] = None, view: Optional[HistoryView] = None):
        self.engine = engine or GameEngine()
        self.view = view or HistoryView()
        self.is_running = False

    def render(self) -> str:
        """The board plus the status line."""
        state = self.engine.state
        board = format_board(state.current_board, self.view.highlighted_cells(state))
        return f"{board}\n\n{self.view.status_text(self.engine.status())}"

    def render_history(self) -> str:
        """The move list in the current sort order. '>' marks the current step."""
        lines = []
        for desc in self.view.ordered_move_descriptions(self.engine.state):
            marker = ">" if desc.is_current else " "
            lines.append(f"{marker} {desc.step:2d}. {desc.label}")
        return "\n".join(lines)

    def handle_command(self, line: str) -> str:
        """
        Process one line of input.

        Args:
            line: Raw user input.

        Returns:
            Text to print.
        """
        parts = line.strip().lower().split()
        if not parts:
            return ""

        command = parts[0]

        if command == "q":
            self.is_running = False
            return "Goodbye!"

        if command == "n":
            self.engine.new_game()
            return "New game!\n" + self.render()

        if command == "h":
            return self.render_history()

        if command == "r":
            self.view.toggle_sort_order()
            return self.render_history()

        if command == "j":
            if len(parts) != 2 or not parts[1].isdecimal():
                return "Usage: j N"
            result = self.engine.jump_to(int(parts[1]))
            if not result.ok:
                return result.message
            return self.render()

        if command.isdecimal() and len(parts) == 1:
            result = self.engine.apply_move(int(command))
            if not result.ok:
                return result.message
            return self.render()

        return f"Unknown command: {line.strip()!r}\n{HELP_TEXT}"

    def run(self):
        """Main console loop."""
        self.is_running = True
        print(HELP_TEXT)
        print()
        print(self.render())

        while self.is_running:
            try:
                line = input("\n> ")
            except EOFError:
                break
            output = self.handle_command(line)
            if output:
                print(output)


def setup_logging(level: str):
    """Configure root logging."""
    logging.basicConfig(level=resolve_log_level(level), format=GameConfig.LOG_FORMAT)


def main(argv=None):
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Time-Travel TicTacToe")
    parser.add_argument(
        "--no-ui",
        action="store_true",
        help="Run without UI (console mode)"
    )
    parser.add_argument(
        "--log-level",
        default=GameConfig.LOG_LEVEL,
        choices=GameConfig.LOG_LEVELS,
        type=str.upper,
        help="Logging level (default: %(default)s)"
    )

    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    # Launch UI by default
    if not args.no_ui:
        from ui import TicTacToeUI
        ui = TicTacToeUI()
        ui.run()
        return

    game = ConsoleGame()
    try:
        game.run()
    except KeyboardInterrupt:
        print("\n\nGame interrupted by user.")


if __name__ == "__main__":
    main()
